import io
import traceback

from monkey.monkey_cli import format_error
from monkey.monkey_lexer import CharacterStream, Lexer, TokenStream
from monkey.monkey_parser import Parser


def print_traceback() -> None:
    buf = io.StringIO()
    traceback.print_exc(file=buf)
    print("[error] >>>")
    print(buf.getvalue())


def read_entry() -> str | None:
    """Read one entry, continuing across lines while braces are unbalanced.

    Returns None when the user asks to leave.
    """
    src_lines: list[str] = []
    brace_count = 0
    while True:
        prompt = ">> " if not src_lines else ".. "
        line = input(prompt)
        if line.strip() in ("exit", "quit") and not src_lines:
            return None
        src_lines.append(line)
        brace_count += line.count("{") - line.count("}")
        if brace_count <= 0:
            return "\n".join(src_lines).strip()


def start_repl(verbose: bool = False) -> None:
    print("Monkey REPL. Type 'exit' or 'quit' to leave.")

    while True:
        try:
            src = read_entry()
            if src is None:
                print("Exiting Monkey REPL.")
                return
            if not src:
                continue
            if src.lower() == "verbose-mode":
                verbose = not verbose
                print(f"[mode] >>> Verbose mode {'ON' if verbose else 'OFF'}")
                continue

            tokens = list(Lexer(CharacterStream(src, 0, 1, 1)))
            if verbose:
                print(f"[tokens] >>> {tokens}")

            parser = Parser(TokenStream(tokens))
            try:
                program = parser.parse_program()
            except RecursionError:
                print_traceback()
                continue

            errors = parser.errors()
            if errors:
                print("[error] >>> parser errors:")
                for err in errors:
                    print(f"\t{format_error(err)}")
                continue

            if program.statements:
                print(program)

        except (KeyboardInterrupt, EOFError):
            print("\nExiting Monkey REPL.")
            break


def main() -> None:
    start_repl()


if __name__ == "__main__":
    main()
