"""
MONKEY CLI Entrypoint.

This module provides the command-line interface for parsing MONKEY source code.
It prints the canonical (fully parenthesized) rendering of the syntax tree, or
its JSON form, and reports every parse diagnostic.

Features:
    - Read source from `.monkey` files or inline strings.
    - Lex and parse, reporting all diagnostics rather than stopping at the first.
    - Output the tree as canonical text or JSON, to the console or a file.
    - Optionally dump the token stream.
    - Launch an interactive REPL with optional verbosity.

Example usage:
    monkey hello.monkey
    monkey -s "let x = 1 + 2 * 3;"
    monkey hello.monkey --json -o hello.json
    monkey --repl --verbose

Exit status is 1 when any diagnostic was produced or the input was nested
too deeply to parse, 0 otherwise.

Functions:
    run_monkey(source: str, is_string: bool = False, as_json: bool = False,
               show_tokens: bool = False, out: str | None = None,
               pretty: bool = False) -> list[ParserError] | None:
        Executes the full pipeline (lex -> parse -> render -> output).

    main() -> None:
        Parses CLI arguments and invokes the appropriate action (REPL or parse).
"""

import argparse
import json
import sys

from monkey.monkey_errors import ParserError
from monkey.monkey_lexer import CharacterStream, Lexer, TokenStream
from monkey.monkey_parser import Parser


def format_error(err: ParserError) -> str:
    """Render a diagnostic as `line:col: message` (location omitted when unknown)."""
    return f"{err.location}: {err}" if err.location else str(err)


def run_monkey(
    source: str,
    is_string: bool = False,
    as_json: bool = False,
    show_tokens: bool = False,
    out: str | None = None,
    pretty: bool = False,
) -> list[ParserError] | None:
    """
    Run the MONKEY front end: lex, parse, and render or write the syntax tree.

    Args:
        source (str): The MONKEY source code or path to a `.monkey` file.
        is_string (bool): If True, treats `source` as raw code instead of a file path.
        as_json (bool): If True, emit the tree as JSON instead of canonical text.
        show_tokens (bool): If True, print the token stream before the tree.
        out (str | None): Optional path to write the rendered tree. If None, prints to stdout.
        pretty (bool): If True, prints formatted banners around each section.

    Returns:
        list[ParserError] | None: Diagnostics collected while parsing, in source
        order, or None if the input is nested too deeply to parse at all.

    Raises:
        ValueError: If `is_string` is False and the source does not end with '.monkey'.
    """
    if not is_string and not source.endswith(".monkey"):
        raise ValueError("Only .monkey files are supported.")
    # 1. Read source
    if not is_string:
        with open(source, encoding="utf-8") as f:
            source = f.read()

    # 2. Lexing
    tokens = list(Lexer(CharacterStream(source, 0, 1, 1)))

    banner = "=" * 20
    if show_tokens:
        if pretty:
            print(f"{banner}\nTokens\n{banner}")
        for tok in tokens:
            print(f"{tok.line}:{tok.col}\t{tok!r}")

    # 3. Parsing and 4. Rendering
    parser = Parser(TokenStream(tokens))
    try:
        program = parser.parse_program()
        if as_json:
            text = json.dumps(program.to_dict(), indent=2)
        else:
            text = str(program)
    except RecursionError as e:
        print(f"[error] >>> RecursionError: {e}", file=sys.stderr)
        return None
    errors = parser.errors()

    # 5. Output result
    if out:
        with open(out, "w", encoding="utf-8") as f:
            f.write(text + "\n")
        if pretty:
            print(f"(wrote to {out})")
    elif pretty:
        print(f"{banner}\nSyntax tree\n{banner}\n{text}\n{banner}")
    else:
        print(text)

    # 6. Diagnostics
    for err in errors:
        print(f"[error] >>> {format_error(err)}", file=sys.stderr)

    return errors


def main() -> None:
    """
    Entry point for the MONKEY CLI.

    Launches the REPL if no arguments are passed or `--repl` is specified,
    otherwise parses the given source and exits non-zero on diagnostics.

    Supported flags:
        - `-s`, `--string`: Interpret source as a raw string instead of a file path.
        - `-j`, `--json`: Emit the syntax tree as JSON.
        - `-t`, `--tokens`: Print the token stream.
        - `-o`, `--out`: Write the rendered tree to a file.
        - `-p`, `--pretty`: Show banners around output sections.
        - `--repl`: Launch the interactive REPL.
        - `--verbose`: Echo tokens in the REPL (if --repl).
    """
    if len(sys.argv) == 1:
        # No args passed: open REPL instead
        from monkey.monkey_repl import start_repl

        start_repl()
        return
    parser = argparse.ArgumentParser(prog="monkey")
    parser.add_argument("source", nargs="?", help="Filename or raw source (with -s)")
    parser.add_argument(
        "-s", "--string", action="store_true", help="Interpret source as literal string"
    )
    parser.add_argument(
        "-j",
        "--json",
        dest="as_json",
        action="store_true",
        help="Print the syntax tree as JSON",
    )
    parser.add_argument(
        "-t",
        "--tokens",
        dest="show_tokens",
        action="store_true",
        help="Print the token stream",
    )
    parser.add_argument("-o", "--out", metavar="OUTFILE", help="Output to file")
    parser.add_argument(
        "-p", "--pretty", action="store_true", help="Show output with banners"
    )
    parser.add_argument(
        "--repl",
        action="store_true",
        help="Launch interactive REPL instead of parsing",
    )
    parser.add_argument(
        "--verbose", action="store_true", help="Verbose REPL mode (if --repl)"
    )

    args = parser.parse_args()

    if args.repl or args.source is None:
        from monkey.monkey_repl import start_repl

        start_repl(verbose=args.verbose)
        return

    errors = run_monkey(
        source=args.source,
        is_string=args.string,
        as_json=args.as_json,
        show_tokens=args.show_tokens,
        out=args.out,
        pretty=args.pretty,
    )
    if errors is None or errors:
        sys.exit(1)


if __name__ == "__main__" and not any("pytest" in arg for arg in sys.argv):
    main()
