"""
Lexical analyzer for the MONKEY programming language.

This module provides the token source consumed by the parser:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single token with type, value, and source location.
    Lexer: Converts a CharacterStream into a sequence of tokens.
    TokenStream: Adapts a prepared sequence of tokens to the same pull interface.

Features:
    - Skips whitespace
    - Supports longest-match recognition of operators (`==` before `=`)
    - Recognizes:
        * Identifiers and keywords
        * Integer literals (kept as text, validated by the parser)
        * Operators and punctuation
    - Unknown characters become `ILLEGAL` tokens instead of raising

Both `Lexer` and `TokenStream` return the `EOF` token indefinitely once the
input is exhausted; the parser relies on this to terminate.

Example:
    >>> lexer = Lexer(CharacterStream("let x = 5;"))
    >>> lexer.next_token()
    Token(LET, let)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - TokenStream
    - token_hashmap
"""

from collections.abc import Iterable, Iterator
from typing import Any

from monkey.monkey_constants import (
    EOF,
    IDENT,
    ILLEGAL,
    INT,
    PAYLOAD_TOKENS,
    TOKEN_LITERALS,
    keyword_hashmap,
    operator_hashmap,
    token_hashmap,
)


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the MONKEY language.

    Only `IDENT` and `INT` tokens carry free-form text; every other type has a
    fixed canonical spelling, filled in automatically when `value` is omitted.

    Equality compares type and value only. Source location is metadata and
    never takes part in comparisons.

    Attributes:
        type (str): The canonical token type (e.g. 'IDENT', 'INT', 'EOF').
        value (str): The raw string value associated with the token.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(
        self, type_: str, value: str | None = None, line: int = 0, col: int = 0
    ):
        self.type = type_
        self.value = value if value is not None else TOKEN_LITERALS.get(type_, "")
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value})"

    def __str__(self) -> str:
        return self.describe()

    def describe(self) -> str:
        """Short form used in diagnostics: `LET`, `ASSIGN`, `INT(5)`, `IDENT(foo)`."""
        if self.type in PAYLOAD_TOKENS or self.type == ILLEGAL:
            return f"{self.type}({self.value})"
        return self.type

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value))

    def same_shape(self, other: "Token") -> bool:
        """Compares tokens the way lookahead checks need to.

        Any two identifiers match regardless of name, and any two integer
        literals match regardless of text. All other tokens must be equal.
        """
        if self.type in PAYLOAD_TOKENS:
            return self.type == other.type
        return self == other


class Lexer:
    """Lexical analyzer for the MONKEY language.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek() in " \t\r\n":
            self.advance()

    def match_operator(self) -> Token | None:
        """Attempts to match the longest valid operator from the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        match_len = 0
        candidate = ""

        for i in range(2):  # longest operator is two characters
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in operator_hashmap:
                max_token = candidate
                match_len = i + 1

        if max_token:
            for _ in range(match_len):
                self.advance()
            return Token(operator_hashmap[max_token], max_token, line, col)

        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token, or an `EOF` token once the source is exhausted.
        """
        self.skip_whitespace()

        if self.stream.end_of_file():
            return Token(EOF, "EOF", self.stream.line, self.stream.column)

        ch = self.peek()
        line, col = self.stream.line, self.stream.column

        # 1. Identifier or keyword
        if ch.isascii() and (ch.isalpha() or ch == "_"):
            ident = ""
            while not self.stream.end_of_file() and (
                self.peek().isascii() and (self.peek().isalnum() or self.peek() == "_")
            ):
                ident += self.advance()
            if ident in keyword_hashmap:
                return Token(keyword_hashmap[ident], ident, line, col)
            return Token(IDENT, ident, line, col)

        # 2. Integer
        if ch.isascii() and ch.isdigit():
            num = ""
            while not self.stream.end_of_file() and (
                self.peek().isascii() and self.peek().isdigit()
            ):
                num += self.advance()
            return Token(INT, num, line, col)

        # 3. Operator or punctuation
        token = self.match_operator()
        if token:
            return token

        # 4. Unknown character
        return Token(ILLEGAL, self.advance(), line, col)

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens up to and excluding `EOF`."""
        while True:
            tok = self.next_token()
            if tok.type == EOF:
                return
            yield tok


class TokenStream:
    """Pull interface over an already prepared sequence of tokens.

    Useful when tokens come from somewhere other than `Lexer`, e.g. tests or
    tools that rewrite the token stream. An `EOF` token is returned forever
    once the sequence runs out, even if the sequence never contained one.
    """

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens = iter(tokens)
        self._eof: Token | None = None

    def next_token(self) -> Token:
        if self._eof is not None:
            return self._eof
        tok = next(self._tokens, None)
        if tok is None:
            tok = Token(EOF)
        if tok.type == EOF:
            self._eof = tok
        return tok


__all__ = ["CharacterStream", "Lexer", "Token", "TokenStream", "token_hashmap"]
