"""
Parse diagnostics for the MONKEY language.

Every parse failure is a `ParserError`, a `SyntaxError` subclass carrying the
tokens involved. The set of subclasses is closed:

    ExpectedToken        a required token was not found at the lookahead position
    ExpectedIdent        an identifier was required but something else was seen
    IntegerParseFailure  integer literal text does not fit a signed 64-bit integer
    UnhandledPrefix      no expression can begin with this token
    UnhandledExpression  an infix token has no handler (currently unreachable)

Nested parse routines raise these; only `Parser.parse_program` catches them,
records them, and moves on to the next statement.
"""

from monkey.monkey_lexer import Token


class ParserError(SyntaxError):
    """Base class of all parse diagnostics.

    Attributes:
        token (Token | None): The token the diagnostic points at, when known.
    """

    def __init__(self, message: str, token: Token | None = None):
        super().__init__(message)
        self.message = message
        self.token = token

    def __str__(self) -> str:
        return self.message

    @property
    def location(self) -> str | None:
        """`line:col` of the offending token, or None for synthetic tokens."""
        if self.token is None or not self.token.line:
            return None
        return f"{self.token.line}:{self.token.col}"


class ExpectedToken(ParserError):
    def __init__(self, expected: Token, saw: Token):
        super().__init__(
            f"Expected next token to be {expected.describe()}, got {saw.describe()} instead",
            saw,
        )
        self.expected = expected
        self.saw = saw


class ExpectedIdent(ParserError):
    def __init__(self, saw: Token):
        super().__init__(
            f"Expected next token to be IDENT, got {saw.describe()} instead", saw
        )
        self.saw = saw


class IntegerParseFailure(ParserError):
    def __init__(self, text: str, token: Token | None = None):
        super().__init__(f"Could not parse {text} as integer", token)
        self.text = text


class UnhandledPrefix(ParserError):
    def __init__(self, token: Token):
        super().__init__(f"No prefix parse function for {token.describe()}", token)


class UnhandledExpression(ParserError):
    def __init__(self, token: Token):
        super().__init__(f"No handler for expression: {token.describe()}", token)
