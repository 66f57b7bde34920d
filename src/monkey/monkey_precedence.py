"""
Binding strength of MONKEY binary operators.

`Precedence` levels are totally ordered from LOWEST to CALL. CALL is reserved
so that new levels can be introduced without renumbering; no syntax produces
it yet.

Any token without an entry in `precedences` maps to LOWEST, which is what
stops the parser's infix loop at statement and group boundaries.
"""

from enum import IntEnum

from monkey.monkey_constants import ASTERISK, EQ, GT, LT, MINUS, NOT_EQ, PLUS, SLASH
from monkey.monkey_lexer import Token


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -X or !X
    CALL = 7  # reserved

    @classmethod
    def for_token(cls, token: Token) -> "Precedence":
        return precedences.get(token.type, cls.LOWEST)


precedences: dict[str, Precedence] = {
    EQ: Precedence.EQUALS,
    NOT_EQ: Precedence.EQUALS,
    LT: Precedence.LESSGREATER,
    GT: Precedence.LESSGREATER,
    PLUS: Precedence.SUM,
    MINUS: Precedence.SUM,
    SLASH: Precedence.PRODUCT,
    ASTERISK: Precedence.PRODUCT,
}
