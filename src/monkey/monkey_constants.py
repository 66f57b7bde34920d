"""
Token vocabulary for the MONKEY language.

Defines the canonical token type names shared by the lexer, parser and
diagnostics, together with the hashmaps used to recognize operators and
keywords in source text.

Exports:
    - token_hashmap: source text -> canonical token type (operators and keywords)
    - operator_hashmap: operator and punctuation subset of `token_hashmap`
    - keyword_hashmap: keyword subset of `token_hashmap`
    - TOKEN_LITERALS: canonical token type -> fixed source text
    - PAYLOAD_TOKENS: token types whose value is free-form (identifiers, integers)
    - INFIX_OPERATORS, PREFIX_OPERATORS
"""

ILLEGAL = "ILLEGAL"
EOF = "EOF"

IDENT = "IDENT"
INT = "INT"

ASSIGN = "ASSIGN"
PLUS = "PLUS"
MINUS = "MINUS"
BANG = "BANG"
ASTERISK = "ASTERISK"
SLASH = "SLASH"

LT = "LT"
GT = "GT"
EQ = "EQ"
NOT_EQ = "NOT_EQ"

SEMICOLON = "SEMICOLON"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
LBRACE = "LBRACE"
RBRACE = "RBRACE"

LET = "LET"
RETURN = "RETURN"
IF = "IF"
ELSE = "ELSE"
TRUE = "TRUE"
FALSE = "FALSE"

operator_hashmap: dict[str, str] = {
    "=": ASSIGN,
    "+": PLUS,
    "-": MINUS,
    "!": BANG,
    "*": ASTERISK,
    "/": SLASH,
    "<": LT,
    ">": GT,
    "==": EQ,
    "!=": NOT_EQ,
    ";": SEMICOLON,
    "(": LPAREN,
    ")": RPAREN,
    "{": LBRACE,
    "}": RBRACE,
}

keyword_hashmap: dict[str, str] = {
    "let": LET,
    "return": RETURN,
    "if": IF,
    "else": ELSE,
    "true": TRUE,
    "false": FALSE,
}

token_hashmap: dict[str, str] = {**operator_hashmap, **keyword_hashmap}

TOKEN_LITERALS: dict[str, str] = {v: k for k, v in token_hashmap.items()}
TOKEN_LITERALS[EOF] = "EOF"

PAYLOAD_TOKENS: frozenset[str] = frozenset({IDENT, INT})

INFIX_OPERATORS: frozenset[str] = frozenset(
    {PLUS, MINUS, ASTERISK, SLASH, GT, LT, EQ, NOT_EQ}
)

PREFIX_OPERATORS: frozenset[str] = frozenset({BANG, MINUS, PLUS})
