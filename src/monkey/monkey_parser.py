"""
MONKEY Language Parser

Parses a stream of MONKEY tokens into a `Program` syntax tree, collecting
diagnostics for malformed statements instead of stopping at the first one.

Grammar
-------
- Statements:
    * `let <ident> = <expr>;`
    * `return ... ;` (the value is skipped, not parsed; see `parse_return_statement`)
    * `<expr>;`
    The trailing `;` is optional for let and expression statements.

- Expressions (Pratt parsing / precedence climbing):
    * identifiers, integer literals, `true`, `false`
    * prefix `!x`, `-x`, `+x`
    * infix `+ - * / < > == !=`
    * grouping `( <expr> )`
    * `if (<expr>) { ... } else { ... }`

Parser Behavior
---------------
- Holds a two-token window: `cur_token` and `peek_token`.
- Lookahead checks compare token shape only: any identifier matches any other
  identifier, any integer literal matches any other integer literal.
- Nested parse routines raise `ParserError` and never recover.
- `parse_program()` is the single recovery point: a failed statement is
  recorded in `errors()`, dropped from the tree, and parsing resumes one token
  further on. No resynchronization to a statement boundary is attempted.

Limits
------
Expression and block nesting is handled by recursion, so pathologically deep
input can raise `RecursionError`.

Entry Points
------------
- `parse_program()`: Parse the whole token stream into a `Program`.
- `errors()`: Diagnostics from the most recent `parse_program()` call.
- `parse_statement()`, `parse_expression(precedence)`: Lower-level entry points.
"""

from __future__ import annotations

from typing import Protocol

from monkey.monkey_ast import (
    NOTHING,
    BlockStatement,
    Boolean,
    Expression,
    ExpressionStatement,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.monkey_constants import (
    ASSIGN,
    ELSE,
    EOF,
    FALSE,
    IDENT,
    IF,
    INFIX_OPERATORS,
    INT,
    LBRACE,
    LET,
    LPAREN,
    PREFIX_OPERATORS,
    RBRACE,
    RETURN,
    RPAREN,
    SEMICOLON,
    TRUE,
)
from monkey.monkey_errors import (
    ExpectedIdent,
    ExpectedToken,
    IntegerParseFailure,
    ParserError,
    UnhandledPrefix,
)
from monkey.monkey_lexer import CharacterStream, Lexer, Token
from monkey.monkey_precedence import Precedence


class TokenSource(Protocol):  # pragma: no cover
    """Anything that hands out tokens one at a time.

    Must keep returning the `EOF` token once the input is exhausted.
    """

    def next_token(self) -> Token: ...


class Parser:
    """
    MONKEY Parser Class

    Attributes
    ----------
    lexer : TokenSource
        Where tokens are pulled from.
    cur_token : Token
        The token being parsed.
    peek_token : Token
        One token of lookahead beyond `cur_token`.
    """

    def __init__(self, lexer: TokenSource) -> None:
        self.lexer = lexer
        self._errors: list[ParserError] = []
        self.cur_token: Token = self.lexer.next_token()
        self.peek_token: Token = self.lexer.next_token()

    @classmethod
    def from_source(cls, source: str) -> Parser:
        return cls(Lexer(CharacterStream(source)))

    def errors(self) -> list[ParserError]:
        return list(self._errors)

    # Token window

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def current_token_is(self, tok: Token | str) -> bool:
        return _as_token(tok).same_shape(self.cur_token)

    def peek_token_is(self, tok: Token | str) -> bool:
        return _as_token(tok).same_shape(self.peek_token)

    def expect_peek(self, tok: Token | str) -> None:
        """Advances onto the next token if it has the expected shape.

        Raises:
            ExpectedToken: Otherwise. The window is left untouched.
        """
        expected = _as_token(tok)
        if not expected.same_shape(self.peek_token):
            raise ExpectedToken(expected, self.peek_token)
        self.next_token()

    def expect_ident(self) -> Identifier:
        """Advances onto the next token if it is an identifier and returns it.

        Raises:
            ExpectedIdent: Otherwise. The window is left untouched.
        """
        if self.peek_token.type != IDENT:
            raise ExpectedIdent(self.peek_token)
        ident = Identifier(self.peek_token.value)
        self.next_token()
        return ident

    def cur_precedence(self) -> Precedence:
        return Precedence.for_token(self.cur_token)

    def peek_precedence(self) -> Precedence:
        return Precedence.for_token(self.peek_token)

    # Statements

    def parse_program(self) -> Program:
        """Parse statements until `EOF`, recording failed ones in `errors()`."""
        self._errors = []
        statements: list[Statement] = []

        while self.cur_token.type != EOF:
            try:
                statements.append(self.parse_statement())
            except ParserError as e:
                self._errors.append(e)
            self.next_token()

        return Program(statements)

    def parse_statement(self) -> Statement:
        if self.cur_token.type == LET:
            return self.parse_let_statement()
        if self.cur_token.type == RETURN:
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement:
        token = self.cur_token
        name = self.expect_ident()
        self.expect_peek(ASSIGN)
        self.next_token()

        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(SEMICOLON):
            self.next_token()
        return LetStatement(token, name, value)

    def parse_return_statement(self) -> ReturnStatement:
        """Parse `return ... ;` without parsing the returned value.

        Tokens are skipped up to the next `;`. `EOF` also ends the skip so a
        missing semicolon cannot stall the parser.
        """
        token = self.cur_token
        self.next_token()
        while not self.current_token_is(SEMICOLON) and self.cur_token.type != EOF:
            self.next_token()
        return ReturnStatement(token, NOTHING)

    def parse_expression_statement(self) -> ExpressionStatement:
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(SEMICOLON):
            self.next_token()
        return ExpressionStatement(token, expression)

    def parse_block_statement(self) -> BlockStatement:
        """Parse statements up to the closing `}`.

        Unlike `parse_program`, the first failing statement aborts the whole
        block.
        """
        token = self.cur_token
        statements: list[Statement] = []
        self.next_token()

        while not self.current_token_is(RBRACE) and self.cur_token.type != EOF:
            statements.append(self.parse_statement())
            self.next_token()

        return BlockStatement(token, statements)

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression:
        left = self._parse_prefix()

        # Stop at `;` or at an operator that binds no tighter than `precedence`.
        # Equal precedence stops too, which keeps `a - b - c` left-associative.
        while not self.peek_token_is(SEMICOLON) and precedence < self.peek_precedence():
            if self.peek_token.type not in INFIX_OPERATORS:
                return left
            self.next_token()
            left = self.parse_infix_expression(left)

        return left

    def _parse_prefix(self) -> Expression:
        tok = self.cur_token

        if tok.type == IDENT:
            return Identifier(tok.value)
        if tok.type == INT:
            return self.parse_integer_literal()
        if tok.type in PREFIX_OPERATORS:
            return self.parse_prefix_expression()
        if tok.type in (TRUE, FALSE):
            return self.parse_boolean()
        if tok.type == LPAREN:
            return self.parse_grouped_expression()
        if tok.type == IF:
            return self.parse_if_expression()

        raise UnhandledPrefix(tok)

    def parse_integer_literal(self) -> IntegerLiteral:
        try:
            return IntegerLiteral.from_text(self.cur_token.value)
        except ValueError as e:
            raise IntegerParseFailure(self.cur_token.value, self.cur_token) from e

    def parse_boolean(self) -> Boolean:
        return Boolean(self.cur_token.type == TRUE)

    def parse_prefix_expression(self) -> PrefixExpression:
        operator = self.cur_token
        self.next_token()
        right = self.parse_expression(Precedence.PREFIX)
        return PrefixExpression(operator, right)

    def parse_infix_expression(self, left: Expression) -> InfixExpression:
        operator = self.cur_token
        precedence = self.cur_precedence()
        self.next_token()
        # The operator's own level, not one above it: see parse_expression.
        right = self.parse_expression(precedence)
        return InfixExpression(left, operator, right)

    def parse_grouped_expression(self) -> Expression:
        """Parse `( expr )`, returning the inner expression.

        A missing `)` is reported in preference to a failure inside the group.
        """
        self.next_token()
        try:
            expr = self.parse_expression(Precedence.LOWEST)
        except ParserError:
            self.expect_peek(RPAREN)
            raise
        self.expect_peek(RPAREN)
        return expr

    def parse_if_expression(self) -> IfExpression:
        self.expect_peek(LPAREN)
        # cur_token is `(`, so the condition parses as a grouped expression.
        condition = self.parse_expression(Precedence.LOWEST)

        self.expect_peek(LBRACE)
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token.type == ELSE:
            self.next_token()
            self.expect_peek(LBRACE)
            alternative = self.parse_block_statement()

        return IfExpression(condition, consequence, alternative)


def _as_token(tok: Token | str) -> Token:
    return Token(tok) if isinstance(tok, str) else tok
