"""
Defines the abstract syntax tree (AST) node structure for the MONKEY programming language.

Classes:
    Node:
        Base of every syntax tree node. Provides canonical rendering via `str()`
        and conversion to plain dictionaries via `to_dict()`.

    Statement / Expression:
        Marker bases for the two node families.

    Program, LetStatement, ReturnStatement, ExpressionStatement, BlockStatement:
        Statement-level nodes.

    Identifier, IntegerLiteral, Boolean, PrefixExpression, InfixExpression,
    IfExpression, Nothing:
        Expression-level nodes.

    ASTDict:
        TypedDict representation for serializing nodes to plain Python dictionaries,
        suitable for JSON output or debugging.

Every node is a frozen dataclass: once built it cannot be modified, and child
sequences are stored as tuples in source order. Children are owned by exactly
one parent, so the result is always a tree.

Canonical rendering parenthesizes every operator application, which lets tests
check the shape of a parse without deep structural comparisons:

    >>> str(InfixExpression(Identifier("a"), Token("PLUS"), Identifier("b")))
    '(a + b)'
"""

import re
from dataclasses import dataclass, field
from typing import Any, TypedDict

from monkey.monkey_lexer import Token

I64_MIN = -(2**63)
I64_MAX = 2**63 - 1

_INTEGER_TEXT = re.compile(r"[+-]?[0-9]+")


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of a node used for serialization.

    Only `kind` is always present; the remaining keys depend on the node type.

    Fields:
        kind (str): The node class name (e.g., "LetStatement", "InfixExpression").
        token (str): Source text of the token that introduced the node.
        name (str): Bound name of a let statement.
        value (Any): Literal value, identifier name, or nested value node.
        operator (str): Operator text for prefix and infix expressions.
        left (ASTDict): Left operand of an infix expression.
        right (ASTDict): Right operand of a prefix or infix expression.
        condition (ASTDict): Condition of an if expression.
        consequence (ASTDict): Block evaluated when the condition holds.
        alternative (ASTDict | None): Optional else block.
        expression (ASTDict): Wrapped expression of an expression statement.
        statements (list[ASTDict]): Ordered child statements.
    """

    kind: str
    token: str
    name: str
    value: Any
    operator: str
    left: "ASTDict"
    right: "ASTDict"
    condition: "ASTDict"
    consequence: "ASTDict"
    alternative: "ASTDict | None"
    expression: "ASTDict"
    statements: list["ASTDict"]


class Node:
    """Base class for every syntax tree node."""

    def to_dict(self) -> ASTDict:  # pragma: no cover
        raise NotImplementedError

    def __str__(self) -> str:  # pragma: no cover
        raise NotImplementedError


class Statement(Node):
    pass


class Expression(Node):
    pass


# Expressions


@dataclass(frozen=True)
class Identifier(Expression):
    value: str

    def __str__(self) -> str:
        return self.value

    def to_dict(self) -> ASTDict:
        return {"kind": "Identifier", "value": self.value}


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    """A signed 64-bit integer literal.

    Raises:
        ValueError: If `value` does not fit in a signed 64-bit integer.
    """

    value: int

    def __post_init__(self) -> None:
        if not I64_MIN <= self.value <= I64_MAX:
            raise ValueError(f"{self.value} does not fit in a signed 64-bit integer")

    @classmethod
    def from_text(cls, text: str) -> "IntegerLiteral":
        """Builds a literal from source text.

        Only an optional sign followed by ASCII digits is accepted; Python's
        looser `int()` syntax (underscores, surrounding whitespace) is not.

        Raises:
            ValueError: If the text is not an integer or is out of range.
        """
        if not _INTEGER_TEXT.fullmatch(text):
            raise ValueError(f"invalid integer literal: {text!r}")
        return cls(int(text))

    def __str__(self) -> str:
        return str(self.value)

    def to_dict(self) -> ASTDict:
        return {"kind": "IntegerLiteral", "value": self.value}


@dataclass(frozen=True)
class Boolean(Expression):
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"

    def to_dict(self) -> ASTDict:
        return {"kind": "Boolean", "value": self.value}


@dataclass(frozen=True)
class PrefixExpression(Expression):
    operator: Token
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator.value}{self.right})"

    def to_dict(self) -> ASTDict:
        return {
            "kind": "PrefixExpression",
            "operator": self.operator.value,
            "right": self.right.to_dict(),
        }


@dataclass(frozen=True)
class InfixExpression(Expression):
    left: Expression
    operator: Token
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator.value} {self.right})"

    def to_dict(self) -> ASTDict:
        return {
            "kind": "InfixExpression",
            "left": self.left.to_dict(),
            "operator": self.operator.value,
            "right": self.right.to_dict(),
        }


@dataclass(frozen=True)
class Nothing(Expression):
    """Placeholder for a value that was deliberately not parsed.

    No source syntax produces it; return statements carry it as their value.
    Use the `NOTHING` singleton.
    """

    def __str__(self) -> str:
        return ""

    def to_dict(self) -> ASTDict:
        return {"kind": "Nothing"}


NOTHING = Nothing()


# Statements


@dataclass(frozen=True)
class BlockStatement(Statement):
    """A `{ ... }` sequence of statements, used as a branch of an if expression."""

    token: Token
    statements: tuple[Statement, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "statements", tuple(self.statements))

    def __str__(self) -> str:
        if not self.statements:
            return "{ }"
        return "{ " + " ".join(str(s) for s in self.statements) + " }"

    def to_dict(self) -> ASTDict:
        return {
            "kind": "BlockStatement",
            "token": self.token.value,
            "statements": [s.to_dict() for s in self.statements],
        }


@dataclass(frozen=True)
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: BlockStatement | None = None

    def __str__(self) -> str:
        # The grammar requires `(` after `if`; operator forms already render one.
        if isinstance(self.condition, (PrefixExpression, InfixExpression)):
            condition = str(self.condition)
        else:
            condition = f"({self.condition})"
        out = f"if {condition} {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out

    def to_dict(self) -> ASTDict:
        return {
            "kind": "IfExpression",
            "condition": self.condition.to_dict(),
            "consequence": self.consequence.to_dict(),
            "alternative": (
                self.alternative.to_dict() if self.alternative is not None else None
            ),
        }


@dataclass(frozen=True)
class LetStatement(Statement):
    token: Token
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"let {self.name} = {self.value};"

    def to_dict(self) -> ASTDict:
        return {
            "kind": "LetStatement",
            "token": self.token.value,
            "name": self.name.value,
            "value": self.value.to_dict(),
        }


@dataclass(frozen=True)
class ReturnStatement(Statement):
    token: Token
    value: Expression = NOTHING

    def __str__(self) -> str:
        rendered = str(self.value)
        return f"return {rendered};" if rendered else "return;"

    def to_dict(self) -> ASTDict:
        return {
            "kind": "ReturnStatement",
            "token": self.token.value,
            "value": self.value.to_dict(),
        }


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    token: Token
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)

    def to_dict(self) -> ASTDict:
        return {
            "kind": "ExpressionStatement",
            "token": self.token.value,
            "expression": self.expression.to_dict(),
        }


@dataclass(frozen=True)
class Program(Node):
    """Root of the tree: top-level statements in source order."""

    statements: tuple[Statement, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "statements", tuple(self.statements))

    def __str__(self) -> str:
        return "\n".join(str(s) for s in self.statements)

    def to_dict(self) -> ASTDict:
        return {
            "kind": "Program",
            "statements": [s.to_dict() for s in self.statements],
        }
