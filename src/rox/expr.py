#!/usr/bin/env python3
from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from typing import FrozenSet, Generic, TypeVar

from rox.token import Token
from rox.token_type import TokenType
from rox.value import Value

# Covariant so that a Visitor[str] is accepted wherever a Visitor[object] is.
R = TypeVar("R", covariant=True)

UNARY_OPERATORS: FrozenSet[TokenType] = frozenset({TokenType.BANG, TokenType.MINUS})

BINARY_OPERATORS: FrozenSet[TokenType] = frozenset(
    {
        TokenType.BANG_EQUAL,
        TokenType.EQUAL_EQUAL,
        TokenType.GREATER,
        TokenType.GREATER_EQUAL,
        TokenType.LESS,
        TokenType.LESS_EQUAL,
        TokenType.MINUS,
        TokenType.PLUS,
        TokenType.SLASH,
        TokenType.STAR,
    }
)


# eq=False keeps identity equality and hashing, two structurally equal nodes
# from different places in the source are still different nodes.
@dataclass(eq=False, frozen=True)
class Expr(metaclass=ABCMeta):
    """Base class for a rox expression.

    An expression is a tree of nodes which evaluates to a Value. Every node owns
    its children exclusively and is never mutated after the Parser builds it.

    For example:
    statements = Parser(Scanner("1 + 2;").scan_tokens()).parse()

    Produces a single expression statement:
    Expression(
        expression=Binary(
            left=Literal(1.0),
            operator=Token(TokenType.PLUS, "+", None, 1),
            right=Literal(2.0),
        ),
    )

    Expressions are consumed through the visitor pattern, accept() routes the
    node to the matching visit method on the visitor.
    """

    @abstractmethod
    def accept(self, visitor: Visitor[R]) -> R: ...


@dataclass(eq=False, frozen=True)
class Binary(Expr):
    """Binary expression.

    Arithmetic operators, evaluating to a float (or str for + on strings):
    - + / *

    Comparison operators, evaluating to a bool:
    > >= < <=

    Equality operators, evaluating to a bool:
    != ==

    Args:
        left: Expr. Left operand.
        operator: Token. Operator token, must be one of BINARY_OPERATORS.
        right: Expr. Right operand.

    Raises:
        ValueError: If the operator is not a binary operator.
    """

    left: Expr
    operator: Token
    right: Expr

    def __post_init__(self) -> None:
        if self.operator.type not in BINARY_OPERATORS:
            raise ValueError(f"'{self.operator.lexeme}' is not a binary operator")

    def accept(self, visitor: Visitor[R]) -> R:
        return visitor.visit_binary_expr(self)


@dataclass(eq=False, frozen=True)
class Grouping(Expr):
    """Parenthesized expression, evaluates to its inner expression.

    Args:
        expression: Expr. Inner expression.
    """

    expression: Expr

    def accept(self, visitor: Visitor[R]) -> R:
        return visitor.visit_grouping_expr(self)


@dataclass(eq=False, frozen=True)
class Literal(Expr):
    """Literal expression.

    Holds the Python representation of a literal in the source:
    false -> Literal(False)
    true  -> Literal(True)
    nil   -> Literal(None)
    "foo" -> Literal("foo")
    2     -> Literal(2.0)

    Numbers are always floats, a Python int is converted on construction.

    Args:
        value: Value. The literal value.

    Raises:
        ValueError: If the value is not a str, number, bool or None.
    """

    value: Value

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or self.value is None:
            return
        if isinstance(self.value, int):
            # Frozen dataclass, so the field has to be set through object.
            object.__setattr__(self, "value", float(self.value))
            return
        if not isinstance(self.value, (str, float)):
            raise ValueError(f"{self.value!r} is not a rox value")

    def accept(self, visitor: Visitor[R]) -> R:
        return visitor.visit_literal_expr(self)


@dataclass(eq=False, frozen=True)
class Unary(Expr):
    """Unary expression, either numeric negation (-2) or logical not (!nil).

    Args:
        operator: Token. Operator token, BANG or MINUS.
        right: Expr. Operand.

    Raises:
        ValueError: If the operator is not a unary operator.
    """

    operator: Token
    right: Expr

    def __post_init__(self) -> None:
        if self.operator.type not in UNARY_OPERATORS:
            raise ValueError(f"'{self.operator.lexeme}' is not a unary operator")

    def accept(self, visitor: Visitor[R]) -> R:
        return visitor.visit_unary_expr(self)


@dataclass(eq=False, frozen=True)
class Variable(Expr):
    """Variable reference, evaluates to the value bound to the name.

    Args:
        name: Token. IDENTIFIER token naming the variable.
    """

    name: Token

    def accept(self, visitor: Visitor[R]) -> R:
        return visitor.visit_variable_expr(self)


class Visitor(Generic[R], metaclass=ABCMeta):
    """Rox expression visitor.

    Implementations provide one visit method per Expr type, and are driven by
    calling expr.accept(visitor). The type parameter R is the return type of
    every visit method.

    For example:
    class Counter(Visitor[int]):
        def visit_literal_expr(self, expr: Literal) -> int:
            return 1

        def visit_binary_expr(self, expr: Binary) -> int:
            return 1 + expr.left.accept(self) + expr.right.accept(self)
        ...
    """

    @abstractmethod
    def visit_binary_expr(self, expr: Binary) -> R: ...

    @abstractmethod
    def visit_grouping_expr(self, expr: Grouping) -> R: ...

    @abstractmethod
    def visit_literal_expr(self, expr: Literal) -> R: ...

    @abstractmethod
    def visit_unary_expr(self, expr: Unary) -> R: ...

    @abstractmethod
    def visit_variable_expr(self, expr: Variable) -> R: ...
