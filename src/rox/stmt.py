#!/usr/bin/env python3
from __future__ import annotations

from abc import ABCMeta, abstractmethod
from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from rox.expr import Expr
from rox.token import Token

R = TypeVar("R", covariant=True)


@dataclass(eq=False, frozen=True)
class Stmt(metaclass=ABCMeta):
    """Base class for a rox statement.

    A program is a list of statements. Unlike an expression, a statement does
    not produce a value, it is executed for its side effect: writing output or
    binding a variable.

    For example:
    Parser(Scanner("print 2 + 2;").scan_tokens()).parse()

    Yields a single Print statement:
    [
        Print(
            expression=Binary(
                left=Literal(2.0),
                operator=Token(TokenType.PLUS, "+", None, 1),
                right=Literal(2.0),
            ),
        ),
    ]
    """

    @abstractmethod
    def accept(self, visitor: Visitor[R]) -> R: ...


@dataclass(eq=False, frozen=True)
class Expression(Stmt):
    """Expression statement, evaluated and its value discarded.

    Args:
        expression: Expr. Expression to evaluate.
    """

    expression: Expr

    def accept(self, visitor: Visitor[R]) -> R:
        return visitor.visit_expression_stmt(self)


@dataclass(eq=False, frozen=True)
class Print(Stmt):
    """Print statement.

    Evaluates the expression and writes its display form and a newline to the
    interpreter's output.

    Args:
        expression: Expr. Expression to evaluate and print.
    """

    expression: Expr

    def accept(self, visitor: Visitor[R]) -> R:
        return visitor.visit_print_stmt(self)


@dataclass(eq=False, frozen=True)
class Var(Stmt):
    """Variable declaration.

    Binds the name in the environment, overwriting any earlier binding. Without
    an initializer the variable is bound to nil:
    var a;      -> Var(name=Token(IDENTIFIER, "a", None, 1), initializer=None)
    var b = 1;  -> Var(name=Token(IDENTIFIER, "b", None, 1),
                       initializer=Literal(1.0))

    Args:
        name: Token. IDENTIFIER token for the variable name.
        initializer: Optional[Expr]. Expression for the initial value, if any.
    """

    name: Token
    initializer: Optional[Expr]

    def accept(self, visitor: Visitor[R]) -> R:
        return visitor.visit_var_stmt(self)


class Visitor(Generic[R], metaclass=ABCMeta):
    """Rox statement visitor, see rox.expr.Visitor."""

    @abstractmethod
    def visit_expression_stmt(self, stmt: Expression) -> R: ...

    @abstractmethod
    def visit_print_stmt(self, stmt: Print) -> R: ...

    @abstractmethod
    def visit_var_stmt(self, stmt: Var) -> R: ...
