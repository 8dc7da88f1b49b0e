#!/usr/bin/env python3
from decimal import Decimal
from math import isinf, isnan
from typing import Union

from rox.expr import Binary, Expr, Grouping, Literal, Unary, Variable
from rox.expr import Visitor as ExprVisitor
from rox.stmt import Expression, Print, Stmt, Var
from rox.stmt import Visitor as StmtVisitor
from rox.token import Token
from rox.value import Value


class AstPrinter(ExprVisitor[str], StmtVisitor[str]):
    """Printer generating a parenthesized prefix form of the rox AST.

    Every node becomes "(name operands...)", which makes precedence and
    grouping visible at a glance.

    To use the printer:
    rox print_ast examples/arith.rox
    1: (var x = (+ 1 (* 2 3)))
    2: (print (group (- x)))
    """

    def print(self, expr_or_stmt: Union[Expr, Stmt]) -> str:
        return expr_or_stmt.accept(self)

    def visit_expression_stmt(self, stmt: Expression) -> str:
        return self.parenthesize(";", stmt.expression)

    def visit_print_stmt(self, stmt: Print) -> str:
        return self.parenthesize("print", stmt.expression)

    def visit_var_stmt(self, stmt: Var) -> str:
        if stmt.initializer is None:
            return self.parenthesize2("var", stmt.name)

        return self.parenthesize2("var", stmt.name, "=", stmt.initializer)

    def visit_binary_expr(self, expr: Binary) -> str:
        return self.parenthesize(expr.operator.lexeme, expr.left, expr.right)

    def visit_grouping_expr(self, expr: Grouping) -> str:
        return self.parenthesize("group", expr.expression)

    def visit_literal_expr(self, expr: Literal) -> str:
        if expr.value is None:
            return "nil"
        if isinstance(expr.value, bool):
            return str(expr.value).lower()
        if isinstance(expr.value, str):
            return f'"{expr.value}"'

        text = str(expr.value)
        if text.endswith(".0"):
            text = text[0:-2]

        return text

    def visit_unary_expr(self, expr: Unary) -> str:
        return self.parenthesize(expr.operator.lexeme, expr.right)

    def visit_variable_expr(self, expr: Variable) -> str:
        return expr.name.lexeme

    def parenthesize(self, name: str, *exprs: Expr) -> str:
        builder = f"({name}"
        for expr in exprs:
            builder += f" {self.print(expr)}"
        builder += ")"

        return builder

    def parenthesize2(self, name: str, *parts: object) -> str:
        builder = f"({name}"
        for part in parts:
            builder += " "
            if isinstance(part, (Expr, Stmt)):
                builder += self.print(part)
            elif isinstance(part, Token):
                builder += part.lexeme
            else:
                builder += str(part)
        builder += ")"

        return builder


class SourcePrinter(ExprVisitor[str], StmtVisitor[str]):
    """Printer generating rox source text from an AST.

    The output scans and parses back into a tree which evaluates to the same
    value as the original. Every unary and binary expression is wrapped in
    parentheses, so trees built by hand print correctly whatever their shape:

    SourcePrinter().print(Binary(Literal(1.0), plus, Binary(...)))
    '(1 + (2 * 3))'

    Numbers are written in plain positional notation since the scanner has no
    exponent syntax, and the non-finite floats are written as the divisions
    which produce them.

    Raises:
        ValueError: For a string literal containing a double quote, which rox
            has no way to spell.
    """

    def print(self, expr_or_stmt: Union[Expr, Stmt]) -> str:
        return expr_or_stmt.accept(self)

    def visit_expression_stmt(self, stmt: Expression) -> str:
        return f"{self.print(stmt.expression)};"

    def visit_print_stmt(self, stmt: Print) -> str:
        return f"print {self.print(stmt.expression)};"

    def visit_var_stmt(self, stmt: Var) -> str:
        if stmt.initializer is None:
            return f"var {stmt.name.lexeme};"

        return f"var {stmt.name.lexeme} = {self.print(stmt.initializer)};"

    def visit_binary_expr(self, expr: Binary) -> str:
        left = self.print(expr.left)
        right = self.print(expr.right)
        return f"({left} {expr.operator.lexeme} {right})"

    def visit_grouping_expr(self, expr: Grouping) -> str:
        return f"({self.print(expr.expression)})"

    def visit_literal_expr(self, expr: Literal) -> str:
        return self.literal(expr.value)

    def visit_unary_expr(self, expr: Unary) -> str:
        return f"({expr.operator.lexeme}{self.print(expr.right)})"

    def visit_variable_expr(self, expr: Variable) -> str:
        return expr.name.lexeme

    def literal(self, value: Value) -> str:
        if value is None:
            return "nil"
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, str):
            if '"' in value:
                raise ValueError(f"string literal cannot contain '\"': {value!r}")

            return f'"{value}"'

        if isnan(value):
            return "(0 / 0)"
        if isinf(value):
            return "(1 / 0)" if value > 0 else "(-1 / 0)"

        # repr() is the shortest text which reads back as the same float,
        # Decimal expands any exponent into plain digits.
        text = format(Decimal(repr(value)), "f")
        if text.endswith(".0"):
            text = text[0:-2]

        # A leading minus is a unary operator in rox.
        if text.startswith("-"):
            return f"({text})"

        return text
