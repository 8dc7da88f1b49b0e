import math

import pytest

from rox.ast_printer import AstPrinter, SourcePrinter
from rox.expr import Binary, Grouping, Literal, Unary, Variable
from rox.interpreter import Interpreter
from rox.parser import Parser
from rox.scanner import Scanner
from rox.stmt import Expression, Print, Var
from rox.token import Token
from rox.token_type import TokenType


def op(type, lexeme):
    return Token(type, lexeme, None, 1)


PLUS = op(TokenType.PLUS, "+")
MINUS = op(TokenType.MINUS, "-")
STAR = op(TokenType.STAR, "*")
SLASH = op(TokenType.SLASH, "/")
LESS = op(TokenType.LESS, "<")
EQUAL_EQUAL = op(TokenType.EQUAL_EQUAL, "==")
BANG = op(TokenType.BANG, "!")


def reparse(expr):
    source = SourcePrinter().print(expr)
    return Parser(Scanner(source).scan_tokens()).parse_expression()


def assert_same_value(expr):
    interpreter = Interpreter()
    expected = interpreter.evaluate(expr)
    actual = interpreter.evaluate(reparse(expr))
    assert interpreter.is_equal(expected, actual)


def test_ast_printer_expressions():
    expr = Binary(
        Unary(MINUS, Literal(123.0)),
        STAR,
        Grouping(Literal(45.67)),
    )
    assert AstPrinter().print(expr) == "(* (- 123) (group 45.67))"


def test_ast_printer_literals():
    printer = AstPrinter()
    assert printer.print(Literal(None)) == "nil"
    assert printer.print(Literal(True)) == "true"
    assert printer.print(Literal("hi")) == '"hi"'


def test_ast_printer_statements():
    name = op(TokenType.IDENTIFIER, "x")
    printer = AstPrinter()
    assert printer.print(Var(name, None)) == "(var x)"
    assert printer.print(Var(name, Literal(1.0))) == "(var x = 1)"
    assert printer.print(Print(Variable(name))) == "(print x)"
    assert printer.print(Expression(Literal(2.0))) == "(; 2)"


def test_source_printer_parenthesizes_operators():
    expr = Binary(Literal(1.0), PLUS, Binary(Literal(2.0), STAR, Literal(3.0)))
    assert SourcePrinter().print(expr) == "(1 + (2 * 3))"


def test_round_trip_simple_addition():
    expr = Binary(Literal(1.0), PLUS, Literal(2.0))
    assert_same_value(expr)


def test_round_trip_respects_tree_shape():
    # 1 - (2 - 3), which flat source would read as (1 - 2) - 3
    expr = Binary(Literal(1.0), MINUS, Binary(Literal(2.0), MINUS, Literal(3.0)))
    assert Interpreter().evaluate(reparse(expr)) == 2.0


def test_round_trip_number_forms():
    for value in (0.1, 12.5, 1e20, 1e-7, 123456789.125, -0.0, -3.5):
        assert_same_value(Literal(value))
        assert Interpreter().evaluate(reparse(Literal(value))) == value


def test_round_trip_non_finite_numbers():
    for value in (math.inf, -math.inf, math.nan):
        assert_same_value(Literal(value))


def test_round_trip_mixed_values():
    exprs = [
        Binary(Literal("a"), PLUS, Literal("b")),
        Binary(Literal(1.0), LESS, Literal(2.0)),
        Binary(Literal(None), EQUAL_EQUAL, Literal(False)),
        Unary(BANG, Unary(BANG, Literal(True))),
        Unary(MINUS, Literal(-4.0)),
        Binary(Grouping(Literal(9.0)), SLASH, Literal(0.0)),
    ]
    for expr in exprs:
        assert_same_value(expr)


def test_source_printer_statements():
    name = op(TokenType.IDENTIFIER, "x")
    printer = SourcePrinter()
    assert printer.print(Var(name, None)) == "var x;"
    assert printer.print(Var(name, Literal(1.5))) == "var x = 1.5;"
    assert printer.print(Print(Variable(name))) == "print x;"
    assert printer.print(Expression(Literal(True))) == "true;"


def test_source_printer_rejects_quotes_in_strings():
    with pytest.raises(ValueError):
        SourcePrinter().print(Literal('say "hi"'))
