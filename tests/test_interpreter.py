import io
import math
import sys

import pytest

from rox.environment import Environment
from rox.expr import Binary, Grouping, Literal, Unary, Variable
from rox.interpreter import Interpreter
from rox.parser import Parser
from rox.runtime_error import RoxRuntimeError
from rox.scanner import Scanner
from rox.stmt import Print
from rox.token import Token
from rox.token_type import TokenType


def op(type, lexeme):
    return Token(type, lexeme, None, 1)


PLUS = op(TokenType.PLUS, "+")
BANG = op(TokenType.BANG, "!")


def evaluate(source, interpreter=None):
    expr = Parser(Scanner(source).scan_tokens()).parse_expression()
    return (interpreter or Interpreter()).evaluate(expr)


def run_program(source, environment=None):
    statements = Parser(Scanner(source).scan_tokens()).parse()
    output = io.StringIO()
    error = Interpreter(environment, output).interpret(statements)
    return output.getvalue(), error


def test_addition_adds():
    expr = Binary(Literal(3.0), PLUS, Literal(4.0))
    assert Interpreter().evaluate(expr) == 7.0


def test_string_concatenation():
    expr = Binary(Literal("a"), PLUS, Literal("b"))
    assert Interpreter().evaluate(expr) == "ab"


def test_arithmetic():
    assert evaluate("10 - 4") == 6.0
    assert evaluate("3 * 4") == 12.0
    assert evaluate("7 / 2") == 3.5
    assert evaluate("-(2 + 3)") == -5.0
    assert evaluate("2 + 3 * 4 - 6 / 2") == 11.0


def test_division_by_zero_follows_ieee():
    assert evaluate("1 / 0") == math.inf
    assert evaluate("-1 / 0") == -math.inf
    assert evaluate("1 / -0") == -math.inf
    assert math.isnan(evaluate("0 / 0"))


def test_comparisons():
    assert evaluate("1 < 2") is True
    assert evaluate("2 <= 2") is True
    assert evaluate("1 > 2") is False
    assert evaluate("3 >= 4") is False


def test_equality():
    assert evaluate("1 == 1") is True
    assert evaluate('"a" == "a"') is True
    assert evaluate("nil == nil") is True
    assert evaluate("nil == false") is False
    assert evaluate('1 == "1"') is False
    assert evaluate("true != false") is True
    assert evaluate("0 == false") is False
    assert evaluate("1 == true") is False


def test_not_uses_truthiness():
    assert Interpreter().evaluate(Unary(BANG, Literal(None))) is True
    assert Interpreter().evaluate(Unary(BANG, Literal(0.0))) is False
    assert evaluate('!""') is False
    assert evaluate("!false") is True
    assert evaluate("!!nil") is False


def test_truthiness():
    interpreter = Interpreter()
    assert interpreter.is_truthy(None) is False
    assert interpreter.is_truthy(False) is False
    assert interpreter.is_truthy(True) is True
    assert interpreter.is_truthy(0.0) is True
    assert interpreter.is_truthy("") is True


def test_value_equality_properties():
    interpreter = Interpreter()
    values = [None, True, False, 0.0, 1.0, math.nan, "", "a"]
    for a in values:
        assert interpreter.is_equal(a, a)
        for b in values:
            assert interpreter.is_equal(a, b) == interpreter.is_equal(b, a)
            if type(a) is not type(b):
                assert not interpreter.is_equal(a, b)


def test_stringify():
    interpreter = Interpreter()
    assert interpreter.stringify(None) == "nil"
    assert interpreter.stringify(True) == "true"
    assert interpreter.stringify(False) == "false"
    assert interpreter.stringify(6.0) == "6"
    assert interpreter.stringify(2.5) == "2.5"
    assert interpreter.stringify("text") == "text"


def test_undefined_variable():
    with pytest.raises(RoxRuntimeError) as excinfo:
        Interpreter().evaluate(Variable(op(TokenType.IDENTIFIER, "x")))
    assert excinfo.value.message == "Undefined variable 'x'."


def test_negating_non_number():
    with pytest.raises(RoxRuntimeError) as excinfo:
        evaluate('-"a"')
    assert excinfo.value.message == "Operand must be a number."


def test_mismatched_operands_name_the_operator():
    with pytest.raises(RoxRuntimeError) as excinfo:
        evaluate('1 + "a"')
    assert excinfo.value.message == "Operands of '+' must be two numbers or two strings."

    for operator in ("-", "*", "/", "<", "<=", ">", ">="):
        with pytest.raises(RoxRuntimeError) as excinfo:
            evaluate(f'"a" {operator} 1')
        assert excinfo.value.message == f"Operands of '{operator}' must be numbers."
        assert excinfo.value.token.lexeme == operator


def test_both_operands_evaluated_left_first():
    # The left operand fails first even though the right would fail too.
    with pytest.raises(RoxRuntimeError) as excinfo:
        evaluate("a + b")
    assert excinfo.value.message == "Undefined variable 'a'."

    # The operator never runs when the right operand fails.
    with pytest.raises(RoxRuntimeError) as excinfo:
        evaluate('"s" * b')
    assert excinfo.value.message == "Undefined variable 'b'."


def test_var_and_print_end_to_end():
    output, error = run_program("var x = 5; print x + 1;")
    assert error is None
    assert output == "6\n"


def test_var_without_initializer_is_nil():
    output, error = run_program("var x; print x;")
    assert error is None
    assert output == "nil\n"


def test_redeclaration_overwrites():
    output, error = run_program('var x = 1; var x = "two"; print x;')
    assert error is None
    assert output == "two\n"


def test_expression_statement_prints_nothing():
    output, error = run_program("1 + 2;")
    assert error is None
    assert output == ""


def test_runtime_error_aborts_remaining_statements():
    environment = Environment()
    output, error = run_program(
        'var a = 1; print a; var b = -"x"; print 2;', environment
    )
    assert output == "1\n"
    assert isinstance(error, RoxRuntimeError)
    assert error.message == "Operand must be a number."
    assert environment.values == {"a": 1.0}


def test_environment_persists_between_runs():
    environment = Environment()
    run_program("var greeting = \"hi\";", environment)
    output, error = run_program("print greeting + \"!\";", environment)
    assert error is None
    assert output == "hi!\n"


def test_print_defaults_to_stdout(capsys):
    statements = Parser(Scanner("print true;").scan_tokens()).parse()
    assert Interpreter().interpret(statements) is None
    assert capsys.readouterr().out == "true\n"


def test_int_literals_are_numbers():
    expr = Binary(Literal(3), PLUS, Literal(4))
    assert Literal(3).value == 3.0
    assert Interpreter().evaluate(expr) == 7.0
    assert Literal(True).value is True


def test_literal_rejects_foreign_values():
    with pytest.raises(ValueError):
        Literal([1, 2])


def test_deep_expression_is_a_runtime_error():
    terms = 2 * sys.getrecursionlimit()
    environment = Environment()
    output, error = run_program(
        "var before = 1;\nprint " + " + ".join(["1"] * terms) + ";\nprint 3;",
        environment,
    )
    assert output == ""
    assert isinstance(error, RoxRuntimeError)
    assert error.message == "Expression too deeply nested."
    assert error.token.type is TokenType.PLUS
    assert error.token.line == 2
    assert environment.values == {"before": 1.0}


def test_deep_groupings_without_a_token():
    expr = Literal(1.0)
    for _ in range(2 * sys.getrecursionlimit()):
        expr = Grouping(expr)

    error = Interpreter(output=io.StringIO()).interpret([Print(expr)])
    assert error.message == "Expression too deeply nested."
    assert error.token is None
