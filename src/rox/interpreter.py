#!/usr/bin/env python3
from math import copysign, inf, isnan, nan
from typing import List, Optional, TextIO, Union, cast

from rox.environment import Environment
from rox.expr import Binary, Expr, Grouping, Literal, Unary, Variable
from rox.expr import Visitor as ExprVisitor
from rox.runtime_error import RoxRuntimeError
from rox.stmt import Expression, Print, Stmt, Var
from rox.stmt import Visitor as StmtVisitor
from rox.token import Token
from rox.token_type import TokenType
from rox.value import Value


class Interpreter(ExprVisitor[Value], StmtVisitor[None]):
    """Rox interpreter.

    Executes the statements produced by the Parser by walking the AST directly.
    Statements run eagerly, one at a time and in order. The only state carried
    between them is the Environment.

    For example:
    tokens = Scanner("var x = 5; print x + 1;").scan_tokens()
    statements = Parser(tokens).parse()
    Interpreter().interpret(statements)
    6

    Args:
        environment: Optional[Environment]. Variable namespace to run against,
            a fresh one is created if not provided.
        output: Optional[TextIO]. Stream print statements write to, defaults to
            sys.stdout at the time of printing.

    Public Attributes:
        environment: Environment. The run's variable namespace.
        output: Optional[TextIO]. Output stream for print statements.
    """

    def __init__(
        self,
        environment: Optional[Environment] = None,
        output: Optional[TextIO] = None,
    ) -> None:
        self.environment = environment if environment is not None else Environment()
        self.output = output

    def interpret(self, statements: List[Stmt]) -> Optional[RoxRuntimeError]:
        """Execute statements in order.

        The first runtime error aborts the remaining statements. Effects of the
        statements which already ran are kept: printed output stays printed and
        bindings stay in the Environment.

        Args:
            statements: List[Stmt]. Statements to execute. These must come from
                a parse which reported no errors.

        Returns:
            error: Optional[RoxRuntimeError]. The error which aborted the run,
                or None if every statement ran.
        """

        for statement in statements:
            try:
                self.execute(statement)
            except RoxRuntimeError as error:
                return error
            except RecursionError:
                return RoxRuntimeError(
                    self.statement_token(statement), "Expression too deeply nested."
                )

        return None

    def statement_token(self, stmt: Stmt) -> Optional[Token]:
        """Find a Token to report an error in a statement against.

        This walks down the tree with a loop rather than recursion, it is used
        when the statement is too deep for the recursive evaluator.

        Args:
            stmt: Stmt. Statement the error happened in.

        Returns:
            token: Optional[Token]. The outermost operator or variable name, or
                None for a tree of nothing but groupings around a literal.
        """

        if isinstance(stmt, Var):
            return stmt.name

        expr = cast(Union[Expression, Print], stmt).expression
        while isinstance(expr, Grouping):
            expr = expr.expression

        if isinstance(expr, (Binary, Unary)):
            return expr.operator
        if isinstance(expr, Variable):
            return expr.name

        return None

    def evaluate(self, expr: Expr) -> Value:
        return expr.accept(self)

    def execute(self, stmt: Stmt) -> None:
        stmt.accept(self)

    def visit_expression_stmt(self, stmt: Expression) -> None:
        self.evaluate(stmt.expression)

    def visit_print_stmt(self, stmt: Print) -> None:
        """Execute a print statement.

        The value is written in its display form, see stringify().

        Args:
            stmt: Print. Print statement to execute.
        """

        value = self.evaluate(stmt.expression)
        print(self.stringify(value), file=self.output)

    def visit_var_stmt(self, stmt: Var) -> None:
        """Execute a var statement, binding nil when there is no initializer.

        Args:
            stmt: Var. Var statement to execute.
        """

        value = None
        if stmt.initializer is not None:
            value = self.evaluate(stmt.initializer)

        self.environment.define(stmt.name.lexeme, value)

    def visit_literal_expr(self, expr: Literal) -> Value:
        return expr.value

    def visit_grouping_expr(self, expr: Grouping) -> Value:
        return self.evaluate(expr.expression)

    def visit_variable_expr(self, expr: Variable) -> Value:
        return self.environment.get(expr.name)

    def visit_unary_expr(self, expr: Unary) -> Value:
        """Evaluate a unary expression.

        Args:
            expr: Unary. Unary expression to evaluate.

        Returns:
            value: Value. bool for !, float for -.

        Raises:
            RoxRuntimeError: If - is applied to anything but a number.
        """

        right = self.evaluate(expr.right)

        match expr.operator.type:
            case TokenType.BANG:
                return not self.is_truthy(right)
            case TokenType.MINUS:
                self.check_number_operand(expr.operator, right)
                return -cast(float, right)
            case _:
                # Unary refuses any other operator on construction.
                raise AssertionError(f"unexpected unary operator {expr.operator}")

    def visit_binary_expr(self, expr: Binary) -> Value:
        """Evaluate a binary expression.

        Both operands are evaluated, left first, before any type checking.

        Args:
            expr: Binary. Binary expression to evaluate.

        Returns:
            value: Value. float or str for arithmetic, bool for comparison and
                equality.

        Raises:
            RoxRuntimeError: If the operand types do not suit the operator.
        """

        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)

        match expr.operator.type:
            case TokenType.GREATER:
                self.check_number_operands(expr.operator, left, right)
                return cast(float, left) > cast(float, right)
            case TokenType.GREATER_EQUAL:
                self.check_number_operands(expr.operator, left, right)
                return cast(float, left) >= cast(float, right)
            case TokenType.LESS:
                self.check_number_operands(expr.operator, left, right)
                return cast(float, left) < cast(float, right)
            case TokenType.LESS_EQUAL:
                self.check_number_operands(expr.operator, left, right)
                return cast(float, left) <= cast(float, right)
            case TokenType.BANG_EQUAL:
                return not self.is_equal(left, right)
            case TokenType.EQUAL_EQUAL:
                return self.is_equal(left, right)
            case TokenType.MINUS:
                self.check_number_operands(expr.operator, left, right)
                return cast(float, left) - cast(float, right)
            case TokenType.PLUS:
                if isinstance(left, float) and isinstance(right, float):
                    return left + right

                if isinstance(left, str) and isinstance(right, str):
                    return left + right

                raise RoxRuntimeError(
                    expr.operator,
                    "Operands of '+' must be two numbers or two strings.",
                )
            case TokenType.SLASH:
                self.check_number_operands(expr.operator, left, right)
                return self.divide(cast(float, left), cast(float, right))
            case TokenType.STAR:
                self.check_number_operands(expr.operator, left, right)
                return cast(float, left) * cast(float, right)
            case _:
                # Binary refuses any other operator on construction.
                raise AssertionError(f"unexpected binary operator {expr.operator}")

    def divide(self, left: float, right: float) -> float:
        """Divide with IEEE 754 semantics.

        Python raises ZeroDivisionError for float division by zero, rox follows
        IEEE instead:
        1 / 0  -> inf
        -1 / 0 -> -inf
        0 / 0  -> nan

        Args:
            left: float. Dividend.
            right: float. Divisor.

        Returns:
            quotient: float. Result of the division.
        """

        if right != 0.0:
            return left / right

        if left == 0.0 or isnan(left):
            return nan

        # The sign of a zero divisor matters: 1 / -0 -> -inf
        return copysign(inf, left) * copysign(1.0, right)

    def check_number_operand(self, operator: Token, operand: Value) -> None:
        if isinstance(operand, float):
            return

        raise RoxRuntimeError(operator, "Operand must be a number.")

    def check_number_operands(
        self, operator: Token, left: Value, right: Value
    ) -> None:
        """Check that both operands of a binary operator are numbers.

        Args:
            operator: Token. Operator being applied, named in the error.
            left: Value. Left operand.
            right: Value. Right operand.

        Raises:
            RoxRuntimeError: If either operand is not a number.
        """

        if isinstance(left, float) and isinstance(right, float):
            return

        raise RoxRuntimeError(
            operator, f"Operands of '{operator.lexeme}' must be numbers."
        )

    def is_truthy(self, obj: Value) -> bool:
        """Return the truthiness of a value.

        nil and false are falsy, every other value is truthy, including 0 and
        the empty string.

        Args:
            obj: Value. Value to test.

        Returns:
            truthy: bool. Truthiness of the value.
        """

        if obj is None:
            return False
        if isinstance(obj, bool):
            return obj

        return True

    def is_equal(self, a: Value, b: Value) -> bool:
        """Compare two values for equality.

        Values of different kinds are never equal. Python considers True == 1.0
        and False == 0.0, so booleans are compared by kind first.

        NaN is equal to itself here, keeping equality reflexive for every value.

        Args:
            a: Value. Left operand.
            b: Value. Right operand.

        Returns:
            equal: bool. Equality result.
        """

        if a is None and b is None:
            return True
        if a is None or b is None:
            return False
        if isinstance(a, bool) != isinstance(b, bool):
            return False
        if isinstance(a, float) and isinstance(b, float) and isnan(a) and isnan(b):
            return True

        return a == b

    def stringify(self, obj: Value) -> str:
        """Return the display form of a value.

        Args:
            obj: Value. Value to display.

        Returns:
            string: str. Display form, e.g. nil, true, 6, 2.5, text.
        """

        if obj is None:
            return "nil"

        if isinstance(obj, bool):
            return str(obj).lower()

        if isinstance(obj, float):
            text = str(obj)

            # "6.0" -> "6"
            if text.endswith(".0"):
                text = text[0:-2]

            return text

        return obj
