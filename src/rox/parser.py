#!/usr/bin/env python3
from typing import List, Optional, Union

from rox.expr import Binary, Expr, Grouping, Literal, Unary, Variable
from rox.stmt import Expression, Print, Stmt, Var
from rox.token import Token
from rox.token_type import TokenType

# Return value refinement for the expression levels
ParsedPrimary = Union[Literal, Variable, Grouping]
ParsedUnary = Union[Unary, ParsedPrimary]
ParsedBinary = Union[Binary, ParsedUnary]


class ParseError(Exception):
    """A grammar violation found while parsing.

    Raised inside the Parser to unwind to the enclosing declaration, where it
    is recorded on Parser.errors before synchronizing. parse_expression() lets
    it propagate to the caller.

    Args:
        token: Token. Token where the error was found.
        message: str. Description of the error.
    """

    def __init__(self, token: Token, message: str) -> None:
        super().__init__(message)
        self.token = token
        self.message = message


class Parser:
    """Rox Parser

    Recursive descent parser turning the Scanner's Tokens into statements for
    the Interpreter. There is one method per grammar rule, each rule calling
    the rule of next higher precedence.

    Parse errors do not stop parse(). The failing declaration is dropped, the
    error is recorded on errors, and parsing resumes at the next statement
    boundary so that every genuine defect is reported once.

    Args:
        tokens: List[Token]. Tokens to parse, terminated by an EOF Token.

    Public Attributes:
        current: int. Index of the next Token to consume, never decreases.
        errors: List[ParseError]. Errors recorded by parse(), in source order.
    """

    def __init__(self, tokens: List[Token]) -> None:
        self.tokens = tokens
        self.current = 0
        self.errors: List[ParseError] = []

    def parse(self) -> List[Stmt]:
        """Parse a whole program.

        Grammar Rule:
        program → declaration* EOF ;

        Returns:
            stmts: List[Stmt]. Statements which parsed cleanly. If errors is not
                empty afterwards this list is incomplete and must not be run.
        """

        statements = []

        while not self.is_at_end():
            statement = self.declaration()
            if statement is not None:
                statements.append(statement)

        return statements

    def parse_expression(self) -> Expr:
        """Parse the tokens as one expression followed by EOF.

        Returns:
            expression: Expr. The parsed expression.

        Raises:
            ParseError: On the first grammar violation, or when the expression
                nests deeper than the Python stack allows.
        """

        try:
            expr = self.expression()
        except RecursionError:
            raise self.error(self.peek(), "Expression nesting too deep.") from None

        if not self.is_at_end():
            raise self.error(self.peek(), "Expect end of expression.")

        return expr

    def declaration(self) -> Optional[Stmt]:
        """Parse a declaration, synchronizing and returning None on error.

        Grammar Rule:
        declaration → varDecl | statement ;
        """

        try:
            if self.match(TokenType.VAR):
                return self.var_declaration()

            return self.statement()
        except ParseError as error:
            self.errors.append(error)
            self.synchronize()
            return None
        except RecursionError:
            self.errors.append(
                self.error(self.peek(), "Expression nesting too deep.")
            )
            self.synchronize()
            return None

    def var_declaration(self) -> Var:
        """Parse a variable declaration after the var keyword.

        Grammar Rule:
        varDecl → "var" IDENTIFIER ( "=" expression )? ";" ;
        """

        name = self.consume(TokenType.IDENTIFIER, "Expect variable name.")

        initializer = None
        if self.match(TokenType.EQUAL):
            initializer = self.expression()

        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")

        return Var(name, initializer)

    def statement(self) -> Union[Print, Expression]:
        """Parse a non-declaring statement.

        Grammar Rule:
        statement → printStmt | exprStmt ;
        """

        if self.match(TokenType.PRINT):
            return self.print_statement()

        return self.expression_statement()

    def print_statement(self) -> Print:
        """Grammar Rule:
        printStmt → "print" expression ";" ;
        """

        value = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after value.")
        return Print(value)

    def expression_statement(self) -> Expression:
        """Grammar Rule:
        exprStmt → expression ";" ;
        """

        expr = self.expression()
        self.consume(TokenType.SEMICOLON, "Expect ';' after expression.")
        return Expression(expr)

    def expression(self) -> Expr:
        """Grammar Rule:
        expression → equality ;
        """

        return self.equality()

    def equality(self) -> ParsedBinary:
        """Parse an equality expression, or any of higher precedence.

        Grammar Rule:
        equality → comparison ( ( "!=" | "==" ) comparison )* ;
        """

        expr = self.comparison()

        # Loop rather than recurse so that a == b == c is left associative
        while self.match(TokenType.BANG_EQUAL, TokenType.EQUAL_EQUAL):
            operator = self.previous()
            right = self.comparison()
            expr = Binary(expr, operator, right)

        return expr

    def comparison(self) -> ParsedBinary:
        """Grammar Rule:
        comparison → term ( ( ">" | ">=" | "<" | "<=" ) term )* ;
        """

        expr = self.term()

        while self.match(
            TokenType.GREATER,
            TokenType.GREATER_EQUAL,
            TokenType.LESS,
            TokenType.LESS_EQUAL,
        ):
            operator = self.previous()
            right = self.term()
            expr = Binary(expr, operator, right)

        return expr

    def term(self) -> ParsedBinary:
        """Grammar Rule:
        term → factor ( ( "-" | "+" ) factor )* ;
        """

        expr = self.factor()

        while self.match(TokenType.MINUS, TokenType.PLUS):
            operator = self.previous()
            right = self.factor()
            expr = Binary(expr, operator, right)

        return expr

    def factor(self) -> ParsedBinary:
        """Grammar Rule:
        factor → unary ( ( "/" | "*" ) unary )* ;
        """

        expr = self.unary()

        while self.match(TokenType.SLASH, TokenType.STAR):
            operator = self.previous()
            right = self.unary()
            expr = Binary(expr, operator, right)

        return expr

    def unary(self) -> ParsedUnary:
        """Parse a unary expression, recursing for chains like !!true or --1.

        Grammar Rule:
        unary → ( "!" | "-" ) unary | primary ;
        """

        if self.match(TokenType.BANG, TokenType.MINUS):
            operator = self.previous()
            right = self.unary()
            return Unary(operator, right)

        return self.primary()

    def primary(self) -> ParsedPrimary:
        """Parse a primary expression.

        Grammar Rule:
        primary → "false" | "true" | "nil" | NUMBER | STRING | IDENTIFIER
                | "(" expression ")" ;

        Raises:
            ParseError: If the current Token cannot start an expression.
        """

        if self.match(TokenType.FALSE):
            return Literal(False)
        if self.match(TokenType.TRUE):
            return Literal(True)
        if self.match(TokenType.NIL):
            return Literal(None)

        if self.match(TokenType.NUMBER, TokenType.STRING):
            return Literal(self.previous().literal)

        if self.match(TokenType.IDENTIFIER):
            return Variable(self.previous())

        if self.match(TokenType.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenType.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise self.error(self.peek(), "Expect expression.")

    def match(self, *types: TokenType) -> bool:
        """Consume the current Token if it is any of the given types.

        Args:
            types: TokenType. Token types to check for.

        Returns:
            matched: bool. Whether a Token was consumed.
        """

        for type in types:
            if self.check(type):
                self.advance()
                return True

        return False

    def consume(self, type: TokenType, message: str) -> Token:
        """Consume a Token of the given type or fail.

        Args:
            type: TokenType. Required Token type.
            message: str. Error message if the current Token does not match.

        Returns:
            token: Token. The consumed Token.

        Raises:
            ParseError: If the current Token is not of the required type.
        """

        if self.check(type):
            return self.advance()

        raise self.error(self.peek(), message)

    def check(self, type: TokenType) -> bool:
        if self.is_at_end():
            return False

        return self.peek().type == type

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1

        return self.previous()

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def peek(self) -> Token:
        return self.tokens[self.current]

    def previous(self) -> Token:
        return self.tokens[self.current - 1]

    def error(self, token: Token, message: str) -> ParseError:
        return ParseError(token, message)

    def synchronize(self) -> None:
        """Discard Tokens until the next likely statement boundary.

        A boundary is just after a ";" or just before a keyword which starts a
        statement. Keywords the grammar does not use yet are still boundaries
        since a statement could only sensibly start there.
        """

        self.advance()

        while not self.is_at_end():
            if self.previous().type == TokenType.SEMICOLON:
                return

            match self.peek().type:
                case (
                    TokenType.CLASS
                    | TokenType.FUN
                    | TokenType.VAR
                    | TokenType.FOR
                    | TokenType.IF
                    | TokenType.WHILE
                    | TokenType.PRINT
                    | TokenType.RETURN
                ):
                    return
                case _:
                    self.advance()
