#!/usr/bin/env python3
from dataclasses import dataclass
from typing import Dict, List

from rox.token import Token
from rox.token_type import TokenType
from rox.value import Value


@dataclass(frozen=True)
class ScanError:
    """A lexical error found while scanning.

    Scan errors never stop the Scanner, the offending characters are skipped
    and scanning resumes. They are collected on Scanner.errors for the caller
    to report.

    Args:
        line: int. Line the error was found on.
        message: str. Description of the error.
    """

    line: int
    message: str


class Scanner:
    """Rox Scanner

    Converts rox source text into a list of Tokens in a single left to right
    pass. The result always ends with exactly one EOF Token, even when the
    source contained errors.

    To use:
    scanner = Scanner("print 1 + 2;")
    scanner.scan_tokens()
    [PRINT print None,
     NUMBER 1 1.0,
     PLUS + None,
     NUMBER 2 2.0,
     SEMICOLON ; None,
     EOF  None]
    scanner.errors
    []

    Args:
        source: str. The rox source text to scan.

    Public Attributes:
        tokens: List[Token]. All scanned tokens.
        errors: List[ScanError]. Errors found while scanning, in source order.
        start: int. Index of the first character of the lexeme being scanned.
        current: int. Index of the next character to consume.
        line: int. Current line, incremented on every consumed newline.
    """

    keywords: Dict[str, TokenType] = {
        "and": TokenType.AND,
        "class": TokenType.CLASS,
        "else": TokenType.ELSE,
        "false": TokenType.FALSE,
        "for": TokenType.FOR,
        "fun": TokenType.FUN,
        "if": TokenType.IF,
        "nil": TokenType.NIL,
        "or": TokenType.OR,
        "print": TokenType.PRINT,
        "return": TokenType.RETURN,
        "super": TokenType.SUPER,
        "this": TokenType.THIS,
        "true": TokenType.TRUE,
        "var": TokenType.VAR,
        "while": TokenType.WHILE,
    }

    # Lexemes which are always exactly one character long.
    single_char_tokens: Dict[str, TokenType] = {
        "(": TokenType.LEFT_PAREN,
        ")": TokenType.RIGHT_PAREN,
        "{": TokenType.LEFT_BRACE,
        "}": TokenType.RIGHT_BRACE,
        ",": TokenType.COMMA,
        ".": TokenType.DOT,
        "-": TokenType.MINUS,
        "+": TokenType.PLUS,
        ";": TokenType.SEMICOLON,
        "*": TokenType.STAR,
    }

    def __init__(self, source: str) -> None:
        self.source = source
        self.tokens: List[Token] = []
        self.errors: List[ScanError] = []
        self.start = 0
        self.current = 0
        self.line = 1

    def scan_tokens(self) -> List[Token]:
        """Scan the whole source and return the Tokens.

        This never raises. Check the errors attribute afterwards to see whether
        the source was lexically valid.

        Returns:
            tokens: List[Token]. Scanned tokens, terminated by an EOF Token.
        """

        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self.line))
        return self.tokens

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)

    def scan_token(self) -> None:
        """Scan a single lexeme starting at the start index."""

        c = self.advance()

        if c in self.single_char_tokens:
            self.add_token(self.single_char_tokens[c])
            return

        match c:
            case "!":
                self.add_token(
                    TokenType.BANG_EQUAL if self.match("=") else TokenType.BANG
                )
            case "=":
                self.add_token(
                    TokenType.EQUAL_EQUAL if self.match("=") else TokenType.EQUAL
                )
            case "<":
                self.add_token(
                    TokenType.LESS_EQUAL if self.match("=") else TokenType.LESS
                )
            case ">":
                self.add_token(
                    TokenType.GREATER_EQUAL if self.match("=") else TokenType.GREATER
                )
            case "/":
                if self.match("/"):
                    # Line comment, nothing is emitted up to the newline.
                    while self.peek() != "\n" and not self.is_at_end():
                        self.advance()
                else:
                    self.add_token(TokenType.SLASH)
            case " " | "\r" | "\t":
                pass
            case "\n":
                self.line += 1
            case '"':
                self.string()
            case _:
                if self.is_digit(c):
                    self.number()
                elif self.is_alpha(c):
                    self.identifier()
                else:
                    self.error("Unexpected character.")

    def identifier(self) -> None:
        """Scan an identifier or reserved word.

        Examples:
        print  -> Token(TokenType.PRINT,      "print",  None, 1)
        total  -> Token(TokenType.IDENTIFIER, "total",  None, 1)
        Print  -> Token(TokenType.IDENTIFIER, "Print",  None, 1)
        """

        while self.is_alpha_numeric(self.peek()):
            self.advance()

        text = self.source[self.start : self.current]
        self.add_token(self.keywords.get(text, TokenType.IDENTIFIER))

    def number(self) -> None:
        """Scan a number literal.

        A fractional part is only consumed when the "." is followed by a digit,
        so "12." scans as NUMBER 12 followed by DOT.

        Examples:
        4   -> Token(TokenType.NUMBER, "4",   4.0, 1)
        4.2 -> Token(TokenType.NUMBER, "4.2", 4.2, 1)
        """

        while self.is_digit(self.peek()):
            self.advance()

        if self.peek() == "." and self.is_digit(self.peek_next()):
            self.advance()

            while self.is_digit(self.peek()):
                self.advance()

        self.add_token(TokenType.NUMBER, float(self.source[self.start : self.current]))

    def string(self) -> None:
        """Scan a string literal.

        Strings may span lines. The lexeme keeps the quotes, the literal value
        does not. Reaching the end of input first is an error and no Token is
        added.
        """

        while self.peek() != '"' and not self.is_at_end():
            if self.peek() == "\n":
                self.line += 1

            self.advance()

        if self.is_at_end():
            self.error("Unterminated string.")
            return

        # Closing quote
        self.advance()

        self.add_token(TokenType.STRING, self.source[self.start + 1 : self.current - 1])

    def advance(self) -> str:
        current = self.source[self.current]
        self.current += 1
        return current

    def match(self, expected: str) -> bool:
        """Consume the next char only if it is the expected one.

        Args:
            expected: str. Expected char.

        Returns:
            matched: bool. Whether the char was found and consumed.
        """

        if self.is_at_end():
            return False
        if self.source[self.current] != expected:
            return False

        self.current += 1
        return True

    def peek(self) -> str:
        if self.is_at_end():
            return "\0"

        return self.source[self.current]

    def peek_next(self) -> str:
        if self.current + 1 >= len(self.source):
            return "\0"

        return self.source[self.current + 1]

    def is_alpha(self, c: str) -> bool:
        return ("a" <= c <= "z") or ("A" <= c <= "Z") or c == "_"

    def is_alpha_numeric(self, c: str) -> bool:
        return self.is_alpha(c) or self.is_digit(c)

    def is_digit(self, c: str) -> bool:
        # str.isdigit() also accepts non-ASCII digits float() cannot parse.
        return "0" <= c <= "9"

    def add_token(self, type: TokenType, literal: Value = None) -> None:
        """Add a Token for the lexeme between the start and current indexes.

        Args:
            type: TokenType. Kind of Token being added.
            literal: Value. Parsed literal value if any, otherwise None.
        """

        text = self.source[self.start : self.current]
        self.tokens.append(Token(type, text, literal, self.line))

    def error(self, message: str) -> None:
        """Record a ScanError at the current line.

        Args:
            message: str. Description of the error.
        """

        self.errors.append(ScanError(self.line, message))
