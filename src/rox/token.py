#!/usr/bin/env python3
from dataclasses import dataclass

from rox.token_type import TokenType
from rox.value import Value


@dataclass(frozen=True)
class Token:
    """Scanned token.

    A Token is one lexeme of rox source along with its kind. Tokens are created
    by the Scanner and only ever read afterwards, the Parser keeps references
    to them inside AST nodes for error reporting.

    For example, "var x = 5;" scans to:
    Token(TokenType.VAR,        "var", None, 1)
    Token(TokenType.IDENTIFIER, "x",   None, 1)
    Token(TokenType.EQUAL,      "=",   None, 1)
    Token(TokenType.NUMBER,     "5",   5.0,  1)
    Token(TokenType.SEMICOLON,  ";",   None, 1)
    Token(TokenType.EOF,        "",    None, 1)

    Args:
        type: TokenType. Kind of the token.
        lexeme: str. Exact source text the token was scanned from.
        literal: Value. Parsed value for NUMBER and STRING tokens, otherwise
            None.
        line: int. Source line the token ended on.
    """

    type: TokenType
    lexeme: str
    literal: Value
    line: int

    def __repr__(self) -> str:
        return self.to_string()

    def to_string(self) -> str:
        return f"{self.type.name} {self.lexeme} {self.literal}"
