#!/usr/bin/env python3
from enum import IntEnum, auto


class TokenType(IntEnum):
    """Rox token kinds

    The closed set of lexical categories produced by the Scanner. Every Token
    carries exactly one of these, and the Parser dispatches on them when
    building expressions and statements.

    Several keywords (class, fun, if, ...) are reserved by the Scanner even
    though the Parser never builds a node for them. They still act as
    statement boundaries during error recovery.
    """

    # Punctuators
    LEFT_PAREN = auto()  # (
    RIGHT_PAREN = auto()  # )
    LEFT_BRACE = auto()  # {
    RIGHT_BRACE = auto()  # }
    COMMA = auto()  # ,
    DOT = auto()  # .
    MINUS = auto()  # -
    PLUS = auto()  # +
    SEMICOLON = auto()  # ;
    SLASH = auto()  # /
    STAR = auto()  # *

    # Operators resolved with one character of lookahead
    BANG = auto()  # !
    BANG_EQUAL = auto()  # !=
    EQUAL = auto()  # =
    EQUAL_EQUAL = auto()  # ==
    GREATER = auto()  # >
    GREATER_EQUAL = auto()  # >=
    LESS = auto()  # <
    LESS_EQUAL = auto()  # <=

    # Literals
    IDENTIFIER = auto()  # total_2
    STRING = auto()  # "text"
    NUMBER = auto()  # 12.5

    # Reserved words
    AND = auto()
    CLASS = auto()
    ELSE = auto()
    FALSE = auto()
    FOR = auto()
    FUN = auto()
    IF = auto()
    NIL = auto()
    OR = auto()
    PRINT = auto()
    RETURN = auto()
    SUPER = auto()
    THIS = auto()
    TRUE = auto()
    VAR = auto()
    WHILE = auto()

    # End of input, always the last token in a scan
    EOF = auto()
