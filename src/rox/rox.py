#!/usr/bin/env python3
import sys
from typing import Iterable

from rox.parser import ParseError
from rox.runtime_error import RoxRuntimeError
from rox.scanner import ScanError
from rox.token_type import TokenType


class Rox:
    """Rox diagnostic reporting.

    The Scanner, Parser and Interpreter never print anything themselves, they
    hand their errors back as data. This class formats those errors for the
    user and keeps track of whether any were seen, which the command line layer
    uses to decide whether to keep going and which exit code to use.

    Public Attributes:
        had_error: bool. Whether a scan or parse error was reported. Statements
            from a source with such errors are never executed.
        had_runtime_error: bool. Whether a runtime error was reported.
    """

    had_error = False
    had_runtime_error = False

    @classmethod
    def reset(cls) -> None:
        cls.had_error = False
        cls.had_runtime_error = False

    @classmethod
    def report(cls, line: int, where: str, message: str) -> None:
        """Report a scan or parse error to the user.

        Args:
            line: int. Line number where the error was found.
            where: str. Location on the line, empty for scan errors.
            message: str. Error message, printed to stderr.
        """

        print(f"[line {line}] Error{where}: {message}", file=sys.stderr)
        cls.had_error = True

    @classmethod
    def scan_errors(cls, errors: Iterable[ScanError]) -> None:
        for error in errors:
            cls.report(error.line, "", error.message)

    @classmethod
    def parse_errors(cls, errors: Iterable[ParseError]) -> None:
        """Report parse errors, pointing at the offending token.

        Args:
            errors: Iterable[ParseError]. Errors collected by the Parser.
        """

        for error in errors:
            token = error.token
            if token.type is TokenType.EOF:
                cls.report(token.line, " at end", error.message)
            else:
                cls.report(token.line, f" at '{token.lexeme}'", error.message)

    @classmethod
    def runtime_error(cls, error: RoxRuntimeError) -> None:
        """Report the runtime error which aborted a run.

        Args:
            error: RoxRuntimeError. Error returned by the Interpreter.
        """

        if error.token is None:
            print(error.message, file=sys.stderr)
        else:
            print(f"{error.message}\n[line {error.token.line}]", file=sys.stderr)
        cls.had_runtime_error = True
