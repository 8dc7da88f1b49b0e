#!/usr/bin/env python3
from typing import Optional

from rox.token import Token


class RoxRuntimeError(RuntimeError):
    """Error raised while evaluating a rox program.

    A runtime error aborts the remaining statements of the run. Interpreter
    catches it at the run boundary and hands it back to the caller, so it never
    escapes interpret().

    Args:
        token: Optional[Token]. Token closest to where the error happened, used
            to report the line. None only when the statement has no token to
            point at.
        message: str. Error message with details.
    """

    def __init__(self, token: Optional[Token], message: str) -> None:
        super().__init__(message)
        self.token = token
        self.message = message
