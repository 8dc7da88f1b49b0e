#!/usr/bin/env python3
from typing import Dict

from rox.runtime_error import RoxRuntimeError
from rox.token import Token
from rox.value import Value


class Environment:
    """Rox Environment

    The variable namespace of a run: a single flat mapping from name to value.
    There is no nesting, every declaration lands in the same mapping and a later
    declaration of a name overwrites the earlier one.

    One Environment lives for a whole run. The REPL keeps the same Environment
    across input lines so that earlier declarations stay visible.

    Public Attributes:
        values: Dict[str, Value]. Mapping of variable names to their values.
    """

    def __init__(self) -> None:
        self.values: Dict[str, Value] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.values

    def get(self, name: Token) -> Value:
        """Retrieve the value bound to a variable.

        Args:
            name: Token. IDENTIFIER token naming the variable.

        Returns:
            value: Value. The bound value.

        Raises:
            RoxRuntimeError: If nothing is bound to the name.
        """

        if name.lexeme in self.values:
            return self.values[name.lexeme]

        raise RoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def define(self, name: str, value: Value) -> None:
        """Bind a variable, overwriting any existing binding.

        Args:
            name: str. Name of the variable.
            value: Value. Value to bind.
        """

        self.values[name] = value
