#!/usr/bin/env python3
from typing import Union

# Runtime values in rox map directly onto Python natives:
# String  -> str
# Number  -> float
# Boolean -> bool
# Nil     -> None
Value = Union[str, float, bool, None]
