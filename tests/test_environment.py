import pytest

from rox.environment import Environment
from rox.runtime_error import RoxRuntimeError
from rox.token import Token
from rox.token_type import TokenType


def name(lexeme):
    return Token(TokenType.IDENTIFIER, lexeme, None, 3)


def test_define_and_get():
    environment = Environment()
    environment.define("a", 1.0)
    assert environment.get(name("a")) == 1.0
    assert "a" in environment
    assert "b" not in environment


def test_define_overwrites():
    environment = Environment()
    environment.define("a", 1.0)
    environment.define("a", None)
    assert environment.get(name("a")) is None
    assert environment.values == {"a": None}


def test_get_unbound_raises_with_token():
    with pytest.raises(RoxRuntimeError) as excinfo:
        Environment().get(name("missing"))
    assert excinfo.value.message == "Undefined variable 'missing'."
    assert excinfo.value.token.line == 3
