import pytest

from rox.rox import Rox


@pytest.fixture(autouse=True)
def reset_rox_flags():
    Rox.reset()
    yield
    Rox.reset()
