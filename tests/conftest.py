import io

import pytest

from squirrel.builtins import build_namespace, global_environment
from squirrel.interpreter import Interpreter


# Every test gets its own namespace and global environment; nothing is
# shared between tests, including the output sink used by `print`.


@pytest.fixture
def out():
    return io.StringIO()


@pytest.fixture
def env(out):
    """Fresh global environment with builtins loaded."""
    return global_environment(build_namespace(out))


@pytest.fixture
def interp(out):
    return Interpreter(out=out)
