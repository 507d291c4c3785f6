import pytest

from mankai.interpreter import Interpreter

# Every test runs against a configuration that does not depend on the
# caller's shell. Tests that exercise the MANKAI_* variables set them
# explicitly through monkeypatch.
MANKAI_VARS = (
    "MANKAI_MAX_CALL_DEPTH",
    "MANKAI_MAX_EVAL_DEPTH",
    "MANKAI_PRELUDE_PATH",
    "MANKAI_LOG_LEVEL",
    "MANKAI_SERVER_HOST",
    "MANKAI_SERVER_PORT",
)


@pytest.fixture(autouse=True, scope="session")
def _clean_mankai_env():
    with pytest.MonkeyPatch.context() as mp:
        for var in MANKAI_VARS:
            mp.delenv(var, raising=False)
        yield


@pytest.fixture
def interp():
    """Fresh interpreter with builtins loaded and no prelude."""
    return Interpreter(prelude=None)


@pytest.fixture
def run(interp):
    """Evaluate source text in the fixture session and return the last value."""
    return interp.eval
