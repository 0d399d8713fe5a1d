import io

import pytest

from monty.core.context import ExecutionContext
from monty.core.stack import Stack
from monty.logging_config import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging():
    configure_logging("WARNING")


@pytest.fixture
def ctx():
    """Execution context writing to an in-memory buffer."""
    return ExecutionContext(stack=Stack(), stdout=io.StringIO())


@pytest.fixture
def write_program(tmp_path):
    """Write Monty source to a temporary file and return its path."""

    def _write(source: str, name: str = "program.m") -> str:
        path = tmp_path / name
        path.write_text(source)
        return str(path)

    return _write
