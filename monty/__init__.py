"""
Monty: an interpreter for a line-oriented stack bytecode language.
"""

from .core.errors import MontyError
from .core.execution import ExecutionResult, Interpreter
from .core.stack import Stack
from .logging_config import configure_default_logging

__version__ = "0.1.0"

# Library callers get quiet logs on stderr; the CLI reconfigures on startup
configure_default_logging()

__all__ = [
    "Interpreter",
    "ExecutionResult",
    "MontyError",
    "Stack",
]
