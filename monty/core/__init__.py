"""
Stack machine core: value stack, opcode table, handlers and driver.
"""

from .context import ExecutionContext
from .errors import (
    AllocationFailure,
    ConfigError,
    DivisionByZero,
    FileOpenError,
    InstructionError,
    InvalidPushArgument,
    MontyError,
    OutOfRange,
    TooShort,
    Underflow,
    UnknownOpcode,
    UsageError,
)
from .execution import ExecutionResult, Interpreter
from .instruction import Instruction, tokenize_line
from .opcodes import OPCODE_NAMES, OPCODES, Opcode, lookup
from .stack import EmptyStackError, Stack, StackNode, StackTooShortError

__all__ = [
    # Data model
    "Stack",
    "StackNode",
    "EmptyStackError",
    "StackTooShortError",
    "Instruction",
    "tokenize_line",
    "ExecutionContext",
    # Dispatch
    "Opcode",
    "OPCODES",
    "OPCODE_NAMES",
    "lookup",
    "Interpreter",
    "ExecutionResult",
    # Errors
    "MontyError",
    "UsageError",
    "FileOpenError",
    "ConfigError",
    "AllocationFailure",
    "InstructionError",
    "UnknownOpcode",
    "InvalidPushArgument",
    "Underflow",
    "TooShort",
    "DivisionByZero",
    "OutOfRange",
]
