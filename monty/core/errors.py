# core/errors.py
"""
Fatal error taxonomy for the Monty interpreter.

Every error renders exactly one diagnostic line through ``str(error)``. Handlers
raise these; only the CLI prints them and picks the exit code.
"""

from typing import Optional


class MontyError(Exception):
    """Base class for every fatal condition."""

    exit_code = 1


class UsageError(MontyError):
    def __init__(self):
        super().__init__("USAGE: monty file")


class FileOpenError(MontyError):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Error: Can't open file {path}")


class ConfigError(MontyError):
    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Error: {detail}")


class AllocationFailure(MontyError):
    def __init__(self):
        super().__init__("Error: malloc failed")


class InstructionError(MontyError):
    """An error tied to a source line, rendered as ``L<line>: <detail>``."""

    def __init__(self, line_number: int, detail: str):
        self.line_number = line_number
        self.detail = detail
        super().__init__(f"L{line_number}: {detail}")


class UnknownOpcode(InstructionError):
    def __init__(self, line_number: int, opcode: str):
        self.opcode = opcode
        super().__init__(line_number, f"unknown instruction {opcode}")


class InvalidPushArgument(InstructionError):
    def __init__(self, line_number: int, argument: Optional[str] = None):
        self.argument = argument
        super().__init__(line_number, "usage: push integer")


# pop words its empty-stack message differently from the printing opcodes
_UNDERFLOW_DETAILS = {
    "pop": "can't pop an empty stack",
}


class Underflow(InstructionError):
    """Opcode needed a value but the stack was empty."""

    def __init__(self, line_number: int, opcode: str):
        self.opcode = opcode
        detail = _UNDERFLOW_DETAILS.get(opcode, f"can't {opcode}, stack empty")
        super().__init__(line_number, detail)


class TooShort(InstructionError):
    """Opcode needed two values but the stack held fewer."""

    def __init__(self, line_number: int, opcode: str):
        self.opcode = opcode
        super().__init__(line_number, f"can't {opcode}, stack too short")


class DivisionByZero(InstructionError):
    def __init__(self, line_number: int):
        super().__init__(line_number, "division by zero")


class OutOfRange(InstructionError):
    def __init__(self, line_number: int, opcode: str, value: int):
        self.opcode = opcode
        self.value = value
        super().__init__(line_number, f"can't {opcode}, value out of range")
