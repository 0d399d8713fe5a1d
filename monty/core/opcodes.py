"""
Opcode definitions and dispatch table.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from . import handlers
from .errors import UnknownOpcode
from .handlers import Handler
from .instruction import Instruction


@dataclass(frozen=True)
class Opcode:
    """An instruction mnemonic and the handler implementing it."""

    name: str
    handler: Handler


INSTRUCTION_SET: Tuple[Opcode, ...] = (
    # Stack manipulation
    Opcode("push", handlers.handle_push),
    Opcode("pop", handlers.handle_pop),
    Opcode("swap", handlers.handle_swap),
    Opcode("rotl", handlers.handle_rotl),
    Opcode("rotr", handlers.handle_rotr),
    Opcode("nop", handlers.handle_nop),
    # Printing
    Opcode("pall", handlers.handle_pall),
    Opcode("pint", handlers.handle_pint),
    Opcode("pchar", handlers.handle_pchar),
    Opcode("pstr", handlers.handle_pstr),
    # Arithmetic
    Opcode("add", handlers.handle_add),
    Opcode("sub", handlers.handle_sub),
    Opcode("mul", handlers.handle_mul),
    Opcode("div", handlers.handle_div),
    Opcode("mod", handlers.handle_mod),
)

# Map from opcode name to handler, read-only after import
OPCODES: Mapping[str, Handler] = MappingProxyType(
    {opcode.name: opcode.handler for opcode in INSTRUCTION_SET}
)

OPCODE_NAMES: Tuple[str, ...] = tuple(opcode.name for opcode in INSTRUCTION_SET)


def lookup(instruction: Instruction) -> Handler:
    """
    Find the handler for an instruction's opcode.

    Matching is exact and case-sensitive.

    Raises:
        UnknownOpcode: If no handler is registered under that name
    """
    handler = OPCODES.get(instruction.opcode)
    if handler is None:
        raise UnknownOpcode(instruction.line_number, instruction.opcode)
    return handler
