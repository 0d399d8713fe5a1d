# core/handlers.py
"""
Opcode handlers.

Each handler takes the execution context and the tokenized instruction,
mutates the stack or writes output, and raises an InstructionError subclass
on any fatal condition. Handlers never terminate the process.
"""

from typing import Callable

import structlog

from .context import ExecutionContext
from .errors import DivisionByZero, InvalidPushArgument, OutOfRange, TooShort, Underflow
from .instruction import Instruction

logger = structlog.get_logger()

Handler = Callable[[ExecutionContext, Instruction], None]

ASCII_MAX = 127


def truncating_div(left: int, right: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def truncating_mod(left: int, right: int) -> int:
    """Remainder of truncating_div; takes the sign of the left operand."""
    return left - right * truncating_div(left, right)


# --- Stack manipulation ---


def handle_push(ctx: ExecutionContext, instruction: Instruction) -> None:
    value = instruction.integer_argument()
    if value is None:
        raise InvalidPushArgument(instruction.line_number, instruction.argument)
    ctx.stack.push(value)


def handle_pop(ctx: ExecutionContext, instruction: Instruction) -> None:
    if not ctx.stack:
        raise Underflow(instruction.line_number, instruction.opcode)
    ctx.stack.pop()


def handle_swap(ctx: ExecutionContext, instruction: Instruction) -> None:
    if len(ctx.stack) < 2:
        raise TooShort(instruction.line_number, instruction.opcode)
    ctx.stack.swap_top_two()


def handle_rotl(ctx: ExecutionContext, instruction: Instruction) -> None:
    ctx.stack.rotate_top_to_bottom()


def handle_rotr(ctx: ExecutionContext, instruction: Instruction) -> None:
    ctx.stack.rotate_bottom_to_top()


def handle_nop(ctx: ExecutionContext, instruction: Instruction) -> None:
    pass


# --- Printing ---


def handle_pall(ctx: ExecutionContext, instruction: Instruction) -> None:
    for value in ctx.stack:
        ctx.write_line(str(value))


def handle_pint(ctx: ExecutionContext, instruction: Instruction) -> None:
    if not ctx.stack:
        raise Underflow(instruction.line_number, instruction.opcode)
    ctx.write_line(str(ctx.stack.peek()))


def handle_pchar(ctx: ExecutionContext, instruction: Instruction) -> None:
    if not ctx.stack:
        raise Underflow(instruction.line_number, instruction.opcode)
    value = ctx.stack.peek()
    if value < 0 or value > ASCII_MAX:
        raise OutOfRange(instruction.line_number, instruction.opcode, value)
    ctx.write_line(chr(value))


def handle_pstr(ctx: ExecutionContext, instruction: Instruction) -> None:
    """Print values from the head as characters, stopping at 0, non-ASCII or the end."""
    chars = []
    for value in ctx.stack:
        if value <= 0 or value > ASCII_MAX:
            break
        chars.append(chr(value))
    ctx.write_line("".join(chars))


# --- Arithmetic ---


def _binary_op(
    ctx: ExecutionContext,
    instruction: Instruction,
    operation: Callable[[int, int], int],
    checks_zero: bool = False,
) -> None:
    """Combine second (left) with head (right); the result replaces second."""
    if len(ctx.stack) < 2:
        raise TooShort(instruction.line_number, instruction.opcode)
    if checks_zero and ctx.stack.peek() == 0:
        raise DivisionByZero(instruction.line_number)
    right = ctx.stack.pop()
    left = ctx.stack.peek()
    result = operation(left, right)
    ctx.stack.replace_top(result)
    logger.debug(
        "Binary operation executed",
        opcode=instruction.opcode,
        left=left,
        right=right,
        result=result,
        line=instruction.line_number,
    )


def handle_add(ctx: ExecutionContext, instruction: Instruction) -> None:
    _binary_op(ctx, instruction, lambda a, b: a + b)


def handle_sub(ctx: ExecutionContext, instruction: Instruction) -> None:
    _binary_op(ctx, instruction, lambda a, b: a - b)


def handle_mul(ctx: ExecutionContext, instruction: Instruction) -> None:
    _binary_op(ctx, instruction, lambda a, b: a * b)


def handle_div(ctx: ExecutionContext, instruction: Instruction) -> None:
    _binary_op(ctx, instruction, truncating_div, checks_zero=True)


def handle_mod(ctx: ExecutionContext, instruction: Instruction) -> None:
    _binary_op(ctx, instruction, truncating_mod, checks_zero=True)
