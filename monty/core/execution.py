# core/execution.py
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, TextIO

import structlog

from .context import ExecutionContext
from .errors import MontyError
from .instruction import Instruction, tokenize_line
from .opcodes import lookup
from .stack import Stack

logger = structlog.get_logger()


@dataclass
class ExecutionResult:
    lines_read: int = 0
    instructions_executed: int = 0
    final_stack: List[int] = field(default_factory=list)


class Interpreter:
    """
    Runs Monty source lines top to bottom against a single stack.

    The line counter tracks physical lines, so blank and comment lines still
    advance the number reported in diagnostics. The first MontyError raised
    by a handler propagates to the caller and nothing after it executes.
    """

    def __init__(self, stdout: Optional[TextIO] = None, max_stack_size: Optional[int] = None):
        self.context = ExecutionContext(stack=Stack(max_size=max_stack_size))
        if stdout is not None:
            self.context.stdout = stdout

    @property
    def stack(self) -> Stack:
        return self.context.stack

    def execute(self, instruction: Instruction) -> None:
        """Dispatch a single tokenized instruction."""
        handler = lookup(instruction)
        logger.debug(
            "Executing instruction",
            line=instruction.line_number,
            opcode=instruction.opcode,
            argument=instruction.argument,
            depth=len(self.context.stack),
        )
        handler(self.context, instruction)

    def run(self, lines: Iterable[str]) -> ExecutionResult:
        """
        Execute every line until the source is exhausted.

        Args:
            lines: Physical source lines, in order

        Returns:
            ExecutionResult with counters and the stack as it stood at the end

        Raises:
            MontyError: The first fatal condition met; execution stops there
        """
        result = ExecutionResult()
        try:
            for line in lines:
                self.context.line_number += 1
                result.lines_read = self.context.line_number
                instruction = tokenize_line(line, self.context.line_number)
                if instruction is None:
                    continue
                self.execute(instruction)
                result.instructions_executed += 1
            result.final_stack = self.context.stack.to_list()
        except MontyError as e:
            logger.info(
                "Execution halted",
                line=self.context.line_number,
                error=type(e).__name__,
                detail=str(e),
            )
            raise
        finally:
            self.context.stack.clear()

        logger.debug(
            "Execution finished",
            lines_read=result.lines_read,
            instructions_executed=result.instructions_executed,
        )
        return result
