import sys
from dataclasses import dataclass, field
from typing import TextIO

from .stack import Stack


@dataclass
class ExecutionContext:
    """Mutable state shared by the driver and every handler invocation."""

    stack: Stack = field(default_factory=Stack)
    line_number: int = 0
    stdout: TextIO = field(default_factory=lambda: sys.stdout)

    def write_line(self, text: str) -> None:
        self.stdout.write(f"{text}\n")
