import re
from dataclasses import dataclass
from typing import Optional

# Tokens are separated by spaces, tabs and newlines only
_DELIMITERS = re.compile(r"[ \t\n]+")
_INTEGER = re.compile(r"[+-]?[0-9]+")
# A CRLF ending is a line ending; a carriage return anywhere else is data
_CRLF = re.compile(r"\r\n?\Z")


@dataclass(frozen=True)
class Instruction:
    line_number: int
    opcode: str
    argument: Optional[str] = None

    def integer_argument(self) -> Optional[int]:
        """Return the argument as an int, or None if it is missing or malformed."""
        if not is_integer(self.argument):
            return None
        return int(self.argument)


def is_integer(token: Optional[str]) -> bool:
    """True for an optional sign followed by one or more ASCII digits."""
    return token is not None and _INTEGER.fullmatch(token) is not None


def tokenize_line(line: str, line_number: int) -> Optional[Instruction]:
    """
    Split a source line into an Instruction.

    Args:
        line: Raw source line, with or without its trailing newline
        line_number: Physical line number the line was read from

    Returns:
        The Instruction, or None for blank lines and comments (first token
        starting with '#'). Tokens past the argument are ignored.
    """
    tokens = [token for token in _DELIMITERS.split(_CRLF.sub("", line)) if token]
    if not tokens or tokens[0].startswith("#"):
        return None
    argument = tokens[1] if len(tokens) > 1 else None
    return Instruction(line_number=line_number, opcode=tokens[0], argument=argument)
