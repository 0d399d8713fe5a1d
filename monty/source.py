from contextlib import contextmanager
from typing import Iterator, TextIO

import structlog

from .core.errors import FileOpenError

logger = structlog.get_logger()


@contextmanager
def open_program(path: str) -> Iterator[TextIO]:
    """
    Open a Monty source file for line-by-line reading.

    The file is opened before any instruction runs, so an unreadable path
    fails up front. Iterating the yielded handle gives the physical lines,
    split on '\\n' only and returned untranslated. Bytes that are not valid
    UTF-8 come back as surrogate escapes so diagnostics can echo them as
    written.

    Raises:
        FileOpenError: If the file cannot be opened
    """
    try:
        handle = open(path, "r", encoding="utf-8", errors="surrogateescape", newline="\n")
    except OSError as e:
        logger.debug("Failed to open program", path=path, error=str(e))
        raise FileOpenError(path) from e
    with handle:
        yield handle
