#!/usr/bin/env python3
"""
Command line entry point for the Monty bytecode interpreter.

Usage:
    monty file [--log-level LEVEL] [--log-format {console,json}]
               [--max-stack-size N] [--config PATH]

There is no -h option: every argument that is not one of the flags above is
taken as the program path, so "monty -h" runs a file named "-h". "--" ends
the flags.

This is the single place where fatal errors are printed and turned into an
exit status.
"""

import argparse
import sys
from typing import List, Optional

import structlog

from .config import LOG_FORMATS, LOG_LEVELS, load_config
from .core.errors import MontyError, UsageError
from .core.execution import Interpreter
from .logging_config import configure_logging
from .source import open_program

logger = structlog.get_logger()


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports every misuse with the Monty usage line."""

    def error(self, message):
        raise UsageError()


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(prog="monty", description="Run a Monty bytecode file", add_help=False)
    parser.add_argument("files", nargs="*", metavar="file", help="Monty source file to run")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, help="Logging level (default: WARNING)")
    parser.add_argument("--log-format", choices=LOG_FORMATS, help="Log renderer (default: console)")
    parser.add_argument("--max-stack-size", type=int, help="Fail with an allocation error past this many values")
    parser.add_argument("--config", help="YAML config file (default: $MONTY_CONFIG)")
    return parser


def run(path: str, max_stack_size: Optional[int] = None) -> int:
    interpreter = Interpreter(max_stack_size=max_stack_size)
    with open_program(path) as lines:
        result = interpreter.run(lines)
    logger.info(
        "Program completed",
        path=path,
        lines_read=result.lines_read,
        instructions_executed=result.instructions_executed,
    )
    return 0


def report(error: MontyError) -> None:
    """Write the diagnostic line to stderr, echoing undecodable source bytes as read."""
    sys.stdout.flush()
    message = f"{error}\n"
    stream = getattr(sys.stderr, "buffer", None)
    if stream is None:
        sys.stderr.write(message)
        return
    sys.stderr.flush()
    stream.write(message.encode("utf-8", "surrogateescape"))
    stream.flush()


def main(argv: Optional[List[str]] = None) -> int:
    try:
        args, unknown = build_parser().parse_known_args(argv)
        # Anything that is not one of our flags is a path, leading dash or not
        files = args.files + unknown
        if len(files) != 1:
            raise UsageError()
        config = load_config(
            args.config,
            log_level=args.log_level,
            log_format=args.log_format,
            max_stack_size=args.max_stack_size,
        )
        configure_logging(config.log_level, config.log_format)
        return run(files[0], max_stack_size=config.max_stack_size)
    except MontyError as e:
        report(e)
        return e.exit_code


if __name__ == "__main__":
    raise SystemExit(main())
