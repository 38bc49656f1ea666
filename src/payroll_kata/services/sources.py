"""Command sources feeding the application.

A source is any iterable of ``Command`` or ``RejectedLine`` items. Text
sources parse lazily, one line at a time, so a REPL on stdin is processed
as it is typed.
"""

from __future__ import annotations

import itertools
import logging
from typing import Iterable, Iterator, TextIO, Union

from payroll_kata.commands import Command, load_commands
from payroll_kata.errors import ParseError
from payroll_kata.parser import parse_line
from payroll_kata.services.transactions import RejectedLine

logger = logging.getLogger(__name__)

SourceItem = Union[Command, RejectedLine]


class TextCommandSource:
    """Parse script lines from a file, stdin, a StringIO or a list."""

    def __init__(self, lines: Iterable[str]):
        self.lines = lines

    def __iter__(self) -> Iterator[SourceItem]:
        for lineno, line in enumerate(self.lines, start=1):
            try:
                command = parse_line(line)
            except ParseError as e:
                error = e.at_line(lineno)
                logger.debug("rejected line %d: %s", lineno, error)
                yield RejectedLine(error)
                continue
            if command is not None:
                yield command


class JsonCommandSource:
    """Serve a JSON command queue (see ``commands.dump_commands``).

    Raises:
        ValueError: payload is not a valid command array
    """

    def __init__(self, payload: str):
        self.commands = load_commands(payload)

    def __iter__(self) -> Iterator[SourceItem]:
        return iter(self.commands)


def echo_lines(lines: Iterable[str], sink: TextIO) -> Iterator[str]:
    """Echo each raw line to ``sink`` as it is read."""
    for line in lines:
        text = line.rstrip("\r\n")
        sink.write(f"Read line: {text}\n")
        yield line


def join_lines(*sources: Iterable[str]) -> Iterator[str]:
    """Chain several line streams, e.g. a prelude script before stdin."""
    return itertools.chain.from_iterable(sources)
