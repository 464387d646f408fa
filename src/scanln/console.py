"""Console entry points — scan, scanln, readln, and an ask-until-valid prompt."""

from __future__ import annotations

import logging
import sys
from typing import Any, TextIO

from scanln.cursor import ByteCursor
from scanln.errors import ScanAborted
from scanln.execute import Value, package, run
from scanln.ops import Op
from scanln.parser import compile_spec
from scanln.scanner import Scanner
from scanln.sources import ByteSource, stream_source

logger = logging.getLogger(__name__)


class Format:
    """A compiled format spec, ready to run against any number of scanners."""

    __slots__ = ("spec", "ops")

    def __init__(self, spec: str) -> None:
        self.spec = spec
        self.ops: tuple[Op, ...] = compile_spec(spec)

    def run(self, scanner: Scanner) -> list[Value | None]:
        return run(self.ops, scanner)

    def scan(self, scanner: Scanner) -> Any:
        return package(self.run(scanner))

    def __repr__(self) -> str:
        return f"Format({self.spec!r})"


def _as_format(spec: str | Format) -> Format:
    return spec if isinstance(spec, Format) else Format(spec)


class Console:
    """Scan typed values off one byte source, one call per line or fragment.

    The console keeps a single ByteCursor for its source, so a byte pushed
    back by one call is the first byte the next call sees. Each call gets a
    fresh Scanner.
    """

    def __init__(self, source: ByteSource | None = None, *, line_terminated: bool = True) -> None:
        if source is None:
            source = stream_source(sys.stdin.buffer)
        self.cursor = ByteCursor(source, line_terminated=line_terminated)

    @property
    def eof(self) -> bool:
        return self.cursor.eof

    def at_eof(self) -> bool:
        """True when no byte is left, checked without consuming anything."""
        self.cursor.rearm()
        return self.cursor.peek() is None

    def scanner(self, drop_line: bool = False) -> Scanner:
        self.cursor.rearm()
        return Scanner(self.cursor, drop_line)

    def attempt(self, spec: str | Format, drop_line: bool = True) -> list[Value | None]:
        """Run one parse attempt and return the raw placeholder slots."""
        fmt = _as_format(spec)
        with self.scanner(drop_line) as scanner:
            return fmt.run(scanner)

    def scan(self, spec: str | Format) -> Any:
        """One attempt; unread input stays available to the next call."""
        return package(self.attempt(spec, drop_line=False))

    def scanln(self, spec: str | Format) -> Any:
        """One attempt, then discard the rest of the line."""
        return package(self.attempt(spec, drop_line=True))

    def readln(self) -> str:
        with self.scanner() as scanner:
            return scanner.line()

    def prompt(
        self,
        spec: str | Format,
        message: str | None = None,
        *,
        attempts: int | None = None,
        output: TextIO | None = None,
    ) -> Any:
        """Ask until a line fills every placeholder.

        Writes ``message`` before each attempt. Raises ScanAborted when the
        input ends or ``attempts`` lines have been tried.
        """
        fmt = _as_format(spec)
        out = output if output is not None else sys.stdout
        tried = 0
        while True:
            if message:
                out.write(message)
                out.flush()
            values = self.attempt(fmt, drop_line=True)
            tried += 1
            if all(v is not None for v in values):
                return package(values)
            if self.eof:
                raise ScanAborted("input ended", tried)
            if attempts is not None and tried >= attempts:
                raise ScanAborted("no complete match", tried)
            logger.info("line did not match %r, asking again", fmt.spec)


_default: Console | None = None


def default_console() -> Console:
    """The process-wide console on standard input, created on first use."""
    global _default
    if _default is None:
        _default = Console()
    return _default


def scan(spec: str | Format) -> Any:
    return default_console().scan(spec)


def scanln(spec: str | Format) -> Any:
    return default_console().scanln(spec)


def readln() -> str:
    return default_console().readln()
