"""Byte cursor — one-byte pushback over a byte source."""

from __future__ import annotations

from scanln.sources import ByteSource

NEWLINE = 0x0A

# HT LF VT FF CR SPACE
_WHITESPACE = frozenset(b"\t\n\x0b\x0c\r ")


def is_whitespace(b: int) -> bool:
    """Return True if b is an ASCII whitespace byte."""
    return b in _WHITESPACE


class ByteCursor:
    """Wrap a byte source with a single pushback slot and an exhausted flag.

    In line-terminated mode (the default, matching console input) a newline
    is consumed and reported as the end of input, so one scan never reads
    past the line it started on. Once exhausted, ``next()`` returns None
    without touching the source until ``rearm()`` is called.

    The cursor also counts consumed newlines and tracks whether anything but
    whitespace has been consumed since the last one. Pushing a byte back
    undoes its effect on that state.
    """

    __slots__ = (
        "_source",
        "_pushed",
        "_exhausted",
        "_eof",
        "_blank",
        "_was_blank",
        "_was_lines",
        "lines",
        "line_terminated",
    )

    def __init__(self, source: ByteSource, *, line_terminated: bool = True) -> None:
        self._source = source
        self._pushed: int | None = None
        self._exhausted = False
        self._eof = False
        self._blank = True
        self._was_blank = True
        self._was_lines = 0
        self.lines = 0
        self.line_terminated = line_terminated

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def eof(self) -> bool:
        """True once the underlying source has reported end of stream."""
        return self._eof

    @property
    def line_blank(self) -> bool:
        """True while nothing but whitespace has been consumed on the current line."""
        return self._blank

    def next(self) -> int | None:
        if self._exhausted:
            return None

        if self._pushed is not None:
            b, self._pushed = self._pushed, None
        else:
            b = self._source()
            if b is None:
                self._exhausted = True
                self._eof = True
                return None

        self._was_blank = self._blank
        self._was_lines = self.lines
        if b == NEWLINE:
            self.lines += 1
            self._blank = True
            if self.line_terminated:
                self._exhausted = True
                return None
        elif not is_whitespace(b):
            self._blank = False
        return b

    def push(self, b: int) -> None:
        """Buffer b for the next call to next(); ignored if a byte is already buffered."""
        if self._pushed is None:
            self._pushed = b
            self._blank = self._was_blank
            self.lines = self._was_lines

    def peek(self) -> int | None:
        """Return the next byte without consuming it.

        A newline is returned as-is rather than ending the line; the next
        call to next() still treats it as the line end.
        """
        if self._exhausted:
            return None
        if self._pushed is None:
            b = self._source()
            if b is None:
                self._exhausted = True
                self._eof = True
                return None
            self._pushed = b
        return self._pushed

    def rearm(self) -> None:
        """Make the cursor readable again after a line ended; end of stream is final."""
        if not self._eof:
            self._exhausted = False
