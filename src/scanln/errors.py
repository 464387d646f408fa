"""Error types with formatted format-spec context."""

from __future__ import annotations

from scanln.tokens import Span


class FormatError(Exception):
    """Base class for errors raised while compiling a format spec."""

    def __init__(self, message: str, span: Span, source: str) -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    @property
    def offset(self) -> int:
        """0-based byte offset of the offending character."""
        return self.span.start

    def format(self, filename: str = "<spec>") -> str:
        col = self.span.start + 1

        # Underline the span, at least one caret, never past the end of the spec
        underline_len = max(1, min(self.span.end, len(self.source)) - self.span.start)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        # Non-printable characters are shown escaped so the carets stay aligned
        shown = "".join(ch if 0x20 <= ord(ch) <= 0x7E else "?" for ch in self.source)

        return (
            f"error: {self.message}\n"
            f"  --> {filename}:{col}\n"
            f"   |\n"
            f"   | {shown}\n"
            f"   | {pad}{carets}"
        )


class LexError(FormatError):
    """Raised on the first character the tokenizer cannot accept."""

    def __init__(self, message: str, offset: int, source: str) -> None:
        super().__init__(message, Span(offset, offset + 1), source)


class ParseError(FormatError):
    """Raised on the first malformed placeholder or stray token."""


class ScanAborted(Exception):
    """Raised by a retry loop that gave up before every placeholder was filled."""

    def __init__(self, message: str, attempts: int) -> None:
        self.message = message
        self.attempts = attempts
        super().__init__(f"{message} after {attempts} attempt(s)")
