"""Scan engine — primitive parsers over a byte cursor."""

from __future__ import annotations

from enum import IntEnum

from scanln.cursor import NEWLINE, ByteCursor, is_whitespace
from scanln.utf8 import REPLACEMENT, Utf8Decoder


class Base(IntEnum):
    BINARY = 2
    OCTAL = 8
    DECIMAL = 10
    HEX = 16

    def digit(self, b: int) -> int | None:
        """Return the value of digit byte b in this base, or None."""
        if 0x30 <= b <= 0x39:  # 0-9
            value = b - 0x30
        elif 0x61 <= b <= 0x66:  # a-f
            value = b - 0x61 + 10
        elif 0x41 <= b <= 0x46:  # A-F
            value = b - 0x41 + 10
        else:
            return None
        return value if value < self else None


_PREFIXES = {
    ord("x"): Base.HEX,
    ord("X"): Base.HEX,
    ord("o"): Base.OCTAL,
    ord("O"): Base.OCTAL,
    ord("b"): Base.BINARY,
    ord("B"): Base.BINARY,
}


def _to_float(n: int) -> float:
    try:
        return float(n)
    except OverflowError:
        return float("inf")


class Scanner:
    """Parse values off a ByteCursor.

    Every primitive reads through the cursor and pushes back the single byte
    it over-read, so consecutive primitives see a contiguous stream. Failures
    are reported as None (or False for ``literal``), never raised.

    A scanner created with ``drop_line=True`` discards the rest of the
    current line when closed; use it as a context manager or call
    ``close()`` explicitly. If the scan already crossed a newline and has
    consumed nothing but whitespace since, the line it ended on is untouched.
    """

    def __init__(self, cursor: ByteCursor, drop_line: bool = False) -> None:
        self.cursor = cursor
        self.drop_line = drop_line
        self._closed = False
        self._start_lines = cursor.lines

    def __enter__(self) -> Scanner:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if not self.drop_line:
            return
        if self.cursor.lines != self._start_lines and self.cursor.line_blank:
            return
        while True:
            b = self.cursor.next()
            if b is None or b == NEWLINE:
                break

    # ------------------------------------------------------------------
    # Prefixes
    # ------------------------------------------------------------------

    def classify(self, octal_zero: bool = True) -> tuple[Base, bool]:
        """Read an optional base prefix.

        Returns the base of the number that follows and whether a leading
        ``0`` was consumed, in which case the caller may default the value
        to 0 when no digits follow. With ``octal_zero`` a ``0`` followed by
        an octal digit selects base 8, as in C's ``%i``.
        """
        b = self.cursor.next()
        if b is None:
            return Base.DECIMAL, False
        if b != 0x30:
            self.cursor.push(b)
            return Base.DECIMAL, False

        b = self.cursor.next()
        if b is None:
            return Base.DECIMAL, True
        if b in _PREFIXES:
            return _PREFIXES[b], False
        self.cursor.push(b)
        if octal_zero and Base.OCTAL.digit(b) is not None:
            return Base.OCTAL, True
        return Base.DECIMAL, True

    def sign(self) -> int:
        b = self.cursor.next()
        if b == 0x2B:  # +
            return 1
        if b == 0x2D:  # -
            return -1
        if b is not None:
            self.cursor.push(b)
        return 1

    # ------------------------------------------------------------------
    # Digits
    # ------------------------------------------------------------------

    def _accumulate(self, base: Base) -> tuple[int, int]:
        """Fold digits of base into an integer; return (value, digit count)."""
        value = 0
        count = 0
        while True:
            b = self.cursor.next()
            if b is None:
                break
            d = base.digit(b)
            if d is None:
                self.cursor.push(b)
                break
            value = value * base + d
            count += 1
        return value, count

    def digits(self, base: Base) -> int | None:
        value, count = self._accumulate(base)
        return value if count else None

    def digits_inv(self, base: Base) -> float | None:
        """Parse the digits after a radix point as a fraction."""
        value, count = self._accumulate(base)
        if not count:
            return None
        return value / base**count

    def binary(self) -> int | None:
        return self.digits(Base.BINARY)

    def octal(self) -> int | None:
        return self.digits(Base.OCTAL)

    def decimal(self) -> int | None:
        return self.digits(Base.DECIMAL)

    def hexadecimal(self) -> int | None:
        return self.digits(Base.HEX)

    def binary_inv(self) -> float | None:
        return self.digits_inv(Base.BINARY)

    def octal_inv(self) -> float | None:
        return self.digits_inv(Base.OCTAL)

    def decimal_inv(self) -> float | None:
        return self.digits_inv(Base.DECIMAL)

    def hexadecimal_inv(self) -> float | None:
        return self.digits_inv(Base.HEX)

    # ------------------------------------------------------------------
    # Numbers
    # ------------------------------------------------------------------

    def unsigned_integer(self) -> int | None:
        """Parse an unsigned integer including its base prefix."""
        base, zero = self.classify()
        value = self.digits(base)
        if value is None and zero:
            return 0
        return value

    def signed_integer(self) -> int | None:
        sign = self.sign()
        value = self.unsigned_integer()
        if value is None:
            return None
        return sign * value

    def float(self) -> float | None:
        """Parse a float: sign, optional base prefix, digits, optional fraction."""
        sign = self.sign()
        base, zero = self.classify(octal_zero=False)
        whole = self.digits(base)
        if whole is None:
            if not zero:
                return None
            whole = 0
        value = _to_float(whole)

        b = self.cursor.next()
        if b is None:
            return sign * value
        if b != 0x2E:  # .
            self.cursor.push(b)
            return sign * value

        frac = self.digits_inv(base)
        if frac is not None:
            value += frac
        return sign * value

    # ------------------------------------------------------------------
    # Text
    # ------------------------------------------------------------------

    def word(self) -> str:
        """Read up to the next whitespace byte, decoding UTF-8 with U+FFFD recovery."""
        return self.string(word=True, line=False)

    def line(self) -> str:
        """Read up to and including the next newline; the newline is not returned."""
        return self.string(word=False, line=True)

    def string(self, word: bool, line: bool) -> str:
        out: list[str] = []
        decoder = Utf8Decoder()
        while True:
            b = self.cursor.next()
            if b is None:
                break
            if word and is_whitespace(b):
                self.cursor.push(b)
                break
            if line and b == NEWLINE:
                break
            for ch in decoder.push(b):
                if ch is not None:
                    out.append(ch)
        if decoder.pending():
            out.append(REPLACEMENT)
        return "".join(out)

    def whitespace(self) -> None:
        while True:
            b = self.cursor.next()
            if b is None:
                return
            if not is_whitespace(b):
                self.cursor.push(b)
                return

    def literal(self, text: str) -> bool:
        """Match text byte by byte.

        On a mismatch only the mismatching byte is pushed back; bytes that
        already matched stay consumed. Running out of input part way through
        is a mismatch too.
        """
        for expected in text.encode("utf-8"):
            b = self.cursor.next()
            if b is None:
                return False
            if b != expected:
                self.cursor.push(b)
                return False
        return True
