"""Incremental UTF-8 decoding with U+FFFD recovery."""

from __future__ import annotations

REPLACEMENT = "\ufffd"

# Smallest scalar each sequence length may encode; anything below is overlong
_MIN_SCALAR = {1: 0x80, 2: 0x800, 3: 0x10000}


def sequence_width(lead: int) -> int:
    """Return the number of continuation bytes a lead byte announces, 0 if invalid."""
    if 0xC2 <= lead <= 0xDF:
        return 1
    if 0xE0 <= lead <= 0xEF:
        return 2
    if 0xF0 <= lead <= 0xF4:
        return 3
    return 0


class Utf8Decoder:
    """Byte-at-a-time UTF-8 decoder that never raises.

    Each pushed byte yields a pair of optional characters. The first slot
    closes out whatever was pending before the byte (a finished character, or
    a replacement for a sequence the byte interrupted); the second slot is the
    byte's own contribution when it can be decided on the spot (an ASCII
    character, or a replacement for an invalid lead byte).
    """

    def __init__(self) -> None:
        self.accumulator = 0
        self.remaining = 0
        self._width = 0

    def push(self, b: int) -> tuple[str | None, str | None]:
        if b < 0x80:
            if self.remaining > 0:
                self.remaining = 0
                return REPLACEMENT, chr(b)
            return None, chr(b)

        if b >= 0xC0:
            old = REPLACEMENT if self.remaining > 0 else None
            self.remaining = 0
            n = sequence_width(b)
            if n == 0:
                return old, REPLACEMENT
            self.remaining = n
            self._width = n
            self.accumulator = b & (0xFF >> (n + 2))
            return old, None

        # Continuation byte
        if self.remaining == 0:
            return REPLACEMENT, None
        self.accumulator = (self.accumulator << 6) | (b & 0x3F)
        self.remaining -= 1
        if self.remaining > 0:
            return None, None
        return self._finish(), None

    def pending(self) -> bool:
        return self.remaining > 0

    def _finish(self) -> str:
        cp = self.accumulator
        if cp < _MIN_SCALAR[self._width] or 0xD800 <= cp <= 0xDFFF or cp > 0x10FFFF:
            return REPLACEMENT
        return chr(cp)
