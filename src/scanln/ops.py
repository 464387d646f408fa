"""Compiled scan operations produced from a format spec."""

from __future__ import annotations

import math
import struct
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum

from scanln.tokens import Span

_NO_SPAN = Span(0, 0)

# Magnitudes at or past this round beyond the largest finite binary32
_F32_OVERFLOW = 2.0**128 * (1 - 2.0**-25)


class IntKind(Enum):
    """Integer placeholder types: (tag, bit width, signed)."""

    I8 = ("i8", 8, True)
    U8 = ("u8", 8, False)
    I16 = ("i16", 16, True)
    U16 = ("u16", 16, False)
    I32 = ("i32", 32, True)
    U32 = ("u32", 32, False)
    I64 = ("i64", 64, True)
    U64 = ("u64", 64, False)
    I = ("i", 64, True)
    U = ("u", 64, False)

    def __init__(self, tag: str, bits: int, signed: bool) -> None:
        self.tag = tag
        self.bits = bits
        self.signed = signed

    def cast(self, value: int) -> int:
        """Wrap value into this kind's range (two's complement for signed kinds)."""
        value &= (1 << self.bits) - 1
        if self.signed and value >> (self.bits - 1):
            value -= 1 << self.bits
        return value


def to_f32(value: float) -> float:
    """Round a float to the nearest binary32 value, overflowing to infinity."""
    if abs(value) >= _F32_OVERFLOW:
        return math.copysign(math.inf, value)
    return struct.unpack("<f", struct.pack("<f", value))[0]


@dataclass(frozen=True, slots=True)
class Lit:
    """Match text literally."""

    text: str
    span: Span = field(default=_NO_SPAN, compare=False)


@dataclass(frozen=True, slots=True)
class Whitespace:
    """Skip any amount of whitespace, including none."""

    span: Span = field(default=_NO_SPAN, compare=False)


@dataclass(frozen=True, slots=True)
class IntPlaceholder:
    kind: IntKind
    span: Span = field(default=_NO_SPAN, compare=False)


@dataclass(frozen=True, slots=True)
class FloatPlaceholder:
    """Float placeholder; double selects f64 over f32."""

    double: bool
    span: Span = field(default=_NO_SPAN, compare=False)

    @property
    def tag(self) -> str:
        return "f64" if self.double else "f32"


@dataclass(frozen=True, slots=True)
class StringPlaceholder:
    """Whitespace-delimited word."""

    span: Span = field(default=_NO_SPAN, compare=False)


Op = Lit | Whitespace | IntPlaceholder | FloatPlaceholder | StringPlaceholder

Placeholder = IntPlaceholder | FloatPlaceholder | StringPlaceholder



def placeholders(ops: Iterable[Op]) -> tuple[Placeholder, ...]:
    """The value-producing ops, in slot order."""
    return tuple(op for op in ops if isinstance(op, Placeholder))
