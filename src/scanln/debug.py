"""--debug dump of compiled ops to stderr."""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TextIO

from scanln.ops import FloatPlaceholder, IntPlaceholder, Lit, Op, StringPlaceholder, Whitespace


def dump_ops(ops: Iterable[Op], *, file: TextIO | None = None) -> None:
    """Print one line per op to *file* (default: the current sys.stderr)."""
    if file is None:
        file = sys.stderr
    file.write("Format\n")
    slot = 0
    for op in ops:
        file.write(f"  {describe(op, slot)}  @{op.span.start}..{op.span.end}\n")
        if not isinstance(op, (Lit, Whitespace)):
            slot += 1


def describe(op: Op, slot: int = 0) -> str:
    if isinstance(op, Lit):
        return f"Lit {op.text!r}"
    if isinstance(op, Whitespace):
        return "Whitespace"
    if isinstance(op, IntPlaceholder):
        sign = "signed" if op.kind.signed else "unsigned"
        return f"Int #{slot} {op.kind.tag} ({sign}, {op.kind.bits} bits)"
    if isinstance(op, FloatPlaceholder):
        return f"Float #{slot} {op.tag}"
    if isinstance(op, StringPlaceholder):
        return f"String #{slot}"
    raise TypeError(f"not a scan op: {type(op).__name__}")
