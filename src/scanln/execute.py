"""Run compiled scan ops against a scanner."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from scanln.ops import (
    FloatPlaceholder,
    IntPlaceholder,
    Lit,
    Op,
    StringPlaceholder,
    Whitespace,
    placeholders,
    to_f32,
)
from scanln.scanner import Scanner

logger = logging.getLogger(__name__)

Value = int | float | str


def run(ops: Iterable[Op], scanner: Scanner) -> list[Value | None]:
    """Evaluate ops in order, returning one slot per placeholder.

    The first literal mismatch or failed number stops the run; the
    placeholders after it stay None.
    """
    ops = list(ops)
    values: list[Value | None] = [None] * len(placeholders(ops))
    slot = 0

    for op in ops:
        if isinstance(op, Lit):
            if not scanner.literal(op.text):
                logger.debug("literal %r did not match, stopping", op.text)
                break
        elif isinstance(op, Whitespace):
            scanner.whitespace()
        elif isinstance(op, IntPlaceholder):
            raw = scanner.signed_integer() if op.kind.signed else scanner.unsigned_integer()
            if raw is None:
                logger.debug("no %s at placeholder %d, stopping", op.kind.tag, slot)
                break
            values[slot] = op.kind.cast(raw)
            slot += 1
        elif isinstance(op, FloatPlaceholder):
            f = scanner.float()
            if f is None:
                logger.debug("no %s at placeholder %d, stopping", op.tag, slot)
                break
            values[slot] = f if op.double else to_f32(f)
            slot += 1
        elif isinstance(op, StringPlaceholder):
            values[slot] = scanner.word()
            slot += 1

    return values


def package(values: list[Value | None]) -> Any:
    """A bare value for a single placeholder, a tuple otherwise."""
    if len(values) == 1:
        return values[0]
    return tuple(values)


def execute(ops: Iterable[Op], scanner: Scanner) -> Any:
    """Run ops and package the result."""
    return package(run(ops, scanner))
