"""One-byte-at-a-time byte sources.

A byte source is any zero-argument callable returning the next byte as an
int, or None once the stream has ended. The scanner never asks for more than
one byte per call and does no buffering of its own beyond a single pushed-back
byte.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Callable
from typing import BinaryIO

logger = logging.getLogger(__name__)

ByteSource = Callable[[], "int | None"]


def fd_source(fd: int = 0) -> ByteSource:
    """Read straight from a file descriptor, one read(2) call per byte."""

    def read_one_byte() -> int | None:
        try:
            data = os.read(fd, 1)
        except OSError as exc:
            # A failed read ends the stream like EOF does
            logger.debug("read from fd %d failed: %s", fd, exc)
            return None
        return data[0] if data else None

    return read_one_byte


def stream_source(stream: BinaryIO) -> ByteSource:
    """Read from a binary file object such as sys.stdin.buffer."""

    def read_one_byte() -> int | None:
        data = stream.read(1)
        return data[0] if data else None

    return read_one_byte


def bytes_source(data: bytes) -> ByteSource:
    """Serve bytes from memory, e.g. ``Console(bytes_source(b"1 2\\n"))``."""
    it = iter(data)

    def read_one_byte() -> int | None:
        return next(it, None)

    return read_one_byte
