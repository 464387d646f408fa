"""Typed console-input scanning driven by small format specs like "{u32} {s}"."""

from __future__ import annotations

from scanln.console import Console, Format, readln, scan, scanln
from scanln.errors import FormatError, LexError, ParseError, ScanAborted

__version__ = "0.1.0"

__all__ = [
    "Console",
    "Format",
    "FormatError",
    "LexError",
    "ParseError",
    "ScanAborted",
    "readln",
    "scan",
    "scanln",
]
