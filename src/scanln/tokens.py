"""Format-spec token types, spans, and character classification helpers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto


class TokenType(Enum):
    # Structural
    LBRACE = auto()  # {
    RBRACE = auto()  # }
    COLON = auto()  # :

    # Escaped braces, matched literally
    LBRACE_BRACE = auto()  # {{
    RBRACE_BRACE = auto()  # }}

    # Content
    LITERAL = auto()  # run of any other printable characters
    SPACE = auto()  # run of spaces/tabs

    EOF = auto()


@dataclass(frozen=True, slots=True)
class Span:
    """Half-open range of 0-based byte offsets into the format spec."""

    start: int
    end: int


@dataclass(frozen=True, slots=True)
class Token:
    """A single format-spec token with its source text."""

    type: TokenType
    value: str
    span: Span


def is_blank(ch: str) -> bool:
    """Return True for the characters that form a SPACE run."""
    return ch == " " or ch == "\t"


def is_printable_ascii(ch: str) -> bool:
    """Return True if ch is in the printable ASCII range 0x20-0x7E."""
    return 0x20 <= ord(ch) <= 0x7E


def is_structural(ch: str) -> bool:
    return ch in "{}:"
