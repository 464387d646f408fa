"""Shared test fixtures and helpers."""

from __future__ import annotations

import pytest

from scanln.console import Console
from scanln.cursor import ByteCursor
from scanln.lexer import tokenize
from scanln.parser import parse
from scanln.scanner import Scanner
from scanln.sources import bytes_source
from scanln.tokens import Token, TokenType


@pytest.fixture
def lex():
    """Return a helper that tokenizes a spec and returns tokens (excluding EOF)."""

    def _lex(source: str) -> list[Token]:
        tokens = tokenize(source)
        # Strip trailing EOF for convenience
        return [t for t in tokens if t.type != TokenType.EOF]

    return _lex


@pytest.fixture
def compile_ops():
    """Return a helper that compiles a spec into its op list."""

    def _compile(source: str):
        return parse(source)

    return _compile


@pytest.fixture
def scanner_for():
    """Return a helper building a Scanner over in-memory bytes.

    Line termination is off by default so newlines reach the primitives.
    """

    def _scanner(data: bytes, drop_line: bool = False, line_terminated: bool = False) -> Scanner:
        cursor = ByteCursor(bytes_source(data), line_terminated=line_terminated)
        return Scanner(cursor, drop_line)

    return _scanner


@pytest.fixture
def console_for():
    """Return a helper building a line-terminated Console over in-memory bytes."""

    def _console(data: bytes, line_terminated: bool = True) -> Console:
        return Console(bytes_source(data), line_terminated=line_terminated)

    return _console


def assert_types(tokens: list[Token], expected: list[TokenType]) -> None:
    """Assert that the token types match the expected list."""
    actual = [t.type for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def assert_values(tokens: list[Token], expected: list[str]) -> None:
    """Assert that the token values match the expected list."""
    actual = [t.value for t in tokens]
    assert actual == expected, f"Expected {expected}, got {actual}"


def rest(scanner: Scanner) -> bytes:
    """Drain a scanner's cursor and return everything left."""
    out = bytearray()
    while (b := scanner.cursor.next()) is not None:
        out.append(b)
    return bytes(out)
