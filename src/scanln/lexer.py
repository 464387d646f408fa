"""Format-spec lexer — converts a spec string into a flat token stream."""

from __future__ import annotations

from scanln.errors import LexError
from scanln.tokens import Span, Token, TokenType, is_blank, is_printable_ascii, is_structural


class Lexer:
    """Tokenize a format spec into a stream of Token objects."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._tokens: list[Token] = []

    def tokenize(self) -> list[Token]:
        """Tokenize the full spec and return the token list, ending in EOF."""
        while self._pos < len(self._source):
            ch = self._peek()

            if is_blank(ch):
                self._lex_space()
                continue

            if not is_printable_ascii(ch):
                raise self._error(f"expected ASCII character, found {ch!r}")

            if ch == "{" and self._peek(1) == "{":
                self._lex_punct(TokenType.LBRACE_BRACE, 2)
            elif ch == "}" and self._peek(1) == "}":
                self._lex_punct(TokenType.RBRACE_BRACE, 2)
            elif ch == "{":
                self._lex_punct(TokenType.LBRACE, 1)
            elif ch == "}":
                self._lex_punct(TokenType.RBRACE, 1)
            elif ch == ":":
                self._lex_punct(TokenType.COLON, 1)
            else:
                self._lex_literal()

        self._emit(TokenType.EOF, self._pos)
        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> str:
        idx = self._pos + offset
        if idx < len(self._source):
            return self._source[idx]
        return ""

    def _emit(self, tt: TokenType, start: int) -> Token:
        tok = Token(tt, self._source[start : self._pos], Span(start, self._pos))
        self._tokens.append(tok)
        return tok

    def _error(self, message: str, offset: int | None = None) -> LexError:
        if offset is None:
            offset = self._pos
        return LexError(message, offset, self._source)

    # ------------------------------------------------------------------
    # Token kinds
    # ------------------------------------------------------------------

    def _lex_punct(self, tt: TokenType, width: int) -> None:
        start = self._pos
        self._pos += width
        self._emit(tt, start)

    def _lex_space(self) -> None:
        start = self._pos
        while self._pos < len(self._source) and is_blank(self._peek()):
            self._pos += 1
        self._emit(TokenType.SPACE, start)

    def _lex_literal(self) -> None:
        start = self._pos
        while self._pos < len(self._source):
            ch = self._peek()
            # Non-printable characters end the run and are reported by tokenize()
            if is_blank(ch) or is_structural(ch) or not is_printable_ascii(ch):
                break
            self._pos += 1
        self._emit(TokenType.LITERAL, start)


def tokenize(source: str) -> list[Token]:
    """Convenience function: tokenize a format spec and return the token list."""
    return Lexer(source).tokenize()
