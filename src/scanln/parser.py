"""Format-spec parser — compiles a token stream into an ordered list of scan ops."""

from __future__ import annotations

import logging
from functools import lru_cache

from scanln.errors import ParseError
from scanln.lexer import tokenize
from scanln.ops import (
    FloatPlaceholder,
    IntKind,
    IntPlaceholder,
    Lit,
    Op,
    StringPlaceholder,
    Whitespace,
)
from scanln.tokens import Span, Token, TokenType

logger = logging.getLogger(__name__)

_INT_KINDS: dict[str, IntKind] = {kind.tag: kind for kind in IntKind}

# Tokens that stand for literal text, with the text they stand for
_LITERAL_TEXT: dict[TokenType, str | None] = {
    TokenType.LITERAL: None,  # its own source text
    TokenType.COLON: ":",
    TokenType.LBRACE_BRACE: "{",
    TokenType.RBRACE_BRACE: "}",
}


class Parser:
    """Single-pass parser over a format-spec token stream."""

    def __init__(self, tokens: list[Token], source: str) -> None:
        self._tokens = tokens
        self._source = source
        self._pos = 0
        self._ops: list[Op] = []

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def _peek(self) -> Token:
        if self._pos < len(self._tokens):
            return self._tokens[self._pos]
        return self._tokens[-1]  # EOF

    def _at(self, *types: TokenType) -> bool:
        return self._peek().type in types

    def _advance(self) -> Token:
        tok = self._peek()
        if tok.type != TokenType.EOF:
            self._pos += 1
        return tok

    def _skip_spaces(self) -> None:
        while self._at(TokenType.SPACE):
            self._advance()

    def _error(self, message: str, span: Span) -> ParseError:
        return ParseError(message, span, self._source)

    # ------------------------------------------------------------------
    # Spec level
    # ------------------------------------------------------------------

    def parse(self) -> list[Op]:
        while not self._at(TokenType.EOF):
            tok = self._advance()

            if tok.type in _LITERAL_TEXT:
                text = _LITERAL_TEXT[tok.type]
                self._push_literal(tok.value if text is None else text, tok.span)
            elif tok.type == TokenType.SPACE:
                self._ops.append(Whitespace(tok.span))
            elif tok.type == TokenType.LBRACE:
                self._ops.append(self._parse_placeholder(tok))
            else:
                raise self._error("unexpected token", tok.span)

        return self._ops

    def _push_literal(self, text: str, span: Span) -> None:
        prev = self._ops[-1] if self._ops else None
        if isinstance(prev, Lit):
            self._ops[-1] = Lit(prev.text + text, Span(prev.span.start, span.end))
        else:
            self._ops.append(Lit(text, span))

    # ------------------------------------------------------------------
    # Placeholders
    # ------------------------------------------------------------------

    def _parse_placeholder(self, open_tok: Token) -> Op:
        self._skip_spaces()

        type_tok = self._advance()
        if type_tok.type == TokenType.EOF:
            raise self._error("unterminated placeholder", open_tok.span)
        if type_tok.type != TokenType.LITERAL:
            raise self._error("expected type", type_tok.span)

        tag = type_tok.value
        if tag not in _INT_KINDS and tag not in ("f32", "f64", "s"):
            raise self._error(f"unknown type '{tag}'", type_tok.span)

        self._skip_spaces()

        close_tok = self._advance()
        if close_tok.type == TokenType.EOF:
            raise self._error("unterminated placeholder", open_tok.span)
        if close_tok.type != TokenType.RBRACE:
            raise self._error("unexpected token", close_tok.span)

        span = Span(open_tok.span.start, close_tok.span.end)
        if tag in _INT_KINDS:
            return IntPlaceholder(_INT_KINDS[tag], span)
        if tag == "s":
            return StringPlaceholder(span)
        return FloatPlaceholder(tag == "f64", span)


def parse(source: str) -> list[Op]:
    """Tokenize and parse a format spec, returning its ops."""
    tokens = tokenize(source)
    return Parser(tokens, source).parse()


@lru_cache(maxsize=256)
def compile_spec(source: str) -> tuple[Op, ...]:
    """Compile a format spec once; repeated calls with the same text hit the cache."""
    ops = tuple(parse(source))
    logger.debug("compiled format %r into %d ops", source, len(ops))
    return ops
