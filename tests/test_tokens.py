"""Test format-spec tokens: { } {{ }} : spaces and literal runs."""

import pytest

from scanln.errors import LexError
from scanln.lexer import tokenize
from scanln.tokens import TokenType

from tests.conftest import assert_types, assert_values


class TestBraces:
    def test_single_braces(self, lex):
        tokens = lex("{}")
        assert_types(tokens, [TokenType.LBRACE, TokenType.RBRACE])

    def test_double_braces(self, lex):
        tokens = lex("{{}}")
        assert_types(tokens, [TokenType.LBRACE_BRACE, TokenType.RBRACE_BRACE])

    def test_triple_brace_pairs_first_two(self, lex):
        tokens = lex("{{{")
        assert_types(tokens, [TokenType.LBRACE_BRACE, TokenType.LBRACE])

    def test_placeholder(self, lex):
        tokens = lex("{u32}")
        assert_types(tokens, [TokenType.LBRACE, TokenType.LITERAL, TokenType.RBRACE])
        assert tokens[1].value == "u32"


class TestColon:
    def test_colon_is_own_token(self, lex):
        tokens = lex("a:b")
        assert_types(tokens, [TokenType.LITERAL, TokenType.COLON, TokenType.LITERAL])


class TestSpace:
    def test_run_collapses(self, lex):
        tokens = lex("a \t  b")
        assert_types(tokens, [TokenType.LITERAL, TokenType.SPACE, TokenType.LITERAL])

    def test_space_anchored_at_first_blank(self, lex):
        tokens = lex("ab   c")
        assert tokens[1].span.start == 2
        assert tokens[1].span.end == 5

    def test_leading_and_trailing(self, lex):
        tokens = lex(" {s} ")
        assert tokens[0].type == TokenType.SPACE
        assert tokens[-1].type == TokenType.SPACE


class TestLiteral:
    def test_run_is_one_token(self, lex):
        tokens = lex("name=")
        assert_types(tokens, [TokenType.LITERAL])
        assert_values(tokens, ["name="])

    def test_offsets(self, lex):
        tokens = lex("x{i8}yz")
        assert [(t.span.start, t.span.end) for t in tokens] == [
            (0, 1),
            (1, 2),
            (2, 4),
            (4, 5),
            (5, 7),
        ]


class TestEof:
    def test_empty_spec_is_just_eof(self):
        tokens = tokenize("")
        assert_types(tokens, [TokenType.EOF])

    def test_eof_at_end_offset(self):
        tokens = tokenize("abc")
        assert tokens[-1].type == TokenType.EOF
        assert tokens[-1].span.start == 3


class TestNonAscii:
    def test_non_ascii_rejected_with_offset(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("abé")
        assert exc_info.value.offset == 2

    def test_control_character_rejected(self):
        with pytest.raises(LexError) as exc_info:
            tokenize("{s}\n")
        assert exc_info.value.offset == 3

    def test_tab_is_allowed(self, lex):
        tokens = lex("\t")
        assert_types(tokens, [TokenType.SPACE])
