"""Tests for the incremental UTF-8 decoder."""

from __future__ import annotations

import pytest

from scanln.utf8 import REPLACEMENT, Utf8Decoder, sequence_width


def decode(data: bytes) -> str:
    """Feed every byte through one decoder, flushing a truncated tail as U+FFFD."""
    decoder = Utf8Decoder()
    out = [ch for b in data for ch in decoder.push(b) if ch is not None]
    if decoder.pending():
        out.append(REPLACEMENT)
    return "".join(out)


class TestValidInput:
    @pytest.mark.parametrize(
        "text",
        ["", "hello", "Zürich", "日本語", "emoji 🎉 mix", "\x7f\x00", "߿ࠀ￿𐀀\U0010ffff"],
    )
    def test_round_trip(self, text):
        assert decode(text.encode("utf-8")) == text

    def test_ascii_pair(self):
        d = Utf8Decoder()
        assert d.push(0x41) == (None, "A")
        assert not d.pending()

    def test_two_byte_sequence(self):
        d = Utf8Decoder()
        assert d.push(0xC3) == (None, None)
        assert d.pending()
        assert d.push(0xBC) == ("ü", None)
        assert not d.pending()

    def test_four_byte_sequence(self):
        d = Utf8Decoder()
        out = [d.push(b) for b in "🎉".encode("utf-8")]
        assert out == [(None, None), (None, None), (None, None), ("🎉", None)]


class TestMalformedInput:
    def test_stray_continuation(self):
        d = Utf8Decoder()
        assert d.push(0x80) == (REPLACEMENT, None)

    def test_truncated_then_ascii(self):
        d = Utf8Decoder()
        d.push(0xE6)
        assert d.push(0x41) == (REPLACEMENT, "A")
        assert not d.pending()

    def test_truncated_then_new_lead(self):
        d = Utf8Decoder()
        d.push(0xE6)
        assert d.push(0xC3) == (REPLACEMENT, None)
        assert d.push(0xBC) == ("ü", None)

    @pytest.mark.parametrize("lead", [0xC0, 0xC1, 0xF5, 0xFF])
    def test_invalid_lead_byte(self, lead):
        d = Utf8Decoder()
        assert d.push(lead) == (None, REPLACEMENT)
        assert not d.pending()

    def test_surrogate_rejected(self):
        assert decode(b"\xed\xa0\x80") == REPLACEMENT

    def test_overlong_rejected(self):
        assert decode(b"\xe0\x80\xaf") == REPLACEMENT

    def test_above_max_scalar_rejected(self):
        assert decode(b"\xf4\x90\x80\x80") == REPLACEMENT

    def test_truncated_at_end(self):
        assert decode(b"ab\xe6\x97") == "ab" + REPLACEMENT

    @pytest.mark.parametrize(
        "data",
        [b"\x80", b"\xc3", b"\xe6\x97", b"\xf0\x9f\x8e", b"\xc0", b"\xed\xa0\x80"],
    )
    def test_one_replacement_per_malformed_unit(self, data):
        assert decode(data) == REPLACEMENT

    def test_never_raises_on_any_byte(self):
        d = Utf8Decoder()
        for b in range(256):
            d.push(b)


class TestSequenceWidth:
    def test_widths(self):
        assert sequence_width(0xC2) == 1
        assert sequence_width(0xE0) == 2
        assert sequence_width(0xF4) == 3
        assert sequence_width(0x80) == 0
