"""Tests for dekh.text -- parsing whole blocks of output."""

from __future__ import annotations

import dataclasses

import pytest

from dekh.text import EMPTY_BLOCK, TextBlock, parse_text


class TestParseText:
    def test_splits_on_line_feeds(self) -> None:
        block = parse_text("one\ntwo\nthree")
        assert [line.plain() for line in block.lines] == ["one", "two", "three"]

    def test_max_width_is_widest_visible_line(self) -> None:
        block = parse_text("ab\n\x1b[31mabcd\x1b[0m\nabc")
        assert block.max_width == 4

    def test_max_width_counts_wide_characters(self) -> None:
        assert parse_text("世界\nabc").max_width == 4

    def test_empty_string_is_one_empty_line(self) -> None:
        block = parse_text("")
        assert block.line_count == 1
        assert block.max_width == 0

    def test_trailing_newline_keeps_empty_last_line(self) -> None:
        block = parse_text("a\nb\n")
        assert block.line_count == 3
        assert block.lines[-1].cells == ()

    def test_crlf_line_endings(self) -> None:
        block = parse_text("first\r\nsecond\r\n")
        assert [line.text() for line in block.lines] == ["first", "second", ""]
        assert block.max_width == 6

    def test_bare_carriage_return_inside_line_is_kept(self) -> None:
        block = parse_text("50%\r100%")
        assert block.lines[0].text() == "50%\r100%"

    def test_long_lines_are_not_wrapped(self) -> None:
        block = parse_text("x" * 500)
        assert block.line_count == 1
        assert block.max_width == 500


class TestTextBlock:
    def test_empty_block(self) -> None:
        assert EMPTY_BLOCK.line_count == 0
        assert EMPTY_BLOCK.max_width == 0
        assert len(TextBlock()) == 0

    def test_block_is_immutable(self) -> None:
        block = parse_text("a")
        with pytest.raises(dataclasses.FrozenInstanceError):
            block.max_width = 10  # type: ignore[misc]

    def test_equal_text_parses_to_equal_blocks(self) -> None:
        assert parse_text("a\nb") == parse_text("a\nb")
