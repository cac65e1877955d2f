"""Tests for dekh.parser -- visible/control classification of one line."""

from __future__ import annotations

from dekh.parser import Cell, char_width, has_open_sequence, parse_line, scan


def visibility(raw: str) -> str:
    """Return a string of ``v``/``.`` marks, one per scanned char."""
    return "".join("v" if visible else "." for _, visible in scan(raw))


# ---------------------------------------------------------------------------
# Plain text
# ---------------------------------------------------------------------------


class TestPlainText:
    def test_ascii_is_visible(self) -> None:
        line = parse_line("abc")
        assert [c.char for c in line.cells] == ["a", "b", "c"]
        assert all(c.visible for c in line.cells)
        assert line.visible_width == 3

    def test_empty_line(self) -> None:
        line = parse_line("")
        assert line.cells == ()
        assert line.visible_width == 0

    def test_tab_expands_to_four_spaces(self) -> None:
        line = parse_line("\ta")
        assert line.text() == "    a"
        assert line.visible_width == 5

    def test_wide_characters_count_as_two(self) -> None:
        line = parse_line("a世b")
        assert [c.width for c in line.cells] == [1, 2, 1]
        assert line.visible_width == 4

    def test_combining_mark_is_zero_width(self) -> None:
        line = parse_line("e\u0301")
        assert [c.width for c in line.cells] == [1, 0]
        assert all(c.visible for c in line.cells)


# ---------------------------------------------------------------------------
# SGR sequences
# ---------------------------------------------------------------------------


class TestSgrSequences:
    def test_color_codes_are_invisible(self) -> None:
        raw = "\x1b[31mred\x1b[0m"
        assert visibility(raw) == ".....vvv...."
        assert parse_line(raw).visible_width == 3

    def test_visible_text_between_sequences(self) -> None:
        raw = "a\x1b[1mb\x1b[22mc"
        assert parse_line(raw).plain() == "abc"

    def test_sequence_without_parameters(self) -> None:
        assert visibility("\x1b[mx") == "...v"

    def test_text_is_preserved_byte_for_byte(self) -> None:
        raw = "\x1b[38;5;196mx\x1b[0m y"
        assert parse_line(raw).text() == raw


# ---------------------------------------------------------------------------
# OSC hyperlinks
# ---------------------------------------------------------------------------


class TestHyperlinks:
    def test_hyperlink_wrappers_are_invisible(self) -> None:
        raw = "\x1b]8;;http://example.com\x1b\\Example\x1b]8;;\x1b\\"
        line = parse_line(raw)
        assert line.plain() == "Example"
        assert line.visible_width == 7

    def test_terminator_pair_is_two_invisible_cells(self) -> None:
        raw = "\x1b]x\x1b\\y"
        assert visibility(raw) == ".....v"

    def test_unterminated_hyperlink_stays_invisible(self) -> None:
        raw = "\x1b]8;;url\x1bXtext"
        assert parse_line(raw).visible_width == 0

    def test_bel_terminated_osc_is_not_recognized_as_closed(self) -> None:
        raw = "\x1b]8;;url\x07link"
        assert parse_line(raw).visible_width == 0

    def test_osc_then_sgr(self) -> None:
        raw = "\x1b]8;;u\x1b\\\x1b[1mA\x1b[0m\x1b]8;;\x1b\\"
        assert parse_line(raw).plain() == "A"


# ---------------------------------------------------------------------------
# Malformed input
# ---------------------------------------------------------------------------


class TestMalformed:
    def test_trailing_escape_is_visible(self) -> None:
        line = parse_line("ab\x1b")
        last = line.cells[-1]
        assert last.char == "\x1b"
        assert last.visible
        assert last.width == 0

    def test_unrecognized_escape_pair_is_visible(self) -> None:
        assert visibility("\x1bXa") == "vvv"

    def test_unterminated_sgr_swallows_rest_of_line(self) -> None:
        assert parse_line("\x1b[31abc").visible_width == 0

    def test_invisible_cells_have_zero_width(self) -> None:
        raw = "\x1b[31m世\x1b]8;;世\x1b\\z"
        for cell in parse_line(raw).cells:
            if not cell.visible:
                assert cell.width == 0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


class TestHelpers:
    def test_char_width_of_control_char_is_zero(self) -> None:
        assert char_width("\x1b") == 0
        assert char_width("\r") == 0

    def test_cell_is_a_value(self) -> None:
        assert Cell("a", True, 1) == Cell("a", True, 1)

    def test_has_open_sequence(self) -> None:
        assert has_open_sequence("\x1b[31")
        assert has_open_sequence("\x1b]8;;url")
        assert not has_open_sequence("\x1b[31mx")
        assert not has_open_sequence("\x1b]8;;u\x1b\\x")
        assert not has_open_sequence("plain\x1b")
