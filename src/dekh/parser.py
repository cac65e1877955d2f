"""Line parser: split raw terminal text into visible and control cells.

Each character of a line becomes a :class:`Cell`. Characters that belong to
an SGR sequence (``ESC[ ... m``) or an OSC hyperlink (``ESC] ... ESC\\``)
are marked invisible and take no columns; everything else is visible and
measured with :mod:`wcwidth`.

Only those two sequence forms are recognized. Anything else that starts with
ESC is passed through as visible text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

import wcwidth as _wcwidth

ESC = "\x1b"
TAB_WIDTH = 4

# ---------------------------------------------------------------------------
# Scan state machine
# ---------------------------------------------------------------------------

ScanState = Literal["text", "sgr", "osc"]

# ESC followed by one of these characters opens a sequence.
_OPENERS: dict[str, ScanState] = {
    "[": "sgr",
    "]": "osc",
}

# Characters that close the sequence opened in a given state.
_TERMINATORS: dict[ScanState, str] = {
    "sgr": "m",
    "osc": ESC + "\\",
}


# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Cell:
    """One character of a line.

    ``width`` is always 0 for invisible cells.
    """

    char: str
    visible: bool
    width: int


@dataclass(frozen=True)
class Line:
    """An immutable parsed line."""

    cells: tuple[Cell, ...]
    visible_width: int

    def __len__(self) -> int:
        return len(self.cells)

    def text(self) -> str:
        """Return the line's characters, control sequences included."""
        return "".join(cell.char for cell in self.cells)

    def plain(self) -> str:
        """Return only the visible characters."""
        return "".join(cell.char for cell in self.cells if cell.visible)


def char_width(ch: str) -> int:
    """Return the number of terminal columns *ch* occupies (0, 1 or 2)."""
    return max(_wcwidth.wcwidth(ch), 0)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def _next_state(state: ScanState, s: str, i: int) -> tuple[ScanState, int]:
    """Return the state after reading ``s[i]`` and how many chars it consumes.

    The returned count is 2 only when a two-char terminator is matched; the
    second char then belongs to the same invisible run.
    """
    ch = s[i]
    has_next = i + 1 < len(s)

    if state == "text":
        if ch == ESC and has_next:
            return _OPENERS.get(s[i + 1], "text"), 1
        return "text", 1

    terminator = _TERMINATORS[state]
    if ch != terminator[0]:
        return state, 1
    if len(terminator) == 1:
        return "text", 1
    if has_next and s[i + 1] == terminator[1]:
        return "text", 2
    # Unterminated hyperlink: stay invisible.
    return state, 1


def scan(raw: str) -> list[tuple[str, bool]]:
    """Classify every char of *raw* as ``(char, visible)``.

    Tabs are expanded to four spaces first.
    """
    s = raw.replace("\t", " " * TAB_WIDTH)
    out: list[tuple[str, bool]] = []
    state: ScanState = "text"
    i = 0
    while i < len(s):
        # A sequence opens on its own ESC, so the new state applies to it.
        if state == "text":
            state, consumed = _next_state(state, s, i)
            visible = state == "text"
        else:
            visible = False
            state, consumed = _next_state(state, s, i)
        out.append((s[i], visible))
        if consumed == 2:
            out.append((s[i + 1], False))
        i += consumed
    return out


def parse_line(raw: str) -> Line:
    """Parse one line of raw text (no ``\\n``) into a :class:`Line`."""
    cells: list[Cell] = []
    total = 0
    for ch, visible in scan(raw):
        width = char_width(ch) if visible else 0
        total += width
        cells.append(Cell(ch, visible, width))
    return Line(tuple(cells), total)


def has_open_sequence(raw: str) -> bool:
    """Return ``True`` if *raw* ends inside an SGR or OSC sequence."""
    s = raw.replace("\t", " " * TAB_WIDTH)
    state: ScanState = "text"
    i = 0
    while i < len(s):
        state, consumed = _next_state(state, s, i)
        i += consumed
    return state != "text"
