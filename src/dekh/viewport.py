"""Viewport renderer: clip a :class:`TextBlock` to a window.

The renderer works on parsed cells so that control sequences are always
copied whole. Visible cells are skipped or emitted by display width; when a
line runs past the right edge the attributes are reset and the rest of the
line is dropped.
"""

from __future__ import annotations

from dekh.parser import Line
from dekh.text import TextBlock

RESET = "\x1b[0m"


def render_line(line: Line, x: int, width: int) -> str:
    """Render columns ``[x, x + width)`` of *line*.

    Control sequences before the cutoff are emitted verbatim even when the
    visible text around them is skipped. A double-width character that
    straddles the left edge is replaced by a space for its overhanging
    column; one that straddles the right edge is dropped.
    """
    if width <= 0:
        return ""

    out: list[str] = []
    skip = x
    budget = width

    for cell in line.cells:
        if not cell.visible:
            out.append(cell.char)
            continue

        if skip > 0:
            skip -= cell.width
            if skip < 0:
                pad = min(-skip, budget)
                out.append(" " * pad)
                budget -= pad
                skip = 0
            continue

        if cell.width == 0:
            out.append(cell.char)
            continue

        if budget >= cell.width:
            budget -= cell.width
            out.append(cell.char)
            continue

        out.append(RESET)
        break

    return "".join(out)


def render(block: TextBlock, x: int, y: int, width: int, height: int) -> str:
    """Render the ``width`` x ``height`` window at ``(x, y)`` of *block*.

    ``x`` and ``y`` are expected to be snapped already (see
    :func:`dekh.scroll.snap`); ``y`` is only floored at 0 here. Lines are
    joined with ``\\n`` and never padded.
    """
    if width <= 0 or height <= 0 or not block.lines:
        return ""

    height = min(height, len(block.lines))
    top = max(y, 0)
    rows = block.lines[top : top + height]
    return "\n".join(render_line(line, x, width) for line in rows)
