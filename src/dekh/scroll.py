"""Scroll coordination: viewport state, snapping and scroll actions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Literal

from dekh.text import TextBlock

ScrollAction = Literal[
    "scrollUp",
    "scrollDown",
    "scrollLeft",
    "scrollRight",
    "pageUp",
    "pageDown",
    "pageLeft",
    "pageRight",
    "top",
    "bottom",
    "quit",
]

SCROLL_ACTIONS: tuple[ScrollAction, ...] = (
    "scrollUp",
    "scrollDown",
    "scrollLeft",
    "scrollRight",
    "pageUp",
    "pageDown",
    "pageLeft",
    "pageRight",
    "top",
    "bottom",
    "quit",
)


@dataclass(frozen=True)
class ViewportState:
    """Top-left offset ``(x, y)`` and window size ``(width, height)``."""

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0


def snap(state: ViewportState, block: TextBlock) -> ViewportState:
    """Clamp the offset of *state* into the range valid for *block*.

    When the content is smaller than the offset allows, the window is pinned
    to the right/bottom edge; offsets never go negative. Snapping an already
    snapped state returns an equal state.
    """
    x2 = min(state.x + state.width, block.max_width)
    x1 = max(x2 - state.width, 0)
    y2 = min(state.y + state.height, len(block.lines))
    y1 = max(y2 - state.height, 0)
    return replace(state, x=x1, y=y1)


def scroll_by(
    state: ViewportState, block: TextBlock, dx: int = 0, dy: int = 0
) -> ViewportState:
    """Move the window by ``(dx, dy)`` and snap."""
    return snap(replace(state, x=state.x + dx, y=state.y + dy), block)


def resize(
    state: ViewportState, block: TextBlock, width: int, height: int
) -> ViewportState:
    """Change the window size, keeping the offset where it still fits."""
    return snap(replace(state, width=max(width, 0), height=max(height, 0)), block)


def delta_for(
    action: ScrollAction, state: ViewportState, block: TextBlock, step: int = 1
) -> tuple[int, int]:
    """Translate *action* into a ``(dx, dy)`` offset delta.

    ``top`` and ``bottom`` return a delta that spans the whole block, which
    snapping turns into the first or last page.
    """
    page_x = max(state.width, 1)
    page_y = max(state.height, 1)
    span = len(block.lines) + state.height

    if action == "scrollUp":
        return 0, -step
    if action == "scrollDown":
        return 0, step
    if action == "scrollLeft":
        return -step, 0
    if action == "scrollRight":
        return step, 0
    if action == "pageUp":
        return 0, -page_y
    if action == "pageDown":
        return 0, page_y
    if action == "pageLeft":
        return -page_x, 0
    if action == "pageRight":
        return page_x, 0
    if action == "top":
        return 0, -(state.y + span)
    if action == "bottom":
        return 0, span
    return 0, 0


def apply_action(
    action: ScrollAction, state: ViewportState, block: TextBlock, step: int = 1
) -> ViewportState:
    """Apply a scroll *action* to *state* and snap the result."""
    dx, dy = delta_for(action, state, block, step)
    return scroll_by(state, block, dx, dy)
