"""Text model: a whole block of parsed command output."""

from __future__ import annotations

from dataclasses import dataclass

from dekh.parser import Line, parse_line


@dataclass(frozen=True)
class TextBlock:
    """Immutable snapshot of parsed text.

    A new block is built for every refresh; blocks are never mutated.
    """

    lines: tuple[Line, ...] = ()
    max_width: int = 0

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def __len__(self) -> int:
        return len(self.lines)


EMPTY_BLOCK = TextBlock()


def parse_text(raw: str) -> TextBlock:
    """Split *raw* on line feeds and parse each line.

    A line feed is a hard break; lines are never wrapped. A carriage return
    just before a line feed belongs to the line ending and is dropped. The
    empty string parses to a single empty line.
    """
    lines = tuple(
        parse_line(line.removesuffix("\r")) for line in raw.split("\n")
    )
    max_width = max((line.visible_width for line in lines), default=0)
    return TextBlock(lines, max_width)
