"""Configuration for a watch session."""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field

from dekh.keybindings import ViewerKeybindingsConfig

DEFAULT_INTERVAL = 2.0


@dataclass
class WatchConfig:
    """Watch session configuration.

    ``interval`` is the pause, in seconds, between the end of one run and
    the start of the next.
    """

    command: list[str]
    interval: float = DEFAULT_INTERVAL
    scroll_step: int = 1
    wheel_step: int = 1
    show_header: bool = True
    keybindings: ViewerKeybindingsConfig = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.command:
            raise ValueError("command must not be empty")
        if self.interval <= 0:
            raise ValueError(f"interval must be positive, got {self.interval}")
        if self.scroll_step < 1 or self.wheel_step < 1:
            raise ValueError("scroll steps must be at least 1")

    @property
    def command_line(self) -> str:
        return " ".join(self.command)


def command_from_args(args: list[str]) -> list[str]:
    """Build the command argv from positional CLI arguments.

    A single argument is split with shell quoting rules, so both
    ``dekh 'ls -l'`` and ``dekh ls -l`` work. Raises ``ValueError`` for
    unbalanced quotes.
    """
    if len(args) == 1:
        return shlex.split(args[0])
    return list(args)


def format_interval(seconds: float) -> str:
    """Format *seconds* compactly: ``2s``, ``500ms``, ``1m30s``, ``1h0m0s``."""
    if seconds < 1:
        return f"{round(seconds * 1000, 3):g}ms"
    hours = int(seconds // 3600)
    minutes = int(seconds % 3600 // 60)
    secs = round(seconds - hours * 3600 - minutes * 60, 6)
    if hours:
        return f"{hours}h{minutes}m{secs:g}s"
    if minutes:
        return f"{minutes}m{secs:g}s"
    return f"{secs:g}s"
