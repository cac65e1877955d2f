"""dekh: watch a command's output in a scrollable, color-preserving viewport."""

import logging

from dekh.app import WatchApp
from dekh.command import CommandResult, CommandRunner
from dekh.config import WatchConfig, command_from_args, format_interval
from dekh.keybindings import (
    DEFAULT_VIEWER_KEYBINDINGS,
    ViewerKeybindingsManager,
    parse_bindings,
    wheel_action,
)
from dekh.keys import KeyId, MouseEvent, matches_key, parse_key, parse_mouse
from dekh.parser import Cell, Line, char_width, parse_line
from dekh.scroll import (
    ScrollAction,
    ViewportState,
    apply_action,
    delta_for,
    resize,
    scroll_by,
    snap,
)
from dekh.stdin_buffer import StdinBuffer
from dekh.terminal import ProcessTerminal, Terminal
from dekh.text import TextBlock, parse_text
from dekh.viewport import RESET, render, render_line

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Core
    "Cell",
    "Line",
    "TextBlock",
    "ViewportState",
    "char_width",
    "parse_line",
    "parse_text",
    "render",
    "render_line",
    "RESET",
    # Scrolling
    "ScrollAction",
    "apply_action",
    "delta_for",
    "resize",
    "scroll_by",
    "snap",
    # Input
    "DEFAULT_VIEWER_KEYBINDINGS",
    "KeyId",
    "MouseEvent",
    "StdinBuffer",
    "ViewerKeybindingsManager",
    "matches_key",
    "parse_key",
    "parse_bindings",
    "parse_mouse",
    "wheel_action",
    # Terminal
    "ProcessTerminal",
    "Terminal",
    # App
    "CommandResult",
    "CommandRunner",
    "WatchApp",
    "WatchConfig",
    "command_from_args",
    "format_interval",
]
