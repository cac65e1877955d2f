"""Keyboard and mouse input decoding.

Turns raw terminal input (one complete sequence, as emitted by
:class:`dekh.stdin_buffer.StdinBuffer`) into key identifiers such as
``"up"``, ``"ctrl+c"`` or ``"shift+pageDown"``, and SGR mouse reports into
:class:`MouseEvent` values.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

KeyId = str

# ---------------------------------------------------------------------------
# Keyboard
# ---------------------------------------------------------------------------

# ESC [ <number> ; <modifier> <final>, both parameters optional.
_CSI_KEY_RE = re.compile(r"^\x1b\[(?:(\d+)(?:;(\d+))?)?([ABCDFHZ~])$")
# Application cursor mode: ESC O <final>.
_SS3_KEY_RE = re.compile(r"^\x1bO([ABCDFH])$")

_FINAL_KEYS: dict[str, KeyId] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

_TILDE_KEYS: dict[int, KeyId] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    7: "home",
    8: "end",
}

# xterm encodes modifiers as 1 + bitmask.
_MODIFIERS = ((4, "ctrl"), (2, "alt"), (1, "shift"))

_SINGLE_CHAR_KEYS: dict[str, KeyId] = {
    "\x1b": "escape",
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    " ": "space",
    "\x7f": "backspace",
    "\x08": "backspace",
}


def _with_modifiers(name: KeyId, param: str | None) -> KeyId:
    bits = int(param) - 1 if param else 0
    prefix = "".join(f"{mod}+" for bit, mod in _MODIFIERS if bits & bit)
    return prefix + name


def _parse_escape(data: str) -> KeyId | None:
    match = _SS3_KEY_RE.match(data)
    if match:
        return _FINAL_KEYS[match.group(1)]

    match = _CSI_KEY_RE.match(data)
    if match is None:
        # Meta sends ESC before the key.
        if len(data) == 2 and data[1].isprintable():
            return "alt+" + data[1]
        return None

    number, modifier, final = match.groups()
    if final == "Z":
        return "shift+tab"
    if final == "~":
        name = _TILDE_KEYS.get(int(number)) if number else None
    else:
        name = _FINAL_KEYS[final]
    if name is None:
        return None
    return _with_modifiers(name, modifier)


def parse_key(data: str) -> KeyId | None:
    """Parse raw terminal input and return the key identifier, or ``None``.

    Printable characters are returned as-is, so ``"G"`` and ``"g"`` are
    different keys. Modified keys are named ``ctrl+alt+shift+<key>``, in that
    order, leaving out the modifiers that are not held.
    """
    if not data:
        return None
    if data in _SINGLE_CHAR_KEYS:
        return _SINGLE_CHAR_KEYS[data]
    if data[0] == "\x1b":
        return _parse_escape(data)
    if len(data) != 1:
        return None
    if 1 <= ord(data) <= 26:
        return "ctrl+" + chr(ord(data) + ord("a") - 1)
    if data.isprintable():
        return data
    return None


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if *data* decodes to *key_id*."""
    parsed = parse_key(data)
    if parsed is None:
        return False
    if parsed == key_id:
        return True
    # Named keys are case-insensitive ("PageUp" == "pageUp"); characters are not.
    return len(key_id) > 1 and len(parsed) > 1 and parsed.lower() == key_id.lower()


# ---------------------------------------------------------------------------
# Mouse
# ---------------------------------------------------------------------------

MouseButton = Literal[
    "left",
    "middle",
    "right",
    "release",
    "wheelUp",
    "wheelDown",
    "wheelLeft",
    "wheelRight",
    "unknown",
]

_SGR_MOUSE_RE = re.compile(r"^\x1b\[<(\d+);(\d+);(\d+)([Mm])$")

_BUTTONS: dict[int, MouseButton] = {
    0: "left",
    1: "middle",
    2: "right",
    3: "release",
    64: "wheelUp",
    65: "wheelDown",
    66: "wheelLeft",
    67: "wheelRight",
}

_SHIFT_BIT = 4
_ALT_BIT = 8
_CTRL_BIT = 16
_MOTION_BIT = 32


@dataclass
class MouseEvent:
    """A decoded SGR (mode 1006) mouse report.

    ``column`` and ``row`` are 1-based, as reported by the terminal.
    """

    button: MouseButton
    column: int
    row: int
    pressed: bool
    shift: bool = False
    alt: bool = False
    ctrl: bool = False
    motion: bool = False

    @property
    def is_wheel(self) -> bool:
        return self.button.startswith("wheel")


def is_mouse_sequence(data: str) -> bool:
    return data.startswith("\x1b[<")


def parse_mouse(data: str) -> MouseEvent | None:
    """Decode an SGR mouse report like ``ESC[<64;10;5M``."""
    match = _SGR_MOUSE_RE.match(data)
    if match is None:
        return None
    code = int(match.group(1))
    base = code & ~(_SHIFT_BIT | _ALT_BIT | _CTRL_BIT | _MOTION_BIT)
    return MouseEvent(
        button=_BUTTONS.get(base, "unknown"),
        column=int(match.group(2)),
        row=int(match.group(3)),
        pressed=match.group(4) == "M",
        shift=bool(code & _SHIFT_BIT),
        alt=bool(code & _ALT_BIT),
        ctrl=bool(code & _CTRL_BIT),
        motion=bool(code & _MOTION_BIT),
    )
