"""Viewer keybindings manager: raw input -> scroll action."""

from __future__ import annotations

from dekh.keys import KeyId, MouseEvent, matches_key
from dekh.scroll import SCROLL_ACTIONS, ScrollAction

ViewerKeybindingsConfig = dict[ScrollAction, KeyId | list[KeyId]]

DEFAULT_VIEWER_KEYBINDINGS: dict[ScrollAction, KeyId | list[KeyId]] = {
    "scrollUp": ["up", "k"],
    "scrollDown": ["down", "j"],
    "scrollLeft": ["left", "h"],
    "scrollRight": ["right", "l"],
    "pageUp": ["pageUp", "b"],
    "pageDown": ["pageDown", "space"],
    "pageLeft": ["shift+left", "H"],
    "pageRight": ["shift+right", "L"],
    "top": ["home", "g"],
    "bottom": ["end", "G"],
    "quit": ["q", "ctrl+c"],
}

_WHEEL_ACTIONS: dict[str, ScrollAction] = {
    "wheelUp": "scrollUp",
    "wheelDown": "scrollDown",
    "wheelLeft": "scrollLeft",
    "wheelRight": "scrollRight",
}

# Shift turns the vertical wheel into a horizontal one.
_SHIFT_WHEEL_ACTIONS: dict[str, ScrollAction] = {
    "wheelUp": "scrollLeft",
    "wheelDown": "scrollRight",
    "wheelLeft": "scrollLeft",
    "wheelRight": "scrollRight",
}


class ViewerKeybindingsManager:
    """Manages keybindings for the viewer."""

    def __init__(self, config: ViewerKeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[ScrollAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: ViewerKeybindingsConfig) -> None:
        # User bindings come first so they win over a default on the same key.
        for source in (config, DEFAULT_VIEWER_KEYBINDINGS):
            for action, keys in source.items():
                if action not in self._action_to_keys:
                    key_array = keys if isinstance(keys, list) else [keys]
                    self._action_to_keys[action] = list(key_array)

    def matches(self, data: str, action: ScrollAction) -> bool:
        """Check if input matches a specific action."""
        keys = self._action_to_keys.get(action)
        if not keys:
            return False
        return any(matches_key(data, key) for key in keys)

    def action_for(self, data: str) -> ScrollAction | None:
        """Return the first action bound to *data*, if any."""
        for action in self._action_to_keys:
            if self.matches(data, action):
                return action
        return None


def wheel_action(event: MouseEvent) -> ScrollAction | None:
    """Map a mouse wheel press to a scroll action."""
    if not event.is_wheel or not event.pressed:
        return None
    table = _SHIFT_WHEEL_ACTIONS if event.shift else _WHEEL_ACTIONS
    return table.get(event.button)


def parse_bindings(specs: list[str]) -> ViewerKeybindingsConfig:
    """Parse ``ACTION=KEY[,KEY...]`` overrides, as given to ``--bind``.

    A later spec for the same action replaces an earlier one. Raises
    ``ValueError`` for a malformed spec or an unknown action.
    """
    config: ViewerKeybindingsConfig = {}
    for spec in specs:
        action, sep, keys = spec.partition("=")
        key_list = [key.strip() for key in keys.split(",") if key.strip()]
        if not sep or not key_list:
            raise ValueError(f"expected ACTION=KEY[,KEY...], got {spec!r}")
        if action not in SCROLL_ACTIONS:
            raise ValueError(
                f"unknown action {action!r} (choose from {', '.join(SCROLL_ACTIONS)})"
            )
        config[action] = key_list  # type: ignore[index]
    return config
