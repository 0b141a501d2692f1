"""Mapping between keyboard keys and player actions."""

from __future__ import annotations

import enum
from typing import Collection, Dict, List, Optional

from .identifiers import Key


class PlayerAction(enum.IntEnum):
    """Actions a player can trigger; the values travel over the network."""

    MOVE_LEFT = 0
    MOVE_RIGHT = 1
    MOVE_UP = 2
    MOVE_DOWN = 3
    FIRE = 4
    LAUNCH_MISSILE = 5


_REALTIME_ACTIONS = frozenset(
    {
        PlayerAction.MOVE_LEFT,
        PlayerAction.MOVE_RIGHT,
        PlayerAction.MOVE_UP,
        PlayerAction.MOVE_DOWN,
        PlayerAction.FIRE,
    }
)

_PRESETS: Dict[int, Dict[Key, PlayerAction]] = {
    1: {
        Key.Left: PlayerAction.MOVE_LEFT,
        Key.Right: PlayerAction.MOVE_RIGHT,
        Key.Up: PlayerAction.MOVE_UP,
        Key.Down: PlayerAction.MOVE_DOWN,
        Key.Space: PlayerAction.FIRE,
        Key.M: PlayerAction.LAUNCH_MISSILE,
    },
    2: {
        Key.A: PlayerAction.MOVE_LEFT,
        Key.D: PlayerAction.MOVE_RIGHT,
        Key.W: PlayerAction.MOVE_UP,
        Key.S: PlayerAction.MOVE_DOWN,
        Key.F: PlayerAction.FIRE,
        Key.R: PlayerAction.LAUNCH_MISSILE,
    },
}


def is_realtime_action(action: PlayerAction) -> bool:
    """Return True for actions that stay in effect while their key is held."""
    return action in _REALTIME_ACTIONS


class KeyBinding:
    """Keys bound to player actions; preset 1 and 2 give the default layouts."""

    def __init__(self, preset: int) -> None:
        self._key_map: Dict[Key, PlayerAction] = dict(_PRESETS.get(preset, {}))

    @property
    def bindings(self) -> Dict[Key, PlayerAction]:
        return dict(sorted(self._key_map.items()))

    def assign_key(self, action: PlayerAction, key: Key) -> None:
        """Bind key to action, dropping any key previously bound to that action."""
        self._key_map = {k: a for k, a in self._key_map.items() if a != action}
        self._key_map[key] = action

    def assigned_key(self, action: PlayerAction) -> Key:
        """Return the key bound to action, or Key.Unknown if there is none."""
        for key in sorted(self._key_map, reverse=True):
            if self._key_map[key] == action:
                return key
        return Key.Unknown

    def check_action(self, key: Optional[Key]) -> Optional[PlayerAction]:
        """Return the action bound to key, or None."""
        if key is None:
            return None
        return self._key_map.get(key)

    def realtime_actions(self, pressed_keys: Collection[Key]) -> List[PlayerAction]:
        """Return the realtime actions whose keys are among pressed_keys."""
        return [
            action
            for key, action in sorted(self._key_map.items())
            if key in pressed_keys and is_realtime_action(action)
        ]