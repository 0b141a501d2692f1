"""Identifiers shared across the game: categories, resources, states, keys and events."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class Category(enum.IntFlag):
    """Scene node categories used to dispatch commands."""

    NONE = 0
    SCENE_AIR_LAYER = 1 << 0
    PLAYER_AIRCRAFT = 1 << 1
    ALLIED_AIRCRAFT = 1 << 2
    ENEMY_AIRCRAFT = 1 << 3
    PICKUP = 1 << 4
    ALLIED_PROJECTILE = 1 << 5
    ENEMY_PROJECTILE = 1 << 6
    PARTICLE_SYSTEM = 1 << 7
    SOUND_EFFECT = 1 << 8
    NETWORK = 1 << 9

    AIRCRAFT = PLAYER_AIRCRAFT | ALLIED_AIRCRAFT | ENEMY_AIRCRAFT
    PROJECTILE = ALLIED_PROJECTILE | ENEMY_PROJECTILE


class Textures(enum.Enum):
    ENTITIES = enum.auto()
    JUNGLE = enum.auto()
    TITLE_SCREEN = enum.auto()
    BUTTONS = enum.auto()
    EXPLOSION = enum.auto()
    PARTICLE = enum.auto()
    FINISH_LINE = enum.auto()


class Shaders(enum.Enum):
    BRIGHTNESS_PASS = enum.auto()
    DOWN_SAMPLE_PASS = enum.auto()
    GAUSSIAN_BLUR_PASS = enum.auto()
    ADD_PASS = enum.auto()


class Fonts(enum.Enum):
    MAIN = enum.auto()


class SoundEffect(enum.Enum):
    ALLIED_GUNFIRE = enum.auto()
    ENEMY_GUNFIRE = enum.auto()
    EXPLOSION1 = enum.auto()
    EXPLOSION2 = enum.auto()
    LAUNCH_MISSILE = enum.auto()
    COLLECT_PICKUP = enum.auto()
    BUTTON = enum.auto()


class Music(enum.Enum):
    MENU_THEME = enum.auto()
    MISSION_THEME = enum.auto()


class States(enum.Enum):
    NONE = enum.auto()
    TITLE = enum.auto()
    MENU = enum.auto()
    GAME = enum.auto()
    LOADING = enum.auto()
    PAUSE = enum.auto()
    NETWORK_PAUSE = enum.auto()
    SETTINGS = enum.auto()
    GAME_OVER = enum.auto()
    MISSION_SUCCESS = enum.auto()
    HOST_GAME = enum.auto()
    JOIN_GAME = enum.auto()


_KEY_NAMES = (
    [chr(code) for code in range(ord("A"), ord("Z") + 1)]
    + [f"Num{digit}" for digit in range(10)]
    + [
        "Escape", "LControl", "LShift", "LAlt", "LSystem",
        "RControl", "RShift", "RAlt", "RSystem", "Menu",
        "LBracket", "RBracket", "SemiColon", "Comma", "Period",
        "Quote", "Slash", "BackSlash", "Tilde", "Equal", "Dash",
        "Space", "Return", "BackSpace", "Tab", "PageUp", "PageDown",
        "End", "Home", "Insert", "Delete", "Add", "Subtract",
        "Multiply", "Divide", "Left", "Right", "Up", "Down",
    ]
    + [f"Numpad{digit}" for digit in range(10)]
    + [f"F{number}" for number in range(1, 16)]
    + ["Pause"]
)

Key = enum.IntEnum(  # type: ignore[misc]
    "Key",
    [("Unknown", -1)] + [(name, index) for index, name in enumerate(_KEY_NAMES)],
    module=__name__,
)
Key.__doc__ = "Keyboard keys, named as shown to the player."


class EventType(enum.Enum):
    CLOSED = enum.auto()
    KEY_PRESSED = enum.auto()
    KEY_RELEASED = enum.auto()
    GAINED_FOCUS = enum.auto()
    LOST_FOCUS = enum.auto()


@dataclass(frozen=True)
class Event:
    """An input event; key events carry the key involved."""

    type: EventType
    key: Optional[Key] = None