"""Scene nodes that bridge the world to the network and to sound output."""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Optional

from .identifiers import Category, SoundEffect
from .protocol import GameAction, GameActionType
from .scene import SceneNode
from .utility import PointLike, Vector


class NetworkNode(SceneNode):
    """Collects game actions that have to be reported to the server."""

    def __init__(self) -> None:
        super().__init__(Category.NETWORK)
        self._pending: Deque[GameAction] = deque()

    def get_category(self) -> Category:
        return Category.NETWORK

    def notify_game_action(self, action_type: GameActionType, position: PointLike) -> None:
        self._pending.append(GameAction(action_type, Vector(*position)))

    def poll_game_action(self) -> Optional[GameAction]:
        """Return the oldest pending action, or None when there is none."""
        return self._pending.popleft() if self._pending else None


class SoundNode(SceneNode):
    """Plays sound effects at positions in the world."""

    def __init__(self, player: Any) -> None:
        super().__init__(Category.SOUND_EFFECT)
        self._sounds = player

    def get_category(self) -> Category:
        return Category.SOUND_EFFECT

    def play_sound(self, effect: SoundEffect, position: PointLike) -> None:
        self._sounds.play(effect, Vector(*position))