"""Collectable items that improve an aircraft."""

from __future__ import annotations

from typing import Any

from .data import PickupType, pickup_data
from .entity import Entity
from .identifiers import Category
from .utility import Rect, Transform, center_origin

_TABLE = pickup_data()


class Pickup(Entity):
    """A pickup that applies its effect to the aircraft collecting it."""

    def __init__(self, pickup_type: PickupType) -> None:
        super().__init__(1)
        self._type = PickupType(pickup_type)
        data = _TABLE[self._type]
        self._texture = data.texture
        self._texture_rect = data.texture_rect
        self._sprite_origin = center_origin(
            Rect(0, 0, data.texture_rect.width, data.texture_rect.height)
        )

    @property
    def pickup_type(self) -> PickupType:
        return self._type

    def get_category(self) -> Category:
        return Category.PICKUP

    def bounding_rect(self) -> Rect:
        local = Rect(
            -self._sprite_origin.x,
            -self._sprite_origin.y,
            self._texture_rect.width,
            self._texture_rect.height,
        )
        return self.world_transform().transform_rect(local)

    def apply(self, player: Any) -> None:
        """Apply this pickup's effect to player."""
        _TABLE[self._type].action(player)

    def _draw_current(self, target: Any, transform: Transform) -> None:
        target.draw_sprite(
            self._texture, self._texture_rect, transform.translated(-self._sprite_origin)
        )