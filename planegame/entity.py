"""Scene nodes with hitpoints and velocity."""

from __future__ import annotations

from typing import Optional, Union

from .commands import CommandQueue
from .scene import SceneNode
from .utility import PointLike, Vector


class Entity(SceneNode):
    """A moving scene node that can be damaged and destroyed."""

    def __init__(self, hitpoints: int) -> None:
        super().__init__()
        self._velocity = Vector()
        self._hitpoints = hitpoints

    @property
    def velocity(self) -> Vector:
        return self._velocity

    @velocity.setter
    def velocity(self, value: PointLike) -> None:
        self._velocity = Vector(*value)

    def accelerate(self, vx: Union[float, PointLike], vy: Optional[float] = None) -> None:
        """Add to the velocity, given either as a vector or as two components."""
        delta = Vector(*vx) if vy is None else Vector(vx, vy)
        self._velocity = self._velocity + delta

    @property
    def hitpoints(self) -> int:
        return self._hitpoints

    @hitpoints.setter
    def hitpoints(self, points: int) -> None:
        if points <= 0:
            raise ValueError("Set hitpoints with non-positive points")
        self._hitpoints = points

    def repair(self, points: int) -> None:
        if points <= 0:
            raise ValueError("Repairing with non-positive points")
        self._hitpoints += points

    def damage(self, points: int) -> None:
        if points <= 0:
            raise ValueError("Damaging with non-positive points")
        self._hitpoints = max(self._hitpoints - points, 0)

    def destroy(self) -> None:
        self._hitpoints = 0

    def remove(self) -> None:
        self.destroy()

    def is_destroyed(self) -> bool:
        return self._hitpoints <= 0

    def _update_current(self, dt: float, commands: CommandQueue) -> None:
        self.move(self._velocity * dt)