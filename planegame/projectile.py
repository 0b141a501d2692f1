"""Bullets and guided missiles."""

from __future__ import annotations

import math
from typing import Any

from .commands import CommandQueue
from .data import ParticleType, ProjectileType, projectile_data
from .entity import Entity
from .identifiers import Category
from .particles import EmitterNode
from .utility import PointLike, Rect, Transform, Vector, center_origin, to_degree, unit_vector

_TABLE = projectile_data()

_APPROACH_RATE = 200.0


class Projectile(Entity):
    """A bullet or missile; missiles steer towards a target and trail particles."""

    def __init__(self, projectile_type: ProjectileType) -> None:
        super().__init__(1)
        self._type = ProjectileType(projectile_type)
        data = _TABLE[self._type]
        self._texture = data.texture
        self._texture_rect = data.texture_rect
        self._sprite_origin = center_origin(
            Rect(0, 0, data.texture_rect.width, data.texture_rect.height)
        )
        self._target_direction = Vector()

        if self.is_guided():
            offset = (0.0, self.bounding_rect().height / 2.0)
            for particle_type in (ParticleType.SMOKE, ParticleType.PROPELLANT):
                emitter = EmitterNode(particle_type)
                emitter.position = offset
                self.attach_child(emitter)

    @property
    def projectile_type(self) -> ProjectileType:
        return self._type

    @property
    def target_direction(self) -> Vector:
        return self._target_direction

    def guide_towards(self, position: PointLike) -> None:
        """Point the missile at a position in world coordinates."""
        if not self.is_guided():
            raise ValueError("Calling guide_towards on a non-guided projectile")
        self._target_direction = unit_vector(Vector(*position) - self.world_position())

    def is_guided(self) -> bool:
        return self._type == ProjectileType.MISSILE

    def get_category(self) -> Category:
        if self._type == ProjectileType.ENEMY_BULLET:
            return Category.ENEMY_AIRCRAFT
        return Category.ALLIED_PROJECTILE

    def _sprite_bounds(self) -> Rect:
        return Rect(
            -self._sprite_origin.x,
            -self._sprite_origin.y,
            self._texture_rect.width,
            self._texture_rect.height,
        )

    def bounding_rect(self) -> Rect:
        return self.world_transform().transform_rect(self._sprite_bounds())

    def max_speed(self) -> float:
        return _TABLE[self._type].speed

    def impact_damage(self) -> int:
        return _TABLE[self._type].damage

    def _update_current(self, dt: float, commands: CommandQueue) -> None:
        if self.is_guided():
            steering = self._target_direction * (_APPROACH_RATE * dt) + self.velocity
            new_velocity = unit_vector(steering) * self.max_speed()
            angle = math.atan2(new_velocity.y, new_velocity.x)
            self.rotation = to_degree(angle) + 90.0
            self.velocity = new_velocity
        super()._update_current(dt, commands)

    def _draw_current(self, target: Any, transform: Transform) -> None:
        target.draw_sprite(
            self._texture, self._texture_rect, transform.translated(-self._sprite_origin)
        )