"""Player and enemy aircraft."""

from __future__ import annotations

import math
from typing import Any, Optional

from .animation import Animation
from .commands import Command, CommandQueue, derived_action
from .data import AircraftType, PickupType, ProjectileType, aircraft_data
from .entity import Entity
from .identifiers import Category, SoundEffect, Textures
from .nodes import NetworkNode, SoundNode
from .pickup import Pickup
from .projectile import Projectile
from .protocol import GameActionType
from .scene import SceneNode, TextNode
from .utility import Rect, Transform, Vector, center_origin, random_int, to_radian

_TABLE = aircraft_data()

_EXPLOSION_TEXTURE_SIZE = (1024, 1024)
_MAX_FIRE_RATE_LEVEL = 10
_MAX_SPREAD_LEVEL = 3


class Aircraft(Entity):
    """An aircraft that moves, fires, launches missiles and explodes."""

    def __init__(self, aircraft_type: AircraftType, identifier: int = 0) -> None:
        self._type = AircraftType(aircraft_type)
        data = _TABLE[self._type]
        super().__init__(data.hitpoints)

        self._texture = data.texture
        self._texture_rect = data.texture_rect
        self._sprite_origin = center_origin(
            Rect(0, 0, data.texture_rect.width, data.texture_rect.height)
        )

        self._explosion = Animation(_EXPLOSION_TEXTURE_SIZE)
        self._explosion.frame_size = (256, 256)
        self._explosion.num_frames = 16
        self._explosion.duration = 1.0
        self._explosion.origin = center_origin(self._explosion.local_bounds())

        self._fire_countdown = 0.0
        self._is_firing = False
        self._is_launching_missile = False
        self._is_show_explosion = True
        self._is_explosion_begin = False
        self._is_spawned_pickup = False
        self._is_pickups_enabled = True
        self._fire_rate_level = 1
        self._spread_level = 1
        self._missile_ammo = 2
        self._travelled_distance = 0.0
        self._direction_index = 0
        self._identifier = identifier

        self._fire_command = Command(
            lambda node, dt: self._create_bullets(node), Category.SCENE_AIR_LAYER
        )
        self._missile_command = Command(
            lambda node, dt: self._create_projectile(node, ProjectileType.MISSILE, 0.0, 0.5),
            Category.SCENE_AIR_LAYER,
        )
        self._drop_pickup_command = Command(
            lambda node, dt: self._create_pickup(node), Category.SCENE_AIR_LAYER
        )

        self._health_display = TextNode("")
        self.attach_child(self._health_display)

        self._missile_display: Optional[TextNode] = None
        if self.get_category() == Category.PLAYER_AIRCRAFT:
            self._missile_display = TextNode("")
            self._missile_display.position = (0.0, 70.0)
            self.attach_child(self._missile_display)

        self._update_texts()

    @property
    def aircraft_type(self) -> AircraftType:
        return self._type

    @property
    def identifier(self) -> int:
        return self._identifier

    @identifier.setter
    def identifier(self, value: int) -> None:
        self._identifier = value

    @property
    def missile_ammo(self) -> int:
        return self._missile_ammo

    @missile_ammo.setter
    def missile_ammo(self, ammo: int) -> None:
        self._missile_ammo = ammo

    @property
    def fire_rate_level(self) -> int:
        return self._fire_rate_level

    @property
    def spread_level(self) -> int:
        return self._spread_level

    @property
    def health_display(self) -> TextNode:
        return self._health_display

    @property
    def missile_display(self) -> Optional[TextNode]:
        return self._missile_display

    @property
    def sprite_texture_rect(self) -> Rect:
        return self._texture_rect

    @property
    def explosion(self) -> Animation:
        return self._explosion

    def get_category(self) -> Category:
        return Category.PLAYER_AIRCRAFT if self.is_allied() else Category.ENEMY_AIRCRAFT

    def bounding_rect(self) -> Rect:
        local = Rect(
            -self._sprite_origin.x,
            -self._sprite_origin.y,
            self._texture_rect.width,
            self._texture_rect.height,
        )
        return self.world_transform().transform_rect(local)

    def is_marked_for_removal(self) -> bool:
        return self.is_destroyed() and (
            self._explosion.is_finished() or not self._is_show_explosion
        )

    def remove(self) -> None:
        super().remove()
        self._is_show_explosion = False

    def is_allied(self) -> bool:
        return self._type == AircraftType.EAGLE

    def max_speed(self) -> float:
        return _TABLE[self._type].speed

    def disable_pickups(self) -> None:
        self._is_pickups_enabled = False

    def increase_fire_rate(self) -> None:
        if self._fire_rate_level < _MAX_FIRE_RATE_LEVEL:
            self._fire_rate_level += 1

    def increase_spread(self) -> None:
        if self._spread_level < _MAX_SPREAD_LEVEL:
            self._spread_level += 1

    def collect_missiles(self, count: int) -> None:
        self._missile_ammo += count

    def fire(self) -> None:
        """Request gunfire; aircraft without a fire interval cannot fire."""
        if _TABLE[self._type].fire_interval != 0.0:
            self._is_firing = True

    def launch_missile(self) -> None:
        if self._missile_ammo > 0:
            self._is_launching_missile = True
            self._missile_ammo -= 1

    def play_local_sound(self, commands: CommandQueue, effect: SoundEffect) -> None:
        """Queue a sound effect at the aircraft's current world position."""
        position = self.world_position()

        def play(node: SoundNode, _dt: float) -> None:
            node.play_sound(effect, position)

        commands.push(Command(derived_action(SoundNode, play), Category.SOUND_EFFECT))

    def _update_current(self, dt: float, commands: CommandQueue) -> None:
        self._update_texts()
        self._update_roll_animation()

        if self.is_destroyed():
            self._check_pickup_drop(commands)
            self._explosion.update(dt)

            if not self._is_explosion_begin:
                effect = (
                    SoundEffect.EXPLOSION1 if random_int(2) == 0 else SoundEffect.EXPLOSION2
                )
                self.play_local_sound(commands, effect)

                if not self.is_allied():
                    position = self.world_position()

                    def notify(node: NetworkNode, _dt: float) -> None:
                        node.notify_game_action(GameActionType.ENEMY_EXPLODE, position)

                    commands.push(Command(derived_action(NetworkNode, notify), Category.NETWORK))

                self._is_explosion_begin = True
            return

        self._check_projectile_launch(dt, commands)
        self._update_movement_pattern(dt)
        super()._update_current(dt, commands)

    def _update_movement_pattern(self, dt: float) -> None:
        directions = _TABLE[self._type].directions
        if not directions:
            return
        if self._travelled_distance > directions[self._direction_index].distance:
            self._direction_index = (self._direction_index + 1) % len(directions)
            self._travelled_distance = 0.0

        radians = to_radian(directions[self._direction_index].angle + 90.0)
        speed = self.max_speed()
        self.velocity = (speed * math.cos(radians), speed * math.sin(radians))
        self._travelled_distance += speed * dt

    def _check_pickup_drop(self, commands: CommandQueue) -> None:
        if (
            not self.is_allied()
            and random_int(3) == 0
            and not self._is_spawned_pickup
            and self._is_pickups_enabled
        ):
            commands.push(self._drop_pickup_command)
        self._is_spawned_pickup = True

    def _check_projectile_launch(self, dt: float, commands: CommandQueue) -> None:
        if not self.is_allied():
            self.fire()

        if self._is_firing and self._fire_countdown <= 0.0:
            commands.push(self._fire_command)
            self.play_local_sound(
                commands,
                SoundEffect.ALLIED_GUNFIRE if self.is_allied() else SoundEffect.ENEMY_GUNFIRE,
            )
            self._fire_countdown += _TABLE[self._type].fire_interval / (
                self._fire_rate_level + 1.0
            )
            self._is_firing = False
        elif self._fire_countdown > 0.0:
            self._fire_countdown -= dt
            self._is_firing = False

        if self._is_launching_missile:
            commands.push(self._missile_command)
            self.play_local_sound(commands, SoundEffect.LAUNCH_MISSILE)
            self._is_launching_missile = False

    def _create_bullets(self, node: SceneNode) -> None:
        kind = ProjectileType.ALLIED_BULLET if self.is_allied() else ProjectileType.ENEMY_BULLET
        offsets = {
            1: ((0.0, 0.5),),
            2: ((-0.33, 0.33), (0.33, 0.33)),
            3: ((-0.5, 0.33), (0.0, 0.5), (0.5, 0.33)),
        }.get(self._spread_level, ())
        for x_offset, y_offset in offsets:
            self._create_projectile(node, kind, x_offset, y_offset)

    def _create_projectile(
        self, node: SceneNode, kind: ProjectileType, x_offset: float, y_offset: float
    ) -> None:
        projectile = Projectile(kind)
        offset = Vector(
            x_offset * self._texture_rect.width, y_offset * self._texture_rect.height
        )
        velocity = Vector(0.0, projectile.max_speed())
        sign = 1.0 if self.is_allied() else -1.0
        projectile.position = self.world_position() + offset * sign
        projectile.velocity = velocity * sign
        node.attach_child(projectile)

    def _create_pickup(self, node: SceneNode) -> None:
        pickup = Pickup(PickupType(random_int(len(PickupType))))
        pickup.position = self.world_position()
        pickup.velocity = (0.0, 1.0)
        node.attach_child(pickup)

    def _update_texts(self) -> None:
        if self.is_destroyed():
            self._health_display.set_string("")
        else:
            self._health_display.set_string(f"{self.hitpoints} HP")
        self._health_display.position = (0.0, 50.0)
        self._health_display.rotation = -self.rotation

        if self._missile_display is not None:
            if self._missile_ammo == 0 or self.is_destroyed():
                self._missile_display.set_string("")
            else:
                self._missile_display.set_string(f"M: {self._missile_ammo}")

    def _update_roll_animation(self) -> None:
        data = _TABLE[self._type]
        if not data.has_roll_animation:
            return
        rect = data.texture_rect
        left = rect.left
        if self.velocity.x < 0.0:
            left += rect.width
        if self.velocity.x > 0.0:
            left += rect.width * 2
        self._texture_rect = Rect(left, rect.top, rect.width, rect.height)

    def _draw_current(self, target: Any, transform: Transform) -> None:
        if self.is_destroyed() and self._is_show_explosion:
            target.draw_sprite(
                Textures.EXPLOSION,
                self._explosion.texture_rect,
                transform.translated(-self._explosion.origin),
            )
        else:
            target.draw_sprite(
                self._texture, self._texture_rect, transform.translated(-self._sprite_origin)
            )