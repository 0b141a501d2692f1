"""Static tables describing aircraft, projectiles, pickups and particles."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Callable, Dict, Tuple

from .identifiers import Textures
from .utility import Rect


class AircraftType(enum.IntEnum):
    EAGLE = 0
    RAPTOR = 1
    AVENGER = 2


class ProjectileType(enum.IntEnum):
    ALLIED_BULLET = 0
    ENEMY_BULLET = 1
    MISSILE = 2


class PickupType(enum.IntEnum):
    HEALTH_REFILL = 0
    MISSILE_REFILL = 1
    FIRE_SPREAD = 2
    FIRE_RATE = 3


class ParticleType(enum.IntEnum):
    PROPELLANT = 0
    SMOKE = 1


@dataclass(frozen=True)
class Direction:
    """One leg of an enemy movement pattern."""

    angle: float
    distance: float


@dataclass(frozen=True)
class AircraftData:
    hitpoints: int
    speed: float
    texture: Textures
    texture_rect: Rect
    fire_interval: float
    directions: Tuple[Direction, ...]
    has_roll_animation: bool


@dataclass(frozen=True)
class ProjectileData:
    damage: int
    speed: float
    texture: Textures
    texture_rect: Rect


@dataclass(frozen=True)
class PickupData:
    action: Callable[[Any], None]
    texture: Textures
    texture_rect: Rect


@dataclass(frozen=True)
class ParticleData:
    color: Tuple[int, int, int]
    lifetime: float


def aircraft_data() -> Dict[AircraftType, AircraftData]:
    return {
        AircraftType.EAGLE: AircraftData(
            hitpoints=100,
            speed=200.0,
            texture=Textures.ENTITIES,
            texture_rect=Rect(0, 0, 48, 64),
            fire_interval=1.0,
            directions=(),
            has_roll_animation=True,
        ),
        AircraftType.RAPTOR: AircraftData(
            hitpoints=20,
            speed=80.0,
            texture=Textures.ENTITIES,
            texture_rect=Rect(144, 0, 84, 64),
            fire_interval=0.0,
            directions=(
                Direction(+45.0, 80.0),
                Direction(-45.0, 160.0),
                Direction(+45.0, 80.0),
            ),
            has_roll_animation=False,
        ),
        AircraftType.AVENGER: AircraftData(
            hitpoints=40,
            speed=50.0,
            texture=Textures.ENTITIES,
            texture_rect=Rect(228, 0, 60, 59),
            fire_interval=2.0,
            directions=(
                Direction(+45.0, 50.0),
                Direction(0.0, 50.0),
                Direction(-45.0, 100.0),
                Direction(0.0, 50.0),
                Direction(+45.0, 50.0),
            ),
            has_roll_animation=False,
        ),
    }


def projectile_data() -> Dict[ProjectileType, ProjectileData]:
    return {
        ProjectileType.ALLIED_BULLET: ProjectileData(
            10, 300.0, Textures.ENTITIES, Rect(175, 64, 3, 14)
        ),
        ProjectileType.ENEMY_BULLET: ProjectileData(
            10, 300.0, Textures.ENTITIES, Rect(178, 64, 3, 14)
        ),
        ProjectileType.MISSILE: ProjectileData(
            200, 150.0, Textures.ENTITIES, Rect(160, 64, 15, 32)
        ),
    }


def pickup_data() -> Dict[PickupType, PickupData]:
    return {
        PickupType.HEALTH_REFILL: PickupData(
            lambda aircraft: aircraft.repair(25), Textures.ENTITIES, Rect(0, 64, 40, 40)
        ),
        PickupType.MISSILE_REFILL: PickupData(
            lambda aircraft: aircraft.collect_missiles(3),
            Textures.ENTITIES,
            Rect(40, 64, 40, 40),
        ),
        PickupType.FIRE_SPREAD: PickupData(
            lambda aircraft: aircraft.increase_spread(),
            Textures.ENTITIES,
            Rect(80, 64, 40, 40),
        ),
        PickupType.FIRE_RATE: PickupData(
            lambda aircraft: aircraft.increase_fire_rate(),
            Textures.ENTITIES,
            Rect(120, 64, 40, 40),
        ),
    }


def particle_data() -> Dict[ParticleType, ParticleData]:
    return {
        ParticleType.PROPELLANT: ParticleData((255, 255, 50), 0.6),
        ParticleType.SMOKE: ParticleData((50, 50, 50), 4.0),
    }