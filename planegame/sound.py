"""Positional sound effects and looping background music."""

from __future__ import annotations

import math
from pathlib import Path
from typing import Dict, List, NamedTuple, Optional, Tuple, Union

import pygame

from .identifiers import Music, SoundEffect
from .utility import PointLike, Vector

# Sound space as seen by a player in front of the screen: the listener
# hovers LISTENER_Z units above the plane the sounds are played in.
_LISTENER_Z = 300.0
_ATTENUATION = 8.0
_MIN_DISTANCE_2D = 200.0
_MIN_DISTANCE_3D = math.sqrt(_MIN_DISTANCE_2D * _MIN_DISTANCE_2D + _LISTENER_Z * _LISTENER_Z)

_SOUND_FILES: Dict[SoundEffect, str] = {
    SoundEffect.ALLIED_GUNFIRE: "AlliedGunfire.wav",
    SoundEffect.ENEMY_GUNFIRE: "EnemyGunfire.wav",
    SoundEffect.EXPLOSION1: "Explosion1.wav",
    SoundEffect.EXPLOSION2: "Explosion2.wav",
    SoundEffect.LAUNCH_MISSILE: "LaunchMissile.wav",
    SoundEffect.COLLECT_PICKUP: "CollectPickup.wav",
    SoundEffect.BUTTON: "Button.wav",
}

_MUSIC_FILES: Dict[Music, str] = {
    Music.MENU_THEME: "MenuTheme.ogg",
    Music.MISSION_THEME: "MissionTheme.ogg",
}

PathLike = Union[str, Path]


def _ensure_mixer() -> None:
    if pygame.mixer.get_init():
        return
    try:
        pygame.mixer.init()
    except pygame.error as exc:
        raise RuntimeError(f"Audio output could not be opened: {exc}") from exc


def _spatialize(listener: Vector, position: Vector) -> Tuple[float, float]:
    """Return (left, right) channel volumes for a sound heard from listener."""
    dx = position.x - listener.x
    dy = -(position.y - listener.y)
    dz = -_LISTENER_Z
    dist = math.sqrt(dx * dx + dy * dy + dz * dz)
    clamped = max(dist, _MIN_DISTANCE_3D)
    gain = _MIN_DISTANCE_3D / (_MIN_DISTANCE_3D + _ATTENUATION * (clamped - _MIN_DISTANCE_3D))
    pan = dx / dist
    return gain * min(1.0, 1.0 - pan), gain * min(1.0, 1.0 + pan)


class _Playback(NamedTuple):
    effect: SoundEffect
    position: Vector
    left_volume: float
    right_volume: float
    sound: "pygame.mixer.Sound"
    channel: Optional["pygame.mixer.Channel"]

    def is_playing(self) -> bool:
        return (
            self.channel is not None
            and self.channel.get_busy()
            and self.channel.get_sound() is self.sound
        )


class SoundPlayer:
    """Plays sound effects placed in the world relative to a listener."""

    def __init__(self, media_dir: PathLike) -> None:
        _ensure_mixer()
        sound_dir = Path(media_dir) / "Sound"
        self._buffers: Dict[SoundEffect, pygame.mixer.Sound] = {}
        for effect, name in _SOUND_FILES.items():
            path = sound_dir / name
            try:
                self._buffers[effect] = pygame.mixer.Sound(str(path))
            except (pygame.error, OSError) as exc:
                raise RuntimeError(f"Failed to load {path}") from exc
        self._sounds: List[_Playback] = []
        self._listener = Vector()

    @property
    def listener_position(self) -> Vector:
        return self._listener

    @property
    def playing(self) -> Tuple[_Playback, ...]:
        return tuple(self._sounds)

    def play(self, effect: SoundEffect, position: Optional[PointLike] = None) -> None:
        """Play effect at position, or at the listener when no position is given."""
        where = self._listener if position is None else Vector(*position)
        left, right = _spatialize(self._listener, where)
        sound = self._buffers[effect]
        channel = sound.play()
        if channel is not None:
            channel.set_volume(left, right)
        self._sounds.append(_Playback(effect, where, left, right, sound, channel))

    def remove_stopped_sounds(self) -> None:
        self._sounds = [playback for playback in self._sounds if playback.is_playing()]

    def set_listener_position(self, position: PointLike) -> None:
        self._listener = Vector(*position)


class MusicPlayer:
    """Streams one looping music theme at a time."""

    def __init__(self, media_dir: PathLike) -> None:
        music_dir = Path(media_dir) / "Music"
        self._filenames: Dict[Music, Path] = {
            theme: music_dir / name for theme, name in _MUSIC_FILES.items()
        }
        self.volume = 100.0

    @property
    def filenames(self) -> Dict[Music, Path]:
        return dict(self._filenames)

    def play(self, theme: Music) -> None:
        filename = self._filenames[theme]
        try:
            _ensure_mixer()
            pygame.mixer.music.load(str(filename))
        except (pygame.error, OSError, RuntimeError) as exc:
            raise RuntimeError(f"Music {filename} could not be loaded") from exc
        pygame.mixer.music.set_volume(self.volume / 100.0)
        pygame.mixer.music.play(loops=-1)

    def stop(self) -> None:
        if pygame.mixer.get_init():
            pygame.mixer.music.stop()

    def set_paused(self, paused: bool) -> None:
        if not pygame.mixer.get_init():
            return
        if paused:
            pygame.mixer.music.pause()
        else:
            pygame.mixer.music.unpause()