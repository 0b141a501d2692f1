"""Frame-by-frame sprite sheet animation."""

from __future__ import annotations

import math
from typing import Tuple

from .utility import Rect, Vector


class Animation:
    """Steps a texture rectangle through the frames of a sprite sheet over time."""

    def __init__(self, texture_size: Tuple[int, int]) -> None:
        width, height = texture_size
        self.texture_size = (int(width), int(height))
        self.frame_size: Tuple[int, int] = (0, 0)
        self.num_frames = 0
        self.duration = 0.0
        self.repeating = False
        self.origin = Vector()
        self.texture_rect = Rect(0, 0, self.texture_size[0], self.texture_size[1])
        self._current_frame = 0
        self._elapsed_time = 0.0

    @property
    def current_frame(self) -> int:
        return self._current_frame

    @property
    def elapsed_time(self) -> float:
        return self._elapsed_time

    def restart(self) -> None:
        self._current_frame = 0

    def is_finished(self) -> bool:
        return self._current_frame >= self.num_frames

    def local_bounds(self) -> Rect:
        return Rect(self.origin.x, self.origin.y, self.frame_size[0], self.frame_size[1])

    def _first_frame(self) -> Rect:
        return Rect(0, 0, self.frame_size[0], self.frame_size[1])

    def update(self, dt: float) -> None:
        """Advance the animation by dt seconds."""
        time_per_frame = self.duration / self.num_frames if self.num_frames else math.inf
        if self.repeating and time_per_frame <= 0.0:
            raise ValueError("a repeating animation needs a positive duration")
        self._elapsed_time += dt

        texture_width = self.texture_size[0]
        rect = self.texture_rect
        if self._current_frame == 0:
            rect = self._first_frame()

        while self._elapsed_time >= time_per_frame and (
            self._current_frame <= self.num_frames or self.repeating
        ):
            left = rect.left + rect.width
            top = rect.top
            if left + rect.width > texture_width:
                left = 0
                top += rect.height
            rect = Rect(left, top, rect.width, rect.height)

            self._elapsed_time -= time_per_frame
            if self.repeating:
                self._current_frame = (self._current_frame + 1) % self.num_frames
                if self._current_frame == 0:
                    rect = self._first_frame()
            else:
                self._current_frame += 1

        self.texture_rect = rect