import pytest

from planegame.animation import Animation
from planegame.utility import Rect, Vector

FRAME = 256
SHEET = (FRAME * 4, FRAME * 4)


def _explosion(frames=16, repeating=False):
    animation = Animation(SHEET)
    animation.frame_size = (FRAME, FRAME)
    animation.num_frames = frames
    animation.duration = 1.0
    animation.repeating = repeating
    return animation


def test_initial_rect_covers_texture():
    animation = Animation(SHEET)
    assert animation.texture_rect == Rect(0, 0, SHEET[0], SHEET[1])
    assert animation.current_frame == 0


def test_first_step_moves_one_frame_right():
    animation = _explosion()
    animation.update(1.0 / 16)
    assert animation.current_frame == 1
    assert animation.texture_rect == Rect(FRAME, 0, FRAME, FRAME)


def test_row_wraps_down():
    animation = _explosion()
    for _ in range(4):
        animation.update(1.0 / 16)
    assert animation.texture_rect == Rect(0, FRAME, FRAME, FRAME)


def test_finishes_after_duration():
    animation = _explosion()
    animation.update(0.5)
    assert not animation.is_finished()
    animation.update(0.5)
    assert animation.is_finished()


def test_short_update_keeps_first_frame():
    animation = _explosion()
    animation.update(0.01)
    assert animation.current_frame == 0
    assert animation.texture_rect == Rect(0, 0, FRAME, FRAME)
    assert animation.elapsed_time == pytest.approx(0.01)


def test_repeating_wraps_to_first_frame():
    animation = _explosion(frames=4, repeating=True)
    for _ in range(4):
        animation.update(0.25)
    assert animation.current_frame == 0
    assert animation.texture_rect == Rect(0, 0, FRAME, FRAME)
    assert not animation.is_finished() or animation.num_frames == 0


def test_repeating_never_finishes_on_long_update():
    animation = _explosion(frames=4, repeating=True)
    animation.update(10.0)
    assert animation.current_frame < animation.num_frames


def test_restart_resets_frame():
    animation = _explosion()
    animation.update(1.0)
    animation.restart()
    assert animation.current_frame == 0
    assert not animation.is_finished()


def test_local_bounds_uses_origin_and_frame_size():
    animation = _explosion()
    animation.origin = Vector(5.0, 7.0)
    assert animation.local_bounds() == Rect(5.0, 7.0, FRAME, FRAME)


def test_repeating_without_duration_raises():
    animation = _explosion(frames=4, repeating=True)
    animation.duration = 0.0
    with pytest.raises(ValueError):
        animation.update(0.1)