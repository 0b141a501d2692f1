import pytest

from planegame.identifiers import Key
from planegame.keybinding import KeyBinding, PlayerAction, is_realtime_action


def test_preset_one_layout():
    binding = KeyBinding(1)
    assert binding.check_action(Key.Left) == PlayerAction.MOVE_LEFT
    assert binding.check_action(Key.Right) == PlayerAction.MOVE_RIGHT
    assert binding.check_action(Key.Space) == PlayerAction.FIRE
    assert binding.check_action(Key.M) == PlayerAction.LAUNCH_MISSILE


def test_preset_two_layout():
    binding = KeyBinding(2)
    assert binding.check_action(Key.A) == PlayerAction.MOVE_LEFT
    assert binding.check_action(Key.W) == PlayerAction.MOVE_UP
    assert binding.check_action(Key.F) == PlayerAction.FIRE
    assert binding.check_action(Key.R) == PlayerAction.LAUNCH_MISSILE
    assert binding.check_action(Key.Left) is None


def test_unknown_preset_is_empty():
    binding = KeyBinding(0)
    assert binding.bindings == {}
    assert binding.assigned_key(PlayerAction.FIRE) == Key.Unknown


def test_check_action_of_unbound_key():
    assert KeyBinding(1).check_action(Key.Q) is None
    assert KeyBinding(1).check_action(None) is None


def test_assigned_key():
    binding = KeyBinding(1)
    assert binding.assigned_key(PlayerAction.FIRE) == Key.Space
    assert binding.assigned_key(PlayerAction.MOVE_DOWN) == Key.Down


def test_assign_key_replaces_old_key():
    binding = KeyBinding(1)
    binding.assign_key(PlayerAction.FIRE, Key.Z)
    assert binding.assigned_key(PlayerAction.FIRE) == Key.Z
    assert binding.check_action(Key.Space) is None
    assert binding.check_action(Key.Z) == PlayerAction.FIRE


def test_assign_key_steals_key_from_other_action():
    binding = KeyBinding(1)
    binding.assign_key(PlayerAction.FIRE, Key.Left)
    assert binding.check_action(Key.Left) == PlayerAction.FIRE
    assert binding.assigned_key(PlayerAction.MOVE_LEFT) == Key.Unknown
    assert len(binding.bindings) == 5


def test_realtime_actions_filter_pressed_and_realtime():
    binding = KeyBinding(1)
    actions = binding.realtime_actions({Key.Left, Key.M, Key.Space, Key.Q})
    assert set(actions) == {PlayerAction.MOVE_LEFT, PlayerAction.FIRE}
    assert PlayerAction.LAUNCH_MISSILE not in actions


def test_realtime_actions_nothing_pressed():
    assert KeyBinding(2).realtime_actions(set()) == []


@pytest.mark.parametrize(
    "action, expected",
    [
        (PlayerAction.MOVE_LEFT, True),
        (PlayerAction.MOVE_RIGHT, True),
        (PlayerAction.MOVE_UP, True),
        (PlayerAction.MOVE_DOWN, True),
        (PlayerAction.FIRE, True),
        (PlayerAction.LAUNCH_MISSILE, False),
    ],
)
def test_is_realtime_action(action, expected):
    assert is_realtime_action(action) is expected