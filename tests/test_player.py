import pytest

from planegame.aircraft import Aircraft
from planegame.commands import CommandQueue
from planegame.data import AircraftType
from planegame.identifiers import Category, Event, EventType, Key
from planegame.keybinding import KeyBinding, PlayerAction
from planegame.player import MissionStatus, Player
from planegame.protocol import ClientPacketType, Packet
from planegame.scene import SceneNode
from planegame.utility import Vector


class FakeConnection:
    def __init__(self):
        self.sent = []

    def send(self, packet):
        self.sent.append(Packet(packet.data))


def press(key):
    return Event(EventType.KEY_PRESSED, key)


def release(key):
    return Event(EventType.KEY_RELEASED, key)


def test_default_mission_status():
    player = Player(None, 1, KeyBinding(1))
    assert player.mission_status == MissionStatus.RUNNING
    player.mission_status = MissionStatus.SUCCESS
    assert player.mission_status == MissionStatus.SUCCESS


def test_is_local():
    assert Player(None, 1, KeyBinding(1)).is_local() is True
    assert Player(FakeConnection(), 2, None).is_local() is False


def test_local_missile_event_pushes_command():
    player = Player(None, 1, KeyBinding(1))
    commands = CommandQueue()
    player.handle_event(press(Key.M), commands)
    assert len(commands) == 1
    command = commands.pop()
    assert command.category == Category.PLAYER_AIRCRAFT
    aircraft = Aircraft(AircraftType.EAGLE, 1)
    before = aircraft.missile_ammo
    command.action(aircraft, 0.0)
    assert aircraft.missile_ammo == before - 1


def test_local_realtime_key_event_pushes_nothing():
    player = Player(None, 1, KeyBinding(1))
    commands = CommandQueue()
    player.handle_event(press(Key.Left), commands)
    assert commands.is_empty()


def test_networked_missile_event_is_sent():
    connection = FakeConnection()
    player = Player(connection, 7, KeyBinding(1))
    commands = CommandQueue()
    player.handle_event(press(Key.M), commands)
    assert commands.is_empty()
    assert len(connection.sent) == 1
    packet = connection.sent[0]
    assert packet.read_int32() == ClientPacketType.PLAYER_EVENT
    assert packet.read_int32() == 7
    assert packet.read_int32() == PlayerAction.LAUNCH_MISSILE
    assert packet.at_end


def test_networked_realtime_change_press_and_release():
    connection = FakeConnection()
    player = Player(connection, 3, KeyBinding(1))
    commands = CommandQueue()
    player.handle_event(press(Key.Left), commands)
    player.handle_event(release(Key.Left), commands)
    assert len(connection.sent) == 2
    pressed, released = connection.sent
    assert pressed.read_int32() == ClientPacketType.PLAYER_REALTIME_CHANGE
    assert pressed.read_int32() == 3
    assert pressed.read_int32() == PlayerAction.MOVE_LEFT
    assert pressed.read_bool() is True
    released.read_int32()
    released.read_int32()
    released.read_int32()
    assert released.read_bool() is False


def test_remote_player_ignores_key_events():
    connection = FakeConnection()
    player = Player(connection, 4, None)
    commands = CommandQueue()
    player.handle_event(press(Key.M), commands)
    assert connection.sent == []
    assert commands.is_empty()


def test_realtime_input_moves_aircraft():
    player = Player(None, 1, KeyBinding(1))
    commands = CommandQueue()
    player.handle_realtime_input(commands, {Key.Left})
    assert len(commands) == 1
    aircraft = Aircraft(AircraftType.EAGLE, 1)
    commands.pop().action(aircraft, 0.0)
    assert aircraft.velocity == Vector(-aircraft.max_speed(), 0.0)


def test_realtime_input_skips_remote_player():
    player = Player(FakeConnection(), 2, None)
    commands = CommandQueue()
    player.handle_realtime_input(commands, {Key.Left})
    assert commands.is_empty()


def test_realtime_input_without_binding_or_connection_raises():
    player = Player(None, 1, None)
    with pytest.raises(RuntimeError):
        player.handle_realtime_input(CommandQueue(), {Key.Left})


def test_realtime_network_input_uses_enabled_proxies():
    player = Player(FakeConnection(), 2, None)
    player.handle_network_realtime_change(PlayerAction.MOVE_UP, True)
    player.handle_network_realtime_change(PlayerAction.MOVE_DOWN, False)
    commands = CommandQueue()
    player.handle_realtime_network_input(commands)
    assert len(commands) == 1
    aircraft = Aircraft(AircraftType.EAGLE, 2)
    commands.pop().action(aircraft, 0.0)
    assert aircraft.velocity == Vector(0.0, -aircraft.max_speed())


def test_realtime_network_input_ignored_for_local_player():
    player = Player(FakeConnection(), 1, KeyBinding(1))
    player.handle_network_realtime_change(PlayerAction.FIRE, True)
    commands = CommandQueue()
    player.handle_realtime_network_input(commands)
    assert commands.is_empty()


def test_network_event_only_affects_matching_identifier():
    player = Player(FakeConnection(), 5, None)
    commands = CommandQueue()
    player.handle_network_event(PlayerAction.LAUNCH_MISSILE, commands)
    command = commands.pop()
    other = Aircraft(AircraftType.EAGLE, 6)
    own = Aircraft(AircraftType.EAGLE, 5)
    other_before, own_before = other.missile_ammo, own.missile_ammo
    command.action(other, 0.0)
    command.action(own, 0.0)
    assert other.missile_ammo == other_before
    assert own.missile_ammo == own_before - 1


def test_disable_all_realtime_actions_sends_off_for_each():
    connection = FakeConnection()
    player = Player(connection, 9, None)
    player.handle_network_realtime_change(PlayerAction.FIRE, True)
    player.handle_network_realtime_change(PlayerAction.MOVE_LEFT, True)
    player.disable_all_realtime_actions()
    assert len(connection.sent) == 2
    actions = set()
    for packet in connection.sent:
        assert packet.read_int32() == ClientPacketType.PLAYER_REALTIME_CHANGE
        assert packet.read_int32() == 9
        actions.add(packet.read_int32())
        assert packet.read_bool() is False
    assert actions == {PlayerAction.FIRE, PlayerAction.MOVE_LEFT}


def test_command_rejects_non_aircraft_node():
    player = Player(None, 1, KeyBinding(1))
    commands = CommandQueue()
    player.handle_event(press(Key.M), commands)
    with pytest.raises(TypeError):
        commands.pop().action(SceneNode(), 0.0)