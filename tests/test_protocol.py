import pytest

from planegame.protocol import (
    ClientPacketType,
    GameAction,
    GameActionType,
    Packet,
    PacketError,
    PacketReader,
    ServerPacketType,
)
from planegame.utility import Vector


def test_packet_type_order_starts_at_zero_and_is_contiguous():
    for enum_type in (ServerPacketType, ClientPacketType):
        count = len(list(enum_type))
        assert [enum_type(i) for i in range(count)] == list(enum_type)
    assert ServerPacketType(0) is ServerPacketType.BROADCAST_MESSAGE
    assert ClientPacketType(0) is ClientPacketType.PLAYER_EVENT


def test_packet_type_round_trip_through_packet():
    data = Packet().write_int32(int(ClientPacketType.QUIT)).data
    assert ClientPacketType(Packet(data).read_int32()) is ClientPacketType.QUIT


def test_mixed_round_trip():
    packet = (
        Packet()
        .write_int32(int(ServerPacketType.SPAWN_ENEMY))
        .write_int32(-42)
        .write_float(1.5)
        .write_bool(True)
        .write_string("New player!")
    )
    reader = Packet(packet.data)
    assert reader.read_int32() == ServerPacketType.SPAWN_ENEMY
    assert reader.read_int32() == -42
    assert reader.read_float() == 1.5
    assert reader.read_bool() is True
    assert reader.read_string() == "New player!"
    assert reader.at_end


def test_float_precision_is_single():
    value = Packet(Packet().write_float(0.1).data).read_float()
    assert value == pytest.approx(0.1, rel=1e-6)


def test_unicode_string_round_trip():
    text = "An ally has disconnected. ✈"
    assert Packet(Packet().write_string(text).data).read_string() == text


def test_frame_bytes():
    assert Packet().write_int32(1).to_frame() == b"\x00\x00\x00\x04\x00\x00\x00\x01"


def test_bool_encoding():
    assert Packet().write_bool(True).write_bool(False).data == b"\x01\x00"


def test_string_encoding():
    assert Packet().write_string("ab").data == b"\x00\x00\x00\x02ab"


def test_read_past_end_raises():
    packet = Packet(Packet().write_bool(True).data)
    with pytest.raises(PacketError):
        packet.read_int32()


def test_truncated_string_raises():
    packet = Packet(Packet().write_string("hello").data[:-2])
    with pytest.raises(PacketError):
        packet.read_string()


def test_int32_out_of_range():
    with pytest.raises(ValueError):
        Packet().write_int32(2**31)


def test_packet_equality():
    assert Packet().write_int32(7) == Packet().write_int32(7)
    assert not Packet().write_int32(7) == Packet().write_int32(8)


def test_reader_reassembles_split_frames():
    first = Packet().write_int32(3).write_string("x")
    second = Packet().write_bool(True)
    stream = first.to_frame() + second.to_frame()
    reader = PacketReader()
    assert reader.feed(stream[:5]) == []
    assert reader.pending == 5
    packets = reader.feed(stream[5:])
    assert packets == [first, second]
    assert reader.pending == 0


def test_reader_empty_packet():
    reader = PacketReader()
    assert reader.feed(Packet().to_frame()) == [Packet()]


def test_game_action_holds_position():
    action = GameAction(GameActionType.ENEMY_EXPLODE, Vector(3.0, 4.0))
    assert action.position == Vector(3.0, 4.0)
    assert GameAction(GameActionType.ENEMY_EXPLODE).position == Vector()