"""Network protocol: packet types, game actions and binary packet encoding."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass, field
from typing import List, Union

from .utility import Vector

SERVER_PORT = 5000

_INT32 = struct.Struct(">i")
_UINT32 = struct.Struct(">I")
_FLOAT = struct.Struct(">f")
_UINT8 = struct.Struct(">B")


class ServerPacketType(enum.IntEnum):
    """Packets sent by the server."""

    BROADCAST_MESSAGE = 0
    SPAWN_SELF = enum.auto()
    INITIAL_STATE = enum.auto()
    PLAYER_EVENT = enum.auto()
    PLAYER_REALTIME_CHANGE = enum.auto()
    PLAYER_CONNECT = enum.auto()
    PLAYER_DISCONNECT = enum.auto()
    ACCEPT_COOP_PARTNER = enum.auto()
    SPAWN_ENEMY = enum.auto()
    SPAWN_PICKUP = enum.auto()
    UPDATE_CLIENT_STATE = enum.auto()
    MISSION_SUCCESS = enum.auto()


class ClientPacketType(enum.IntEnum):
    """Packets sent by a client."""

    PLAYER_EVENT = 0
    PLAYER_REALTIME_CHANGE = enum.auto()
    REQUEST_COOP_PARTNER = enum.auto()
    POSITION_UPDATE = enum.auto()
    GAME_EVENT = enum.auto()
    QUIT = enum.auto()


class GameActionType(enum.IntEnum):
    ENEMY_EXPLODE = 0


@dataclass(frozen=True)
class GameAction:
    """Something that happened in the world and is reported to the server."""

    type: GameActionType
    position: Vector = field(default_factory=Vector)


class PacketError(ValueError):
    """Raised when a packet cannot be decoded."""


class Packet:
    """A growable byte packet with typed big-endian writers and readers."""

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, data: Union[bytes, bytearray] = b"") -> None:
        self._data = bytearray(data)
        self._pos = 0

    @property
    def data(self) -> bytes:
        return bytes(self._data)

    @property
    def at_end(self) -> bool:
        return self._pos >= len(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Packet):
            return NotImplemented
        return self._data == other._data

    def __repr__(self) -> str:
        return f"Packet({bytes(self._data)!r})"

    def _take(self, size: int) -> bytes:
        end = self._pos + size
        if end > len(self._data):
            raise PacketError(
                f"packet too short: need {size} bytes at offset {self._pos}, "
                f"have {len(self._data) - self._pos}"
            )
        chunk = bytes(self._data[self._pos:end])
        self._pos = end
        return chunk

    def _unpack(self, fmt: struct.Struct):
        return fmt.unpack(self._take(fmt.size))[0]

    def write_int32(self, value: int) -> "Packet":
        if not -(2**31) <= value < 2**31:
            raise ValueError(f"{value} does not fit in a 32-bit integer")
        self._data += _INT32.pack(value)
        return self

    def read_int32(self) -> int:
        return self._unpack(_INT32)

    def write_float(self, value: float) -> "Packet":
        self._data += _FLOAT.pack(value)
        return self

    def read_float(self) -> float:
        return self._unpack(_FLOAT)

    def write_bool(self, value: bool) -> "Packet":
        self._data += _UINT8.pack(1 if value else 0)
        return self

    def read_bool(self) -> bool:
        return self._unpack(_UINT8) != 0

    def write_string(self, value: str) -> "Packet":
        encoded = value.encode("utf-8")
        self._data += _UINT32.pack(len(encoded)) + encoded
        return self

    def read_string(self) -> str:
        size = self._unpack(_UINT32)
        raw = self._take(size)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise PacketError("string is not valid UTF-8") from exc

    def to_frame(self) -> bytes:
        """Return the packet prefixed with its 32-bit big-endian length."""
        return _UINT32.pack(len(self._data)) + bytes(self._data)


class PacketReader:
    """Reassembles length-prefixed frames from a byte stream."""

    def __init__(self) -> None:
        self._buffer = bytearray()

    @property
    def pending(self) -> int:
        """Number of buffered bytes not yet forming a whole packet."""
        return len(self._buffer)

    def feed(self, data: Union[bytes, bytearray]) -> List[Packet]:
        """Add received bytes and return every packet now complete."""
        self._buffer += data
        packets: List[Packet] = []
        while len(self._buffer) >= _UINT32.size:
            (size,) = _UINT32.unpack_from(self._buffer)
            end = _UINT32.size + size
            if len(self._buffer) < end:
                break
            packets.append(Packet(self._buffer[_UINT32.size:end]))
            del self._buffer[:end]
        return packets