"""Authoritative multiplayer server: relays player input and drives the shared battle."""

from __future__ import annotations

import select
import socket
import threading
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .data import AircraftType, PickupType
from .protocol import (
    ClientPacketType,
    GameActionType,
    Packet,
    PacketReader,
    ServerPacketType,
)
from .utility import PointLike, Vector, random_int

DEFAULT_PORT = 5000

_CLIENT_TIMEOUT = 3.0
_MAX_CONNECTED_PLAYERS = 10
_WORLD_HEIGHT = 5000.0
_SCROLL_SPEED = -50.0
_STEP_INTERVAL = 1.0 / 60.0
_TICK_INTERVAL = 1.0 / 20.0
_LOOP_PAUSE = 0.1
_INITIAL_HITPOINTS = 100
_INITIAL_MISSILE_AMMO = 2
_FIRST_SPAWN_DELAY = 5.0
_NO_SPAWN_BELOW_TOP = 600.0
_SEND_TIMEOUT = 2.0


@dataclass
class AircraftInfo:
    """What the server knows about one aircraft."""

    position: Vector = field(default_factory=Vector)
    hitpoints: int = 0
    missile_ammo: int = 0
    realtime_actions: Dict[int, bool] = field(default_factory=dict)


@dataclass(eq=False)
class RemotePeer:
    """One connected game instance, local or remote.

    The connection offers ``send(packet)``, ``receive()`` returning the packets
    that have arrived (raising ``ConnectionError`` once the peer is gone) and
    ``close()``.
    """

    connection: Any
    last_packet_time: float = 0.0
    aircraft_identifiers: List[int] = field(default_factory=list)
    ready: bool = False
    timed_out: bool = False


class _SocketConnection:
    """A framed packet connection over a TCP socket."""

    def __init__(self, sock: socket.socket) -> None:
        sock.setblocking(True)
        sock.settimeout(_SEND_TIMEOUT)
        self._sock = sock
        self._reader = PacketReader()
        self._closed = False

    def send(self, packet: Packet) -> None:
        if self._closed:
            return
        try:
            self._sock.sendall(packet.to_frame())
        except OSError:
            pass

    def receive(self) -> List[Packet]:
        if self._closed:
            raise ConnectionError("peer closed the connection")
        packets: List[Packet] = []
        while True:
            readable, _, _ = select.select([self._sock], [], [], 0)
            if not readable:
                return packets
            try:
                data = self._sock.recv(4096)
            except OSError as exc:
                raise ConnectionError("peer connection failed") from exc
            if not data:
                self._closed = True
                if not packets:
                    raise ConnectionError("peer closed the connection")
                return packets
            packets.extend(self._reader.feed(data))

    def close(self) -> None:
        self._closed = True
        try:
            self._sock.close()
        except OSError:
            pass


class GameServer:
    """Accepts players, relays their actions and spawns enemies for everyone."""

    def __init__(self, battlefield_size: PointLike, port: int = DEFAULT_PORT) -> None:
        width, height = battlefield_size
        self._port = port
        self._lock = threading.RLock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._listener: Optional[socket.socket] = None
        self._listening = False
        self._client_timeout = _CLIENT_TIMEOUT
        self._max_connected_players = _MAX_CONNECTED_PLAYERS
        self._world_height = _WORLD_HEIGHT
        self._battlefield_width = float(width)
        self._battlefield_height = float(height)
        self._battlefield_top = self._world_height - self._battlefield_height
        self._scroll_speed = _SCROLL_SPEED
        self._aircraft_count = 0
        self._aircraft_info: Dict[int, AircraftInfo] = {}
        self._peers: List[RemotePeer] = []
        self._identifier_counter = 1
        self._start_time = time.monotonic()
        self._last_spawn_time = 0.0
        self._time_for_next_spawn = _FIRST_SPAWN_DELAY

    @property
    def port(self) -> int:
        return self._port

    @property
    def listening(self) -> bool:
        return self._listening

    @property
    def connected_players(self) -> int:
        return len(self._peers)

    @property
    def battlefield_top(self) -> float:
        return self._battlefield_top

    @property
    def aircraft_info(self) -> Dict[int, AircraftInfo]:
        with self._lock:
            return dict(self._aircraft_info)

    def __enter__(self) -> "GameServer":
        self.start()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.stop()

    def start(self) -> None:
        """Start listening and run the server loop in a background thread."""
        if self._thread is not None and self._thread.is_alive():
            raise RuntimeError("server is already running")
        with self._lock:
            self._set_listening(True)
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._execution_thread, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the server loop and close every socket."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        with self._lock:
            self._set_listening(False)
            for peer in self._peers:
                peer.connection.close()
            self._peers.clear()

    def notify_player_spawn(self, identifier: int) -> None:
        with self._lock:
            info = self._info(identifier)
            for peer in self._ready_peers():
                packet = (
                    Packet()
                    .write_int32(ServerPacketType.PLAYER_CONNECT)
                    .write_int32(identifier)
                    .write_float(info.position.x)
                    .write_float(info.position.y)
                )
                peer.connection.send(packet)

    def notify_player_realtime_change(self, identifier: int, action: int, enabled: bool) -> None:
        with self._lock:
            for peer in self._ready_peers():
                packet = (
                    Packet()
                    .write_int32(ServerPacketType.PLAYER_REALTIME_CHANGE)
                    .write_int32(identifier)
                    .write_int32(action)
                    .write_bool(enabled)
                )
                peer.connection.send(packet)

    def notify_player_event(self, identifier: int, action: int) -> None:
        with self._lock:
            for peer in self._ready_peers():
                packet = (
                    Packet()
                    .write_int32(ServerPacketType.PLAYER_EVENT)
                    .write_int32(identifier)
                    .write_int32(action)
                )
                peer.connection.send(packet)

    def tick(self) -> None:
        """Send the world state, detect mission success, drop wrecks and spawn enemies."""
        with self._lock:
            self._update_client_state()

            if all(info.position.y <= 0.0 for info in self._aircraft_info.values()):
                self._send_to_all(Packet().write_int32(ServerPacketType.MISSION_SUCCESS))

            self._aircraft_info = {
                identifier: info
                for identifier, info in self._aircraft_info.items()
                if info.hitpoints > 0
            }

            if self._now() >= self._time_for_next_spawn + self._last_spawn_time:
                if self._battlefield_top > _NO_SPAWN_BELOW_TOP:
                    self._spawn_enemies()
                    self._last_spawn_time = self._now()
                    self._time_for_next_spawn = (2000 + random_int(6000)) / 1000.0

    def _spawn_enemies(self) -> None:
        enemy_count = 1 + random_int(2)
        spawn_center = float(random_int(500) - 250)
        plane_distance = 0.0
        next_position = spawn_center
        if enemy_count == 2:
            plane_distance = float(random_int(250) + 150)
            next_position = spawn_center - plane_distance / 2.0

        for _ in range(enemy_count):
            packet = (
                Packet()
                .write_int32(ServerPacketType.SPAWN_ENEMY)
                .write_int32(1 + random_int(len(AircraftType) - 1))
                .write_float(self._world_height - self._battlefield_top + 500.0)
                .write_float(next_position)
            )
            next_position += plane_distance / 2.0
            self._send_to_all(packet)

    def _now(self) -> float:
        return time.monotonic() - self._start_time

    def _info(self, identifier: int) -> AircraftInfo:
        return self._aircraft_info.setdefault(identifier, AircraftInfo())

    def _ready_peers(self) -> List[RemotePeer]:
        return [peer for peer in self._peers if peer.ready]

    def _spawn_point(self) -> Vector:
        return Vector(
            self._battlefield_width / 2.0,
            self._battlefield_top + self._battlefield_height / 2.0,
        )

    def _set_listening(self, enable: bool) -> None:
        if enable:
            if self._listening:
                return
            listener = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            try:
                listener.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
                listener.bind(("", self._port))
                listener.listen()
                listener.setblocking(False)
            except OSError:
                listener.close()
                self._listening = False
                return
            self._port = listener.getsockname()[1]
            self._listener = listener
            self._listening = True
        else:
            if self._listener is not None:
                self._listener.close()
                self._listener = None
            self._listening = False

    def _execution_thread(self) -> None:
        step_time = 0.0
        tick_time = 0.0
        last = time.monotonic()
        while not self._stop_event.is_set():
            with self._lock:
                self._handle_incoming_packets()
                self._handle_incoming_connections()

                current = time.monotonic()
                elapsed = current - last
                last = current
                step_time += elapsed
                tick_time += elapsed

                while step_time > _STEP_INTERVAL:
                    self._battlefield_top += self._scroll_speed * _STEP_INTERVAL
                    step_time -= _STEP_INTERVAL

                while tick_time >= _TICK_INTERVAL:
                    self.tick()
                    tick_time -= _TICK_INTERVAL

            self._stop_event.wait(_LOOP_PAUSE)

    def _handle_incoming_packets(self) -> None:
        detected_timeout = False
        for peer in list(self._peers):
            try:
                packets = peer.connection.receive()
            except ConnectionError:
                peer.timed_out = True
                detected_timeout = True
                continue
            for packet in packets:
                if self._handle_incoming_packet(packet, peer):
                    detected_timeout = True
                peer.last_packet_time = self._now()

            if self._now() >= peer.last_packet_time + self._client_timeout:
                peer.timed_out = True
                detected_timeout = True

        if detected_timeout:
            self._handle_disconnections()

    def _handle_incoming_packet(self, packet: Packet, peer: RemotePeer) -> bool:
        """Act on one client packet; return True if the peer asked to leave."""
        try:
            packet_type = ClientPacketType(packet.read_int32())
        except ValueError:
            return False

        if packet_type == ClientPacketType.QUIT:
            peer.timed_out = True
            return True

        if packet_type == ClientPacketType.PLAYER_EVENT:
            identifier = packet.read_int32()
            action = packet.read_int32()
            self.notify_player_event(identifier, action)

        elif packet_type == ClientPacketType.PLAYER_REALTIME_CHANGE:
            identifier = packet.read_int32()
            action = packet.read_int32()
            enabled = packet.read_bool()
            self._info(identifier).realtime_actions[action] = enabled
            self.notify_player_realtime_change(identifier, action, enabled)

        elif packet_type == ClientPacketType.REQUEST_COOP_PARTNER:
            self._add_coop_partner(peer)

        elif packet_type == ClientPacketType.POSITION_UPDATE:
            for _ in range(packet.read_int32()):
                identifier = packet.read_int32()
                x = packet.read_float()
                y = packet.read_float()
                hitpoints = packet.read_int32()
                missile_ammo = packet.read_int32()
                info = self._info(identifier)
                info.position = Vector(x, y)
                info.hitpoints = hitpoints
                info.missile_ammo = missile_ammo

        elif packet_type == ClientPacketType.GAME_EVENT:
            action = packet.read_int32()
            x = packet.read_float()
            y = packet.read_float()
            # Only the host reports explosions, so each one drops at most one pickup.
            if (
                self._is_enemy_explosion(action)
                and random_int(3) == 0
                and self._peers
                and peer is self._peers[0]
            ):
                pickup = (
                    Packet()
                    .write_int32(ServerPacketType.SPAWN_PICKUP)
                    .write_int32(int(PickupType.HEALTH_REFILL))
                    .write_float(x)
                    .write_float(y)
                )
                self._send_to_all(pickup)

        return False

    @staticmethod
    def _is_enemy_explosion(action: int) -> bool:
        try:
            return GameActionType(action) == GameActionType.ENEMY_EXPLODE
        except ValueError:
            return False

    def _add_coop_partner(self, receiving_peer: RemotePeer) -> None:
        identifier = self._identifier_counter
        receiving_peer.aircraft_identifiers.append(identifier)
        info = self._info(identifier)
        info.position = self._spawn_point()
        info.hitpoints = _INITIAL_HITPOINTS
        info.missile_ammo = _INITIAL_MISSILE_AMMO

        accept = (
            Packet()
            .write_int32(ServerPacketType.ACCEPT_COOP_PARTNER)
            .write_int32(identifier)
            .write_float(info.position.x)
            .write_float(info.position.y)
        )
        receiving_peer.connection.send(accept)
        self._aircraft_count += 1

        for peer in self._peers:
            if peer is not receiving_peer and peer.ready:
                notify = (
                    Packet()
                    .write_int32(ServerPacketType.PLAYER_CONNECT)
                    .write_int32(identifier)
                    .write_float(info.position.x)
                    .write_float(info.position.y)
                )
                peer.connection.send(notify)
        self._identifier_counter += 1

    def _update_client_state(self) -> None:
        packet = (
            Packet()
            .write_int32(ServerPacketType.UPDATE_CLIENT_STATE)
            .write_float(self._battlefield_top + self._battlefield_height)
            .write_int32(len(self._aircraft_info))
        )
        for identifier, info in self._aircraft_info.items():
            packet.write_int32(identifier).write_float(info.position.x).write_float(info.position.y)
        self._send_to_all(packet)

    def _handle_incoming_connections(self) -> None:
        if not self._listening or self._listener is None:
            return
        try:
            sock, _ = self._listener.accept()
        except OSError:
            return
        self._accept_peer(_SocketConnection(sock))

    def _accept_peer(self, connection: Any) -> RemotePeer:
        """Register a newly connected game instance and spawn its first aircraft."""
        peer = RemotePeer(connection)
        identifier = self._identifier_counter
        info = self._info(identifier)
        info.position = self._spawn_point()
        info.hitpoints = _INITIAL_HITPOINTS
        info.missile_ammo = _INITIAL_MISSILE_AMMO

        spawn_self = (
            Packet()
            .write_int32(ServerPacketType.SPAWN_SELF)
            .write_int32(identifier)
            .write_float(info.position.x)
            .write_float(info.position.y)
        )
        peer.aircraft_identifiers.append(identifier)

        self._broadcast_message("New player!")
        self._inform_world_state(connection)
        self.notify_player_spawn(identifier)
        self._identifier_counter += 1

        connection.send(spawn_self)
        peer.ready = True
        peer.last_packet_time = self._now()
        self._aircraft_count += 1
        self._peers.append(peer)

        if len(self._peers) >= self._max_connected_players:
            self._set_listening(False)
        return peer

    def _handle_disconnections(self) -> None:
        for peer in [peer for peer in self._peers if peer.timed_out]:
            for identifier in peer.aircraft_identifiers:
                self._send_to_all(
                    Packet()
                    .write_int32(ServerPacketType.PLAYER_DISCONNECT)
                    .write_int32(identifier)
                )
                self._aircraft_info.pop(identifier, None)

            self._aircraft_count -= len(peer.aircraft_identifiers)
            self._peers.remove(peer)
            peer.connection.close()

            if len(self._peers) < self._max_connected_players:
                self._set_listening(True)

            self._broadcast_message("An ally has disconnected.")

    def _inform_world_state(self, connection: Any) -> None:
        packet = (
            Packet()
            .write_int32(ServerPacketType.INITIAL_STATE)
            .write_float(self._world_height)
            .write_float(self._battlefield_top + self._battlefield_height)
            .write_int32(self._aircraft_count)
        )
        for peer in self._ready_peers():
            for identifier in peer.aircraft_identifiers:
                info = self._info(identifier)
                (
                    packet.write_int32(identifier)
                    .write_float(info.position.x)
                    .write_float(info.position.y)
                    .write_int32(info.hitpoints)
                    .write_int32(info.missile_ammo)
                )
        connection.send(packet)

    def _broadcast_message(self, message: str) -> None:
        for peer in self._ready_peers():
            packet = (
                Packet()
                .write_int32(ServerPacketType.BROADCAST_MESSAGE)
                .write_string(message)
            )
            peer.connection.send(packet)

    def _send_to_all(self, packet: Packet) -> None:
        for peer in self._ready_peers():
            peer.connection.send(packet)


def _peer_summary(peer: RemotePeer) -> Tuple[int, ...]:
    return tuple(peer.aircraft_identifiers)