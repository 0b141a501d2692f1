"""Players: turn input, local or from the network, into aircraft commands."""

from __future__ import annotations

import enum
from typing import Any, Collection, Dict, Optional

from .aircraft import Aircraft
from .commands import Command, CommandQueue, derived_action
from .identifiers import Category, Event, EventType, Key
from .keybinding import KeyBinding, PlayerAction, is_realtime_action
from .protocol import ClientPacketType, Packet
from .utility import Vector


class MissionStatus(enum.Enum):
    RUNNING = enum.auto()
    SUCCESS = enum.auto()
    FAILURE = enum.auto()


def _mover(vx: float, vy: float):
    direction = Vector(vx, vy)

    def move(aircraft: Aircraft, _dt: float) -> None:
        aircraft.accelerate(direction * aircraft.max_speed())

    return move


def _fire_trigger(identifier: int):
    def trigger(aircraft: Aircraft, _dt: float) -> None:
        if aircraft.identifier == identifier:
            aircraft.fire()

    return trigger


def _missile_trigger(identifier: int):
    def trigger(aircraft: Aircraft, _dt: float) -> None:
        if aircraft.identifier == identifier:
            aircraft.launch_missile()

    return trigger


class Player:
    """A player controlling one aircraft, locally or through a connection.

    The connection, when given, is any object with a ``send(packet)`` method.
    A player without a key binding is a remote player.
    """

    def __init__(
        self, connection: Optional[Any], identifier: int, binding: Optional[KeyBinding]
    ) -> None:
        self._connection = connection
        self._identifier = identifier
        self._binding = binding
        self.mission_status = MissionStatus.RUNNING
        self._proxies: Dict[PlayerAction, bool] = {}
        functions = {
            PlayerAction.MOVE_LEFT: _mover(-1.0, 0.0),
            PlayerAction.MOVE_RIGHT: _mover(+1.0, 0.0),
            PlayerAction.MOVE_UP: _mover(0.0, -1.0),
            PlayerAction.MOVE_DOWN: _mover(0.0, +1.0),
            PlayerAction.FIRE: _fire_trigger(identifier),
            PlayerAction.LAUNCH_MISSILE: _missile_trigger(identifier),
        }
        self._action_binding: Dict[PlayerAction, Command] = {
            action: Command(derived_action(Aircraft, fn), Category.PLAYER_AIRCRAFT)
            for action, fn in functions.items()
        }

    @property
    def identifier(self) -> int:
        return self._identifier

    def is_local(self) -> bool:
        return self._binding is not None

    def _bound_action(self, key: Optional[Key]) -> Optional[PlayerAction]:
        return self._binding.check_action(key) if self._binding is not None else None

    def handle_event(self, event: Event, commands: CommandQueue) -> None:
        """React to a key event: run or send one-shot actions, send realtime changes."""
        if event.type == EventType.KEY_PRESSED:
            action = self._bound_action(event.key)
            if action is not None and not is_realtime_action(action):
                if self._connection is not None:
                    packet = (
                        Packet()
                        .write_int32(ClientPacketType.PLAYER_EVENT)
                        .write_int32(self._identifier)
                        .write_int32(action)
                    )
                    self._connection.send(packet)
                else:
                    commands.push(self._action_binding[action])

        if (
            event.type in (EventType.KEY_PRESSED, EventType.KEY_RELEASED)
            and self._connection is not None
        ):
            action = self._bound_action(event.key)
            if action is not None and is_realtime_action(action):
                packet = (
                    Packet()
                    .write_int32(ClientPacketType.PLAYER_REALTIME_CHANGE)
                    .write_int32(self._identifier)
                    .write_int32(action)
                    .write_bool(event.type == EventType.KEY_PRESSED)
                )
                self._connection.send(packet)

    def disable_all_realtime_actions(self) -> None:
        """Tell the server that every realtime action received so far is off."""
        if self._proxies and self._connection is None:
            raise RuntimeError("player has no connection to report to")
        for action in self._proxies:
            packet = (
                Packet()
                .write_int32(ClientPacketType.PLAYER_REALTIME_CHANGE)
                .write_int32(self._identifier)
                .write_int32(action)
                .write_bool(False)
            )
            self._connection.send(packet)

    def handle_realtime_input(self, commands: CommandQueue, pressed_keys: Collection[Key]) -> None:
        """Push commands for the realtime actions whose keys are held."""
        if self._connection is not None and not self.is_local():
            return
        if self._binding is None:
            raise RuntimeError("player has no key binding")
        for action in self._binding.realtime_actions(pressed_keys):
            commands.push(self._action_binding[action])

    def handle_realtime_network_input(self, commands: CommandQueue) -> None:
        """Push commands for the realtime actions a remote player has switched on."""
        if self._connection is None or self.is_local():
            return
        for action, enabled in sorted(self._proxies.items()):
            if enabled and is_realtime_action(action):
                commands.push(self._action_binding[action])

    def handle_network_event(self, action: PlayerAction, commands: CommandQueue) -> None:
        commands.push(self._action_binding[PlayerAction(action)])

    def handle_network_realtime_change(self, action: PlayerAction, enabled: bool) -> None:
        self._proxies[PlayerAction(action)] = enabled