"""Game states and the stack that runs them."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from .identifiers import Event, States


class StackAction(enum.Enum):
    PUSH = enum.auto()
    POP = enum.auto()
    CLEAR = enum.auto()


@dataclass(frozen=True)
class _PendingChange:
    action: StackAction
    state_id: Optional[States] = None


class State(abc.ABC):
    """One screen of the game: title, menu, game, pause and so on."""

    @dataclass
    class Context:
        """Shared resources every state may use."""

        window: Any = None
        textures: Any = None
        fonts: Any = None
        music: Any = None
        sounds: Any = None
        keys1: Any = None
        keys2: Any = None

    def __init__(self, stack: "StateStack", context: "State.Context") -> None:
        self._stack = stack
        self._context = context

    @property
    def context(self) -> "State.Context":
        return self._context

    @abc.abstractmethod
    def draw(self) -> None:
        """Draw the state."""

    @abc.abstractmethod
    def update(self, dt: float) -> bool:
        """Advance by dt seconds; return False to stop the states below."""

    @abc.abstractmethod
    def handle_event(self, event: Event) -> bool:
        """React to an event; return False to keep it from further states."""

    def on_activate(self) -> None:
        """Called when the state becomes the top of the stack again."""

    def on_destroy(self) -> None:
        """Called just before the state leaves the stack."""

    def request_stack_push(self, state_id: States) -> None:
        self._stack.push_state(state_id)

    def request_stack_pop(self) -> None:
        self._stack.pop_state()

    def request_state_clear(self) -> None:
        self._stack.clear_states()


class StateStack:
    """A stack of states; pushes, pops and clears take effect between frames."""

    def __init__(self, context: State.Context) -> None:
        self._stack: List[State] = []
        self._pending: List[_PendingChange] = []
        self._context = context
        self._factories: Dict[States, Callable[[], State]] = {}

    @property
    def states(self) -> Tuple[State, ...]:
        return tuple(self._stack)

    def __len__(self) -> int:
        return len(self._stack)

    def register_state(self, state_id: States, factory: Callable[..., State], *args: Any) -> None:
        """Make factory(stack, context, *args) the way to build state_id."""

        def create() -> State:
            return factory(self, self._context, *args)

        self._factories[state_id] = create

    def update(self, dt: float) -> None:
        """Update from the top down, stopping at the first state returning False."""
        for state in reversed(self._stack):
            if not state.update(dt):
                break
        self._apply_pending_changes()

    def draw(self) -> None:
        """Draw every state from the bottom up."""
        for state in self._stack:
            state.draw()

    def handle_event(self, event: Event) -> None:
        """Offer event to the states from the bottom, stopping at the first returning False."""
        for state in list(self._stack):
            if not state.handle_event(event):
                break
        self._apply_pending_changes()

    def push_state(self, state_id: States) -> None:
        self._pending.append(_PendingChange(StackAction.PUSH, state_id))

    def pop_state(self) -> None:
        self._pending.append(_PendingChange(StackAction.POP))

    def clear_states(self) -> None:
        self._pending.append(_PendingChange(StackAction.CLEAR))

    def is_empty(self) -> bool:
        return not self._stack

    def _create_state(self, state_id: States) -> State:
        try:
            factory = self._factories[state_id]
        except KeyError:
            raise KeyError(f"State not found: {state_id}") from None
        return factory()

    def _apply_pending_changes(self) -> None:
        pending, self._pending = self._pending, []
        for change in pending:
            if change.action is StackAction.PUSH:
                self._stack.append(self._create_state(change.state_id))
            elif change.action is StackAction.POP:
                if not self._stack:
                    raise IndexError("pop from empty state stack")
                self._stack[-1].on_destroy()
                self._stack.pop()
                if self._stack:
                    self._stack[-1].on_activate()
            else:
                for state in self._stack:
                    state.on_destroy()
                self._stack.clear()