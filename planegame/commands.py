"""Commands addressed to scene nodes by category, and the queue that holds them."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Optional, Type, TypeVar

from .identifiers import Category

Action = Callable[[Any, float], None]

N = TypeVar("N")


@dataclass
class Command:
    """An action run on every scene node whose category matches."""

    action: Optional[Action] = None
    category: Category = Category.NONE


def derived_action(node_type: Type[N], fn: Callable[[N, float], None]) -> Action:
    """Wrap fn so it only accepts nodes of node_type."""

    def action(node: Any, dt: float) -> None:
        if not isinstance(node, node_type):
            raise TypeError(
                f"command expects {node_type.__name__}, got {type(node).__name__}"
            )
        fn(node, dt)

    return action


class CommandQueue:
    """A first-in, first-out queue of commands."""

    def __init__(self) -> None:
        self._queue: Deque[Command] = deque()

    def push(self, command: Command) -> None:
        self._queue.append(command)

    def pop(self) -> Command:
        if not self._queue:
            raise IndexError("pop from an empty command queue")
        return self._queue.popleft()

    def is_empty(self) -> bool:
        return not self._queue

    def __len__(self) -> int:
        return len(self._queue)

    def __bool__(self) -> bool:
        return bool(self._queue)