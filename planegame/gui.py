"""Menu widgets: selectable components, containers, buttons and labels."""

from __future__ import annotations

import abc
import enum
from typing import Any, Callable, List, Optional

from .identifiers import Event, EventType, Key, SoundEffect, Textures
from .utility import Rect, Transform, Vector

_TEXT_SIZE = 16
_BUTTON_WIDTH = 200
_BUTTON_HEIGHT = 50


class Component(abc.ABC):
    """A GUI element that may be selected and activated."""

    def __init__(self) -> None:
        self.position = Vector()
        self._is_selected = False
        self._is_active = False

    @abc.abstractmethod
    def is_selectable(self) -> bool:
        """Return True if the component can take the selection."""

    def is_selected(self) -> bool:
        return self._is_selected

    def select(self) -> None:
        self._is_selected = True

    def deselect(self) -> None:
        self._is_selected = False

    def is_active(self) -> bool:
        return self._is_active

    def activate(self) -> None:
        self._is_active = True

    def deactivate(self) -> None:
        self._is_active = False

    @abc.abstractmethod
    def handle_event(self, event: Event) -> None:
        """React to an input event."""

    def _transform(self, parent: Transform) -> Transform:
        return parent.translated(self.position)

    def draw(self, target: Any, transform: Transform = Transform()) -> None:
        """Draw the component; nothing by default."""


class Container(Component):
    """Holds components and moves the selection between the selectable ones."""

    def __init__(self) -> None:
        super().__init__()
        self._children: List[Component] = []
        self._selected_child = -1

    @property
    def children(self) -> tuple:
        return tuple(self._children)

    @property
    def selected_index(self) -> Optional[int]:
        return self._selected_child if self._has_selection() else None

    def pack(self, component: Component) -> None:
        self._children.append(component)
        if not self._has_selection() and component.is_selectable():
            self._select(len(self._children) - 1)

    def is_selectable(self) -> bool:
        return False

    def handle_event(self, event: Event) -> None:
        if self._has_selection() and self._children[self._selected_child].is_active():
            self._children[self._selected_child].handle_event(event)
        elif event.type == EventType.KEY_RELEASED:
            if event.key in (Key.W, Key.Up):
                self._select_previous()
            elif event.key in (Key.S, Key.Down):
                self._select_next()
            elif event.key in (Key.Return, Key.Space):
                if self._has_selection():
                    self._children[self._selected_child].activate()

    def draw(self, target: Any, transform: Transform = Transform()) -> None:
        combined = self._transform(transform)
        for child in self._children:
            child.draw(target, combined)

    def _has_selection(self) -> bool:
        return self._selected_child >= 0

    def _select(self, index: int) -> None:
        child = self._children[index]
        if child.is_selectable():
            if self._has_selection():
                self._children[self._selected_child].deselect()
            child.select()
            self._selected_child = index

    def _step_selection(self, step: int) -> None:
        if not self._has_selection():
            return
        count = len(self._children)
        index = (self._selected_child + step) % count
        while not self._children[index].is_selectable():
            index = (index + step) % count
        self._select(index)

    def _select_next(self) -> None:
        self._step_selection(1)

    def _select_previous(self) -> None:
        self._step_selection(-1)


class ButtonType(enum.IntEnum):
    NORMAL = 0
    SELECTED = 1
    PRESSED = 2


class Button(Component):
    """A button that runs a callback when activated; toggles stay pressed."""

    def __init__(self, sounds: Any) -> None:
        super().__init__()
        self._sounds = sounds
        self.callback: Optional[Callable[[], None]] = None
        self.text = ""
        self.toggle = False
        self._texture_rect = Rect()
        self._change_texture(ButtonType.NORMAL)

    @property
    def texture_rect(self) -> Rect:
        return self._texture_rect

    def is_selectable(self) -> bool:
        return True

    def select(self) -> None:
        super().select()
        self._change_texture(ButtonType.SELECTED)

    def deselect(self) -> None:
        super().deselect()
        self._change_texture(ButtonType.NORMAL)

    def activate(self) -> None:
        super().activate()
        if self.toggle:
            self._change_texture(ButtonType.PRESSED)
        if self.callback is not None:
            self.callback()
        if not self.toggle:
            self.deactivate()
        self._sounds.play(SoundEffect.BUTTON)

    def deactivate(self) -> None:
        super().deactivate()
        if self.toggle:
            self._change_texture(
                ButtonType.SELECTED if self.is_selected() else ButtonType.NORMAL
            )

    def handle_event(self, event: Event) -> None:
        """Buttons take no events of their own."""

    def draw(self, target: Any, transform: Transform = Transform()) -> None:
        combined = self._transform(transform)
        target.draw_sprite(Textures.BUTTONS, self._texture_rect, combined)
        text_position = (self._texture_rect.width / 2.0, self._texture_rect.height / 2.0)
        target.draw_text(self.text, _TEXT_SIZE, combined.translated(text_position))

    def _change_texture(self, button_type: ButtonType) -> None:
        self._texture_rect = Rect(
            0, _BUTTON_HEIGHT * int(button_type), _BUTTON_WIDTH, _BUTTON_HEIGHT
        )


class Label(Component):
    """A line of static text."""

    def __init__(self, text: str = "") -> None:
        super().__init__()
        self.text = text

    def is_selectable(self) -> bool:
        return False

    def handle_event(self, event: Event) -> None:
        """Labels ignore events."""

    def draw(self, target: Any, transform: Transform = Transform()) -> None:
        target.draw_text(self.text, _TEXT_SIZE, self._transform(transform))