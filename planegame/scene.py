"""The scene graph: transformable nodes with children, commands and collisions."""

from __future__ import annotations

import math
from typing import Any, List, Optional, Set, Tuple

from .commands import Command, CommandQueue
from .identifiers import Category
from .utility import PointLike, Rect, Transform, Vector

Pair = Tuple["SceneNode", "SceneNode"]


class SceneNode:
    """A node of the scene graph with a local transform and owned children."""

    def __init__(self, category: Category = Category.NONE) -> None:
        self._children: List[SceneNode] = []
        self._parent: Optional[SceneNode] = None
        self._default_category = category
        self._position = Vector()
        self._origin = Vector()
        self.rotation = 0.0

    @property
    def position(self) -> Vector:
        return self._position

    @position.setter
    def position(self, value: PointLike) -> None:
        self._position = Vector(*value)

    @property
    def origin(self) -> Vector:
        return self._origin

    @origin.setter
    def origin(self, value: PointLike) -> None:
        self._origin = Vector(*value)

    @property
    def parent(self) -> Optional["SceneNode"]:
        return self._parent

    @property
    def children(self) -> Tuple["SceneNode", ...]:
        return tuple(self._children)

    def move(self, offset: PointLike) -> None:
        self._position = self._position + Vector(*offset)

    def local_transform(self) -> Transform:
        """Translate by position, rotate, then shift by the origin."""
        return (
            Transform()
            .translated(self._position)
            .rotated(self.rotation)
            .translated(-self._origin)
        )

    def attach_child(self, child: "SceneNode") -> None:
        child._parent = self
        self._children.append(child)

    def detach_child(self, node: "SceneNode") -> "SceneNode":
        """Remove node from the children and return it."""
        for index, child in enumerate(self._children):
            if child is node:
                del self._children[index]
                child._parent = None
                return child
        raise ValueError("SceneNode.detach_child - Node not found")

    def update(self, dt: float, commands: CommandQueue) -> None:
        self._update_current(dt, commands)
        for child in list(self._children):
            child.update(dt, commands)

    def _update_current(self, dt: float, commands: CommandQueue) -> None:
        """Per-node update hook; does nothing by default."""

    def draw(self, target: Any, transform: Transform = Transform()) -> None:
        """Draw this node and its children onto target under transform."""
        combined = transform.combine(self.local_transform())
        self._draw_current(target, combined)
        for child in self._children:
            child.draw(target, combined)

    def _draw_current(self, target: Any, transform: Transform) -> None:
        """Per-node drawing hook; does nothing by default."""

    def world_transform(self) -> Transform:
        transform = Transform()
        node: Optional[SceneNode] = self
        while node is not None:
            transform = node.local_transform().combine(transform)
            node = node._parent
        return transform

    def world_position(self) -> Vector:
        return self.world_transform().apply((0.0, 0.0))

    def on_command(self, command: Command, dt: float) -> None:
        """Run command on this node if its category matches, then on the children."""
        if command.category & self.get_category():
            command.action(self, dt)
        for child in list(self._children):
            child.on_command(command, dt)

    def get_category(self) -> Category:
        return self._default_category

    def check_scene_collision(self, scene_graph: "SceneNode", collision_pairs: Set[Pair]) -> None:
        self.check_node_collision(scene_graph, collision_pairs)
        for child in scene_graph._children:
            self.check_node_collision(child, collision_pairs)

    def check_node_collision(self, node: "SceneNode", collision_pairs: Set[Pair]) -> None:
        if (
            self is not node
            and collision(self, node)
            and not self.is_destroyed()
            and not node.is_destroyed()
        ):
            pair = (self, node) if id(self) < id(node) else (node, self)
            collision_pairs.add(pair)
        for child in self._children:
            child.check_node_collision(node, collision_pairs)

    def remove_wrecks(self) -> None:
        """Drop children marked for removal, recursively."""
        kept = []
        for child in self._children:
            if child.is_marked_for_removal():
                child._parent = None
            else:
                kept.append(child)
        self._children = kept
        for child in kept:
            child.remove_wrecks()

    def bounding_rect(self) -> Rect:
        return Rect()

    def is_marked_for_removal(self) -> bool:
        return self.is_destroyed()

    def is_destroyed(self) -> bool:
        return False


class SpriteNode(SceneNode):
    """A node that draws a texture, or a part of it."""

    def __init__(self, texture: Any, texture_rect: Optional[Rect] = None) -> None:
        super().__init__()
        self.texture = texture
        self.texture_rect = texture_rect

    def _draw_current(self, target: Any, transform: Transform) -> None:
        target.draw_sprite(self.texture, self.texture_rect, transform)


class TextNode(SceneNode):
    """A node that draws a line of text centred on its position."""

    character_size = 20

    def __init__(self, text: str = "") -> None:
        super().__init__()
        self.text = ""
        self.set_string(text)

    def set_string(self, text: str) -> None:
        self.text = text

    def _draw_current(self, target: Any, transform: Transform) -> None:
        target.draw_text(self.text, self.character_size, transform)


def collision(lhs: SceneNode, rhs: SceneNode) -> bool:
    return lhs.bounding_rect().intersects(rhs.bounding_rect())


def distance(lhs: SceneNode, rhs: SceneNode) -> float:
    a = lhs.world_position()
    b = rhs.world_position()
    return math.hypot(a.x - b.x, a.y - b.y)