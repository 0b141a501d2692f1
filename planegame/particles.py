"""Particle systems and the emitters that feed them."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, List, Optional, Tuple

from .commands import Command, CommandQueue, derived_action
from .data import ParticleType, particle_data
from .identifiers import Category
from .scene import SceneNode
from .utility import PointLike, Transform, Vector

_TABLE = particle_data()

_EMISSION_RATE = 30.0


@dataclass
class Particle:
    """A single particle in world coordinates."""

    position: Vector
    color: Tuple[int, int, int]
    lifetime: float


@dataclass(frozen=True)
class Vertex:
    position: Vector
    tex_coords: Vector
    color: Tuple[int, int, int, int]


class ParticleNode(SceneNode):
    """Holds all particles of one type and turns them into textured quads."""

    def __init__(self, particle_type: ParticleType, texture_size: Tuple[float, float]) -> None:
        super().__init__(Category.PARTICLE_SYSTEM)
        self._particles: Deque[Particle] = deque()
        self._type = particle_type
        width, height = texture_size
        self._texture_size = Vector(width, height)
        self._vertices: List[Vertex] = []
        self._needs_vertex_update = True

    @property
    def particle_type(self) -> ParticleType:
        return self._type

    @property
    def particles(self) -> Tuple[Particle, ...]:
        return tuple(self._particles)

    def add_particle(self, position: PointLike) -> None:
        data = _TABLE[self._type]
        self._particles.append(Particle(Vector(*position), data.color, data.lifetime))

    def get_category(self) -> Category:
        return Category.PARTICLE_SYSTEM

    def _update_current(self, dt: float, commands: CommandQueue) -> None:
        while self._particles and self._particles[0].lifetime <= 0.0:
            self._particles.popleft()
        for particle in self._particles:
            particle.lifetime -= dt
        self._needs_vertex_update = True

    def compute_vertices(self) -> List[Vertex]:
        """Rebuild and return four vertices per particle, faded by remaining life."""
        size = self._texture_size
        half = size / 2.0
        full_life = _TABLE[self._type].lifetime
        vertices: List[Vertex] = []
        for particle in self._particles:
            x, y = particle.position
            ratio = particle.lifetime / full_life
            color = (*particle.color, int(255.0 * max(ratio, 0.0)))
            corners = (
                (Vector(x - half.x, y - half.y), Vector(0.0, 0.0)),
                (Vector(x + half.x, y - half.y), Vector(size.x, 0.0)),
                (Vector(x + half.x, y + half.y), Vector(size.x, size.y)),
                (Vector(x - half.x, y + half.y), Vector(0.0, size.y)),
            )
            vertices.extend(Vertex(pos, tex, color) for pos, tex in corners)
        self._vertices = vertices
        self._needs_vertex_update = False
        return list(vertices)

    def _draw_current(self, target: Any, transform: Transform) -> None:
        if self._needs_vertex_update:
            self.compute_vertices()
        target.draw_particles(self._type, list(self._vertices), transform)


class EmitterNode(SceneNode):
    """Emits particles at its world position into the matching particle system."""

    def __init__(self, particle_type: ParticleType) -> None:
        super().__init__()
        self._accumulated_time = 0.0
        self._type = particle_type
        self._particle_system: Optional[ParticleNode] = None

    @property
    def particle_type(self) -> ParticleType:
        return self._type

    @property
    def particle_system(self) -> Optional[ParticleNode]:
        return self._particle_system

    def _update_current(self, dt: float, commands: CommandQueue) -> None:
        if self._particle_system is not None:
            self._emit_particles(dt)
            return

        def finder(container: ParticleNode, _dt: float) -> None:
            if container.particle_type == self._type:
                self._particle_system = container

        commands.push(Command(derived_action(ParticleNode, finder), Category.PARTICLE_SYSTEM))

    def _emit_particles(self, dt: float) -> None:
        interval = 1.0 / _EMISSION_RATE
        self._accumulated_time += dt
        while self._accumulated_time > interval:
            self._accumulated_time -= interval
            self._particle_system.add_particle(self.world_position())