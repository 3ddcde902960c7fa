"""Particle types and the session-owned particle registry.

Particles are immutable values. The physics stepper never edits one in place;
it builds a replacement and hands the registry a whole new collection at the
end of every tick.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum


class ParticleType(Enum):
    """Closed set of resource kinds a particle can carry."""

    SAND = "sand"
    WATER = "water"
    GLASS = "glass"
    STEAM = "steam"


PARTICLE_DENSITY: dict[ParticleType, float] = {
    ParticleType.SAND: 3.0,
    ParticleType.WATER: 1.0,
    ParticleType.GLASS: 2.0,
    ParticleType.STEAM: -1.0,
}
"""Gravity multiplier per type. Negative density means the particle rises."""

REFINED_FORM: dict[ParticleType, ParticleType] = {
    ParticleType.SAND: ParticleType.GLASS,
    ParticleType.WATER: ParticleType.STEAM,
}
"""Raw material -> product mapping applied by a heater."""


@dataclass(frozen=True)
class Particle:
    """A single mobile resource unit."""

    particle_id: int
    particle_type: ParticleType
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0


def empty_tally() -> dict[ParticleType, int]:
    """Return a zeroed per-type counter covering every particle type."""
    return {particle_type: 0 for particle_type in ParticleType}


@dataclass
class ParticleRegistry:
    """Live particle collection plus its identifier counter.

    The counter belongs to the registry (and therefore to one session), so two
    sessions never hand out overlapping identifiers.
    """

    particles: list[Particle] = field(default_factory=list)
    next_id: int = 0

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)

    def create(
        self,
        particle_type: ParticleType,
        x: float,
        y: float,
        vx: float = 0.0,
        vy: float = 0.0,
    ) -> Particle:
        """Mint a particle with a fresh identifier and add it to the collection."""
        particle = Particle(
            particle_id=self.next_id,
            particle_type=particle_type,
            x=x,
            y=y,
            vx=vx,
            vy=vy,
        )
        self.next_id += 1
        self.particles.append(particle)
        return particle

    def replace_all(self, particles: Iterable[Particle]) -> None:
        """Install the stepper's output as the canonical collection."""
        self.particles = list(particles)

    def count_by_type(self) -> dict[ParticleType, int]:
        counts = empty_tally()
        for particle in self.particles:
            counts[particle.particle_type] += 1
        return counts
