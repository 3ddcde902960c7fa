"""One-tick particle integration.

Per particle: gravity, drag, the effect of the machine under it, a single
explicit position step, then wall clamping with per-side restitution.
Collected particles are purged after the whole collection has been processed.
"""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from particle_factory.config.types import FactoryConfig, PhysicsConfig
from particle_factory.domain.effects import apply_machine_effect
from particle_factory.domain.machines import Cell, MachineGrid
from particle_factory.domain.particles import PARTICLE_DENSITY, Particle, ParticleType


@dataclass
class StepResult:
    """Stepper output: the next canonical particle list and this tick's collections."""

    particles: list[Particle]
    collected: Counter[ParticleType] = field(default_factory=Counter)


def cell_of(x: float, y: float, cell_size: float) -> Cell:
    """Return the grid cell containing world position (x, y)."""
    return (math.floor(x / cell_size), math.floor(y / cell_size))


def _apply_boundaries(
    particle: Particle, width: float, height: float, physics: PhysicsConfig
) -> Particle:
    """Clamp to the field and bounce off whichever walls were crossed."""
    radius = physics.particle_radius
    x, y, vx, vy = particle.x, particle.y, particle.vx, particle.vy
    min_x, max_x = radius, width - radius
    min_y, max_y = radius, height - radius

    if x < min_x:
        x = min_x
        vx *= -physics.restitution_left
    if x > max_x:
        x = max_x
        vx *= -physics.restitution_right
    if y < min_y:
        y = min_y
        vy *= -physics.restitution_top
    if y > max_y:
        y = max_y
        vy *= -physics.restitution_bottom
    return replace(particle, x=x, y=y, vx=vx, vy=vy)


def step_particles(
    particles: Sequence[Particle], grid: MachineGrid, config: FactoryConfig
) -> StepResult:
    """Advance every particle by one tick.

    *particles* is not modified; the returned list is a new collection that
    the caller installs as the canonical one.
    """
    physics = config.physics
    width, height = config.width, config.height
    survivors: list[Particle] = []
    collected: Counter[ParticleType] = Counter()

    for particle in particles:
        vy = particle.vy + PARTICLE_DENSITY[particle.particle_type] * physics.gravity
        vx = particle.vx * physics.drag
        vy *= physics.drag
        moved = replace(particle, vx=vx, vy=vy)

        removed = False
        machine = grid.machine_at(cell_of(moved.x, moved.y, config.cell_size))
        if machine is not None:
            effect = apply_machine_effect(machine.machine_type, moved, physics.conveyor_force)
            moved = effect.particle
            removed = effect.removed
            if effect.credited is not None:
                collected[effect.credited] += 1

        moved = replace(moved, x=moved.x + moved.vx, y=moved.y + moved.vy)
        moved = _apply_boundaries(moved, width, height, physics)

        if not removed:
            survivors.append(moved)

    return StepResult(particles=survivors, collected=collected)
