"""Per-cell device effects.

Every device behaviour lives in :func:`apply_machine_effect`, a pure function
of the machine type and the particle sitting on it. The stepper only decides
*which* machine a particle touches; it never branches on machine type itself.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import assert_never

from particle_factory.domain.machines import CONVEYOR_DIRECTION, MachineType
from particle_factory.domain.particles import REFINED_FORM, Particle, ParticleType


@dataclass(frozen=True)
class MachineEffect:
    """Outcome of one particle touching one machine."""

    particle: Particle
    removed: bool = False
    credited: ParticleType | None = None


def apply_machine_effect(
    machine_type: MachineType, particle: Particle, conveyor_force: float
) -> MachineEffect:
    """Return the particle after *machine_type* acts on it.

    Conveyors add an impulse along their direction, heaters refine raw
    material in place, collectors remove the particle and credit its type,
    and spawners leave passing particles alone.
    """
    if (
        machine_type is MachineType.CONVEYOR_UP
        or machine_type is MachineType.CONVEYOR_DOWN
        or machine_type is MachineType.CONVEYOR_LEFT
        or machine_type is MachineType.CONVEYOR_RIGHT
    ):
        dx, dy = CONVEYOR_DIRECTION[machine_type]
        pushed = replace(
            particle,
            vx=particle.vx + dx * conveyor_force,
            vy=particle.vy + dy * conveyor_force,
        )
        return MachineEffect(particle=pushed)
    elif machine_type is MachineType.HEATER:
        refined = REFINED_FORM.get(particle.particle_type)
        if refined is None:
            return MachineEffect(particle=particle)
        return MachineEffect(particle=replace(particle, particle_type=refined))
    elif machine_type is MachineType.COLLECTOR:
        return MachineEffect(particle=particle, removed=True, credited=particle.particle_type)
    elif machine_type is MachineType.SPAWNER_SAND or machine_type is MachineType.SPAWNER_WATER:
        return MachineEffect(particle=particle)
    else:
        assert_never(machine_type)
