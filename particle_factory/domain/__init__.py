"""Domain layer: particles, machines, device effects and levels."""

from particle_factory.domain.effects import MachineEffect, apply_machine_effect
from particle_factory.domain.levels import (
    LEVELS,
    AvailableMachine,
    Level,
    LevelGoal,
    LevelRegistry,
    MachinePlacement,
)
from particle_factory.domain.machines import (
    CONVEYOR_DIRECTION,
    SPAWNED_TYPE,
    Cell,
    Machine,
    MachineGrid,
    MachineType,
)
from particle_factory.domain.particles import (
    PARTICLE_DENSITY,
    REFINED_FORM,
    Particle,
    ParticleRegistry,
    ParticleType,
    empty_tally,
)

__all__ = [
    "AvailableMachine",
    "CONVEYOR_DIRECTION",
    "Cell",
    "LEVELS",
    "Level",
    "LevelGoal",
    "LevelRegistry",
    "Machine",
    "MachineEffect",
    "MachineGrid",
    "MachinePlacement",
    "MachineType",
    "PARTICLE_DENSITY",
    "Particle",
    "ParticleRegistry",
    "ParticleType",
    "REFINED_FORM",
    "SPAWNED_TYPE",
    "apply_machine_effect",
    "empty_tally",
]
