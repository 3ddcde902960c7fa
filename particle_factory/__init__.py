"""Grid-based particle-flow factory puzzle engine."""

from particle_factory.config.types import FactoryConfig, PhysicsConfig, RunConfig
from particle_factory.domain.levels import LEVELS, Level, LevelRegistry
from particle_factory.domain.machines import Machine, MachineType
from particle_factory.domain.particles import Particle, ParticleType
from particle_factory.simulation.session import (
    FactorySession,
    SessionState,
    SessionStatus,
    is_complete,
)

__all__ = [
    "FactoryConfig",
    "FactorySession",
    "LEVELS",
    "Level",
    "LevelRegistry",
    "Machine",
    "MachineType",
    "Particle",
    "ParticleType",
    "PhysicsConfig",
    "RunConfig",
    "SessionState",
    "SessionStatus",
    "is_complete",
]
