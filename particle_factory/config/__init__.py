"""Configuration layer: constants and typed config dataclasses."""

from particle_factory.config.constants import (
    CELL_SIZE,
    CONVEYOR_FORCE,
    DEFAULT_MAX_TICKS,
    DRAG,
    FLUSH_THRESHOLD,
    GRAVITY,
    GRID_HEIGHT,
    GRID_WIDTH,
    MAX_PARTICLES,
    PARTICLE_RADIUS,
    RESTITUTION_BOTTOM,
    RESTITUTION_LEFT,
    RESTITUTION_RIGHT,
    RESTITUTION_TOP,
    SPAWN_INTERVAL,
    SPAWN_JITTER,
    UNLIMITED,
)
from particle_factory.config.types import FactoryConfig, PhysicsConfig, RunConfig

__all__ = [
    "CELL_SIZE",
    "CONVEYOR_FORCE",
    "DEFAULT_MAX_TICKS",
    "DRAG",
    "FLUSH_THRESHOLD",
    "FactoryConfig",
    "GRAVITY",
    "GRID_HEIGHT",
    "GRID_WIDTH",
    "MAX_PARTICLES",
    "PARTICLE_RADIUS",
    "PhysicsConfig",
    "RESTITUTION_BOTTOM",
    "RESTITUTION_LEFT",
    "RESTITUTION_RIGHT",
    "RESTITUTION_TOP",
    "RunConfig",
    "SPAWN_INTERVAL",
    "SPAWN_JITTER",
    "UNLIMITED",
]
