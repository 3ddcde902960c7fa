"""Configuration dataclasses for the particle factory simulation.

All frozen dataclasses that parameterise physics, the factory field and
headless runs live here. Validation happens in ``__post_init__`` so an
invalid configuration can never reach the simulation core.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from particle_factory.config.constants import (
    CELL_SIZE,
    CONVEYOR_FORCE,
    DEFAULT_MAX_TICKS,
    DRAG,
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
)

__all__ = [
    "FactoryConfig",
    "PhysicsConfig",
    "RunConfig",
]


@dataclass(frozen=True)
class PhysicsConfig:
    """Integration and boundary parameters for the physics stepper."""

    gravity: float = GRAVITY
    drag: float = DRAG
    conveyor_force: float = CONVEYOR_FORCE
    particle_radius: float = PARTICLE_RADIUS
    restitution_left: float = RESTITUTION_LEFT
    restitution_right: float = RESTITUTION_RIGHT
    restitution_top: float = RESTITUTION_TOP
    restitution_bottom: float = RESTITUTION_BOTTOM
    """The floor damps harder than the other walls by default."""

    def __post_init__(self) -> None:
        if not 0.0 <= self.drag <= 1.0:
            raise ValueError("drag must be in [0.0, 1.0]")
        if self.conveyor_force < 0.0:
            raise ValueError("conveyor_force must be >= 0")
        if self.particle_radius < 0.0:
            raise ValueError("particle_radius must be >= 0")
        for side in ("left", "right", "top", "bottom"):
            value = getattr(self, f"restitution_{side}")
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"restitution_{side} must be in [0.0, 1.0]")


@dataclass(frozen=True)
class FactoryConfig:
    """Field geometry, spawning and physics settings for one session."""

    grid_width: int = GRID_WIDTH
    grid_height: int = GRID_HEIGHT
    cell_size: float = CELL_SIZE
    max_particles: int = MAX_PARTICLES
    spawn_interval: int = SPAWN_INTERVAL
    spawn_jitter: float = SPAWN_JITTER
    """Spawned particles get vx uniform in [-spawn_jitter, spawn_jitter)."""
    physics: PhysicsConfig = field(default_factory=PhysicsConfig)

    def __post_init__(self) -> None:
        if self.grid_width < 1 or self.grid_height < 1:
            raise ValueError("grid dimensions must be >= 1")
        if self.cell_size <= 0.0:
            raise ValueError("cell_size must be > 0")
        if self.max_particles < 0:
            raise ValueError("max_particles must be >= 0")
        if self.spawn_interval < 1:
            raise ValueError("spawn_interval must be >= 1")
        if self.spawn_jitter < 0.0:
            raise ValueError("spawn_jitter must be >= 0")
        diameter = 2 * self.physics.particle_radius
        if diameter > self.width or diameter > self.height:
            raise ValueError("particle diameter cannot exceed field dimensions")

    @property
    def width(self) -> float:
        """Field width in world units."""
        return self.grid_width * self.cell_size

    @property
    def height(self) -> float:
        """Field height in world units."""
        return self.grid_height * self.cell_size


@dataclass(frozen=True)
class RunConfig:
    """Headless level-run settings."""

    max_ticks: int = DEFAULT_MAX_TICKS
    seed: int = 0
    log_particles: bool = False
    """Also write one row per particle per tick (large)."""

    def __post_init__(self) -> None:
        if self.max_ticks < 1:
            raise ValueError("max_ticks must be >= 1")
