"""Default tuning values for the particle factory.

These are the numbers the built-in levels were balanced against. The config
dataclasses take them as defaults; nothing else should repeat them inline.
"""

from __future__ import annotations

GRID_WIDTH = 20
"""Default grid width in cells."""

GRID_HEIGHT = 16
"""Default grid height in cells."""

CELL_SIZE = 25.0
"""Edge length of one grid cell in world units."""

MAX_PARTICLES = 200
"""Hard cap on live particles; spawning is suppressed once reached."""

SPAWN_INTERVAL = 30
"""Number of frames between spawner activations."""

GRAVITY = 0.08
"""Vertical acceleration per tick for a particle of density 1."""

DRAG = 0.98
"""Multiplicative velocity damping applied every tick."""

CONVEYOR_FORCE = 1.2
"""Velocity impulse a conveyor adds per tick along its direction."""

PARTICLE_RADIUS = 6.0
"""Particle radius used for boundary clamping."""

SPAWN_JITTER = 0.25
"""Half-width of the uniform band for a fresh particle's horizontal velocity."""

RESTITUTION_LEFT = 0.5
"""Velocity retained (and inverted) on contact with the left wall."""

RESTITUTION_RIGHT = 0.5
"""Velocity retained (and inverted) on contact with the right wall."""

RESTITUTION_TOP = 0.5
"""Velocity retained (and inverted) on contact with the ceiling."""

RESTITUTION_BOTTOM = 0.3
"""Velocity retained (and inverted) on contact with the floor."""

UNLIMITED = -1
"""Placement budget sentinel for machine types without a count limit."""

FLUSH_THRESHOLD = 8_192
"""Flush tick-log rows to Parquet once this in-memory row count is reached."""

DEFAULT_MAX_TICKS = 3_000
"""Default tick budget for a headless level run."""
