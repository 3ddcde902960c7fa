"""Tests for particle_factory.config.types module."""

from __future__ import annotations

import pytest

from particle_factory.config.constants import (
    CELL_SIZE,
    GRID_HEIGHT,
    GRID_WIDTH,
    RESTITUTION_BOTTOM,
    RESTITUTION_TOP,
)
from particle_factory.config.types import FactoryConfig, PhysicsConfig, RunConfig


class TestPhysicsConfig:
    def test_default_config(self) -> None:
        config = PhysicsConfig()
        assert config.gravity == 0.08
        assert config.drag == 0.98
        assert config.conveyor_force == 1.2

    def test_floor_damps_harder_than_ceiling_by_default(self) -> None:
        config = PhysicsConfig()
        assert config.restitution_bottom == RESTITUTION_BOTTOM
        assert config.restitution_bottom < config.restitution_top == RESTITUTION_TOP

    def test_restitutions_are_independent(self) -> None:
        config = PhysicsConfig(restitution_left=0.1, restitution_right=0.9)
        assert config.restitution_left == 0.1
        assert config.restitution_right == 0.9
        assert config.restitution_top == RESTITUTION_TOP

    def test_invalid_drag(self) -> None:
        with pytest.raises(ValueError, match="drag must be in"):
            PhysicsConfig(drag=1.5)

    def test_invalid_restitution(self) -> None:
        with pytest.raises(ValueError, match="restitution_bottom must be in"):
            PhysicsConfig(restitution_bottom=-0.1)

    def test_invalid_conveyor_force(self) -> None:
        with pytest.raises(ValueError, match="conveyor_force must be >= 0"):
            PhysicsConfig(conveyor_force=-1.0)

    def test_invalid_radius(self) -> None:
        with pytest.raises(ValueError, match="particle_radius must be >= 0"):
            PhysicsConfig(particle_radius=-1.0)


class TestFactoryConfig:
    def test_default_config(self) -> None:
        config = FactoryConfig()
        assert config.grid_width == GRID_WIDTH
        assert config.grid_height == GRID_HEIGHT
        assert config.max_particles == 200
        assert config.spawn_interval == 30

    def test_field_size(self) -> None:
        config = FactoryConfig()
        assert config.width == GRID_WIDTH * CELL_SIZE == 500.0
        assert config.height == GRID_HEIGHT * CELL_SIZE == 400.0

    def test_invalid_grid_dimensions(self) -> None:
        with pytest.raises(ValueError, match="grid dimensions must be >= 1"):
            FactoryConfig(grid_width=0)

    def test_invalid_cell_size(self) -> None:
        with pytest.raises(ValueError, match="cell_size must be > 0"):
            FactoryConfig(cell_size=0.0)

    def test_invalid_spawn_interval(self) -> None:
        with pytest.raises(ValueError, match="spawn_interval must be >= 1"):
            FactoryConfig(spawn_interval=0)

    def test_invalid_max_particles(self) -> None:
        with pytest.raises(ValueError, match="max_particles must be >= 0"):
            FactoryConfig(max_particles=-1)

    def test_invalid_jitter(self) -> None:
        with pytest.raises(ValueError, match="spawn_jitter must be >= 0"):
            FactoryConfig(spawn_jitter=-0.1)

    def test_particle_must_fit_in_field(self) -> None:
        with pytest.raises(ValueError, match="particle diameter cannot exceed"):
            FactoryConfig(grid_width=1, cell_size=10.0, physics=PhysicsConfig(particle_radius=6.0))


class TestRunConfig:
    def test_default_config(self) -> None:
        config = RunConfig()
        assert config.seed == 0
        assert config.log_particles is False

    def test_invalid_max_ticks(self) -> None:
        with pytest.raises(ValueError, match="max_ticks must be >= 1"):
            RunConfig(max_ticks=0)
