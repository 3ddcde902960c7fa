"""Tests for particle_factory.domain.effects module."""

from __future__ import annotations

import pytest

from particle_factory.domain.effects import apply_machine_effect
from particle_factory.domain.machines import MachineType
from particle_factory.domain.particles import Particle, ParticleType

FORCE = 1.2


def _particle(particle_type: ParticleType = ParticleType.SAND) -> Particle:
    return Particle(particle_id=1, particle_type=particle_type, x=10.0, y=20.0, vx=0.5, vy=-0.5)


class TestConveyors:
    @pytest.mark.parametrize(
        ("machine_type", "expected_v"),
        [
            (MachineType.CONVEYOR_UP, (0.5, -0.5 - FORCE)),
            (MachineType.CONVEYOR_DOWN, (0.5, -0.5 + FORCE)),
            (MachineType.CONVEYOR_LEFT, (0.5 - FORCE, -0.5)),
            (MachineType.CONVEYOR_RIGHT, (0.5 + FORCE, -0.5)),
        ],
    )
    def test_conveyor_adds_impulse(
        self, machine_type: MachineType, expected_v: tuple[float, float]
    ) -> None:
        effect = apply_machine_effect(machine_type, _particle(), FORCE)
        assert (effect.particle.vx, effect.particle.vy) == pytest.approx(expected_v)
        assert not effect.removed
        assert effect.credited is None

    def test_conveyor_does_not_move_particle(self) -> None:
        effect = apply_machine_effect(MachineType.CONVEYOR_RIGHT, _particle(), FORCE)
        assert (effect.particle.x, effect.particle.y) == (10.0, 20.0)


class TestHeater:
    def test_sand_becomes_glass(self) -> None:
        effect = apply_machine_effect(MachineType.HEATER, _particle(ParticleType.SAND), FORCE)
        assert effect.particle.particle_type is ParticleType.GLASS
        assert effect.particle.particle_id == 1
        assert (effect.particle.x, effect.particle.y) == (10.0, 20.0)
        assert not effect.removed

    def test_water_becomes_steam(self) -> None:
        effect = apply_machine_effect(MachineType.HEATER, _particle(ParticleType.WATER), FORCE)
        assert effect.particle.particle_type is ParticleType.STEAM

    @pytest.mark.parametrize("particle_type", [ParticleType.GLASS, ParticleType.STEAM])
    def test_refined_types_are_unchanged(self, particle_type: ParticleType) -> None:
        particle = _particle(particle_type)
        effect = apply_machine_effect(MachineType.HEATER, particle, FORCE)
        assert effect.particle == particle


class TestCollectorAndSpawners:
    def test_collector_removes_and_credits(self) -> None:
        effect = apply_machine_effect(MachineType.COLLECTOR, _particle(ParticleType.STEAM), FORCE)
        assert effect.removed
        assert effect.credited is ParticleType.STEAM

    @pytest.mark.parametrize(
        "machine_type", [MachineType.SPAWNER_SAND, MachineType.SPAWNER_WATER]
    )
    def test_spawners_leave_particles_alone(self, machine_type: MachineType) -> None:
        particle = _particle()
        effect = apply_machine_effect(machine_type, particle, FORCE)
        assert effect.particle == particle
        assert not effect.removed
        assert effect.credited is None

    def test_every_machine_type_is_handled(self) -> None:
        for machine_type in MachineType:
            apply_machine_effect(machine_type, _particle(), FORCE)
