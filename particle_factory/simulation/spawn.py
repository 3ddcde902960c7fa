"""Rate-limited particle creation from spawner machines."""

from __future__ import annotations

from random import Random

from particle_factory.config.types import FactoryConfig
from particle_factory.domain.machines import SPAWNED_TYPE, MachineGrid
from particle_factory.domain.particles import Particle, ParticleRegistry


def spawn_particles(
    registry: ParticleRegistry,
    grid: MachineGrid,
    frame_counter: int,
    config: FactoryConfig,
    rng: Random,
) -> list[Particle]:
    """Emit one particle per spawner on spawn frames and return the new particles.

    Nothing happens unless ``frame_counter % spawn_interval == 0``. A batch that
    would take the registry over ``max_particles`` is skipped whole; skipped
    batches are never made up later.
    """
    if frame_counter % config.spawn_interval != 0:
        return []
    spawners = grid.spawners()
    if not spawners or len(registry) + len(spawners) > config.max_particles:
        return []

    half_cell = config.cell_size / 2
    spawned: list[Particle] = []
    for spawner in spawners:
        spawned.append(
            registry.create(
                SPAWNED_TYPE[spawner.machine_type],
                x=spawner.x * config.cell_size + half_cell,
                y=spawner.y * config.cell_size + half_cell,
                vx=rng.uniform(-config.spawn_jitter, config.spawn_jitter),
                vy=0.0,
            )
        )
    return spawned
