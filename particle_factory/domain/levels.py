"""Static level catalog and goal evaluation.

Level data is frozen after definition. Validation in ``__post_init__`` is the
only place corrupt level content is reported; the session never sees a level
that failed it.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from particle_factory.config.constants import UNLIMITED
from particle_factory.domain.machines import Cell, MachineType
from particle_factory.domain.particles import ParticleType


@dataclass(frozen=True)
class LevelGoal:
    """Collect at least ``amount`` particles of ``particle_type``."""

    particle_type: ParticleType
    amount: int


@dataclass(frozen=True)
class MachinePlacement:
    """A machine type at a cell, without identity (layout entry)."""

    machine_type: MachineType
    x: int
    y: int

    @property
    def cell(self) -> Cell:
        return (self.x, self.y)


@dataclass(frozen=True)
class AvailableMachine:
    """A placeable machine type and how many the player may place (UNLIMITED = -1)."""

    machine_type: MachineType
    count: int

    @property
    def unlimited(self) -> bool:
        return self.count == UNLIMITED


@dataclass(frozen=True)
class Level:
    """One puzzle: goals, fixed layout and placement catalog."""

    level_id: int
    name: str
    hint: str
    goals: tuple[LevelGoal, ...]
    fixed_machines: tuple[MachinePlacement, ...] = ()
    available_machines: tuple[AvailableMachine, ...] = ()

    def __post_init__(self) -> None:
        for goal in self.goals:
            if goal.amount < 1:
                raise ValueError(f"level {self.level_id}: goal amounts must be >= 1")
        goal_types = [goal.particle_type for goal in self.goals]
        if len(set(goal_types)) != len(goal_types):
            raise ValueError(f"level {self.level_id}: duplicate goal types")
        cells = [placement.cell for placement in self.fixed_machines]
        if len(set(cells)) != len(cells):
            raise ValueError(f"level {self.level_id}: fixed machines share a cell")
        for entry in self.available_machines:
            if entry.count < UNLIMITED:
                raise ValueError(
                    f"level {self.level_id}: budget for {entry.machine_type.value} must be >= -1"
                )
        catalog_types = [entry.machine_type for entry in self.available_machines]
        if len(set(catalog_types)) != len(catalog_types):
            raise ValueError(f"level {self.level_id}: duplicate catalog entries")

    def budget_for(self, machine_type: MachineType) -> int | None:
        """Return the budget for *machine_type*, or None if it is not placeable here."""
        for entry in self.available_machines:
            if entry.machine_type is machine_type:
                return entry.count
        return None

    def remaining(self, machine_type: MachineType, placed: int) -> int | None:
        """Remaining placements; None means unlimited, 0 also covers non-catalog types."""
        budget = self.budget_for(machine_type)
        if budget is None:
            return 0
        if budget == UNLIMITED:
            return None
        return max(budget - placed, 0)

    def has_budget(self, machine_type: MachineType, placed: int) -> bool:
        remaining = self.remaining(machine_type, placed)
        return remaining is None or remaining > 0

    def goals_met(self, collected: Mapping[ParticleType, int]) -> bool:
        """True iff every goal's required amount has been collected."""
        return all(collected.get(goal.particle_type, 0) >= goal.amount for goal in self.goals)


class LevelRegistry:
    """Index-addressed, read-only level catalog."""

    def __init__(self, levels: Sequence[Level]) -> None:
        self._levels: tuple[Level, ...] = tuple(levels)

    def __len__(self) -> int:
        return len(self._levels)

    def __iter__(self) -> Iterator[Level]:
        return iter(self._levels)

    def get(self, index: int) -> Level | None:
        """Return the level at *index*, or None outside ``[0, len)``."""
        if 0 <= index < len(self._levels):
            return self._levels[index]
        return None

    def has_next(self, index: int) -> bool:
        return 0 <= index < len(self._levels) - 1

    def has_previous(self, index: int) -> bool:
        return 0 < index < len(self._levels)


LEVELS = LevelRegistry(
    [
        Level(
            level_id=1,
            name="Introduction",
            hint="Steer the sand into the collector with conveyors",
            goals=(LevelGoal(ParticleType.SAND, 10),),
            fixed_machines=(
                MachinePlacement(MachineType.SPAWNER_SAND, 4, 0),
                MachinePlacement(MachineType.COLLECTOR, 12, 11),
            ),
            available_machines=(
                AvailableMachine(MachineType.CONVEYOR_RIGHT, UNLIMITED),
                AvailableMachine(MachineType.CONVEYOR_DOWN, UNLIMITED),
            ),
        ),
        Level(
            level_id=2,
            name="Transformation",
            hint="Turn sand into glass by passing it over a heater",
            goals=(LevelGoal(ParticleType.GLASS, 10),),
            fixed_machines=(
                MachinePlacement(MachineType.SPAWNER_SAND, 2, 0),
                MachinePlacement(MachineType.COLLECTOR, 13, 11),
            ),
            available_machines=(
                AvailableMachine(MachineType.CONVEYOR_RIGHT, UNLIMITED),
                AvailableMachine(MachineType.CONVEYOR_DOWN, UNLIMITED),
                AvailableMachine(MachineType.CONVEYOR_LEFT, UNLIMITED),
                AvailableMachine(MachineType.HEATER, 1),
            ),
        ),
        Level(
            level_id=3,
            name="Two Streams",
            hint="Collect glass and steam at the same time",
            goals=(
                LevelGoal(ParticleType.GLASS, 8),
                LevelGoal(ParticleType.STEAM, 8),
            ),
            fixed_machines=(
                MachinePlacement(MachineType.SPAWNER_SAND, 2, 0),
                MachinePlacement(MachineType.SPAWNER_WATER, 8, 0),
                MachinePlacement(MachineType.COLLECTOR, 13, 11),
            ),
            available_machines=(
                AvailableMachine(MachineType.CONVEYOR_RIGHT, UNLIMITED),
                AvailableMachine(MachineType.CONVEYOR_DOWN, UNLIMITED),
                AvailableMachine(MachineType.CONVEYOR_LEFT, UNLIMITED),
                AvailableMachine(MachineType.CONVEYOR_UP, 4),
                AvailableMachine(MachineType.HEATER, 2),
            ),
        ),
    ]
)
"""Built-in levels in play order."""
