"""Machine types and the fixed-size machine grid.

The grid maps each occupied cell to exactly one machine, so the
one-machine-per-cell invariant holds by construction.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TypeAlias

from particle_factory.domain.particles import ParticleType

Cell: TypeAlias = tuple[int, int]
"""Integer (x, y) grid coordinates; x grows right, y grows down."""


class MachineType(Enum):
    """Closed set of devices that can occupy a cell."""

    SPAWNER_SAND = "spawner_sand"
    SPAWNER_WATER = "spawner_water"
    CONVEYOR_UP = "conveyor_up"
    CONVEYOR_DOWN = "conveyor_down"
    CONVEYOR_LEFT = "conveyor_left"
    CONVEYOR_RIGHT = "conveyor_right"
    HEATER = "heater"
    COLLECTOR = "collector"


SPAWNED_TYPE: dict[MachineType, ParticleType] = {
    MachineType.SPAWNER_SAND: ParticleType.SAND,
    MachineType.SPAWNER_WATER: ParticleType.WATER,
}
"""Particle type emitted by each spawner."""

CONVEYOR_DIRECTION: dict[MachineType, tuple[int, int]] = {
    MachineType.CONVEYOR_UP: (0, -1),
    MachineType.CONVEYOR_DOWN: (0, 1),
    MachineType.CONVEYOR_LEFT: (-1, 0),
    MachineType.CONVEYOR_RIGHT: (1, 0),
}
"""Unit push direction of each conveyor in screen coordinates."""


@dataclass(frozen=True)
class Machine:
    """A device occupying one grid cell."""

    machine_id: str
    machine_type: MachineType
    x: int
    y: int
    fixed: bool = False

    @property
    def cell(self) -> Cell:
        return (self.x, self.y)


@dataclass
class MachineGrid:
    """Cell -> machine lookup for a ``width`` x ``height`` field."""

    width: int
    height: int
    cells: dict[Cell, Machine] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Machine]:
        return iter(self.cells.values())

    def in_bounds(self, cell: Cell) -> bool:
        x, y = cell
        return 0 <= x < self.width and 0 <= y < self.height

    def machine_at(self, cell: Cell) -> Machine | None:
        return self.cells.get(cell)

    def is_occupied(self, cell: Cell) -> bool:
        return cell in self.cells

    def can_place(self, cell: Cell) -> bool:
        """Return True when *cell* is inside the grid and empty."""
        return self.in_bounds(cell) and not self.is_occupied(cell)

    def add(self, machine: Machine) -> bool:
        """Insert *machine* at its cell; returns False and changes nothing if the cell is taken."""
        if not self.can_place(machine.cell):
            return False
        self.cells[machine.cell] = machine
        return True

    def remove(self, cell: Cell) -> Machine | None:
        """Remove and return the non-fixed machine at *cell*, or None if nothing was removed."""
        machine = self.cells.get(cell)
        if machine is None or machine.fixed:
            return None
        del self.cells[cell]
        return machine

    def spawners(self) -> list[Machine]:
        """Return spawner machines in insertion order."""
        return [m for m in self.cells.values() if m.machine_type in SPAWNED_TYPE]

    def copy(self) -> MachineGrid:
        return MachineGrid(width=self.width, height=self.height, cells=dict(self.cells))
