"""Level-attempt state machine.

A :class:`FactorySession` exclusively owns the particle registry, machine
grid, collected tally and placement counters for the level being played.
Every public operation returns an immutable :class:`SessionState` snapshot
that shares nothing mutable with the session, so a render surface can keep a
snapshot around without seeing later ticks.

States::

    Idle --start--> Running --pause--> Idle
    Running --(goals met during tick)--> Complete
    any --reset / load_level / next_level / previous_level--> Idle (fresh)

Illegal requests (placing while running, over budget, on an occupied or
out-of-range cell, removing fixed machines, navigating past the catalog)
are silent no-ops.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from random import Random
from types import MappingProxyType

from particle_factory.config.types import FactoryConfig
from particle_factory.domain.levels import LEVELS, Level, LevelRegistry
from particle_factory.domain.machines import Cell, Machine, MachineGrid, MachineType
from particle_factory.domain.particles import (
    Particle,
    ParticleRegistry,
    ParticleType,
    empty_tally,
)
from particle_factory.simulation.physics import step_particles
from particle_factory.simulation.spawn import spawn_particles

logger = logging.getLogger(__name__)


class SessionStatus(Enum):
    """Coarse session state derived from the running/complete flags."""

    IDLE = "idle"
    RUNNING = "running"
    COMPLETE = "complete"
    NO_LEVEL = "no_level"


@dataclass(frozen=True)
class SessionState:
    """Read-only snapshot of a session after one operation."""

    particles: tuple[Particle, ...]
    machines: tuple[Machine, ...]
    collected: Mapping[ParticleType, int]
    selected_machine: MachineType | None
    is_running: bool
    is_complete: bool
    level_index: int | None
    level: Level | None
    placed_machines: Mapping[MachineType, int]
    frame: int = 0

    @property
    def status(self) -> SessionStatus:
        if self.level is None:
            return SessionStatus.NO_LEVEL
        if self.is_complete:
            return SessionStatus.COMPLETE
        if self.is_running:
            return SessionStatus.RUNNING
        return SessionStatus.IDLE

    def machine_at(self, cell: Cell) -> Machine | None:
        for machine in self.machines:
            if machine.cell == cell:
                return machine
        return None


def is_complete(state: SessionState) -> bool:
    """Return whether the level attempt captured in *state* has met all its goals."""
    return state.is_complete


class FactorySession:
    """Owns one level attempt and drives it one frame at a time."""

    def __init__(
        self,
        levels: LevelRegistry = LEVELS,
        config: FactoryConfig | None = None,
        rng: Random | None = None,
        level_index: int = 0,
    ) -> None:
        self.levels = levels
        self.config = config or FactoryConfig()
        self.rng = rng if rng is not None else Random()
        self.load_level(level_index)

    # ------------------------------------------------------------------
    # Level navigation
    # ------------------------------------------------------------------

    def load_level(self, index: int) -> SessionState:
        """Discard everything and start a fresh, idle attempt at level *index*.

        An out-of-range index yields the empty "no level" state instead of an
        error; callers guard navigation with :meth:`LevelRegistry.has_next`.
        """
        level = self.levels.get(index)
        self._requested_index = index
        self._level = level
        self._level_index: int | None = index if level is not None else None
        self._registry = ParticleRegistry()
        self._grid = MachineGrid(width=self.config.grid_width, height=self.config.grid_height)
        self._collected = empty_tally()
        self._placed: dict[MachineType, int] = {}
        self._running = False
        self._complete = False
        self._frame = 0
        self._next_machine_id = 0
        self._selected: MachineType | None = None

        if level is None:
            logger.debug("No level at index %d; using empty state", index)
            return self.state()

        for i, placement in enumerate(level.fixed_machines):
            machine = Machine(
                machine_id=f"fixed-{i}",
                machine_type=placement.machine_type,
                x=placement.x,
                y=placement.y,
                fixed=True,
            )
            if not self._grid.add(machine):
                logger.warning(
                    "Level %d: fixed %s at %s lies outside the grid; skipped",
                    level.level_id,
                    placement.machine_type.value,
                    placement.cell,
                )
        if level.available_machines:
            self._selected = level.available_machines[0].machine_type
        logger.info("Loaded level %d (%s)", level.level_id, level.name)
        return self.state()

    def reset(self) -> SessionState:
        """Reload the current level, discarding all progress."""
        return self.load_level(self._requested_index)

    def next_level(self) -> SessionState:
        if self._level_index is None or not self.levels.has_next(self._level_index):
            return self.state()
        return self.load_level(self._level_index + 1)

    def previous_level(self) -> SessionState:
        if self._level_index is None or not self.levels.has_previous(self._level_index):
            return self.state()
        return self.load_level(self._level_index - 1)

    # ------------------------------------------------------------------
    # Run control
    # ------------------------------------------------------------------

    def start(self) -> SessionState:
        if self._level is None or self._complete or self._running:
            logger.debug("start ignored (level=%s complete=%s)", self._level_index, self._complete)
            return self.state()
        self._running = True
        logger.debug("Session running at frame %d", self._frame)
        return self.state()

    def pause(self) -> SessionState:
        """Stop ticking; particles, layout and tally are kept as they are."""
        if self._running:
            self._running = False
            logger.debug("Session paused at frame %d", self._frame)
        return self.state()

    def toggle_running(self) -> SessionState:
        return self.pause() if self._running else self.start()

    def tick(self, frame_counter: int) -> SessionState:
        """Advance the simulation by one frame if running; otherwise a no-op."""
        if not self._running or self._level is None:
            return self.state()

        self._frame = frame_counter
        spawn_particles(self._registry, self._grid, frame_counter, self.config, self.rng)
        result = step_particles(self._registry.particles, self._grid, self.config)
        self._registry.replace_all(result.particles)
        for particle_type, count in result.collected.items():
            self._collected[particle_type] += count

        if self._level.goals_met(self._collected):
            self._complete = True
            self._running = False
            logger.info("Level %d complete at frame %d", self._level.level_id, frame_counter)
        return self.state()

    def advance(self) -> SessionState:
        """Tick with the session's own frame counter, which only moves while running."""
        if not self._running:
            return self.state()
        return self.tick(self._frame + 1)

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def select_machine(self, machine_type: MachineType) -> SessionState:
        if self._level is not None and self._level.budget_for(machine_type) is not None:
            self._selected = machine_type
        return self.state()

    def remaining(self, machine_type: MachineType) -> int | None:
        """Placements left for *machine_type*; None means unlimited."""
        if self._level is None:
            return 0
        return self._level.remaining(machine_type, self._placed.get(machine_type, 0))

    def place_machine(self, cell: Cell, machine_type: MachineType | None = None) -> SessionState:
        """Place *machine_type* (default: the selected type) at *cell* if allowed."""
        chosen = machine_type if machine_type is not None else self._selected
        if self._level is None or self._running or chosen is None:
            logger.debug("place at %s rejected: session not editable", cell)
            return self.state()
        placed = self._placed.get(chosen, 0)
        if not self._level.has_budget(chosen, placed) or not self._grid.can_place(cell):
            logger.debug("place %s at %s rejected", chosen.value, cell)
            return self.state()

        machine = Machine(
            machine_id=f"placed-{self._next_machine_id}",
            machine_type=chosen,
            x=cell[0],
            y=cell[1],
            fixed=False,
        )
        self._next_machine_id += 1
        self._grid.add(machine)
        self._placed[chosen] = placed + 1
        return self.state()

    def remove_machine(self, cell: Cell) -> SessionState:
        """Remove the player-placed machine at *cell*; fixed machines stay."""
        if self._running:
            logger.debug("remove at %s rejected: session running", cell)
            return self.state()
        machine = self._grid.remove(cell)
        if machine is None:
            return self.state()
        self._placed[machine.machine_type] = max(self._placed.get(machine.machine_type, 0) - 1, 0)
        return self.state()

    def activate_cell(self, cell: Cell) -> SessionState:
        """Click semantics: remove whatever sits at *cell*, else place the selection."""
        if self._grid.is_occupied(cell):
            return self.remove_machine(cell)
        return self.place_machine(cell)

    # ------------------------------------------------------------------
    # Snapshot
    # ------------------------------------------------------------------

    def state(self) -> SessionState:
        return SessionState(
            particles=tuple(self._registry.particles),
            machines=tuple(self._grid),
            collected=MappingProxyType(dict(self._collected)),
            selected_machine=self._selected,
            is_running=self._running,
            is_complete=self._complete,
            level_index=self._level_index,
            level=self._level,
            placed_machines=MappingProxyType(dict(self._placed)),
            frame=self._frame,
        )
