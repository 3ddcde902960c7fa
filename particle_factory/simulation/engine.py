"""Headless level runner: play a layout to completion and log every tick."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from random import Random

import pyarrow.parquet as pq

from particle_factory.config.constants import FLUSH_THRESHOLD
from particle_factory.config.types import FactoryConfig, RunConfig
from particle_factory.domain.levels import LEVELS, LevelRegistry, MachinePlacement
from particle_factory.domain.particles import ParticleType
from particle_factory.io.paths import logs_dir, particle_log_path, run_summary_path, tick_log_path
from particle_factory.io.schemas import COLLECTED_COLUMNS, PARTICLE_LOG_SCHEMA, TICK_LOG_SCHEMA
from particle_factory.simulation.persistence import empty_columns, flush_columns
from particle_factory.simulation.session import FactorySession, SessionState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    """Outcome of one headless level run."""

    level_id: int
    completed: bool
    completed_at: int | None
    ticks_run: int
    collected: dict[str, int]
    placed: dict[str, int]
    rejected_placements: int
    final_state: SessionState | None = field(default=None, compare=False, repr=False)

    def to_summary(self) -> dict[str, object]:
        """JSON-ready summary (everything except the final snapshot)."""
        return {
            "level_id": self.level_id,
            "completed": self.completed,
            "completed_at": self.completed_at,
            "ticks_run": self.ticks_run,
            "collected": self.collected,
            "placed": self.placed,
            "rejected_placements": self.rejected_placements,
        }


def apply_layout(session: FactorySession, placements: Sequence[MachinePlacement]) -> int:
    """Place each machine through the session; returns how many were rejected."""
    rejected = 0
    for placement in placements:
        before = len(session.state().machines)
        after = session.place_machine(placement.cell, placement.machine_type)
        if len(after.machines) == before:
            logger.warning(
                "Placement rejected: %s at %s", placement.machine_type.value, placement.cell
            )
            rejected += 1
    return rejected


def _append_tick_row(columns: dict[str, list[object]], level_id: int, state: SessionState) -> None:
    columns["level_id"].append(level_id)
    columns["frame"].append(state.frame)
    columns["particle_count"].append(len(state.particles))
    for particle_type, name in zip(ParticleType, COLLECTED_COLUMNS, strict=True):
        columns[name].append(state.collected[particle_type])
    columns["complete"].append(state.is_complete)


def _append_particle_rows(
    columns: dict[str, list[object]], level_id: int, state: SessionState
) -> None:
    for particle in state.particles:
        columns["level_id"].append(level_id)
        columns["frame"].append(state.frame)
        columns["particle_id"].append(particle.particle_id)
        columns["particle_type"].append(particle.particle_type.value)
        columns["x"].append(particle.x)
        columns["y"].append(particle.y)
        columns["vx"].append(particle.vx)
        columns["vy"].append(particle.vy)


def run_level(
    level_index: int,
    placements: Sequence[MachinePlacement],
    out_dir: Path,
    run_config: RunConfig | None = None,
    config: FactoryConfig | None = None,
    levels: LevelRegistry = LEVELS,
) -> RunResult:
    """Load a level, apply *placements*, run until complete or out of ticks.

    Writes ``logs/tick_log.parquet`` (and ``logs/particle_log.parquet`` when
    ``run_config.log_particles`` is set) plus ``run_summary.json`` under
    *out_dir*.
    """
    level = levels.get(level_index)
    if level is None:
        raise ValueError(f"level index must be in [0, {len(levels)}), got {level_index}")
    run_cfg = run_config or RunConfig()

    session = FactorySession(
        levels=levels, config=config, rng=Random(run_cfg.seed), level_index=level_index
    )
    rejected = apply_layout(session, placements)

    out_dir = Path(out_dir)
    logs_dir(out_dir).mkdir(parents=True, exist_ok=True)
    tick_columns = empty_columns(TICK_LOG_SCHEMA)
    particle_columns = empty_columns(PARTICLE_LOG_SCHEMA)
    tick_writer: pq.ParquetWriter | None = None
    particle_writer: pq.ParquetWriter | None = None

    logger.info("Running level %d for up to %d ticks", level.level_id, run_cfg.max_ticks)
    state = session.start()
    try:
        for _ in range(run_cfg.max_ticks):
            state = session.advance()
            _append_tick_row(tick_columns, level.level_id, state)
            if run_cfg.log_particles:
                _append_particle_rows(particle_columns, level.level_id, state)
            if len(tick_columns["frame"]) >= FLUSH_THRESHOLD:
                tick_writer = flush_columns(
                    tick_columns, TICK_LOG_SCHEMA, tick_log_path(out_dir), tick_writer
                )
            if len(particle_columns["frame"]) >= FLUSH_THRESHOLD:
                particle_writer = flush_columns(
                    particle_columns,
                    PARTICLE_LOG_SCHEMA,
                    particle_log_path(out_dir),
                    particle_writer,
                )
            if not state.is_running:
                break
        tick_writer = flush_columns(
            tick_columns, TICK_LOG_SCHEMA, tick_log_path(out_dir), tick_writer
        )
        particle_writer = flush_columns(
            particle_columns, PARTICLE_LOG_SCHEMA, particle_log_path(out_dir), particle_writer
        )
    finally:
        if tick_writer is not None:
            tick_writer.close()
        if particle_writer is not None:
            particle_writer.close()

    result = RunResult(
        level_id=level.level_id,
        completed=state.is_complete,
        completed_at=state.frame if state.is_complete else None,
        ticks_run=state.frame,
        collected={t.value: count for t, count in state.collected.items()},
        placed={t.value: count for t, count in state.placed_machines.items()},
        rejected_placements=rejected,
        final_state=state,
    )
    run_summary_path(out_dir).write_text(json.dumps(result.to_summary(), indent=2))
    logger.info(
        "Level %d %s after %d ticks",
        level.level_id,
        "complete" if result.completed else "incomplete",
        result.ticks_run,
    )
    return result
