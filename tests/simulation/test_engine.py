"""Tests for particle_factory.simulation.engine module."""

from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pyarrow.parquet as pq
import pytest

from particle_factory.config.constants import UNLIMITED
from particle_factory.config.types import RunConfig
from particle_factory.domain.levels import (
    AvailableMachine,
    Level,
    LevelGoal,
    LevelRegistry,
    MachinePlacement,
)
from particle_factory.domain.machines import MachineType
from particle_factory.domain.particles import ParticleType
from particle_factory.io.schemas import PARTICLE_LOG_SCHEMA, TICK_LOG_SCHEMA
from particle_factory.simulation.engine import apply_layout, run_level
from particle_factory.simulation.session import FactorySession

# Sand drops straight from the spawner into the collector three cells below.
DROP_LEVEL = Level(
    level_id=7,
    name="Drop",
    hint="",
    goals=(LevelGoal(ParticleType.SAND, 2),),
    fixed_machines=(
        MachinePlacement(MachineType.SPAWNER_SAND, 4, 0),
        MachinePlacement(MachineType.COLLECTOR, 4, 3),
    ),
    available_machines=(
        AvailableMachine(MachineType.CONVEYOR_RIGHT, UNLIMITED),
        AvailableMachine(MachineType.HEATER, 1),
    ),
)
DROP_LEVELS = LevelRegistry([DROP_LEVEL])


class TestApplyLayout:
    def test_counts_rejections(self) -> None:
        session = FactorySession(levels=DROP_LEVELS)
        placements = [
            MachinePlacement(MachineType.HEATER, 10, 10),
            MachinePlacement(MachineType.HEATER, 11, 10),
            MachinePlacement(MachineType.CONVEYOR_RIGHT, 4, 0),
            MachinePlacement(MachineType.CONVEYOR_RIGHT, 12, 12),
        ]
        assert apply_layout(session, placements) == 2
        assert len(session.state().machines) == 4


class TestRunLevel:
    def test_run_to_completion(self, tmp_path: Path) -> None:
        result = run_level(0, [], tmp_path, RunConfig(max_ticks=500), levels=DROP_LEVELS)
        assert result.completed
        assert result.completed_at == result.ticks_run
        assert result.collected["sand"] >= 2
        assert result.final_state is not None
        assert result.final_state.is_complete

    def test_tick_log_written(self, tmp_path: Path) -> None:
        result = run_level(0, [], tmp_path, RunConfig(max_ticks=500), levels=DROP_LEVELS)
        table = pq.read_table(tmp_path / "logs" / "tick_log.parquet")
        assert table.schema.names == TICK_LOG_SCHEMA.names
        assert table.num_rows == result.ticks_run
        frames = table.column("frame").to_pylist()
        assert frames == list(range(1, result.ticks_run + 1))
        complete = table.column("complete").to_pylist()
        assert complete[-1] is True
        assert not any(complete[:-1])

    def test_collected_columns_are_monotonic(self, tmp_path: Path) -> None:
        run_level(0, [], tmp_path, RunConfig(max_ticks=500), levels=DROP_LEVELS)
        sand = pq.read_table(tmp_path / "logs" / "tick_log.parquet").column(
            "collected_sand"
        ).to_pylist()
        assert sand == sorted(sand)

    def test_summary_json(self, tmp_path: Path) -> None:
        placements = [MachinePlacement(MachineType.HEATER, 10, 10)]
        result = run_level(0, placements, tmp_path, RunConfig(max_ticks=500), levels=DROP_LEVELS)
        summary = json.loads((tmp_path / "run_summary.json").read_text())
        assert summary == result.to_summary()
        assert summary["placed"] == {"heater": 1}
        assert summary["rejected_placements"] == 0
        assert "final_state" not in summary

    def test_incomplete_run_stops_at_max_ticks(self, tmp_path: Path) -> None:
        result = run_level(0, [], tmp_path, RunConfig(max_ticks=20), levels=DROP_LEVELS)
        assert not result.completed
        assert result.completed_at is None
        assert result.ticks_run == 20

    def test_particle_log_opt_in(self, tmp_path: Path) -> None:
        run_level(0, [], tmp_path, RunConfig(max_ticks=40), levels=DROP_LEVELS)
        assert not (tmp_path / "logs" / "particle_log.parquet").exists()

        out = tmp_path / "with_particles"
        run_level(0, [], out, RunConfig(max_ticks=40, log_particles=True), levels=DROP_LEVELS)
        table = pq.read_table(out / "logs" / "particle_log.parquet")
        assert table.schema.names == PARTICLE_LOG_SCHEMA.names
        # one particle spawned at frame 30, logged for frames 30..40
        assert table.num_rows == 11
        assert set(table.column("particle_type").to_pylist()) == {"sand"}

    def test_small_flush_threshold_keeps_every_row(self, tmp_path: Path) -> None:
        with patch("particle_factory.simulation.engine.FLUSH_THRESHOLD", 7):
            result = run_level(0, [], tmp_path, RunConfig(max_ticks=50), levels=DROP_LEVELS)
        parquet_file = pq.ParquetFile(tmp_path / "logs" / "tick_log.parquet")
        assert parquet_file.metadata.num_rows == result.ticks_run == 50
        assert parquet_file.metadata.num_row_groups > 1

    def test_same_seed_same_result(self, tmp_path: Path) -> None:
        run_config = RunConfig(max_ticks=200, seed=3)
        first = run_level(0, [], tmp_path / "a", run_config, levels=DROP_LEVELS)
        second = run_level(0, [], tmp_path / "b", run_config, levels=DROP_LEVELS)
        assert first == second
        assert first.final_state is not None and second.final_state is not None
        assert first.final_state.particles == second.final_state.particles

    def test_invalid_level_index(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="level index must be in"):
            run_level(5, [], tmp_path, levels=DROP_LEVELS)
