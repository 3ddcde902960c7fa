"""Tests for particle_factory.io.paths module."""

from __future__ import annotations

from pathlib import Path

import pytest

from particle_factory.io.paths import (
    particle_log_path,
    resolve_within_base,
    run_summary_path,
    tick_log_path,
)


def test_output_layout(tmp_path: Path) -> None:
    assert tick_log_path(tmp_path) == tmp_path / "logs" / "tick_log.parquet"
    assert particle_log_path(tmp_path) == tmp_path / "logs" / "particle_log.parquet"
    assert run_summary_path(tmp_path) == tmp_path / "run_summary.json"


def test_relative_path_resolves_under_base(tmp_path: Path) -> None:
    resolved = resolve_within_base(Path("frames/out.png"), tmp_path)
    assert resolved == (tmp_path / "frames" / "out.png").resolve()


def test_escape_rejected(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Path escapes base_dir"):
        resolve_within_base(Path("../outside.png"), tmp_path)
