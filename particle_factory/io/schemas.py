"""Parquet schema definitions for headless-run artifacts.

Every Arrow schema used for persisting run logs is centralised here so that
the writer and any reader work against the same column contracts.
"""

from __future__ import annotations

import pyarrow as pa

from particle_factory.domain.particles import ParticleType

TICK_LOG_SCHEMA_VERSION = 1

COLLECTED_COLUMNS: list[str] = [f"collected_{t.value}" for t in ParticleType]
"""Per-type cumulative tally columns, in ParticleType order."""

TICK_LOG_SCHEMA = pa.schema(
    [
        ("level_id", pa.int64()),
        ("frame", pa.int64()),
        ("particle_count", pa.int64()),
        *[(name, pa.int64()) for name in COLLECTED_COLUMNS],
        ("complete", pa.bool_()),
    ]
)

PARTICLE_LOG_SCHEMA = pa.schema(
    [
        ("level_id", pa.int64()),
        ("frame", pa.int64()),
        ("particle_id", pa.int64()),
        ("particle_type", pa.string()),
        ("x", pa.float64()),
        ("y", pa.float64()),
        ("vx", pa.float64()),
        ("vy", pa.float64()),
    ]
)
