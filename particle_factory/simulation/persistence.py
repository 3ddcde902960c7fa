"""Parquet persistence helpers for tick-log and particle-log streams."""

from __future__ import annotations

from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq


def flush_columns(
    columns: dict[str, list[object]],
    schema: pa.Schema,
    log_path: Path,
    writer: pq.ParquetWriter | None,
) -> pq.ParquetWriter | None:
    """Write accumulated rows to Parquet and clear the in-memory buffers.

    The writer is opened lazily on the first non-empty flush and returned so
    the caller can keep appending row groups to the same file.
    """
    first_column = next(iter(columns.values()))
    if not first_column:
        return writer
    table = pa.Table.from_pydict(columns, schema=schema)
    if writer is None:
        writer = pq.ParquetWriter(log_path, schema)
    writer.write_table(table)
    for values in columns.values():
        values.clear()
    return writer


def empty_columns(schema: pa.Schema) -> dict[str, list[object]]:
    """Return one empty buffer per schema field, in schema order."""
    return {name: [] for name in schema.names}
