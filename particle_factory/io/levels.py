"""JSON loading and dumping for level catalogs and machine layouts.

Level files look like::

    {"levels": [{"id": 1, "name": "...", "hint": "...",
                 "goals": [{"type": "sand", "amount": 10}],
                 "fixed_machines": [{"type": "spawner_sand", "x": 4, "y": 0}],
                 "available_machines": [{"type": "conveyor_down", "count": -1}]}]}

Layout files are a list of ``{"type", "x", "y"}`` entries, optionally wrapped
in ``{"machines": [...]}``. Malformed content raises :exc:`ValueError` naming
the offending entry.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from particle_factory.domain.levels import (
    AvailableMachine,
    Level,
    LevelGoal,
    LevelRegistry,
    MachinePlacement,
)
from particle_factory.domain.machines import MachineType
from particle_factory.domain.particles import ParticleType


def _read_json(path: Path) -> Any:
    try:
        return json.loads(Path(path).read_text())
    except json.JSONDecodeError as exc:
        raise ValueError(f"{path} is not valid JSON: {exc}") from exc


def _require_int(raw: object, key: str) -> int:
    """Accept ints only; booleans and floats are rejected."""
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{key} must be an integer, got {raw!r}")
    return raw


def _require_str(raw: object, key: str) -> str:
    if not isinstance(raw, str):
        raise ValueError(f"{key} must be a string, got {raw!r}")
    return raw


def _require_list(raw: object, key: str) -> list[Any]:
    if not isinstance(raw, list):
        raise ValueError(f"{key} must be a list")
    return raw


def _require_dict(raw: object, key: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise ValueError(f"{key} must be an object")
    return raw


def _parse_machine_type(raw: object, key: str) -> MachineType:
    try:
        return MachineType(_require_str(raw, key))
    except ValueError as exc:
        valid = ", ".join(t.value for t in MachineType)
        raise ValueError(f"{key} must be one of {valid}") from exc


def _parse_particle_type(raw: object, key: str) -> ParticleType:
    try:
        return ParticleType(_require_str(raw, key))
    except ValueError as exc:
        valid = ", ".join(t.value for t in ParticleType)
        raise ValueError(f"{key} must be one of {valid}") from exc


def _parse_placement(raw: object, key: str) -> MachinePlacement:
    entry = _require_dict(raw, key)
    return MachinePlacement(
        machine_type=_parse_machine_type(entry.get("type"), f"{key}.type"),
        x=_require_int(entry.get("x"), f"{key}.x"),
        y=_require_int(entry.get("y"), f"{key}.y"),
    )


def parse_level(raw: object, key: str = "level") -> Level:
    """Build a validated :class:`Level` from its JSON object form."""
    entry = _require_dict(raw, key)
    goals: list[LevelGoal] = []
    for i, item in enumerate(_require_list(entry.get("goals"), f"{key}.goals")):
        item_key = f"{key}.goals[{i}]"
        item_dict = _require_dict(item, item_key)
        goals.append(
            LevelGoal(
                particle_type=_parse_particle_type(item_dict.get("type"), f"{item_key}.type"),
                amount=_require_int(item_dict.get("amount"), f"{item_key}.amount"),
            )
        )
    raw_fixed = _require_list(entry.get("fixed_machines", []), f"{key}.fixed_machines")
    fixed = tuple(
        _parse_placement(item, f"{key}.fixed_machines[{i}]") for i, item in enumerate(raw_fixed)
    )
    available: list[AvailableMachine] = []
    raw_available = _require_list(entry.get("available_machines", []), f"{key}.available_machines")
    for i, item in enumerate(raw_available):
        item_key = f"{key}.available_machines[{i}]"
        item_dict = _require_dict(item, item_key)
        available.append(
            AvailableMachine(
                machine_type=_parse_machine_type(item_dict.get("type"), f"{item_key}.type"),
                count=_require_int(item_dict.get("count"), f"{item_key}.count"),
            )
        )
    return Level(
        level_id=_require_int(entry.get("id"), f"{key}.id"),
        name=_require_str(entry.get("name"), f"{key}.name"),
        hint=_require_str(entry.get("hint", ""), f"{key}.hint"),
        goals=tuple(goals),
        fixed_machines=fixed,
        available_machines=tuple(available),
    )


def load_levels(path: Path) -> LevelRegistry:
    """Read a level catalog file into a :class:`LevelRegistry`."""
    document = _read_json(path)
    raw_levels = document.get("levels") if isinstance(document, dict) else document
    levels = [
        parse_level(item, f"levels[{i}]")
        for i, item in enumerate(_require_list(raw_levels, "levels"))
    ]
    if not levels:
        raise ValueError(f"{path} defines no levels")
    return LevelRegistry(levels)


def load_layout(path: Path) -> list[MachinePlacement]:
    """Read a machine layout file (player placements to apply before a run)."""
    document = _read_json(path)
    raw_machines = document.get("machines") if isinstance(document, dict) else document
    return [
        _parse_placement(item, f"machines[{i}]")
        for i, item in enumerate(_require_list(raw_machines, "machines"))
    ]


def level_to_dict(level: Level) -> dict[str, object]:
    """Inverse of :func:`parse_level`."""
    return {
        "id": level.level_id,
        "name": level.name,
        "hint": level.hint,
        "goals": [{"type": g.particle_type.value, "amount": g.amount} for g in level.goals],
        "fixed_machines": [
            {"type": m.machine_type.value, "x": m.x, "y": m.y} for m in level.fixed_machines
        ],
        "available_machines": [
            {"type": a.machine_type.value, "count": a.count} for a in level.available_machines
        ],
    }
