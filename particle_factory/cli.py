"""CLI entrypoint for headless level runs.

This module owns CLI argument parsing and mode dispatch. All domain logic
lives elsewhere:

- ``particle_factory.config``            – configuration dataclasses
- ``particle_factory.io.levels``         – level catalog and layout files
- ``particle_factory.simulation.engine`` – ``run_level`` headless runner
- ``particle_factory.viz.render``        – snapshot rendering
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path

from particle_factory.config.constants import (
    DEFAULT_MAX_TICKS,
    MAX_PARTICLES,
    SPAWN_INTERVAL,
)
from particle_factory.config.types import FactoryConfig, RunConfig
from particle_factory.domain.levels import LEVELS, LevelRegistry, MachinePlacement
from particle_factory.io.levels import level_to_dict, load_layout, load_levels
from particle_factory.simulation.engine import run_level

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Value coercion (CLI > file > default)
# ---------------------------------------------------------------------------


def _coerce_bool(raw: object, key: str) -> bool:
    """Coerce raw value to bool with strict string-check."""
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        normalized = raw.strip().lower()
        if normalized in {"1", "true", "yes", "on"}:
            return True
        if normalized in {"0", "false", "no", "off"}:
            return False
    raise ValueError(f"{key} must be a boolean value")


def _coerce_int(raw: object, key: str) -> int:
    """Coerce raw value to int; rejects booleans and non-integer floats."""
    if isinstance(raw, bool):
        raise ValueError(f"{key} must be an integer value")
    if isinstance(raw, float):
        if raw != int(raw):
            raise ValueError(f"{key} must be an integer value, got {raw!r}")
        return int(raw)
    if isinstance(raw, (int, str)):
        try:
            return int(raw)
        except ValueError as exc:
            raise ValueError(f"{key} must be an integer value, got {raw!r}") from exc
    raise ValueError(f"{key} must be an integer value")


def _coerce_path(raw: object, key: str) -> Path:
    if isinstance(raw, (str, Path)):
        return Path(raw)
    raise ValueError(f"{key} must be a path string")


def _coerce_optional_path(raw: object, key: str) -> Path | None:
    return None if raw is None else _coerce_path(raw, key)


def _get_val(cli_val: object, key: str, file_cfg: dict[str, object], default: object) -> object:
    """CLI > file > default resolution."""
    if cli_val is not None:
        return cli_val
    return file_cfg.get(key, default)


def _load_file_config(parser: argparse.ArgumentParser, path: Path | None) -> dict[str, object]:
    if path is None:
        return {}
    try:
        loaded = json.loads(Path(path).read_text())
    except FileNotFoundError:
        parser.error(f"Config file not found: {path}")
    except json.JSONDecodeError as exc:
        parser.error(f"Config file is not valid JSON: {path}: {exc}")
    if not isinstance(loaded, dict):
        parser.error(f"Config file must contain a JSON object: {path}")
    return loaded


def _resolve_levels(parser: argparse.ArgumentParser, path: Path | None) -> LevelRegistry:
    if path is None:
        return LEVELS
    try:
        return load_levels(path)
    except FileNotFoundError:
        parser.error(f"Levels file not found: {path}")
    except ValueError as exc:
        parser.error(str(exc))


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(description="Particle factory headless runner")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    run = subparsers.add_parser("run", help="Run one level with a machine layout")
    run.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON config file (CLI args override file values)",
    )
    run.add_argument("--level", type=int, default=None, help="Zero-based level index")
    run.add_argument("--layout", type=Path, default=None, help="JSON machine layout file")
    run.add_argument("--levels-file", type=Path, default=None)
    run.add_argument("--ticks", type=int, default=None)
    run.add_argument("--seed", type=int, default=None)
    run.add_argument("--spawn-interval", type=int, default=None)
    run.add_argument("--max-particles", type=int, default=None)
    run.add_argument("--out-dir", type=Path, default=None)
    run.add_argument("--render", type=Path, default=None, help="Write a PNG of the final state")
    run.add_argument("--log-particles", action=argparse.BooleanOptionalAction, default=None)

    levels = subparsers.add_parser("levels", help="Print the level catalog as JSON")
    levels.add_argument("--levels-file", type=Path, default=None)
    return parser


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _handle_levels(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    registry = _resolve_levels(parser, args.levels_file)
    print(json.dumps([level_to_dict(level) for level in registry], ensure_ascii=False, indent=2))


def _handle_run(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    file_cfg = _load_file_config(parser, args.config)
    try:
        level_index = _coerce_int(_get_val(args.level, "level", file_cfg, 0), "level")
        ticks = _coerce_int(_get_val(args.ticks, "ticks", file_cfg, DEFAULT_MAX_TICKS), "ticks")
        seed = _coerce_int(_get_val(args.seed, "seed", file_cfg, 0), "seed")
        spawn_interval = _coerce_int(
            _get_val(args.spawn_interval, "spawn_interval", file_cfg, SPAWN_INTERVAL),
            "spawn_interval",
        )
        max_particles = _coerce_int(
            _get_val(args.max_particles, "max_particles", file_cfg, MAX_PARTICLES),
            "max_particles",
        )
        log_particles = _coerce_bool(
            _get_val(args.log_particles, "log_particles", file_cfg, False), "log_particles"
        )
        out_dir = _coerce_path(_get_val(args.out_dir, "out_dir", file_cfg, "data"), "out_dir")
        layout_path = _coerce_optional_path(
            _get_val(args.layout, "layout", file_cfg, None), "layout"
        )
        render_path = _coerce_optional_path(
            _get_val(args.render, "render", file_cfg, None), "render"
        )
        levels_path = _coerce_optional_path(
            _get_val(args.levels_file, "levels_file", file_cfg, None), "levels_file"
        )
        factory_config = FactoryConfig(spawn_interval=spawn_interval, max_particles=max_particles)
        run_config = RunConfig(max_ticks=ticks, seed=seed, log_particles=log_particles)
    except ValueError as exc:
        parser.error(str(exc))

    registry = _resolve_levels(parser, levels_path)
    if registry.get(level_index) is None:
        parser.error(f"--level must be in [0, {len(registry)}), got {level_index}")

    placements: list[MachinePlacement] = []
    if layout_path is not None:
        try:
            placements = load_layout(layout_path)
        except FileNotFoundError:
            parser.error(f"Layout file not found: {layout_path}")
        except ValueError as exc:
            parser.error(str(exc))
        logger.debug("Loaded %d placements from %s", len(placements), layout_path)

    result = run_level(
        level_index,
        placements,
        out_dir=out_dir,
        run_config=run_config,
        config=factory_config,
        levels=registry,
    )

    summary = result.to_summary()
    summary["out_dir"] = str(out_dir)
    if render_path is not None and result.final_state is not None:
        from particle_factory.viz.render import render_state

        rendered = render_state(result.final_state, render_path, config=factory_config)
        summary["render"] = str(rendered)
    print(json.dumps(summary, ensure_ascii=False, indent=2))


# ---------------------------------------------------------------------------
# Main CLI
# ---------------------------------------------------------------------------


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint.

    Supports ``run --config path/to/config.json`` for reproducible runs.
    CLI arguments override config-file values; config-file values override
    built-in defaults.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "run":
        _handle_run(parser, args)
    elif args.command == "levels":
        _handle_levels(parser, args)
    else:
        parser.print_help()
        raise SystemExit(2)


if __name__ == "__main__":
    main()
