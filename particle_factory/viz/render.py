"""Matplotlib-based rendering of session snapshots."""

from __future__ import annotations

from pathlib import Path

import matplotlib

matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
from matplotlib.patches import Patch, Rectangle  # noqa: E402

from particle_factory.config.types import FactoryConfig  # noqa: E402
from particle_factory.domain.machines import MachineType  # noqa: E402
from particle_factory.domain.particles import ParticleType  # noqa: E402
from particle_factory.io.paths import resolve_within_base  # noqa: E402
from particle_factory.simulation.session import SessionState  # noqa: E402

BACKGROUND_COLOR = "#1a1a2e"
GRID_LINE_COLOR = "#2a2a4e"
FIXED_CELL_COLOR = "#2a2a4e"
PLACED_CELL_COLOR = "#3a3a5e"

PARTICLE_COLORS: dict[ParticleType, str] = {
    ParticleType.SAND: "#e6c86e",
    ParticleType.WATER: "#4a9eff",
    ParticleType.GLASS: "#88ddff",
    ParticleType.STEAM: "#cccccc",
}

MACHINE_COLORS: dict[MachineType, str] = {
    MachineType.SPAWNER_SAND: "#e6c86e",
    MachineType.SPAWNER_WATER: "#4a9eff",
    MachineType.CONVEYOR_UP: "#666666",
    MachineType.CONVEYOR_DOWN: "#666666",
    MachineType.CONVEYOR_LEFT: "#666666",
    MachineType.CONVEYOR_RIGHT: "#666666",
    MachineType.HEATER: "#ff6633",
    MachineType.COLLECTOR: "#44aa44",
}

MACHINE_GLYPHS: dict[MachineType, str] = {
    MachineType.SPAWNER_SAND: "S",
    MachineType.SPAWNER_WATER: "W",
    MachineType.CONVEYOR_UP: "^",
    MachineType.CONVEYOR_DOWN: "v",
    MachineType.CONVEYOR_LEFT: "<",
    MachineType.CONVEYOR_RIGHT: ">",
    MachineType.HEATER: "H",
    MachineType.COLLECTOR: "C",
}


def _particle_arrays(state: SessionState) -> dict[ParticleType, np.ndarray]:
    """Return an (N, 2) position array per particle type present in *state*."""
    grouped: dict[ParticleType, list[tuple[float, float]]] = {}
    for particle in state.particles:
        grouped.setdefault(particle.particle_type, []).append((particle.x, particle.y))
    return {t: np.asarray(points, dtype=float) for t, points in grouped.items()}


def _draw_grid(ax: plt.Axes, config: FactoryConfig) -> None:
    cell = config.cell_size
    for x in range(config.grid_width + 1):
        ax.axvline(x * cell, color=GRID_LINE_COLOR, linewidth=0.8, zorder=0)
    for y in range(config.grid_height + 1):
        ax.axhline(y * cell, color=GRID_LINE_COLOR, linewidth=0.8, zorder=0)


def render_state(
    state: SessionState,
    output_path: Path,
    config: FactoryConfig | None = None,
    title: str | None = None,
    base_dir: Path | None = None,
) -> Path:
    """Draw grid, machines and particles of *state* to a PNG at *output_path*."""
    cfg = config or FactoryConfig()
    output_path = Path(output_path)
    if base_dir is not None:
        output_path = resolve_within_base(output_path, Path(base_dir))
    output_path.parent.mkdir(parents=True, exist_ok=True)

    cell = cfg.cell_size
    fig, ax = plt.subplots(figsize=(cfg.grid_width * 0.4, cfg.grid_height * 0.4))
    try:
        ax.set_facecolor(BACKGROUND_COLOR)
        _draw_grid(ax, cfg)

        for machine in state.machines:
            x0, y0 = machine.x * cell, machine.y * cell
            ax.add_patch(
                Rectangle(
                    (x0 + 2, y0 + 2),
                    cell - 4,
                    cell - 4,
                    facecolor=FIXED_CELL_COLOR if machine.fixed else PLACED_CELL_COLOR,
                    edgecolor=MACHINE_COLORS[machine.machine_type],
                    linewidth=2,
                    hatch="//" if machine.fixed else None,
                    zorder=1,
                )
            )
            ax.text(
                x0 + cell / 2,
                y0 + cell / 2,
                MACHINE_GLYPHS[machine.machine_type],
                color="white",
                ha="center",
                va="center",
                fontsize=8,
                zorder=2,
            )

        for particle_type, points in _particle_arrays(state).items():
            ax.scatter(
                points[:, 0],
                points[:, 1],
                s=18,
                color=PARTICLE_COLORS[particle_type],
                edgecolors="none",
                zorder=3,
            )

        ax.set_xlim(0, cfg.width)
        ax.set_ylim(cfg.height, 0)
        ax.set_aspect("equal")
        ax.set_xticks([])
        ax.set_yticks([])

        handles = [
            Patch(facecolor=color, label=f"{t.value}: {state.collected[t]}")
            for t, color in PARTICLE_COLORS.items()
        ]
        ax.legend(handles=handles, loc="upper left", bbox_to_anchor=(1.01, 1.0), fontsize=7)

        if title is None and state.level is not None:
            title = f"Level {state.level.level_id}: {state.level.name} (frame {state.frame})"
        if title:
            ax.set_title(title, fontsize=9)
        fig.savefig(output_path, bbox_inches="tight", dpi=100)
    finally:
        plt.close(fig)
    return output_path
