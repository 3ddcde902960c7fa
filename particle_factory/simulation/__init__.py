"""Simulation layer: physics stepper, spawning, session state machine, headless runs."""

from particle_factory.simulation.engine import RunResult, apply_layout, run_level
from particle_factory.simulation.physics import StepResult, cell_of, step_particles
from particle_factory.simulation.session import (
    FactorySession,
    SessionState,
    SessionStatus,
    is_complete,
)
from particle_factory.simulation.spawn import spawn_particles

__all__ = [
    "FactorySession",
    "RunResult",
    "SessionState",
    "SessionStatus",
    "StepResult",
    "apply_layout",
    "cell_of",
    "is_complete",
    "run_level",
    "spawn_particles",
    "step_particles",
]
