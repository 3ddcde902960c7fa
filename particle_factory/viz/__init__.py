"""Visualization layer: snapshot renderer."""

from particle_factory.viz.render import render_state

__all__ = ["render_state"]
