"""Neuron placement geometry."""

from __future__ import annotations

from astroliquid.geometry.grids import (
    GridType,
    generate_cubic_grid,
    generate_grid,
    generate_hexagonal_prism_grid,
    tile_hexagonal_prism_grid,
    unique_positions,
)

__all__ = [
    "GridType",
    "generate_cubic_grid",
    "generate_grid",
    "generate_hexagonal_prism_grid",
    "tile_hexagonal_prism_grid",
    "unique_positions",
]
