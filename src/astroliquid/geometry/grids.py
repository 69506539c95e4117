"""
Grid Geometry - Unique 3-D positions for placing liquid neurons.

Two layouts are supported:

- **cube**: a simple cubic lattice, ``nx × ny × nz`` points.
- **hex-prism**: hexagonal layers (axial radius R, 3R² + 3R + 1 points per
  layer) stacked along z, then tiled over the plane with the hexagonal
  super-lattice so that neighbouring tiles interlock without overlap.

All generators return float64 tensors of shape [n_points, 3] whose rows are
unique. ``generate_grid`` is the single entry point used by the reservoir.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

import torch

from astroliquid.errors import ConfigurationError


class GridType(Enum):
    """Neuron placement layouts."""

    CUBE = "cube"
    HEX_PRISM = "hex-prism"

    @classmethod
    def parse(cls, value: Union["GridType", str]) -> "GridType":
        """Resolve an enum member or its string value.

        Raises:
            ConfigurationError: If ``value`` names no known layout
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            valid = [member.value for member in cls]
            raise ConfigurationError(
                f"Invalid grid type {value!r}. Choose from: {valid}"
            ) from None


DEFAULT_CUBE_SIZE = (10, 10, 10)
DEFAULT_HEX_PRISM_SIZE = (3, 6, 6, 6)  # (layers, radius, tiles_x, tiles_y)

_DEDUP_DECIMALS = 9


def unique_positions(points: torch.Tensor) -> torch.Tensor:
    """Remove duplicate rows, sorting the result lexicographically.

    Coordinates are rounded before comparison so that points produced by
    different floating-point paths still collapse onto one.
    """
    rounded = torch.round(points, decimals=_DEDUP_DECIMALS)
    return torch.unique(rounded, dim=0)


def generate_cubic_grid(
    size: Sequence[int] = DEFAULT_CUBE_SIZE,
    spacing: float = 1.0,
) -> torch.Tensor:
    """Simple cubic lattice.

    Args:
        size: Points along (x, y, z)
        spacing: Lattice constant

    Returns:
        Positions [nx * ny * nz, 3]
    """
    if len(size) != 3:
        raise ConfigurationError(f"Cubic grid size must have 3 entries, got {tuple(size)}")
    axes = [torch.arange(n, dtype=torch.float64) * spacing for n in size]
    xs, ys, zs = torch.meshgrid(*axes, indexing="ij")
    return torch.stack([xs, ys, zs], dim=-1).reshape(-1, 3)


def _hexagon_axial(radius: int) -> torch.Tensor:
    """Axial coordinates (q, r) of a hexagon of the given radius."""
    coords = [
        (q, r)
        for q in range(-radius, radius + 1)
        for r in range(-radius, radius + 1)
        if abs(q + r) <= radius
    ]
    return torch.tensor(coords, dtype=torch.float64)


def _axial_to_cartesian(axial: torch.Tensor, spacing: float) -> torch.Tensor:
    q, r = axial[:, 0], axial[:, 1]
    x = spacing * (q + r / 2.0)
    y = spacing * (math.sqrt(3.0) / 2.0) * r
    return torch.stack([x, y], dim=-1)


def generate_hexagonal_prism_grid(
    layers: int = 3,
    radius: int = 6,
    spacing: float = 1.0,
) -> torch.Tensor:
    """Hexagonal layers stacked along z.

    Args:
        layers: Number of stacked layers
        radius: Axial radius of each hexagonal layer
        spacing: Nearest-neighbour distance (in-plane and between layers)

    Returns:
        Positions [layers * (3R² + 3R + 1), 3]
    """
    if layers <= 0 or radius < 0:
        raise ConfigurationError(
            f"Hexagonal prism needs layers > 0 and radius >= 0, got {layers}, {radius}"
        )
    plane = _axial_to_cartesian(_hexagon_axial(radius), spacing)
    slices = []
    for layer in range(layers):
        z = torch.full((plane.shape[0], 1), layer * spacing, dtype=torch.float64)
        slices.append(torch.cat([plane, z], dim=1))
    return torch.cat(slices, dim=0)


def tile_hexagonal_prism_grid(
    base: torch.Tensor,
    tiles: Tuple[int, int] = (6, 6),
    radius: int = 6,
    spacing: float = 1.0,
) -> torch.Tensor:
    """Tile a hexagonal prism over the plane.

    Tiles are placed on the super-lattice spanned by the axial shifts
    ``(2R + 1, -R)`` and ``(R, R + 1)``, whose unit cell holds exactly
    3R² + 3R + 1 sites, so hexagons of radius R interlock with no gaps.

    Args:
        base: Prism produced by ``generate_hexagonal_prism_grid``
        tiles: Number of tiles along the two super-lattice directions
        radius: Axial radius the base was generated with
        spacing: Spacing the base was generated with

    Returns:
        Unique positions of all tiles
    """
    shift_a = torch.tensor([[2 * radius + 1, -radius]], dtype=torch.float64)
    shift_b = torch.tensor([[radius, radius + 1]], dtype=torch.float64)

    tiled = []
    for i in range(tiles[0]):
        for j in range(tiles[1]):
            axial_offset = i * shift_a + j * shift_b
            offset_xy = _axial_to_cartesian(axial_offset, spacing)
            offset = torch.cat([offset_xy, torch.zeros(1, 1, dtype=torch.float64)], dim=1)
            tiled.append(base + offset)
    return unique_positions(torch.cat(tiled, dim=0))


def generate_grid(
    grid_type: Union[GridType, str],
    size: Optional[Sequence[int]] = None,
    spacing: float = 1.0,
) -> torch.Tensor:
    """Generate unique neuron positions for a layout.

    Args:
        grid_type: 'cube' or 'hex-prism'
        size: For 'cube', (nx, ny, nz). For 'hex-prism',
            (layers, radius, tiles_x, tiles_y). None = reference layout.
        spacing: Lattice constant

    Returns:
        Unique positions [n_points, 3], sorted lexicographically

    Raises:
        ConfigurationError: Unknown grid type or malformed size
    """
    grid_type = GridType.parse(grid_type)

    if grid_type is GridType.CUBE:
        points = generate_cubic_grid(size or DEFAULT_CUBE_SIZE, spacing)
    else:
        size = tuple(size or DEFAULT_HEX_PRISM_SIZE)
        if len(size) != 4:
            raise ConfigurationError(
                f"Hex-prism size must be (layers, radius, tiles_x, tiles_y), got {size}"
            )
        layers, radius, tiles_x, tiles_y = size
        base = generate_hexagonal_prism_grid(layers, radius, spacing)
        points = tile_hexagonal_prism_grid(base, (tiles_x, tiles_y), radius, spacing)

    return unique_positions(points)
