"""Island shaping: quadratic radial falloff around the grid center."""

import math

import numpy as np
from numpy.typing import NDArray

# Normalized distance at which falloff reaches zero.
FALLOFF_ZERO_RADIUS = 1.0 / math.sqrt(2.0)


def falloff(x: float, y: float, size: int) -> float:
    """Island attenuation at one grid coordinate.

    Distance is measured from the grid center and normalized by the
    half-width, so the edge midpoints sit at distance 1.

    Args:
        x: Grid column.
        y: Grid row.
        size: Grid vertices per side.

    Returns:
        Multiplier in [0, 1]: 1 at the center, 0 at and beyond
        ``FALLOFF_ZERO_RADIUS``.
    """
    half = size / 2
    dx = (x - half) / half
    dy = (y - half) / half
    dist = math.sqrt(dx * dx + dy * dy)
    return min(max(1.0 - 2.0 * dist * dist, 0.0), 1.0)


def falloff_grid(size: int) -> NDArray[np.float64]:
    """Falloff for every vertex of a size x size grid.

    Args:
        size: Grid vertices per side.

    Returns:
        Array of shape (size, size) indexed [y, x], equal to
        :func:`falloff` at each coordinate.
    """
    half = size / 2
    coords = np.arange(size, dtype=np.float64)
    d = (coords - half) / half
    dx, dy = np.meshgrid(d, d)

    dist = np.sqrt(dx * dx + dy * dy)
    return np.clip(1.0 - 2.0 * dist * dist, 0.0, 1.0)
