"""Material band classification by triangle elevation."""

from enum import IntEnum

import numpy as np
from numpy.typing import NDArray

from .config import BandThresholds

_DEFAULT_THRESHOLDS = BandThresholds()


class MaterialBand(IntEnum):
    """Material bands in ascending elevation order.

    The integer value is the band's position in surface order and its
    code in classification arrays.
    """

    WATER = 0
    SAND = 1
    GRASS = 2
    ROCK = 3

    @property
    def label(self) -> str:
        """Lowercase name, matching the MaterialSet field for this band."""
        return self.name.lower()


BAND_ORDER: tuple[MaterialBand, ...] = tuple(MaterialBand)


def classify(
    avg_height: float,
    max_height: float,
    thresholds: BandThresholds = _DEFAULT_THRESHOLDS,
) -> MaterialBand:
    """Classify a triangle by its average vertex height.

    Comparisons are strict, so a height exactly on a threshold belongs to
    the band above it.

    Args:
        avg_height: Mean of the triangle's three vertex heights.
        max_height: Configured height range.
        thresholds: Band upper bounds as fractions of ``max_height``.

    Returns:
        The band for this height.
    """
    if avg_height < thresholds.water * max_height:
        return MaterialBand.WATER
    if avg_height < thresholds.sand * max_height:
        return MaterialBand.SAND
    if avg_height < thresholds.grass * max_height:
        return MaterialBand.GRASS
    return MaterialBand.ROCK


def classify_heights(
    avg_heights: NDArray[np.float64],
    max_height: float,
    thresholds: BandThresholds = _DEFAULT_THRESHOLDS,
) -> NDArray[np.uint8]:
    """Vectorized :func:`classify`.

    Returns:
        Array of MaterialBand values as uint8, same shape as input.
    """
    bounds = np.array(
        [thresholds.water, thresholds.sand, thresholds.grass], dtype=np.float64
    ) * max_height
    # side="right" counts bounds <= h, which is the strict-< rule
    return np.searchsorted(bounds, avg_heights, side="right").astype(np.uint8)


def triangle_average_heights(
    heights: NDArray[np.float64],
    triangles: NDArray[np.int64],
) -> NDArray[np.float64]:
    """Mean vertex height of each triangle."""
    return heights[triangles].mean(axis=1)
