"""Heightmap synthesis: noise remapped to [0, 1], shaped by falloff, scaled."""

from dataclasses import dataclass
from typing import Iterator

import numpy as np
import structlog
from numpy.typing import NDArray

from .island import falloff_grid
from .noise import NoiseField

logger = structlog.get_logger()


@dataclass(frozen=True)
class HeightSample:
    """One grid vertex of the heightmap."""

    uv: tuple[float, float]
    position: tuple[float, float, float]  # (world_x, height, world_z)
    height: float


class Heightmap:
    """Per-vertex elevation, world position and UV table.

    Arrays are row-major over the grid: entry ``y * size + x`` belongs to
    grid coordinate (x, y). All arrays are read-only once built.
    """

    def __init__(
        self,
        size: int,
        max_height: float,
        uvs: NDArray[np.float64],
        positions: NDArray[np.float64],
        heights: NDArray[np.float64],
        falloff: NDArray[np.float64],
    ):
        self.size = size
        self.max_height = max_height
        self.uvs = uvs
        self.positions = positions
        self.heights = heights
        self.falloff = falloff
        for arr in (self.uvs, self.positions, self.heights, self.falloff):
            arr.flags.writeable = False

    def index(self, x: int, y: int) -> int:
        """Flat index of grid coordinate (x, y)."""
        return y * self.size + x

    def sample(self, index: int) -> HeightSample:
        """Return the record stored at a flat index."""
        u, v = self.uvs[index]
        px, py, pz = self.positions[index]
        return HeightSample(
            uv=(float(u), float(v)),
            position=(float(px), float(py), float(pz)),
            height=float(self.heights[index]),
        )

    def grid(self) -> NDArray[np.float64]:
        """Heights reshaped to (size, size), indexed [y, x]."""
        return self.heights.reshape(self.size, self.size)

    def __len__(self) -> int:
        return self.heights.size

    def __iter__(self) -> Iterator[HeightSample]:
        for i in range(len(self)):
            yield self.sample(i)


def build_heightmap(
    size: int,
    island_scale: float,
    max_height: float,
    noise: NoiseField,
) -> Heightmap:
    """Sample noise over the grid and shape it into an island.

    For each vertex the normalized coordinate (x/(size-1), y/(size-1)) is
    used as UV and mapped to world space centered on the origin. Noise is
    remapped from [-1, 1] to [0, 1], multiplied by the radial falloff and
    by ``max_height``.

    Args:
        size: Grid vertices per side (>= 2).
        island_scale: World-space width of the grid.
        max_height: Height of an unattenuated noise peak.
        noise: Seeded noise field.

    Returns:
        Heightmap with size * size samples, heights in [0, max_height].
    """
    steps = np.arange(size, dtype=np.float64) / (size - 1)
    world = (steps - 0.5) * island_scale

    raw = noise.sample_grid(world, world)
    shape = falloff_grid(size)

    heights = (raw * 0.5 + 0.5) * shape * max_height
    # Float rounding must not push samples outside the valid range
    heights = np.clip(heights, 0.0, max_height)

    fx, fy = np.meshgrid(steps, steps)
    wx, wz = np.meshgrid(world, world)

    uvs = np.stack([fx.ravel(), fy.ravel()], axis=1)
    positions = np.stack([wx.ravel(), heights.ravel(), wz.ravel()], axis=1)

    heightmap = Heightmap(
        size=size,
        max_height=max_height,
        uvs=uvs,
        positions=positions,
        heights=heights.ravel().copy(),
        falloff=shape.ravel().copy(),
    )

    logger.info(
        "heightmap_built",
        size=size,
        samples=len(heightmap),
        min_height=round(float(heightmap.heights.min()), 4),
        max_height=round(float(heightmap.heights.max()), 4),
    )
    return heightmap
