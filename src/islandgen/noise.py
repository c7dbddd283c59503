"""Noise generation for island heightmaps.

Provides a seeded fBm (fractal Brownian motion) field over OpenSimplex
noise, sampled either point by point or across a whole grid at once,
and the seed resolution used when a config asks for a random seed.
"""

import numpy as np
import structlog
from numpy.typing import NDArray
from opensimplex import OpenSimplex

from .config import NoiseConfig
from .exceptions import GenerationFailure

logger = structlog.get_logger()

_SEED_MIN = -(2**63)
_SEED_MAX = 2**63 - 1


def resolve_seed(seed: int, rng: np.random.Generator | None = None) -> int:
    """Return the effective seed for one generation run.

    A seed of 0 means "random": a fresh seed is drawn from ``rng`` exactly
    once. Any other seed is returned unchanged.

    Args:
        seed: Configured seed.
        rng: Entropy source for the draw. A new default generator is used
            when omitted.

    Returns:
        Non-zero effective seed.
    """
    if seed != 0:
        return seed
    if rng is None:
        rng = np.random.default_rng()
    drawn = int(rng.integers(1, 2**31))
    logger.debug("seed_drawn", seed=drawn)
    return drawn


class NoiseField:
    """Deterministic fractal noise over the world XZ plane.

    Each octave uses its own OpenSimplex generator seeded ``seed + i``.
    Octave sums are normalised by the total amplitude and clamped, so
    every sample lies in [-1, 1].
    """

    def __init__(self, seed: int, noise_scale: float, config: NoiseConfig | None = None):
        """Initialize NoiseField.

        Args:
            seed: Effective (already resolved) noise seed.
            noise_scale: Feature wavelength in world units; the base
                frequency is its reciprocal.
            config: Octave parameters.

        Raises:
            GenerationFailure: If the seed is outside the supported range
                or the noise backend cannot be initialised.
        """
        self.config = config or NoiseConfig()
        if noise_scale <= 0:
            raise GenerationFailure(f"noise_scale must be positive, got {noise_scale}")
        if not _SEED_MIN <= seed <= _SEED_MAX - (self.config.octaves - 1):
            raise GenerationFailure(f"Seed {seed} is outside the signed 64-bit range")

        self.seed = seed
        self.frequency = 1.0 / noise_scale

        try:
            self._octaves = [OpenSimplex(seed + i) for i in range(self.config.octaves)]
        except (OverflowError, ValueError, TypeError) as e:
            raise GenerationFailure(f"Noise initialisation failed for seed {seed}: {e}") from e

        amplitude = 1.0
        total = 0.0
        for _ in range(self.config.octaves):
            total += amplitude
            amplitude *= self.config.gain
        self._bounding = 1.0 / total

    def sample(self, world_x: float, world_z: float) -> float:
        """Sample the field at one world position.

        Returns:
            Noise value in [-1, 1].
        """
        x = world_x * self.frequency
        z = world_z * self.frequency
        amplitude = self._bounding
        total = 0.0
        for octave in self._octaves:
            total += octave.noise2(x, z) * amplitude
            x *= self.config.lacunarity
            z *= self.config.lacunarity
            amplitude *= self.config.gain
        return min(max(total, -1.0), 1.0)

    def sample_grid(
        self,
        xs: NDArray[np.float64],
        zs: NDArray[np.float64],
    ) -> NDArray[np.float64]:
        """Sample the field on the grid spanned by two coordinate axes.

        Args:
            xs: World X coordinates of the columns.
            zs: World Z coordinates of the rows.

        Returns:
            Array of shape (len(zs), len(xs)) with values in [-1, 1].
        """
        x = np.asarray(xs, dtype=np.float64) * self.frequency
        z = np.asarray(zs, dtype=np.float64) * self.frequency
        result = np.zeros((z.size, x.size), dtype=np.float64)

        amplitude = self._bounding
        for octave in self._octaves:
            result += octave.noise2array(x, z) * amplitude
            x = x * self.config.lacunarity
            z = z * self.config.lacunarity
            amplitude *= self.config.gain

        return np.clip(result, -1.0, 1.0)

    def __call__(self, world_x: float, world_z: float) -> float:
        return self.sample(world_x, world_z)
