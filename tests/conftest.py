"""Shared test fixtures for island generation tests."""

import numpy as np
import pytest

from islandgen.config import GenerationConfig
from islandgen.generator import GenerationResult, generate_island


class ConstantNoise:
    """Noise stand-in that returns the same value everywhere."""

    def __init__(self, value: float):
        self.value = value

    def sample(self, world_x: float, world_z: float) -> float:
        return self.value

    def sample_grid(self, xs: np.ndarray, zs: np.ndarray) -> np.ndarray:
        return np.full((len(zs), len(xs)), self.value, dtype=np.float64)


@pytest.fixture
def small_config() -> GenerationConfig:
    """16x16 island with a fixed seed."""
    return GenerationConfig(
        size=16,
        island_scale=20.0,
        noise_scale=2.0,
        max_height=10.0,
        seed=1234,
    )


@pytest.fixture
def small_result(small_config: GenerationConfig) -> GenerationResult:
    """Generated island for small_config."""
    return generate_island(small_config)


@pytest.fixture
def constant_noise() -> type[ConstantNoise]:
    """Factory for flat noise fields."""
    return ConstantNoise
