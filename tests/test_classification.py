"""Tests for material band classification."""

import numpy as np
import pytest

from islandgen.classification import (
    BAND_ORDER,
    MaterialBand,
    classify,
    classify_heights,
    triangle_average_heights,
)
from islandgen.config import BandThresholds


def _avg(heights: list[float]) -> float:
    return sum(heights) / len(heights)


class TestClassify:
    """Tests for scalar classification."""

    def test_water_example(self) -> None:
        """Average 0.2 with max 10 is water."""
        assert classify(_avg([0.2, 0.3, 0.1]), 10.0) == MaterialBand.WATER

    def test_sand_example(self) -> None:
        """Average ~1.167 with max 10 is sand."""
        assert classify(_avg([1.0, 1.2, 1.3]), 10.0) == MaterialBand.SAND

    def test_grass_rock_boundary_example(self) -> None:
        """Average exactly 6.0 with max 10 falls through to rock."""
        assert classify(_avg([5.0, 6.0, 7.0]), 10.0) == MaterialBand.ROCK

    def test_rock_example(self) -> None:
        """Average 9 with max 10 is rock."""
        assert classify(_avg([9.0, 9.0, 9.0]), 10.0) == MaterialBand.ROCK

    def test_grass(self) -> None:
        """Mid heights are grass."""
        assert classify(3.0, 10.0) == MaterialBand.GRASS

    def test_boundaries_are_strict(self) -> None:
        """A height equal to a threshold belongs to the band above."""
        assert classify(0.5, 10.0) == MaterialBand.SAND
        assert classify(1.5, 10.0) == MaterialBand.GRASS
        assert classify(0.4999, 10.0) == MaterialBand.WATER

    def test_scale_invariant(self) -> None:
        """Only the ratio to max height matters."""
        for h in [0.1, 0.7, 2.0, 5.9, 8.0]:
            assert classify(h, 10.0) == classify(h * 2.0, 20.0) == classify(h / 10, 1.0)

    def test_custom_thresholds(self) -> None:
        """Configured thresholds replace the defaults."""
        thresholds = BandThresholds(water=0.2, sand=0.3, grass=0.9)
        assert classify(1.5, 10.0, thresholds) == MaterialBand.WATER
        assert classify(8.0, 10.0, thresholds) == MaterialBand.GRASS

    def test_zero_max_height_is_rock(self) -> None:
        """With a zero height range every triangle sits on the rock bound."""
        assert classify(0.0, 0.0) == MaterialBand.ROCK


class TestClassifyHeights:
    """Tests for vectorized classification."""

    def test_matches_scalar(self) -> None:
        """Vectorized result equals scalar classify element-wise."""
        rng = np.random.default_rng(0)
        heights = rng.uniform(0.0, 10.0, size=500)
        heights[:4] = [0.5, 1.5, 6.0, 0.0]
        codes = classify_heights(heights, 10.0)
        expected = [classify(float(h), 10.0) for h in heights]
        np.testing.assert_array_equal(codes, expected)

    def test_output_dtype(self) -> None:
        """Band codes are uint8."""
        assert classify_heights(np.array([1.0, 2.0]), 10.0).dtype == np.uint8

    def test_bands_exhaustive(self) -> None:
        """Every code is a valid band."""
        codes = classify_heights(np.linspace(0, 10, 101), 10.0)
        assert set(np.unique(codes)).issubset({int(b) for b in MaterialBand})


class TestBandOrder:
    """Tests for the band enum."""

    def test_ascending_order(self) -> None:
        """Bands are ordered water, sand, grass, rock."""
        assert BAND_ORDER == (
            MaterialBand.WATER,
            MaterialBand.SAND,
            MaterialBand.GRASS,
            MaterialBand.ROCK,
        )

    def test_labels(self) -> None:
        """Labels are lowercase names."""
        assert [b.label for b in BAND_ORDER] == ["water", "sand", "grass", "rock"]


class TestTriangleAverageHeights:
    """Tests for per-triangle averaging."""

    def test_mean_of_vertices(self) -> None:
        """Average uses the three referenced vertex heights."""
        heights = np.array([0.0, 3.0, 6.0, 9.0])
        tris = np.array([[0, 1, 2], [1, 2, 3]])
        result = triangle_average_heights(heights, tris)
        np.testing.assert_allclose(result, [3.0, 6.0])
