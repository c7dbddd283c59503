"""Per-band triangle soup accumulation."""

import numpy as np
from numpy.typing import NDArray

from .classification import MaterialBand
from .exceptions import GenerationFailure


class SurfaceAccumulator:
    """Append-only, non-indexed vertex buffer for one material band.

    Every triangle contributes its own three vertex records, in the
    triangle's winding order. Nothing is deduplicated, so each triangle
    is shaded flat. Appended data is buffered as chunks and concatenated
    once by :meth:`finalize`, after which the accumulator is frozen.
    """

    def __init__(self, band: MaterialBand):
        self.band = band
        self._positions: list[NDArray[np.float64]] = []
        self._uvs: list[NDArray[np.float64]] = []
        self._vertex_count = 0
        self._finalized: tuple[NDArray[np.float64], NDArray[np.float64]] | None = None

    @property
    def vertex_count(self) -> int:
        return self._vertex_count

    @property
    def triangle_count(self) -> int:
        return self._vertex_count // 3

    @property
    def is_empty(self) -> bool:
        return self._vertex_count == 0

    @property
    def is_finalized(self) -> bool:
        return self._finalized is not None

    def append(self, positions: NDArray[np.float64], uvs: NDArray[np.float64]) -> None:
        """Append a single triangle.

        Args:
            positions: (3, 3) vertex positions in winding order.
            uvs: (3, 2) matching UVs.

        Raises:
            GenerationFailure: If the accumulator is finalized or shapes
                are wrong.
        """
        positions = np.asarray(positions, dtype=np.float64)
        uvs = np.asarray(uvs, dtype=np.float64)
        if positions.shape != (3, 3) or uvs.shape != (3, 2):
            raise GenerationFailure(
                f"Triangle needs (3, 3) positions and (3, 2) uvs, got "
                f"{positions.shape} and {uvs.shape}"
            )
        self._push(positions, uvs)

    def extend(self, positions: NDArray[np.float64], uvs: NDArray[np.float64]) -> None:
        """Append a batch of whole triangles.

        Args:
            positions: (n * 3, 3) vertex positions, three per triangle.
            uvs: (n * 3, 2) matching UVs.

        Raises:
            GenerationFailure: If the accumulator is finalized or the batch
                would split a triangle.
        """
        positions = np.asarray(positions, dtype=np.float64)
        uvs = np.asarray(uvs, dtype=np.float64)
        if positions.ndim != 2 or positions.shape[1] != 3 or len(positions) % 3 != 0:
            raise GenerationFailure(
                f"Batch must hold whole triangles, got positions {positions.shape}"
            )
        if uvs.shape != (len(positions), 2):
            raise GenerationFailure(
                f"UV batch {uvs.shape} does not match {len(positions)} vertices"
            )
        if self._finalized is not None:
            raise GenerationFailure(f"{self.band.name} surface is already finalized")
        if len(positions) == 0:
            return
        self._push(positions, uvs)

    def _push(self, positions: NDArray[np.float64], uvs: NDArray[np.float64]) -> None:
        if self._finalized is not None:
            raise GenerationFailure(f"{self.band.name} surface is already finalized")
        self._positions.append(positions)
        self._uvs.append(uvs)
        self._vertex_count += len(positions)

    def finalize(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Concatenate buffered vertices and freeze the accumulator.

        Calling it again returns the same arrays.

        Returns:
            Tuple of (positions (n, 3), uvs (n, 2)), both read-only.
        """
        if self._finalized is None:
            if self._positions:
                positions = np.concatenate(self._positions)
                uvs = np.concatenate(self._uvs)
            else:
                positions = np.zeros((0, 3), dtype=np.float64)
                uvs = np.zeros((0, 2), dtype=np.float64)
            positions.flags.writeable = False
            uvs.flags.writeable = False
            self._finalized = (positions, uvs)
            self._positions.clear()
            self._uvs.clear()
        return self._finalized


def make_accumulators() -> dict[MaterialBand, SurfaceAccumulator]:
    """One empty accumulator per band, keyed by band."""
    return {band: SurfaceAccumulator(band) for band in MaterialBand}
