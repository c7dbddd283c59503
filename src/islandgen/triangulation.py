"""Grid triangulation: two triangles per cell over a row-major vertex grid."""

from typing import Iterator, Literal

import numpy as np
from numpy.typing import NDArray

Diagonal = Literal["fixed", "alternating"]


def cell_triangles(
    x: int,
    y: int,
    size: int,
    diagonal: Diagonal = "fixed",
) -> tuple[tuple[int, int, int], tuple[int, int, int]]:
    """Return the two triangles of cell (x, y) as vertex index triples.

    The fixed split runs from the right vertex to the down vertex:
    ``(i, i_right, i_down)`` then ``(i_right, i_dr, i_down)``. In
    alternating mode, cells where ``x + y`` is odd use the other diagonal
    with the same winding sense.
    """
    i = y * size + x
    i_right = i + 1
    i_down = i + size
    i_dr = i_down + 1

    if diagonal == "alternating" and (x + y) % 2 == 1:
        return (i, i_dr, i_down), (i, i_right, i_dr)
    return (i, i_right, i_down), (i_right, i_dr, i_down)


def iter_triangles(
    size: int,
    diagonal: Diagonal = "fixed",
) -> Iterator[tuple[int, int, int]]:
    """Yield every triangle of the grid, cell by cell in row-major order."""
    for y in range(size - 1):
        for x in range(size - 1):
            first, second = cell_triangles(x, y, size, diagonal)
            yield first
            yield second


def triangle_indices(size: int, diagonal: Diagonal = "fixed") -> NDArray[np.int64]:
    """Vectorized triangulation of a size x size grid.

    Produces the same triangles in the same order as
    :func:`iter_triangles`.

    Args:
        size: Grid vertices per side.
        diagonal: Cell split mode.

    Returns:
        Array of shape (2 * (size - 1) ** 2, 3) of vertex indices.
    """
    cells = size - 1
    ys, xs = np.meshgrid(np.arange(cells), np.arange(cells), indexing="ij")
    i = (ys * size + xs).ravel()
    i_right = i + 1
    i_down = i + size
    i_dr = i_down + 1

    first = np.stack([i, i_right, i_down], axis=1)
    second = np.stack([i_right, i_dr, i_down], axis=1)

    if diagonal == "alternating":
        odd = ((xs + ys) % 2 == 1).ravel()
        first[odd] = np.stack([i, i_dr, i_down], axis=1)[odd]
        second[odd] = np.stack([i, i_right, i_dr], axis=1)[odd]

    # Interleave so each cell's pair stays adjacent
    tris = np.empty((cells * cells * 2, 3), dtype=np.int64)
    tris[0::2] = first
    tris[1::2] = second
    return tris


def triangle_count(size: int) -> int:
    """Number of triangles produced for a size x size grid."""
    return 2 * (size - 1) ** 2
