"""Mesh assembly: finalize band buffers into an ordered multi-surface mesh."""

from dataclasses import dataclass, field
from typing import Any, Mapping

import numpy as np
import structlog
from numpy.typing import NDArray

from .classification import BAND_ORDER, MaterialBand
from .config import MaterialSet
from .surface import SurfaceAccumulator

logger = structlog.get_logger()


@dataclass(frozen=True)
class Surface:
    """One material-homogeneous triangle list.

    Vertices are implicitly indexed 0, 1, 2, ... and every consecutive
    triple is one triangle.
    """

    band: MaterialBand
    vertices: NDArray[np.float64]  # (n, 3)
    uvs: NDArray[np.float64]  # (n, 2)
    normals: NDArray[np.float64]  # (n, 3), one face normal per triangle
    material: Any = None

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def triangle_count(self) -> int:
        return len(self.vertices) // 3


@dataclass(frozen=True)
class TerrainMesh:
    """Multi-surface mesh with surfaces in band order, empty bands omitted."""

    surfaces: tuple[Surface, ...] = field(default_factory=tuple)

    @property
    def surface_count(self) -> int:
        return len(self.surfaces)

    @property
    def vertex_count(self) -> int:
        return sum(s.vertex_count for s in self.surfaces)

    @property
    def triangle_count(self) -> int:
        return sum(s.triangle_count for s in self.surfaces)

    @property
    def bands(self) -> tuple[MaterialBand, ...]:
        return tuple(s.band for s in self.surfaces)

    def surface_for(self, band: MaterialBand) -> Surface | None:
        """Surface holding a band's triangles, or None if that band is empty."""
        for surface in self.surfaces:
            if surface.band == band:
                return surface
        return None

    def all_vertices(self) -> NDArray[np.float64]:
        """Vertex positions of every surface, concatenated in surface order."""
        if not self.surfaces:
            return np.zeros((0, 3), dtype=np.float64)
        return np.concatenate([s.vertices for s in self.surfaces])


def flat_normals(vertices: NDArray[np.float64]) -> NDArray[np.float64]:
    """Per-triangle normals, repeated for each of the triangle's vertices.

    Triangles are wound so that ``(v2 - v0) x (v1 - v0)`` faces up for
    level ground. Degenerate triangles get a zero normal.

    Args:
        vertices: (n * 3, 3) triangle soup.

    Returns:
        (n * 3, 3) unit normals.
    """
    tris = vertices.reshape(-1, 3, 3)
    normals = np.cross(tris[:, 2] - tris[:, 0], tris[:, 1] - tris[:, 0])
    lengths = np.linalg.norm(normals, axis=1, keepdims=True)
    np.divide(normals, lengths, out=normals, where=lengths > 0)
    return np.repeat(normals, 3, axis=0)


def assemble_mesh(
    accumulators: Mapping[MaterialBand, SurfaceAccumulator],
    materials: MaterialSet | None = None,
) -> TerrainMesh:
    """Finalize every non-empty band into a surface of one mesh.

    Surface index follows the order of non-empty bands, so an island with
    no water starts at SAND.

    Args:
        accumulators: Band buffers keyed by band.
        materials: Material handle per band; missing handles stay None.

    Returns:
        TerrainMesh with surfaces ordered WATER, SAND, GRASS, ROCK.
    """
    materials = materials or MaterialSet()
    surfaces: list[Surface] = []

    for band in BAND_ORDER:
        acc = accumulators.get(band)
        if acc is None or acc.is_empty:
            continue
        vertices, uvs = acc.finalize()
        normals = flat_normals(vertices)
        normals.flags.writeable = False
        surfaces.append(
            Surface(
                band=band,
                vertices=vertices,
                uvs=uvs,
                normals=normals,
                material=getattr(materials, band.label),
            )
        )
        logger.debug(
            "surface_added",
            band=band.label,
            surface_index=len(surfaces) - 1,
            triangles=acc.triangle_count,
        )

    mesh = TerrainMesh(surfaces=tuple(surfaces))
    logger.info(
        "mesh_assembled",
        surfaces=mesh.surface_count,
        triangles=mesh.triangle_count,
        bands=[b.label for b in mesh.bands],
    )
    return mesh
