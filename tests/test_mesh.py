"""Tests for mesh assembly."""

import numpy as np
import pytest

from islandgen.classification import MaterialBand
from islandgen.config import MaterialSet
from islandgen.mesh import assemble_mesh, flat_normals
from islandgen.surface import make_accumulators

# Wound the way the triangulator emits a cell's first triangle
FLAT_TRIANGLE = np.array([[0.0, 1.0, 0.0], [1.0, 1.0, 0.0], [0.0, 1.0, 1.0]])
UVS = np.zeros((3, 2))


def _filled(*bands: MaterialBand, triangles: int = 1) -> dict:
    accs = make_accumulators()
    for band in bands:
        for _ in range(triangles):
            accs[band].append(FLAT_TRIANGLE, UVS)
    return accs


class TestAssembleMesh:
    """Tests for assemble_mesh."""

    def test_surfaces_in_band_order(self) -> None:
        """Surfaces follow water, sand, grass, rock regardless of fill order."""
        accs = _filled(MaterialBand.ROCK, MaterialBand.WATER, MaterialBand.GRASS)
        mesh = assemble_mesh(accs)
        assert mesh.bands == (MaterialBand.WATER, MaterialBand.GRASS, MaterialBand.ROCK)

    def test_empty_bands_omitted(self) -> None:
        """With no water, sand becomes surface 0."""
        mesh = assemble_mesh(_filled(MaterialBand.SAND, MaterialBand.ROCK))
        assert mesh.surface_count == 2
        assert mesh.surfaces[0].band == MaterialBand.SAND

    def test_all_empty(self) -> None:
        """No triangles means no surfaces."""
        mesh = assemble_mesh(make_accumulators())
        assert mesh.surface_count == 0
        assert mesh.all_vertices().shape == (0, 3)

    def test_materials_attached(self) -> None:
        """Each surface carries its band's material handle."""
        materials = MaterialSet(water="mat_water", sand=None, grass=object(), rock="mat_rock")
        mesh = assemble_mesh(_filled(*MaterialBand), materials)
        assert mesh.surfaces[0].material == "mat_water"
        assert mesh.surfaces[1].material is None
        assert mesh.surfaces[2].material is materials.grass
        assert mesh.surfaces[3].material == "mat_rock"

    def test_missing_materials_are_none(self) -> None:
        """Surfaces exist even without any material."""
        mesh = assemble_mesh(_filled(MaterialBand.GRASS))
        assert mesh.surfaces[0].material is None

    def test_counts(self) -> None:
        """Vertex and triangle totals sum over surfaces."""
        mesh = assemble_mesh(_filled(MaterialBand.SAND, MaterialBand.GRASS, triangles=3))
        assert mesh.triangle_count == 6
        assert mesh.vertex_count == 18
        assert all(s.vertex_count % 3 == 0 for s in mesh.surfaces)

    def test_surface_for(self) -> None:
        """Lookup by band returns the surface or None."""
        mesh = assemble_mesh(_filled(MaterialBand.SAND))
        assert mesh.surface_for(MaterialBand.SAND) is mesh.surfaces[0]
        assert mesh.surface_for(MaterialBand.WATER) is None

    def test_normals_per_vertex(self) -> None:
        """Every vertex gets a normal."""
        mesh = assemble_mesh(_filled(MaterialBand.GRASS, triangles=2))
        surface = mesh.surfaces[0]
        assert surface.normals.shape == surface.vertices.shape


class TestFlatNormals:
    """Tests for flat normal generation."""

    def test_level_triangle_faces_up(self) -> None:
        """A level triangle in emission winding has normal +Y."""
        normals = flat_normals(FLAT_TRIANGLE)
        np.testing.assert_allclose(normals, np.tile([0.0, 1.0, 0.0], (3, 1)))

    def test_unit_length(self) -> None:
        """Normals of a sloped triangle are unit vectors."""
        tri = np.array([[0.0, 0.0, 0.0], [1.0, 2.0, 0.0], [0.0, 0.5, 1.0]])
        normals = flat_normals(tri)
        np.testing.assert_allclose(np.linalg.norm(normals, axis=1), 1.0)
        assert normals[0, 1] > 0

    def test_degenerate_is_zero(self) -> None:
        """Collapsed triangles get zero normals instead of NaN."""
        normals = flat_normals(np.zeros((3, 3)))
        np.testing.assert_array_equal(normals, 0.0)

    def test_same_normal_for_all_three_vertices(self) -> None:
        """Shading is flat per triangle."""
        tri = np.array([[0.0, 0.0, 0.0], [1.0, 0.3, 0.0], [0.0, 0.8, 1.0]])
        normals = flat_normals(tri)
        np.testing.assert_array_equal(normals[0], normals[1])
        np.testing.assert_array_equal(normals[1], normals[2])
