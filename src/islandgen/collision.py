"""Static concave collision geometry derived from the rendered mesh."""

from dataclasses import dataclass

import numpy as np
import structlog
from numpy.typing import NDArray

from .mesh import TerrainMesh

logger = structlog.get_logger()


@dataclass(frozen=True)
class CollisionShape:
    """Concave triangle-soup collision shape.

    ``faces`` has shape (n, 3, 3): n triangles of three XYZ vertices.
    """

    faces: NDArray[np.float64]

    @property
    def face_count(self) -> int:
        return len(self.faces)

    @property
    def vertex_count(self) -> int:
        return len(self.faces) * 3

    @property
    def vertices(self) -> NDArray[np.float64]:
        """Faces flattened to an (n * 3, 3) vertex array."""
        return self.faces.reshape(-1, 3)

    def bounds(self) -> tuple[NDArray[np.float64], NDArray[np.float64]]:
        """Axis-aligned bounding box as (min corner, max corner).

        Raises:
            ValueError: If the shape has no faces.
        """
        if self.face_count == 0:
            raise ValueError("Empty collision shape has no bounds")
        verts = self.vertices
        return verts.min(axis=0), verts.max(axis=0)


def build_collision(mesh: TerrainMesh) -> CollisionShape:
    """Build a collision shape from every surface of a mesh.

    Positions are taken unchanged from all surfaces in surface order, so
    collision matches what is rendered regardless of which bands exist.

    Args:
        mesh: Assembled terrain mesh.

    Returns:
        CollisionShape with one face per rendered triangle.
    """
    faces = mesh.all_vertices().reshape(-1, 3, 3)
    faces.flags.writeable = False
    shape = CollisionShape(faces=faces)

    logger.info("collision_built", faces=shape.face_count)
    return shape
