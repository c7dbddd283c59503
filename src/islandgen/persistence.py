"""Bake persistence: save and load generated island meshes."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import numpy as np
import structlog

from .classification import MaterialBand
from .collision import CollisionShape
from .generator import GenerationResult
from .mesh import Surface, TerrainMesh, flat_normals

logger = structlog.get_logger()

FORMAT_VERSION = 1


def save_mesh(path: Path, result: GenerationResult) -> Path:
    """Save a generated island to disk.

    Uses numpy's compressed .npz format. Material handles are opaque and
    are not written.

    Args:
        path: Output path. A ".npz" suffix is appended when missing,
            matching what numpy writes.
        result: Generation result to store.

    Returns:
        The path actually written.
    """
    if path.suffix != ".npz":
        path = path.with_suffix(path.suffix + ".npz")

    arrays: dict[str, Any] = {}
    for surface in result.mesh.surfaces:
        arrays[f"{surface.band.label}_vertices"] = surface.vertices
        arrays[f"{surface.band.label}_uvs"] = surface.uvs

    metadata = {
        "version": FORMAT_VERSION,
        "seed": result.seed,
        "size": result.config.size,
        "island_scale": result.config.island_scale,
        "noise_scale": result.config.noise_scale,
        "max_height": result.config.max_height,
        "bands": [s.band.label for s in result.mesh.surfaces],
        "generated_at": datetime.now(timezone.utc).isoformat(),
    }

    np.savez_compressed(
        path,
        heights=result.heightmap.heights,
        collision=result.collision.faces,
        metadata=json.dumps(metadata).encode("utf-8"),
        **arrays,
    )

    file_size = path.stat().st_size / 1024
    logger.info("mesh_saved", path=str(path), size_kb=round(file_size, 1))
    return path


def load_mesh(path: Path) -> tuple[TerrainMesh, CollisionShape, dict]:
    """Load a baked island from disk.

    Args:
        path: Path to .npz file.

    Returns:
        Tuple of (TerrainMesh, CollisionShape, metadata dict). Surfaces
        carry no material handle.

    Raises:
        FileNotFoundError: If file doesn't exist.
        ValueError: If file format is invalid.
    """
    if not path.exists():
        raise FileNotFoundError(f"Mesh file not found: {path}")

    with np.load(path) as data:
        if "metadata" not in data:
            raise ValueError("Invalid mesh file: missing metadata")
        metadata = json.loads(data["metadata"].tobytes().decode("utf-8"))
        if metadata.get("version") != FORMAT_VERSION:
            raise ValueError(f"Unsupported mesh file version: {metadata.get('version')}")

        surfaces = []
        for label in metadata.get("bands", []):
            try:
                band = MaterialBand[str(label).upper()]
            except KeyError as e:
                raise ValueError(f"Invalid mesh file: unknown band {label!r}") from e
            try:
                vertices = data[f"{label}_vertices"]
                uvs = data[f"{label}_uvs"]
            except KeyError as e:
                raise ValueError(f"Invalid mesh file: missing arrays for {label}") from e
            surfaces.append(
                Surface(band=band, vertices=vertices, uvs=uvs, normals=flat_normals(vertices))
            )

        if "collision" not in data:
            raise ValueError("Invalid mesh file: missing 'collision' array")
        collision = CollisionShape(faces=data["collision"])

    mesh = TerrainMesh(surfaces=tuple(surfaces))
    logger.info("mesh_loaded", path=str(path), surfaces=mesh.surface_count)
    return mesh, collision, metadata
