"""Procedural island terrain baking.

Synthesizes a noise heightmap shaped into an island, splits its surface
into water, sand, grass and rock bands, and returns a multi-surface
triangle-soup mesh plus a matching collision shape.
"""

from .classification import MaterialBand, classify, classify_heights
from .collision import CollisionShape, build_collision
from .config import (
    BandThresholds,
    GenerationConfig,
    MaterialSet,
    NoiseConfig,
    load_config,
    parse_config,
)
from .exceptions import GenerationFailure, InvalidConfigurationError, IslandGenError
from .generator import GenerationResult, generate_island
from .heightmap import Heightmap, HeightSample, build_heightmap
from .island import falloff, falloff_grid
from .mesh import Surface, TerrainMesh, assemble_mesh
from .noise import NoiseField, resolve_seed
from .persistence import load_mesh, save_mesh
from .surface import SurfaceAccumulator
from .triangulation import iter_triangles, triangle_indices
from .validation import ValidationResult, validate_result

__all__ = [
    # Config
    "BandThresholds",
    "GenerationConfig",
    "MaterialSet",
    "NoiseConfig",
    "load_config",
    "parse_config",
    # Pipeline
    "NoiseField",
    "resolve_seed",
    "falloff",
    "falloff_grid",
    "Heightmap",
    "HeightSample",
    "build_heightmap",
    "iter_triangles",
    "triangle_indices",
    "MaterialBand",
    "classify",
    "classify_heights",
    "SurfaceAccumulator",
    "Surface",
    "TerrainMesh",
    "assemble_mesh",
    "CollisionShape",
    "build_collision",
    # Orchestration
    "GenerationResult",
    "generate_island",
    "ValidationResult",
    "validate_result",
    "load_mesh",
    "save_mesh",
    # Exceptions
    "IslandGenError",
    "InvalidConfigurationError",
    "GenerationFailure",
]
