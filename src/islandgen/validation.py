"""Post-generation validation of baked islands."""

import numpy as np
import structlog

from .generator import GenerationResult
from .triangulation import triangle_count

logger = structlog.get_logger()


class ValidationResult:
    """Result of island validation."""

    def __init__(self) -> None:
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.passed = True

    def add_error(self, message: str) -> None:
        """Add validation error."""
        self.errors.append(message)
        self.passed = False

    def add_warning(self, message: str) -> None:
        """Add validation warning."""
        self.warnings.append(message)


def validate_result(result: GenerationResult) -> ValidationResult:
    """Check a generated island against its structural invariants.

    Args:
        result: Output of :func:`~islandgen.generator.generate_island`.

    Returns:
        ValidationResult with any errors/warnings.
    """
    validation = ValidationResult()

    # Check 1: Heightmap size and range
    _check_heightmap(result, validation)

    # Check 2: Every cell produced exactly two triangles
    _check_triangle_count(result, validation)

    # Check 3: Surfaces are whole triangles in band order
    _check_surfaces(result, validation)

    # Check 4: Collision covers every rendered vertex
    _check_collision(result, validation)

    if validation.passed:
        logger.info("validation_passed", warnings=len(validation.warnings))
    else:
        logger.warning("validation_failed", errors=validation.errors)

    return validation


def _check_heightmap(result: GenerationResult, validation: ValidationResult) -> None:
    size = result.config.size
    max_height = result.config.max_height
    heights = result.heightmap.heights

    if heights.size != size * size:
        validation.add_error(f"Heightmap has {heights.size} samples, expected {size * size}")
    if heights.size and (heights.min() < 0.0 or heights.max() > max_height):
        validation.add_error(
            f"Heights span [{heights.min():.4f}, {heights.max():.4f}], "
            f"outside [0, {max_height}]"
        )


def _check_triangle_count(result: GenerationResult, validation: ValidationResult) -> None:
    expected = triangle_count(result.config.size)
    actual = result.mesh.triangle_count
    if actual != expected:
        validation.add_error(f"Mesh has {actual} triangles, expected {expected}")


def _check_surfaces(result: GenerationResult, validation: ValidationResult) -> None:
    bands = [int(b) for b in result.mesh.bands]
    if bands != sorted(set(bands)):
        validation.add_error(f"Surfaces out of band order: {result.mesh.bands}")

    for i, surface in enumerate(result.mesh.surfaces):
        if surface.vertex_count == 0:
            validation.add_error(f"Surface {i} ({surface.band.label}) is empty")
        if surface.vertex_count % 3 != 0:
            validation.add_error(
                f"Surface {i} ({surface.band.label}) has {surface.vertex_count} "
                "vertices, not a multiple of 3"
            )
        if len(surface.uvs) != surface.vertex_count:
            validation.add_error(f"Surface {i} UV count does not match vertices")

    if result.mesh.surface_count == 1:
        validation.add_warning(
            f"Island is a single band ({result.mesh.bands[0].label})"
        )


def _check_collision(result: GenerationResult, validation: ValidationResult) -> None:
    rendered = result.mesh.vertex_count
    if result.collision.vertex_count != rendered:
        validation.add_error(
            f"Collision has {result.collision.vertex_count} vertices, "
            f"mesh renders {rendered}"
        )
        return
    if not np.array_equal(result.collision.vertices, result.mesh.all_vertices()):
        validation.add_error("Collision positions differ from rendered positions")
