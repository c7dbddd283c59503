"""Main island generation orchestration."""

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Mapping

import numpy as np
import structlog
from numpy.typing import NDArray

from .classification import (
    BAND_ORDER,
    MaterialBand,
    classify_heights,
    triangle_average_heights,
)
from .collision import CollisionShape, build_collision
from .config import BandThresholds, GenerationConfig, parse_config
from .exceptions import GenerationFailure, IslandGenError
from .heightmap import Heightmap, build_heightmap
from .mesh import TerrainMesh, assemble_mesh
from .noise import NoiseField, resolve_seed
from .surface import SurfaceAccumulator, make_accumulators
from .triangulation import triangle_indices

logger = structlog.get_logger()

# Below this many triangles per worker, threading costs more than it saves
_MIN_TRIANGLES_PER_BLOCK = 4096

BandBatch = dict[MaterialBand, tuple[NDArray[np.float64], NDArray[np.float64]]]


class GenerationResult:
    """Result of island generation with the intermediate heightmap."""

    def __init__(
        self,
        mesh: TerrainMesh,
        collision: CollisionShape,
        heightmap: Heightmap,
        seed: int,
        config: GenerationConfig,
    ):
        self.mesh = mesh
        self.collision = collision
        self.heightmap = heightmap
        self.seed = seed
        self.config = config


def generate_island(
    config: GenerationConfig | Mapping[str, Any],
    rng: np.random.Generator | None = None,
) -> GenerationResult:
    """Generate an island mesh and its collision shape.

    Args:
        config: Generation configuration, or a mapping to validate into one.
        rng: Entropy source used only when ``config.seed`` is 0.

    Returns:
        GenerationResult with mesh, collision shape, heightmap and the
        effective seed.

    Raises:
        InvalidConfigurationError: If the configuration is rejected.
        GenerationFailure: If any pipeline stage fails.
    """
    config = parse_config(config)
    seed = resolve_seed(config.seed, rng)

    logger.info(
        "generation_started",
        size=config.size,
        seed=seed,
        island_scale=config.island_scale,
        max_height=config.max_height,
    )

    try:
        noise = NoiseField(seed, config.noise_scale, config.noise)
        heightmap = build_heightmap(
            config.size, config.island_scale, config.max_height, noise
        )

        accumulators = make_accumulators()
        triangles = triangle_indices(config.size, config.diagonal)
        accumulate_triangles(
            heightmap, triangles, accumulators, config.bands, workers=config.workers
        )

        mesh = assemble_mesh(accumulators, config.materials)
        collision = build_collision(mesh)
    except IslandGenError:
        raise
    except Exception as e:
        raise GenerationFailure(f"Island generation failed: {e}") from e

    _log_band_stats(mesh, len(triangles))

    if config.debug_output_dir:
        _dump_debug_images(
            Path(config.debug_output_dir),
            heights=heightmap.grid(),
            falloff=heightmap.falloff.reshape(config.size, config.size),
        )

    return GenerationResult(
        mesh=mesh,
        collision=collision,
        heightmap=heightmap,
        seed=seed,
        config=config,
    )


def accumulate_triangles(
    heightmap: Heightmap,
    triangles: NDArray[np.int64],
    accumulators: Mapping[MaterialBand, SurfaceAccumulator],
    thresholds: BandThresholds,
    workers: int = 1,
) -> None:
    """Classify triangles and append them to their band's accumulator.

    With several workers the triangle list is split into contiguous
    blocks. Each block is classified into its own per-band batches and
    the batches are merged in block order, so the buffers come out the
    same as a single-threaded run.

    Args:
        heightmap: Source vertex table.
        triangles: (n, 3) vertex indices in emission order.
        accumulators: Destination buffer per band.
        thresholds: Band thresholds as fractions of max height.
        workers: Thread count.
    """
    n_blocks = min(workers, max(1, len(triangles) // _MIN_TRIANGLES_PER_BLOCK))

    if n_blocks <= 1:
        batches = [_classify_block(heightmap, triangles, thresholds)]
    else:
        blocks = np.array_split(triangles, n_blocks)
        with ThreadPoolExecutor(max_workers=n_blocks) as executor:
            batches = list(
                executor.map(
                    lambda block: _classify_block(heightmap, block, thresholds),
                    blocks,
                )
            )
        logger.debug("classification_parallel", blocks=n_blocks)

    for batch in batches:
        for band, (positions, uvs) in batch.items():
            accumulators[band].extend(positions, uvs)

    for band in BAND_ORDER:
        logger.debug(
            "band_accumulated",
            band=band.label,
            triangles=accumulators[band].triangle_count,
        )


def _classify_block(
    heightmap: Heightmap,
    triangles: NDArray[np.int64],
    thresholds: BandThresholds,
) -> BandBatch:
    """Classify one block of triangles into per-band vertex batches."""
    avg = triangle_average_heights(heightmap.heights, triangles)
    codes = classify_heights(avg, heightmap.max_height, thresholds)

    batch: BandBatch = {}
    for band in BAND_ORDER:
        selected = triangles[codes == band]
        if len(selected) == 0:
            continue
        flat = selected.ravel()
        batch[band] = (heightmap.positions[flat], heightmap.uvs[flat])
    return batch


def _log_band_stats(mesh: TerrainMesh, total: int) -> None:
    """Log how triangles were distributed across bands."""
    for band in BAND_ORDER:
        surface = mesh.surface_for(band)
        count = surface.triangle_count if surface is not None else 0
        pct = count / total * 100 if total else 0.0
        logger.info("band_stats", band=band.label, triangles=count, percent=round(pct, 1))

    if mesh.surface_count == 1:
        logger.info("single_band_island", band=mesh.bands[0].label)


def _dump_debug_images(output_dir: Path, **arrays: NDArray) -> None:
    """Save arrays as images for debugging.

    Args:
        output_dir: Directory to save images.
        **arrays: Named arrays to save.
    """
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.warning("debug_images_skipped", reason=str(e))
        return

    try:
        import matplotlib.pyplot as plt
    except ImportError:
        logger.warning("debug_images_skipped", reason="matplotlib not available")
        return

    for name, arr in arrays.items():
        fig, ax = plt.subplots(figsize=(8, 8))
        ax.imshow(arr, cmap="terrain")
        ax.set_title(name)
        ax.axis("off")

        try:
            fig.savefig(output_dir / f"{name}.png", dpi=150, bbox_inches="tight")
        except OSError as e:
            logger.warning("debug_images_skipped", reason=str(e))
            return
        finally:
            plt.close(fig)

    logger.info("debug_images_saved", output_dir=str(output_dir))
