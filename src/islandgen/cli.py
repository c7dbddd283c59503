"""Command-line interface for baking islands."""

import argparse
import logging
import sys
import time
from pathlib import Path

import structlog


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for island generation."""
    parser = argparse.ArgumentParser(
        description="Bake a procedural island mesh with material bands and collision"
    )
    parser.add_argument(
        "--config", "-c", type=str, default=None, help="TOML config file (optional)"
    )
    parser.add_argument("--size", type=int, default=None, help="Grid vertices per side")
    parser.add_argument("--seed", type=int, default=None, help="Noise seed (0 = random)")
    parser.add_argument(
        "--island-scale", type=float, default=None, help="World-space island width"
    )
    parser.add_argument(
        "--noise-scale", type=float, default=None, help="Noise wavelength in world units"
    )
    parser.add_argument(
        "--max-height", type=float, default=None, help="Height of a full-strength peak"
    )
    parser.add_argument(
        "--workers", type=int, default=None, help="Threads used for classification"
    )
    parser.add_argument(
        "--output",
        "-o",
        type=str,
        default="island.npz",
        help="Output path (default: island.npz)",
    )
    parser.add_argument(
        "--debug-images",
        type=str,
        default=None,
        help="Directory to save debug images (optional)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Verbose logging"
    )

    args = parser.parse_args(argv)

    # Configure structlog for CLI
    level = logging.DEBUG if args.verbose else logging.INFO
    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
    )

    # Import here to avoid slow startup for --help
    from .config import load_config, parse_config
    from .exceptions import IslandGenError
    from .generator import generate_island
    from .persistence import save_mesh
    from .validation import validate_result

    overrides = {
        "size": args.size,
        "seed": args.seed,
        "island_scale": args.island_scale,
        "noise_scale": args.noise_scale,
        "max_height": args.max_height,
        "workers": args.workers,
        "debug_output_dir": args.debug_images,
    }

    try:
        base = load_config(Path(args.config)) if args.config else parse_config({})
        settings = base.model_dump()
        settings.update({k: v for k, v in overrides.items() if v is not None})
        settings["materials"] = base.materials
        config = parse_config(settings)

        start_time = time.time()
        result = generate_island(config)
        gen_time = time.time() - start_time
    except (IslandGenError, FileNotFoundError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    validation = validate_result(result)
    for warning in validation.warnings:
        print(f"warning: {warning}", file=sys.stderr)
    for error in validation.errors:
        print(f"error: {error}", file=sys.stderr)

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path = save_mesh(output_path, result)

    print(
        f"Baked {config.size}x{config.size} island (seed {result.seed}) "
        f"in {gen_time:.2f}s: {result.mesh.triangle_count} triangles "
        f"in {result.mesh.surface_count} surfaces"
    )
    print(f"Saved to {output_path}")

    return 0 if validation.passed else 2


if __name__ == "__main__":
    sys.exit(main())
