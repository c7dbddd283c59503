"""Island generation configuration models."""

import tomllib
from pathlib import Path
from typing import Any, Literal, Mapping

from pydantic import BaseModel, Field, ValidationError, model_validator

from .exceptions import InvalidConfigurationError


class NoiseConfig(BaseModel, frozen=True):
    """Fractal noise parameters."""

    octaves: int = Field(default=4, ge=1, le=12, description="Number of octaves for fBm")
    lacunarity: float = Field(
        default=2.0, gt=0.0, description="Frequency multiplier per octave"
    )
    gain: float = Field(default=0.5, gt=0.0, description="Amplitude multiplier per octave")


class BandThresholds(BaseModel, frozen=True):
    """Upper bounds of the lower three bands, as fractions of max height.

    Anything at or above ``grass`` is rock.
    """

    water: float = Field(default=0.05, gt=0.0, le=1.0, description="Water upper bound")
    sand: float = Field(default=0.15, gt=0.0, le=1.0, description="Sand upper bound")
    grass: float = Field(default=0.6, gt=0.0, le=1.0, description="Grass upper bound")

    @model_validator(mode="after")
    def _check_ascending(self) -> "BandThresholds":
        if not self.water < self.sand < self.grass:
            raise ValueError(
                f"band thresholds must be strictly ascending, got "
                f"water={self.water} sand={self.sand} grass={self.grass}"
            )
        return self


class MaterialSet(BaseModel, frozen=True):
    """Opaque material handles, one per band.

    The handles are never inspected; they are attached to the matching
    surface as-is. Any of them may be None.
    """

    water: Any = None
    sand: Any = None
    grass: Any = None
    rock: Any = None


class GenerationConfig(BaseModel, frozen=True):
    """Complete island generation configuration."""

    size: int = Field(default=64, ge=2, le=512, description="Grid vertices per side")
    island_scale: float = Field(
        default=40.0, ge=1.0, le=100.0, description="World-space width of the island"
    )
    noise_scale: float = Field(
        default=2.0, ge=0.1, le=10.0, description="Noise wavelength in world units"
    )
    max_height: float = Field(
        default=8.0, ge=0.0, le=20.0, description="Height of a full-strength peak"
    )
    seed: int = Field(default=0, description="Noise seed (0 = random per generation)")

    materials: MaterialSet = Field(default_factory=MaterialSet)
    noise: NoiseConfig = Field(default_factory=NoiseConfig)
    bands: BandThresholds = Field(default_factory=BandThresholds)

    diagonal: Literal["fixed", "alternating"] = Field(
        default="fixed", description="Cell split direction"
    )
    workers: int = Field(
        default=1, ge=1, le=64, description="Threads used for classification"
    )

    # Debug options
    debug_output_dir: str | None = Field(
        default=None, description="Directory for debug images (None = disabled)"
    )


def parse_config(data: Mapping[str, Any] | GenerationConfig) -> GenerationConfig:
    """Validate raw settings into a GenerationConfig.

    Args:
        data: Mapping of settings, or an already-built config.

    Returns:
        Validated GenerationConfig.

    Raises:
        InvalidConfigurationError: If any setting is out of bounds.
    """
    if isinstance(data, GenerationConfig):
        return data
    try:
        return GenerationConfig.model_validate(dict(data))
    except ValidationError as e:
        raise InvalidConfigurationError(str(e)) from e


def load_config(config_path: Path) -> GenerationConfig:
    """Load generation settings from a TOML file.

    Settings may live at the top level or under an ``[island]`` table.

    Args:
        config_path: Path to the TOML config file.

    Returns:
        Parsed GenerationConfig.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        InvalidConfigurationError: If TOML is malformed or values are invalid.
    """
    with open(config_path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise InvalidConfigurationError(f"{config_path}: {e}") from e
    return parse_config(data.get("island", data))
