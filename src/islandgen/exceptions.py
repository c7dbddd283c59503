"""Custom exceptions for island generation."""


class IslandGenError(Exception):
    """Base exception for island generation errors."""

    pass


class InvalidConfigurationError(IslandGenError, ValueError):
    """Raised when a generation config is rejected before any work starts."""

    pass


class GenerationFailure(IslandGenError):
    """Raised when the pipeline aborts; no partial mesh is returned."""

    pass
