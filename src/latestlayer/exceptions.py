"""
latestlayer exception hierarchy.

All domain-specific exceptions inherit from LatestLayerError, so a caller can
stop any resolution failure with a single except clause while still being
able to react to a specific layer that could not be resolved.

Hierarchy::

    LatestLayerError
    ├── ConfigurationError            - descriptor loading, parsing, unknown hooks
    └── ResolutionError               - layer version lookup failures
        ├── NoVersionAvailableError   - layer has no published version
        │   └── LayerVersionLookupError - the version listing call itself failed
        └── LayerNotFoundError        - a version source does not know the layer

References that do not match the placeholder pattern and ``layers`` values
that are not lists are not errors: they are skipped and noted at debug level.
"""

from __future__ import annotations


class LatestLayerError(Exception):
    """Base exception for all latestlayer errors."""

    def __init__(self, message: str, *, details: dict | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


# --- Configuration -----------------------------------------------------------


class ConfigurationError(LatestLayerError):
    """Raised when the service descriptor or a template cannot be loaded."""


# --- Resolution --------------------------------------------------------------


class ResolutionError(LatestLayerError):
    """Raised when a layer reference cannot be resolved to a version."""


class NoVersionAvailableError(ResolutionError):
    """Raised when a layer yields zero versions across all listing pages."""

    def __init__(self, layer_name: str, message: str | None = None) -> None:
        super().__init__(
            message or f"Lambda layer {layer_name} has no version available.",
            details={"layer": layer_name},
        )
        self.layer_name = layer_name


class LayerVersionLookupError(NoVersionAvailableError):
    """Raised when listing the versions of a layer fails.

    Lookups are not retried; the original exception is kept as ``__cause__``.
    """

    def __init__(self, layer_name: str, cause: Exception) -> None:
        super().__init__(
            layer_name,
            f"Lambda layer {layer_name} has no version available: listing versions failed ({cause})",
        )
        self.__cause__ = cause


class LayerNotFoundError(ResolutionError):
    """Raised by a version source that has no record of the requested layer."""

    def __init__(self, layer_name: str) -> None:
        super().__init__(f"Lambda layer not found: {layer_name}", details={"layer": layer_name})
        self.layer_name = layer_name
