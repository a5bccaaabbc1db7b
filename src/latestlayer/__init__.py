"""
latestlayer - Pin Lambda layer references to their latest published version.

Layer references written as
``arn:aws:lambda:<region>:<account>:layer:<name>:serverless-latest-layer-version``
are rewritten in place to the ARN of the newest layer version, in both the
service function definitions and the compiled CloudFormation template.
"""

__version__ = "0.1.0"

from latestlayer.config.loader import Service, load_service
from latestlayer.core.coordinator import LayerVersionCoordinator, group_slots
from latestlayer.core.extractor import Slot, collect_slots, function_layer_lists, template_layer_lists
from latestlayer.core.matcher import ParsedReference, match_reference, resolution_target
from latestlayer.core.plugin import CFN_HOOK, SLS_HOOK, LatestLayerVersionPlugin
from latestlayer.core.versions import LayerVersionSource, VersionPage, VersionRecord, resolve_latest_version

# Exceptions
from latestlayer.exceptions import (
    ConfigurationError,
    LatestLayerError,
    LayerNotFoundError,
    LayerVersionLookupError,
    NoVersionAvailableError,
    ResolutionError,
)
from latestlayer.sources import InMemoryLayerVersionSource, LambdaLayerVersionSource

# Logging utilities
from latestlayer.utils.logging import get_logger, setup_logging, setup_logging_from_config

__all__ = [
    # Entry points
    "LatestLayerVersionPlugin",
    "CFN_HOOK",
    "SLS_HOOK",
    # Resolution
    "ParsedReference",
    "match_reference",
    "resolution_target",
    "Slot",
    "collect_slots",
    "function_layer_lists",
    "template_layer_lists",
    "LayerVersionSource",
    "VersionPage",
    "VersionRecord",
    "resolve_latest_version",
    "LayerVersionCoordinator",
    "group_slots",
    # Sources
    "LambdaLayerVersionSource",
    "InMemoryLayerVersionSource",
    # Config
    "Service",
    "load_service",
    # Logging
    "setup_logging",
    "setup_logging_from_config",
    "get_logger",
    # Exceptions
    "LatestLayerError",
    "ConfigurationError",
    "ResolutionError",
    "NoVersionAvailableError",
    "LayerVersionLookupError",
    "LayerNotFoundError",
]
