"""
Layer reference matching, extraction, lookup and coordination.
"""

from latestlayer.core.coordinator import LayerVersionCoordinator, group_slots
from latestlayer.core.extractor import Slot, collect_slots, function_layer_lists, template_layer_lists
from latestlayer.core.matcher import LAYER_ARN_PATTERN, ParsedReference, match_reference, resolution_target
from latestlayer.core.versions import LayerVersionSource, VersionPage, VersionRecord, resolve_latest_version

__all__ = [
    "LAYER_ARN_PATTERN",
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
]
