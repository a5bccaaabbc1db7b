"""
In-memory layer version source.

Serves a fixed catalog in pages. Used by tests and by ``latestlayer resolve
--catalog`` to resolve a service offline.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from latestlayer.core.versions import VersionPage, VersionRecord
from latestlayer.exceptions import ConfigurationError, LayerNotFoundError


def _to_record(layer_name: str, item: Any) -> VersionRecord:
    if isinstance(item, VersionRecord):
        return item
    if not isinstance(item, Mapping):
        raise ConfigurationError(f"Catalog entry for {layer_name} must be a mapping, got: {item!r}")
    try:
        return VersionRecord(version=int(item["version"]), arn=str(item["arn"]))
    except KeyError as e:
        raise ConfigurationError(f"Catalog entry for {layer_name} is missing {e.args[0]!r}: {dict(item)!r}") from e
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            f"Catalog entry for {layer_name} has a non-integer version: {item.get('version')!r}"
        ) from e


def _to_records(layer_name: str, items: Any) -> list[VersionRecord]:
    # A layer listed without versions has none published
    if items is None:
        return []
    if not isinstance(items, list):
        raise ConfigurationError(f"Catalog versions for {layer_name} must be a list, got: {items!r}")
    return [_to_record(layer_name, item) for item in items]


class InMemoryLayerVersionSource:
    """
    Version source backed by a ``{layer_name: [versions]}`` mapping.

    Markers are the string offset of the next page. Every call is recorded in
    ``calls`` as ``(layer_name, marker)``.
    """

    def __init__(self, catalog: Mapping[str, list[Any]], page_size: int = 50):
        if page_size < 1:
            raise ValueError("page_size must be >= 1")
        self.catalog = {name: _to_records(name, items) for name, items in catalog.items()}
        self.page_size = page_size
        self.calls: list[tuple[str, str | None]] = []

    @classmethod
    def from_file(cls, path: str | Path, page_size: int = 50) -> "InMemoryLayerVersionSource":
        """Load a catalog from a YAML or JSON file."""
        path = Path(path)
        try:
            with open(path) as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError as e:
            raise ConfigurationError(f"Catalog file not found: {path}") from e
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Error parsing catalog {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Catalog {path} must be a mapping of layer name to versions")
        return cls(data, page_size=page_size)

    async def list_versions(self, layer_name: str, marker: str | None = None) -> VersionPage:
        self.calls.append((layer_name, marker))
        if layer_name not in self.catalog:
            raise LayerNotFoundError(layer_name)

        versions = self.catalog[layer_name]
        start = int(marker) if marker else 0
        end = start + self.page_size
        return VersionPage(
            versions=versions[start:end],
            next_marker=str(end) if end < len(versions) else None,
        )
