"""
Latest layer version lookup.

A version source lists the published versions of a layer one page at a time.
``resolve_latest_version`` walks every page and keeps the highest version.
"""

from dataclasses import dataclass, field
from typing import Protocol

from latestlayer.exceptions import LayerVersionLookupError, NoVersionAvailableError
from latestlayer.utils.logging import debug_logger

logger = debug_logger("latestlayer.versions")


@dataclass(frozen=True)
class VersionRecord:
    """One published version of a layer."""

    version: int
    arn: str


@dataclass
class VersionPage:
    """One page of a version listing; ``next_marker`` is None on the last page."""

    versions: list[VersionRecord] = field(default_factory=list)
    next_marker: str | None = None


class LayerVersionSource(Protocol):
    """Paginated listing of layer versions."""

    async def list_versions(self, layer_name: str, marker: str | None = None) -> VersionPage: ...


async def resolve_latest_version(source: LayerVersionSource, layer_name: str) -> VersionRecord:
    """
    Find the highest published version of a layer.

    Pages are fetched sequentially, each with the marker returned by the
    previous page, until a page comes back without one. Only a strictly
    greater version number replaces the current pick, so among equal version
    numbers the first one listed wins.

    Args:
        source: Version source to page through
        layer_name: Layer name or layer ARN without version suffix

    Returns:
        The latest VersionRecord

    Raises:
        NoVersionAvailableError: If no page lists any version
        LayerVersionLookupError: If the source fails while listing
    """
    logger.debug(f"Fetching versions for {layer_name}")

    latest: VersionRecord | None = None
    marker: str | None = None
    while True:
        try:
            page = await source.list_versions(layer_name, marker)
        except Exception as e:
            raise LayerVersionLookupError(layer_name, e) from e

        logger.debug(f"Result {page}")
        for record in page.versions:
            if latest is None or record.version > latest.version:
                latest = record

        marker = page.next_marker
        if not marker:
            break

    if latest is None:
        raise NoVersionAvailableError(layer_name)

    logger.debug(f"Latest version for {layer_name} -> {latest}")
    return latest
