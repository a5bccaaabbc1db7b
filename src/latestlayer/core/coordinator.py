"""
Resolution coordination.

Groups slots by resolution target so every distinct layer is looked up once,
resolves all targets concurrently and writes each result into every slot of
its group.
"""

import asyncio
from collections.abc import Iterable
from typing import Any

from latestlayer.core.extractor import Slot, collect_slots
from latestlayer.core.matcher import resolution_target
from latestlayer.core.versions import LayerVersionSource, VersionRecord, resolve_latest_version
from latestlayer.utils.logging import get_logger

logger = get_logger("latestlayer.coordinator")


def group_slots(slots: Iterable[Slot], default_region: str) -> dict[str, list[Slot]]:
    """
    Group eligible slots by resolution target.

    Slots holding a reference that is not eligible are left out. Targets and
    the slots within each target keep discovery order.
    """
    groups: dict[str, list[Slot]] = {}
    for slot in slots:
        target = resolution_target(slot.value, default_region)
        if target is None:
            continue
        groups.setdefault(target, []).append(slot)
    return groups


class LayerVersionCoordinator:
    """
    Resolves grouped layer slots against a version source.

    Targets own disjoint sets of slots, so resolutions run concurrently
    without locking. A failed target does not undo the writes of targets that
    resolved successfully.
    """

    def __init__(self, source: LayerVersionSource, region: str):
        """
        Initialize LayerVersionCoordinator.

        Args:
            source: Version source used for every lookup
            region: Deployment region substituted for ``?`` regions
        """
        self.source = source
        self.region = region

    async def update(self, layer_lists: Iterable[Any]) -> dict[str, VersionRecord]:
        """Resolve every eligible reference found in the given layer lists."""
        slots = collect_slots(layer_lists)
        return await self.resolve_all(group_slots(slots, self.region))

    async def resolve_all(self, groups: dict[str, list[Slot]]) -> dict[str, VersionRecord]:
        """
        Resolve every target once and write results into its slots.

        Args:
            groups: Slots grouped by resolution target

        Returns:
            Resolved VersionRecord per target

        Raises:
            ResolutionError: The first failure in target order, after all
                targets have settled
        """
        if not groups:
            return {}

        targets = list(groups)
        results = await asyncio.gather(
            *(self._resolve_group(target, groups[target]) for target in targets),
            return_exceptions=True,
        )

        resolved: dict[str, VersionRecord] = {}
        failures: list[BaseException] = []
        for target, result in zip(targets, results, strict=True):
            if isinstance(result, BaseException):
                failures.append(result)
            else:
                resolved[target] = result

        if failures:
            for failure in failures[1:]:
                logger.error(f"Layer resolution failed: {failure}")
            raise failures[0]

        return resolved

    async def _resolve_group(self, target: str, slots: list[Slot]) -> VersionRecord:
        latest = await resolve_latest_version(self.source, target)
        for slot in slots:
            slot.write(latest.arn)
        logger.info(f"Resolved {target} to version {latest.version} ({len(slots)} reference(s))")
        return latest
