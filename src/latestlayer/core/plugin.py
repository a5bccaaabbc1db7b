"""
Lifecycle entry points.

Replaces the ``serverless-latest-layer-version`` pseudo version in layer
references with the ARN of the latest published layer version. Two hooks
cover the two moments a deployment reads layer references:

- after the compiled CloudFormation template is finalized (full deploys)
- before a single function is deployed (``deploy function``)
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable

from latestlayer.config.loader import Service
from latestlayer.core.coordinator import LayerVersionCoordinator
from latestlayer.core.extractor import function_layer_lists, template_layer_lists
from latestlayer.core.versions import LayerVersionSource, VersionRecord
from latestlayer.exceptions import ConfigurationError
from latestlayer.utils.async_utils import dual
from latestlayer.utils.logging import get_logger

logger = get_logger("latestlayer.plugin")

CFN_HOOK = "after:aws:package:finalize:mergeCustomProviderResources"
SLS_HOOK = "before:deploy:function:deploy"


class LatestLayerVersionPlugin:
    """
    Resolves placeholder layer references of a service in place.

    Args:
        service: Loaded service descriptor
        source: Version source (default: Lambda API in the service region)
    """

    def __init__(self, service: Service, source: LayerVersionSource | None = None):
        self.service = service
        if source is None:
            from latestlayer.sources.lambda_api import LambdaLayerVersionSource

            source = LambdaLayerVersionSource(
                region=service.region, profile=service.provider.get("profile")
            )
        self.source = source

        self.hooks: dict[str, Callable[[], Awaitable[dict[str, VersionRecord]]]] = {
            CFN_HOOK: self.update_cfn_layer_version,
            SLS_HOOK: self.update_sls_layer_version,
        }

    @dual
    async def update_sls_layer_version(self) -> dict[str, VersionRecord]:
        """Resolve layer references in the service function definitions."""
        return await self.update(function_layer_lists(self.service.functions))

    @dual
    async def update_cfn_layer_version(self) -> dict[str, VersionRecord]:
        """Resolve layer references in the compiled CloudFormation template."""
        return await self.update(template_layer_lists(self.service.compiled_template))

    async def update(self, layer_lists: Any) -> dict[str, VersionRecord]:
        coordinator = LayerVersionCoordinator(self.source, self.service.region)
        return await coordinator.update(layer_lists)

    @dual
    async def run_hook(self, name: str) -> dict[str, VersionRecord]:
        """Run the entry point registered for a lifecycle event."""
        if name not in self.hooks:
            raise ConfigurationError(
                f"Unknown lifecycle hook: {name}", details={"available": sorted(self.hooks)}
            )
        logger.debug(f"Running hook {name}")
        return await self.hooks[name]()
