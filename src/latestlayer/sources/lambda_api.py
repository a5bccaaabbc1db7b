"""
AWS Lambda layer version source.

Lists layer versions through the boto3 ``lambda`` client. Calls run in a worker
thread so lookups for different layers overlap on the event loop.
"""

from __future__ import annotations

import asyncio
from typing import Any, Optional

from latestlayer.core.versions import VersionPage, VersionRecord
from latestlayer.utils.logging import debug_logger

logger = debug_logger("latestlayer.sources.lambda")


class LambdaLayerVersionSource:
    """
    boto3-backed version source.

    Provides a lazily created Lambda client. Credentials come from the
    environment, a named profile or the instance role.

    Example:
        source = LambdaLayerVersionSource(region="eu-west-1", profile="deploy")
        page = await source.list_versions("my-layer")
    """

    def __init__(
        self,
        region: Optional[str] = None,
        *,
        profile: Optional[str] = None,
        endpoint_url: Optional[str] = None,
        client: Any = None,
    ):
        self.region = region
        self.profile = profile
        self.endpoint_url = endpoint_url
        self._client = client

    def _get_client_kwargs(self) -> dict[str, Any]:
        """Build kwargs for boto3 client initialization."""
        kwargs: dict[str, Any] = {}
        if self.region:
            kwargs["region_name"] = self.region
        if self.endpoint_url:
            kwargs["endpoint_url"] = self.endpoint_url
        return kwargs

    @property
    def client(self):
        """
        Get boto3 Lambda client (lazy initialization).

        Returns:
            boto3 client('lambda') instance
        """
        if self._client is None:
            import boto3

            session = boto3.session.Session(profile_name=self.profile) if self.profile else boto3.session.Session()
            self._client = session.client("lambda", **self._get_client_kwargs())
        return self._client

    async def list_versions(self, layer_name: str, marker: str | None = None) -> VersionPage:
        """
        Fetch one page of versions for a layer.

        Args:
            layer_name: Layer name or layer ARN without version suffix
            marker: Continuation marker from the previous page

        Returns:
            VersionPage with the page's versions and the next marker, if any
        """
        params: dict[str, Any] = {"LayerName": layer_name}
        if marker:
            params["Marker"] = marker

        response = await asyncio.to_thread(self.client.list_layer_versions, **params)
        logger.debug(f"listLayerVersions {params} -> {len(response.get('LayerVersions', []))} version(s)")

        return VersionPage(
            versions=[
                VersionRecord(version=int(item["Version"]), arn=item["LayerVersionArn"])
                for item in response.get("LayerVersions", [])
            ],
            next_marker=response.get("NextMarker"),
        )
