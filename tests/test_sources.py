"""
Tests for layer version sources.
"""

from unittest.mock import MagicMock, patch

import pytest

from latestlayer.core.versions import VersionRecord, resolve_latest_version
from latestlayer.exceptions import ConfigurationError, LayerNotFoundError
from latestlayer.sources.lambda_api import LambdaLayerVersionSource
from latestlayer.sources.memory import InMemoryLayerVersionSource


class TestLambdaLayerVersionSource:
    """Tests for the boto3-backed source."""

    @pytest.mark.asyncio
    async def test_maps_response(self):
        client = MagicMock()
        client.list_layer_versions.return_value = {
            "LayerVersions": [
                {"Version": 3, "LayerVersionArn": "arn:aws:lambda:us-east-1:123:layer:foo:3"},
                {"Version": 2, "LayerVersionArn": "arn:aws:lambda:us-east-1:123:layer:foo:2"},
            ],
            "NextMarker": "abc",
        }
        source = LambdaLayerVersionSource(region="us-east-1", client=client)

        page = await source.list_versions("foo")

        client.list_layer_versions.assert_called_once_with(LayerName="foo")
        assert page.versions[0] == VersionRecord(3, "arn:aws:lambda:us-east-1:123:layer:foo:3")
        assert page.next_marker == "abc"

    @pytest.mark.asyncio
    async def test_passes_marker(self):
        client = MagicMock()
        client.list_layer_versions.return_value = {"LayerVersions": []}
        source = LambdaLayerVersionSource(client=client)

        page = await source.list_versions("foo", "abc")

        client.list_layer_versions.assert_called_once_with(LayerName="foo", Marker="abc")
        assert page.versions == []
        assert page.next_marker is None

    @pytest.mark.asyncio
    async def test_pages_through_client(self):
        client = MagicMock()
        client.list_layer_versions.side_effect = [
            {"LayerVersions": [{"Version": 1, "LayerVersionArn": "v1"}, {"Version": 5, "LayerVersionArn": "v5"}], "NextMarker": "m"},
            {"LayerVersions": [{"Version": 3, "LayerVersionArn": "v3"}]},
        ]
        source = LambdaLayerVersionSource(client=client)

        latest = await resolve_latest_version(source, "foo")

        assert latest.arn == "v5"
        assert client.list_layer_versions.call_count == 2

    def test_client_is_lazy(self):
        with patch("boto3.session.Session") as session_cls:
            source = LambdaLayerVersionSource(region="eu-west-1", profile="deploy")
            session_cls.assert_not_called()

            client = source.client

            session_cls.assert_called_once_with(profile_name="deploy")
            session_cls.return_value.client.assert_called_once_with("lambda", region_name="eu-west-1")
            assert source.client is client


class TestInMemoryLayerVersionSource:
    """Tests for the catalog-backed source."""

    @pytest.mark.asyncio
    async def test_pages(self):
        source = InMemoryLayerVersionSource(
            {"foo": [{"version": i, "arn": f"foo:{i}"} for i in range(1, 6)]}, page_size=2
        )
        first = await source.list_versions("foo")
        second = await source.list_versions("foo", first.next_marker)
        third = await source.list_versions("foo", second.next_marker)

        assert [r.version for r in first.versions] == [1, 2]
        assert [r.version for r in third.versions] == [5]
        assert third.next_marker is None
        assert source.calls == [("foo", None), ("foo", "2"), ("foo", "4")]

    @pytest.mark.asyncio
    async def test_unknown_layer(self):
        source = InMemoryLayerVersionSource({})
        with pytest.raises(LayerNotFoundError):
            await source.list_versions("missing")

    def test_invalid_page_size(self):
        with pytest.raises(ValueError, match="page_size"):
            InMemoryLayerVersionSource({}, page_size=0)

    def test_from_file(self, tmp_path):
        catalog = tmp_path / "catalog.yaml"
        catalog.write_text("foo:\n  - version: 1\n    arn: foo:1\n")
        source = InMemoryLayerVersionSource.from_file(catalog)
        assert source.catalog == {"foo": [VersionRecord(1, "foo:1")]}

    def test_from_file_missing(self, tmp_path):
        with pytest.raises(ConfigurationError, match="Catalog file not found"):
            InMemoryLayerVersionSource.from_file(tmp_path / "nope.yaml")

    def test_from_file_not_mapping(self, tmp_path):
        catalog = tmp_path / "catalog.yaml"
        catalog.write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            InMemoryLayerVersionSource.from_file(catalog)

    @pytest.mark.parametrize(
        "entry, message",
        [
            ({"version": 1}, "Catalog entry for foo is missing 'arn'"),
            ({"arn": "foo:1"}, "Catalog entry for foo is missing 'version'"),
            ({"version": "one", "arn": "foo:1"}, "non-integer version: 'one'"),
            ({"version": None, "arn": "foo:1"}, "non-integer version: None"),
            ("foo:1", "must be a mapping"),
        ],
    )
    def test_malformed_entry(self, entry, message):
        with pytest.raises(ConfigurationError, match=message):
            InMemoryLayerVersionSource({"foo": [entry]})

    def test_versions_not_a_list(self):
        with pytest.raises(ConfigurationError, match="Catalog versions for foo must be a list"):
            InMemoryLayerVersionSource({"foo": {"version": 1, "arn": "foo:1"}})

    @pytest.mark.asyncio
    async def test_layer_without_versions(self, tmp_path):
        catalog = tmp_path / "catalog.yaml"
        catalog.write_text("foo:\n")
        source = InMemoryLayerVersionSource.from_file(catalog)

        assert source.catalog == {"foo": []}
        page = await source.list_versions("foo")
        assert page.versions == [] and page.next_marker is None
