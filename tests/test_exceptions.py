"""
Tests for the exception hierarchy.
"""

import pytest

from latestlayer.exceptions import (
    ConfigurationError,
    LatestLayerError,
    LayerNotFoundError,
    LayerVersionLookupError,
    NoVersionAvailableError,
    ResolutionError,
)


class TestHierarchy:
    """Verify all exceptions inherit from LatestLayerError."""

    @pytest.mark.parametrize(
        "exc_class",
        [
            ConfigurationError,
            ResolutionError,
            NoVersionAvailableError,
            LayerVersionLookupError,
            LayerNotFoundError,
        ],
    )
    def test_inherits_from_base(self, exc_class):
        assert issubclass(exc_class, LatestLayerError)

    def test_lookup_error_is_no_version_available(self):
        assert issubclass(LayerVersionLookupError, NoVersionAvailableError)

    def test_not_found_is_resolution_error(self):
        assert issubclass(LayerNotFoundError, ResolutionError)
        assert not issubclass(LayerNotFoundError, NoVersionAvailableError)


class TestMessages:
    """Verify messages and details name the layer."""

    def test_base_details(self):
        err = LatestLayerError("boom", details={"k": "v"})
        assert err.message == "boom"
        assert err.details == {"k": "v"}
        assert LatestLayerError("boom").details == {}

    def test_no_version_available(self):
        err = NoVersionAvailableError("shared-deps")
        assert str(err) == "Lambda layer shared-deps has no version available."
        assert err.layer_name == "shared-deps"
        assert err.details == {"layer": "shared-deps"}

    def test_lookup_error_keeps_cause(self):
        cause = TimeoutError("read timeout")
        err = LayerVersionLookupError("shared-deps", cause)
        assert err.__cause__ is cause
        assert "shared-deps" in err.message
        assert "read timeout" in err.message

    def test_not_found(self):
        err = LayerNotFoundError("shared-deps")
        assert err.layer_name == "shared-deps"
        assert "shared-deps" in str(err)
