"""
Layer reference matching.

A layer reference is eligible for resolution only when it has exactly this
shape::

    arn:aws:lambda:<region>:<account-id>:layer:<layer-name>:serverless-latest-layer-version

``?`` in the region position means "the deployment region"; ``?`` in the
account position means "the deploying account", in which case the layer is
looked up by its bare name.
"""

import re
from dataclasses import dataclass

from latestlayer.utils.logging import debug_logger

logger = debug_logger("latestlayer.matcher")

PLACEHOLDER = "?"
LATEST_MARKER = "serverless-latest-layer-version"

LAYER_ARN_PATTERN = re.compile(
    r"^arn:aws:lambda:(?P<region>[^:]+):(?P<account_id>[^:]+):layer:(?P<layer_name>[^:]+):"
    + re.escape(LATEST_MARKER)
    + r"$"
)

# Already pinned to a published version, left untouched
_VERSIONED_ARN_PATTERN = re.compile(r"^arn:aws:lambda:[^:]+:[^:]+:layer:[^:]+:\d+$")


@dataclass(frozen=True)
class ParsedReference:
    """Structural parts of an eligible layer reference."""

    region: str
    account_id: str
    layer_name: str
    version_token: str = "latest"

    def target(self, default_region: str) -> str:
        """
        Canonical name the layer versions are listed under.

        Args:
            default_region: Deployment region, used when region is a placeholder

        Returns:
            Bare layer name for account-relative references, layer ARN without
            version suffix otherwise
        """
        if self.account_id == PLACEHOLDER:
            return self.layer_name
        region = default_region if self.region == PLACEHOLDER else self.region
        return f"arn:aws:lambda:{region}:{self.account_id}:layer:{self.layer_name}"


def match_reference(raw: object) -> ParsedReference | None:
    """
    Decompose a layer reference, or return None if it is not eligible.

    Not-eligible covers empty values, non-strings, references pinned to an
    explicit version and anything else outside the placeholder shape.
    """
    if not raw:
        return None
    if not isinstance(raw, str):
        logger.debug(f"Skipping layer as its not a string: {raw!r}")
        return None

    tokens = LAYER_ARN_PATTERN.match(raw)
    if tokens is None:
        if _VERSIONED_ARN_PATTERN.match(raw):
            logger.debug(f"Skipping layer {raw} as it has a clearly specified layer version.")
        else:
            logger.debug(f"Skipping layer {raw} as it doesn't match regexp: {LAYER_ARN_PATTERN.pattern}")
        return None

    return ParsedReference(
        region=tokens.group("region"),
        account_id=tokens.group("account_id"),
        layer_name=tokens.group("layer_name"),
    )


def resolution_target(raw: object, default_region: str) -> str | None:
    """Resolution target for a raw reference, None when not eligible."""
    parsed = match_reference(raw)
    if parsed is None:
        return None
    return parsed.target(default_region)
