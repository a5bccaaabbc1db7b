"""
Descriptor value resolution and environment variable substitution.
"""

import os
import re
from typing import Any

# ${VAR_NAME}; serverless variables such as ${self:...} or ${opt:stage} contain a colon and are left alone
_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def resolve_config(config_data: dict[str, Any], stage: str = "dev") -> dict[str, Any]:
    """
    Resolve a descriptor with environment variable substitution.

    Substitutes ${VAR_NAME} from the environment (unset variables are left as
    written) and the {stage} placeholder.

    Args:
        config_data: Descriptor dictionary
        stage: Current deployment stage

    Returns:
        Resolved descriptor
    """
    return resolve_value(config_data, stage)


def resolve_value(value: Any, stage: str) -> Any:
    """Recursively resolve values in the descriptor."""
    if isinstance(value, dict):
        return {k: resolve_value(v, stage) for k, v in value.items()}
    elif isinstance(value, list):
        return [resolve_value(item, stage) for item in value]
    elif isinstance(value, str):
        result = _ENV_VAR_PATTERN.sub(lambda m: os.getenv(m.group(1), m.group(0)), value)
        return result.replace("{stage}", stage)
    else:
        return value
