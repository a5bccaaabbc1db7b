"""
Service descriptor loading.
"""

from latestlayer.config.loader import (
    DEFAULT_TEMPLATE_PATH,
    Service,
    dump_service,
    load_compiled_template,
    load_service,
    write_compiled_template,
)
from latestlayer.config.resolver import resolve_config

__all__ = [
    "DEFAULT_TEMPLATE_PATH",
    "Service",
    "dump_service",
    "load_compiled_template",
    "load_service",
    "write_compiled_template",
    "resolve_config",
]
