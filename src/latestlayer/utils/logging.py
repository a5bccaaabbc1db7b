"""
Logging configuration for latestlayer.

Console output goes through Rich when it is installed, with an optional plain
file log next to it. Resolution internals write to the debug sink returned by
``debug_logger``, which tags every line with the plugin name.
"""

import logging
import sys
from pathlib import Path
from typing import Any

try:
    import importlib.util

    RICH_AVAILABLE = importlib.util.find_spec("rich.logging") is not None
except Exception:
    RICH_AVAILABLE = False

DEBUG_TAG = "[serverless-latest-layer-version]"


class FileFormatter(logging.Formatter):
    """Formatter for file logs - clean and parseable."""

    def __init__(self) -> None:
        super().__init__(fmt="%(asctime)s [%(levelname)-8s] %(name)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")


class TaggedLogger(logging.LoggerAdapter):
    """Logger adapter that prefixes every message with the plugin tag."""

    def process(self, msg: Any, kwargs: Any) -> tuple[Any, Any]:
        return f"{DEBUG_TAG} {msg}", kwargs


# Map string level names to logging constants
LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _parse_level(level: str | int) -> int:
    """
    Parse logging level from string or int.

    Args:
        level: Logging level as string (DEBUG, INFO, etc.) or int

    Returns:
        Logging level constant, INFO when the name is unknown
    """
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        level_upper = level.upper()
        if level_upper in LEVEL_MAP:
            return LEVEL_MAP[level_upper]
    return logging.INFO


def setup_logging(
    level: str | int = logging.INFO,
    log_file: str | Path | None = None,
    format_string: str | None = None,
    file_mode: str = "a",
    console_enabled: bool = True,
    use_rich: bool = True,
) -> logging.Logger:
    """
    Setup logging for latestlayer.

    Args:
        level: Logging level as string (DEBUG, INFO, etc.) or int (default: INFO)
        log_file: Optional file path to write logs to (default: None, console only)
        format_string: Optional custom format string for the plain console handler
        file_mode: File mode for file handler - 'a' for append, 'w' for overwrite (default: 'a')
        console_enabled: Whether to enable console logging (default: True)
        use_rich: Whether to use RichHandler for console output (default: True)

    Returns:
        Logger instance
    """
    logger = logging.getLogger("latestlayer")

    # Only clear handlers from this specific logger, not root or child loggers
    logger.handlers.clear()

    level_int = _parse_level(level)
    logger.setLevel(level_int)

    if console_enabled:
        if use_rich and RICH_AVAILABLE:
            from rich.logging import RichHandler

            logger.addHandler(
                RichHandler(
                    level=level_int,
                    show_time=True,
                    show_path=False,
                    markup=False,
                    rich_tracebacks=True,
                    log_time_format="[%X]",
                )
            )
        else:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setLevel(level_int)
            console_handler.setFormatter(
                logging.Formatter(format_string or "%(levelname)s: %(asctime)s - %(message)s", "%Y-%m-%d %H:%M:%S")
            )
            logger.addHandler(console_handler)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode=file_mode)
        # File captures everything the logger lets through
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(FileFormatter())
        logger.addHandler(file_handler)

    return logger


def setup_logging_from_config(config: dict[str, Any], project_dir: Path | None = None) -> logging.Logger:
    """
    Setup logging from a settings mapping.

    Args:
        config: Settings dictionary, with logging options nested under 'logging' or flat
        project_dir: Optional project directory for resolving a relative log file path

    Returns:
        Logger instance
    """
    logging_config = config.get("logging") or {}

    if not logging_config and ("level" in config or "file" in config or "format" in config):
        logging_config = config

    level = logging_config.get("level", logging.INFO)
    log_file = logging_config.get("file") or logging_config.get("log_file")
    console_type = logging_config.get("console_type", "rich")
    console_enabled = logging_config.get("console_enabled", True)

    if log_file and project_dir:
        log_file = Path(log_file)
        if not log_file.is_absolute():
            log_file = project_dir / log_file

    return setup_logging(
        level=level,
        log_file=log_file,
        format_string=logging_config.get("format"),
        file_mode=logging_config.get("file_mode", "a"),
        console_enabled=console_enabled,
        use_rich=console_type == "rich",
    )


def get_logger(name: str = "latestlayer") -> logging.Logger:
    """
    Get a logger instance.

    Args:
        name: Logger name (default: "latestlayer")

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    return logger


def debug_logger(name: str = "latestlayer") -> TaggedLogger:
    """Get the tagged debug sink for a module."""
    return TaggedLogger(get_logger(name), {})
