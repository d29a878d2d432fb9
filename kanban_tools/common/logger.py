"""
================================================================================
Logging Setup
================================================================================

Centralized Loguru configuration for the suite and its tools.

Settings come from the `logging.*` configuration section:
    logging.level      DEBUG / INFO / WARNING / ERROR
    logging.format     Loguru format string
    logging.file       optional log file (rotated, retained, zipped)
    logging.rotation   e.g. "10 MB"
    logging.retention  e.g. "7 days"

================================================================================
"""

import sys
from pathlib import Path
from typing import Any, Optional

from loguru import logger

DEFAULT_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} | {message}"

_logger_initialized: bool = False


def init_logger(config: Optional[Any] = None, level: Optional[str] = None) -> None:
    """
    Initializes the global Loguru logger with consistent configuration.

    Safe to call more than once; only the first call configures sinks.

    Args:
        config: Object with a `get(key, default)` method (ConfigLoader)
        level: Log level override
    """
    global _logger_initialized

    if _logger_initialized:
        return

    def setting(key: str, default: Any) -> Any:
        return config.get(key, default) if config is not None else default

    log_level = (level or setting("logging.level", "INFO")).upper()
    log_format = setting("logging.format", DEFAULT_FORMAT)

    logger.remove()
    logger.add(
        sys.stderr,
        level=log_level,
        format=log_format,
        colorize=True,
        backtrace=True,
        diagnose=False,
    )

    log_file = setting("logging.file", None)
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_file,
            level=log_level,
            format=log_format.replace("{level: <8}", "{level}"),  # no padding in files
            rotation=setting("logging.rotation", "10 MB"),
            retention=setting("logging.retention", "7 days"),
            compression="zip",
        )

    _logger_initialized = True
    logger.debug(f"Logger initialized with level: {log_level}")


def reset_logger() -> None:
    """Allow the next init_logger() call to reconfigure sinks."""
    global _logger_initialized
    _logger_initialized = False
