"""
================================================================================
Kanban Tools Common Utilities
================================================================================

Shared logging setup for the suite and the runner script.

Usage:
    from kanban_tools.common import init_logger

    init_logger(config)

================================================================================
"""

from .logger import init_logger, reset_logger

__all__ = [
    "init_logger",
    "reset_logger",
]
