"""
================================================================================
Framework Errors
================================================================================

Failure taxonomy for the UI suite.

    - SetupFailure: configuration or browser launch failed; the run aborts
    - ConfigurationError: missing/invalid configuration (a SetupFailure)
    - TeardownFailure: closing engine resources failed

Element lookup failures live next to the resolver
(`smart_locator.ElementNotFoundError`); assertion failures are plain
`AssertionError`.

================================================================================
"""

from __future__ import annotations

from typing import List, Optional


class SetupFailure(Exception):
    """Raised when the one-time session setup cannot complete."""
    pass


class ConfigurationError(SetupFailure):
    """Raised when configuration loading or validation fails."""
    pass


class TeardownFailure(Exception):
    """
    Raised after best-effort teardown when one or more steps failed.

    Attributes:
        errors: Every exception collected while closing resources
    """

    def __init__(self, message: str, errors: Optional[List[BaseException]] = None):
        super().__init__(message)
        self.errors = list(errors or [])


__all__ = [
    "SetupFailure",
    "ConfigurationError",
    "TeardownFailure",
]
