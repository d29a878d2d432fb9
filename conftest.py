"""
Repository-level pytest configuration.

Provides the repo root, the default config path and the --run-e2e switch.
Credentials are never read from the repo: set TRELLO_EMAIL and
TRELLO_PASSWORD in the environment.
"""

from __future__ import annotations

from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Return repo root path."""
    return Path(__file__).parent


@pytest.fixture(scope="session")
def config_path(project_root: Path) -> Path:
    """Path of the default YAML configuration."""
    return project_root / "config" / "config.yaml"


def pytest_addoption(parser):
    """Command line switches shared by every suite."""
    parser.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run end-to-end scenarios against the live board application",
    )
