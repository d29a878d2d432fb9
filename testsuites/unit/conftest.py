"""
Fixtures for browser-free tests.

Environment overrides are cleared so a developer's TRELLO_* / BROWSER_*
variables never leak into configuration assertions.
"""

import os
from pathlib import Path

import pytest
import yaml

from kanban_tools.report_tools import OutcomeReporter
from testsuites.ui_testing.framework.config_loader import ConfigLoader
from testsuites.unit.fakes import FakePage

OVERRIDE_PREFIXES = ("BROWSER_", "TRELLO_", "REPORT_", "LOGGING_")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith(OVERRIDE_PREFIXES):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def valid_config_data():
    return {
        "browser": {
            "type": "Chromium",
            "headless": True,
            "viewport_width": 1280,
            "viewport_height": 720,
            "slow_mo": 0,
            "default_timeout": 2000,
        },
        "trello": {
            "base_url": "https://trello.example.test",
            "email": "qa@example.test",
            "password": "not-a-real-password",
        },
    }


@pytest.fixture
def write_config(tmp_path):
    """Write a dict as YAML and return a loader for it."""
    def _write(data) -> ConfigLoader:
        path = tmp_path / "config.yaml"
        path.write_text(yaml.dump(data), encoding="utf-8")
        return ConfigLoader(config_path=path)
    return _write


@pytest.fixture
def reporter(tmp_path) -> OutcomeReporter:
    return OutcomeReporter(Path(tmp_path) / "reports")


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage(url="https://trello.example.test/b/1/board")
