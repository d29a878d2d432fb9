"""
================================================================================
Root Pytest Configuration
================================================================================

Registers project-wide markers, tags tests by directory, and keeps the
live end-to-end flow behind the --run-e2e switch.

================================================================================
"""

import pytest


def pytest_configure(config):
    """Configure pytest with project-wide custom markers."""

    # Priority markers
    config.addinivalue_line(
        "markers", "P0: Critical priority tests - must pass for deployment"
    )
    config.addinivalue_line(
        "markers", "P1: High priority tests - important functionality"
    )
    config.addinivalue_line(
        "markers", "P2: Medium priority tests - edge cases and minor features"
    )

    # Test type markers
    config.addinivalue_line(
        "markers", "smoke: Quick verification tests"
    )
    config.addinivalue_line(
        "markers", "unit: Browser-free tests using fake engine handles"
    )
    config.addinivalue_line(
        "markers", "e2e: End-to-end scenarios against the live board (needs --run-e2e)"
    )

    # Domain markers
    config.addinivalue_line(
        "markers", "ui: UI-specific tests"
    )
    config.addinivalue_line(
        "markers", "board: Board, list and card management"
    )


def pytest_collection_modifyitems(config, items):
    """
    Tag tests by location and skip the live flow unless requested.
    """
    run_e2e = config.getoption("--run-e2e")
    skip_e2e = pytest.mark.skip(reason="live board flow: pass --run-e2e to run")

    for item in items:
        path = str(item.fspath)

        if "ui_testing" in path:
            item.add_marker(pytest.mark.ui)

        if "unit" in path:
            item.add_marker(pytest.mark.unit)

        if "e2e" in item.keywords and not run_e2e:
            item.add_marker(skip_e2e)


def pytest_report_header(config):
    """Add custom header to pytest output."""
    return [
        "",
        "=" * 60,
        "Kanban Board UI Acceptance Suite",
        "=" * 60,
        "",
    ]
