"""
================================================================================
Kanban Tools
================================================================================

Infrastructure shared by the kanban board UI suite.

Modules:
    - common: Loguru logging setup
    - report_tools: Scenario outcome reporter and Allure helpers

Example:
    from kanban_tools.common import init_logger
    from kanban_tools.report_tools import OutcomeReporter

    init_logger(config)
    reporter = OutcomeReporter.from_config(config)
    record = reporter.create_test("Create Trello Board")
    record.pass_()
    reporter.flush()

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]
