"""Reporting: per-scenario outcome records and Allure helpers."""

from .outcome_reporter import (
    Outcome,
    OutcomeAlreadyRecordedError,
    OutcomeReporter,
    RunSummary,
    ScenarioRecord,
)

__all__ = [
    "Outcome",
    "OutcomeAlreadyRecordedError",
    "OutcomeReporter",
    "RunSummary",
    "ScenarioRecord",
]
