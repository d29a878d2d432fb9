"""
================================================================================
Outcome Reporter
================================================================================

Per-scenario pass/fail records with ordered log messages, flushed once at
the end of the run into an HTML report and a JSON summary.

Each record mirrors its messages to loguru and to Allure steps, so the
same trail shows up in the console, the Allure report and the run report.

Usage:
    reporter = OutcomeReporter(Path("reports"))
    record = reporter.create_test("Create Trello Board")
    record.log("INFO", "Creating new board.")
    record.pass_()
    reporter.flush()

================================================================================
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import allure
from jinja2 import Environment
from loguru import logger

from .allure_utils import attach_text


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class Outcome(str, Enum):
    """Verdict of one scenario record."""
    PENDING = "pending"
    PASSED = "passed"
    FAILED = "failed"


class OutcomeAlreadyRecordedError(RuntimeError):
    """Raised when a record receives a second verdict."""
    pass


@dataclass
class LogEntry:
    level: str
    message: str
    timestamp: str = field(default_factory=lambda: datetime.now().isoformat(timespec="seconds"))


class ScenarioRecord:
    """
    Pass/fail record of one scenario.

    The verdict is write-once: exactly one of pass_() / fail() may be called.
    """

    def __init__(self, name: str, ordinal: int):
        self.name = name
        self.ordinal = ordinal
        self.entries: List[LogEntry] = []
        self.started_at = datetime.now()
        self.finished_at: Optional[datetime] = None
        self._outcome = Outcome.PENDING

    def __repr__(self) -> str:
        return f"ScenarioRecord({self.ordinal}, {self.name!r}, {self._outcome.value})"

    @property
    def outcome(self) -> Outcome:
        return self._outcome

    def log(self, level: str, message: str) -> None:
        """
        Append a message to the record.

        Args:
            level: DEBUG, INFO, WARNING or ERROR
            message: Free text
        """
        level = level.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {level}")
        self.entries.append(LogEntry(level=level, message=message))
        logger.log(level, f"[{self.name}] {message}")
        with allure.step(f"{level}: {message}"):
            pass

    def _finish(self, outcome: Outcome) -> None:
        if self._outcome is not Outcome.PENDING:
            raise OutcomeAlreadyRecordedError(
                f"Outcome of '{self.name}' already recorded as {self._outcome.value}"
            )
        self._outcome = outcome
        self.finished_at = datetime.now()

    def pass_(self, message: str = "Test passed") -> None:
        self._finish(Outcome.PASSED)
        self.entries.append(LogEntry(level="INFO", message=message))
        logger.success(f"[{self.name}] {message}")

    def fail(self, message: str) -> None:
        self._finish(Outcome.FAILED)
        self.entries.append(LogEntry(level="ERROR", message=message))
        logger.error(f"[{self.name}] {message}")
        attach_text(message, name="Failure")

    @property
    def duration_seconds(self) -> float:
        end = self.finished_at or datetime.now()
        return (end - self.started_at).total_seconds()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "ordinal": self.ordinal,
            "name": self.name,
            "outcome": self._outcome.value,
            "duration_seconds": round(self.duration_seconds, 3),
            "log": [
                {"timestamp": e.timestamp, "level": e.level, "message": e.message}
                for e in self.entries
            ],
        }


@dataclass
class RunSummary:
    """Totals over every record of a run."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    pending: int = 0

    @property
    def pass_rate(self) -> float:
        if self.total == 0:
            return 0.0
        return (self.passed / self.total) * 100

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": self.failed,
            "pending": self.pending,
            "pass_rate": f"{self.pass_rate:.2f}%",
        }


class OutcomeReporter:
    """
    Collects scenario records for one run and writes the run report.

    Constructed once per run and passed to the browser session (which
    flushes it on teardown) and the scenario runner.
    """

    def __init__(
        self,
        report_dir: Path,
        document_title: str = "Trello Test Report",
        report_name: str = "Trello Test Execution Report",
        system_info: Optional[Dict[str, str]] = None,
    ):
        self.report_dir = Path(report_dir)
        self.document_title = document_title
        self.report_name = report_name
        self.system_info: Dict[str, str] = dict(system_info or {})
        self.created_at = datetime.now()
        self._records: List[ScenarioRecord] = []
        self._flushed_path: Optional[Path] = None

    @classmethod
    def from_config(cls, config: Any) -> "OutcomeReporter":
        """Build from the `report.*` configuration section."""
        return cls(
            report_dir=Path(config.get("report.dir", "reports")),
            document_title=config.get("report.document_title", "Trello Test Report"),
            report_name=config.get("report.report_name", "Trello Test Execution Report"),
            system_info={
                "Environment": str(config.get("report.environment", "QA")),
                "Browser": str(config.get("browser.type", "chromium")),
            },
        )

    @property
    def records(self) -> List[ScenarioRecord]:
        return list(self._records)

    def add_system_info(self, key: str, value: str) -> None:
        self.system_info[key] = value

    def create_test(self, name: str) -> ScenarioRecord:
        """Open a new pending record."""
        record = ScenarioRecord(name=name, ordinal=len(self._records) + 1)
        self._records.append(record)
        logger.debug(f"Record created: {record.ordinal}. {name}")
        return record

    def summary(self) -> RunSummary:
        summary = RunSummary(total=len(self._records))
        for record in self._records:
            if record.outcome is Outcome.PASSED:
                summary.passed += 1
            elif record.outcome is Outcome.FAILED:
                summary.failed += 1
            else:
                summary.pending += 1
        return summary

    def flush(self) -> Path:
        """
        Write the HTML report and JSON summary.

        Only the first call writes; later calls return the same path.

        Returns:
            Path to the HTML report
        """
        if self._flushed_path is not None:
            return self._flushed_path

        self.report_dir.mkdir(parents=True, exist_ok=True)
        stamp = self.created_at.strftime("%Y%m%d_%H%M%S")
        html_path = self.report_dir / f"KanbanReport_{stamp}.html"
        json_path = self.report_dir / f"KanbanReport_{stamp}.json"

        payload = {
            "title": self.report_name,
            "created_at": self.created_at.isoformat(timespec="seconds"),
            "system_info": self.system_info,
            "summary": self.summary().to_dict(),
            "scenarios": [r.to_dict() for r in self._records],
        }
        json_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
        html_path.write_text(self._render_html(payload), encoding="utf-8")

        self._flushed_path = html_path
        logger.info(f"Report written: {html_path}")
        return html_path

    def _render_html(self, payload: Dict[str, Any]) -> str:
        """Render the run report; autoescape covers every scenario string."""
        env = Environment(autoescape=True)
        template = env.from_string(HTML_TEMPLATE)
        return template.render(document_title=self.document_title, **payload)


HTML_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{{ document_title }}</title>
<style>
body { font-family: sans-serif; margin: 2em; }
section { border-left: 6px solid #999; padding: .5em 1em; margin: 1em 0; }
section.passed { border-color: #2e7d32; }
section.failed { border-color: #c62828; }
tr.error td { color: #c62828; }
tr.warning td { color: #ef6c00; }
td, th { padding: 2px 8px; text-align: left; }
</style>
</head>
<body>
<h1>{{ title }}</h1>
<p>Total: {{ summary.total }} | Passed: {{ summary.passed }} | Failed: {{ summary.failed }} | Pending: {{ summary.pending }} | Pass rate: {{ summary.pass_rate }}</p>
<table>
{% for key, value in system_info.items() %}
<tr><th>{{ key }}</th><td>{{ value }}</td></tr>
{% endfor %}
</table>
{% for scenario in scenarios %}
<section class="{{ scenario.outcome }}">
<h2>{{ scenario.ordinal }}. {{ scenario.name }} <span>{{ scenario.outcome | upper }}</span></h2>
<table>
{% for entry in scenario.log %}
<tr class="{{ entry.level | lower }}"><td>{{ entry.timestamp }}</td><td>{{ entry.level }}</td><td>{{ entry.message }}</td></tr>
{% endfor %}
</table>
</section>
{% endfor %}
</body>
</html>
"""


__all__ = [
    "Outcome",
    "OutcomeAlreadyRecordedError",
    "OutcomeReporter",
    "RunSummary",
    "ScenarioRecord",
]
