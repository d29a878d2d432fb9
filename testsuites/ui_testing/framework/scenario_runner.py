"""
================================================================================
Scenario Runner
================================================================================

Ordered, stateful scenario execution on one shared browser session.

A pipeline is an explicit list of named scenarios in declaration order.
Each scenario declares the facts it requires (e.g. "board_created") and
the facts it provides once it passes. All scenarios receive the same
ScenarioContext, so UI state created by scenario N is the starting point
of scenario N+1.

Per-case state machine:

    PENDING -> RUNNING -> PASSED | FAILED

    - no retries: each case executes exactly once per runner
    - unmet preconditions are logged, never skipped; a failure upstream
      shows up as a warning on every dependent case
    - a scenario provides its facts only once all of its cases passed, so
      one failed parameter set withholds the facts from dependents
    - failures are logged to the outcome record, then re-raised so the
      host harness fails the test too

Usage:
    pipeline = ScenarioPipeline("Board flow")

    @pipeline.scenario("Create board", requires={"logged_in"}, provides={"board_created"})
    async def create_board(ctx):
        await ctx.boards_page.create_board("Demo")

    runner = ScenarioRunner(pipeline, context, reporter)
    outcomes = await runner.run_all()

================================================================================
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    List,
    Optional,
    Set,
    Tuple,
)

from loguru import logger

from kanban_tools.report_tools.outcome_reporter import OutcomeReporter, ScenarioRecord


ScenarioBody = Callable[..., Awaitable[None]]


class ScenarioState(str, Enum):
    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"


class ScenarioAlreadyExecutedError(RuntimeError):
    """Raised when a case is dispatched a second time."""
    pass


@dataclass(frozen=True)
class Scenario:
    """
    A named scenario body with declared preconditions.

    Attributes:
        name: Title; may hold `{param}` placeholders filled per case
        body: `async def body(ctx, **params)`
        requires: Facts that earlier scenarios must have provided
        provides: Facts added to the context when the scenario passes
        params: Literal input sets; one case per set, in order
    """
    name: str
    body: ScenarioBody
    requires: FrozenSet[str] = frozenset()
    provides: FrozenSet[str] = frozenset()
    params: Tuple[Dict[str, Any], ...] = ()


@dataclass
class ScenarioCase:
    """One dispatchable unit: a scenario bound to one input set."""
    ordinal: int
    scenario: Scenario
    params: Dict[str, Any] = field(default_factory=dict)

    @property
    def title(self) -> str:
        if not self.params:
            return self.scenario.name
        return self.scenario.name.format(**self.params)

    @property
    def test_id(self) -> str:
        slug = re.sub(r"[^0-9a-zA-Z]+", "_", self.title).strip("_").lower()
        return f"{self.ordinal:02d}_{slug}"


class ScenarioPipeline:
    """Ordered registry of scenarios."""

    def __init__(self, name: str):
        self.name = name
        self._scenarios: List[Scenario] = []

    def __len__(self) -> int:
        return len(self._scenarios)

    @property
    def scenarios(self) -> List[Scenario]:
        return list(self._scenarios)

    def add(
        self,
        name: str,
        body: ScenarioBody,
        requires: Iterable[str] = (),
        provides: Iterable[str] = (),
        params: Optional[Iterable[Dict[str, Any]]] = None,
    ) -> Scenario:
        """Append a scenario after every scenario already registered."""
        scenario = Scenario(
            name=name,
            body=body,
            requires=frozenset(requires),
            provides=frozenset(provides),
            params=tuple(dict(p) for p in (params or ())),
        )
        self._scenarios.append(scenario)
        return scenario

    def scenario(
        self,
        name: str,
        requires: Iterable[str] = (),
        provides: Iterable[str] = (),
        params: Optional[Iterable[Dict[str, Any]]] = None,
    ) -> Callable[[ScenarioBody], ScenarioBody]:
        """Decorator form of add(); registration order is execution order."""
        def decorator(body: ScenarioBody) -> ScenarioBody:
            self.add(name, body, requires=requires, provides=provides, params=params)
            return body
        return decorator

    def cases(self) -> List[ScenarioCase]:
        """
        Expand scenarios into cases.

        Parameterized scenarios contribute one case per input set, in
        declaration order; ordinals run 1..N over the whole pipeline.
        """
        cases: List[ScenarioCase] = []
        for scenario in self._scenarios:
            for params in scenario.params or ({},):
                cases.append(ScenarioCase(len(cases) + 1, scenario, dict(params)))
        return cases


class ScenarioContext:
    """
    Shared state passed by reference to every scenario body.

    Attributes:
        login_page: LoginPage on the shared page
        boards_page: BoardsPage on the shared page
        settings: Resolved SessionSettings (credentials, base URL)
        facts: Facts provided by passed scenarios
        record: Outcome record of the running case
    """

    def __init__(self, login_page: Any = None, boards_page: Any = None, settings: Any = None):
        self.login_page = login_page
        self.boards_page = boards_page
        self.settings = settings
        self.facts: Set[str] = set()
        self.record: Optional[ScenarioRecord] = None

    def log(self, message: str, level: str = "INFO") -> None:
        """Log to the running case's record (or loguru when none is running)."""
        if self.record is not None:
            self.record.log(level, message)
        else:
            logger.log(level.upper(), message)

    def has(self, *facts: str) -> bool:
        return all(f in self.facts for f in facts)


@dataclass
class ScenarioOutcome:
    case: ScenarioCase
    state: ScenarioState
    record: ScenarioRecord
    unmet_preconditions: FrozenSet[str] = frozenset()
    error: Optional[BaseException] = None


class ScenarioRunner:
    """
    Dispatches pipeline cases, one at a time, against a shared context.

    Args:
        pipeline: Scenarios to run
        context: Shared ScenarioContext
        reporter: Outcome reporter receiving one record per case
        capture_failure: Optional `async (name) -> Any` called after a failure
            (e.g. BasePage.capture_failure for a screenshot)
    """

    def __init__(
        self,
        pipeline: ScenarioPipeline,
        context: ScenarioContext,
        reporter: OutcomeReporter,
        capture_failure: Optional[Callable[[str], Awaitable[Any]]] = None,
    ):
        self.pipeline = pipeline
        self.context = context
        self.reporter = reporter
        self.capture_failure = capture_failure
        self._states: Dict[int, ScenarioState] = {}
        self.outcomes: List[ScenarioOutcome] = []

    def state_of(self, case: ScenarioCase) -> ScenarioState:
        return self._states.get(case.ordinal, ScenarioState.PENDING)

    def unmet_preconditions(self, case: ScenarioCase) -> FrozenSet[str]:
        return frozenset(case.scenario.requires - self.context.facts)

    async def run_case(self, case: ScenarioCase) -> ScenarioOutcome:
        """
        Execute one case and record its outcome.

        Raises:
            ScenarioAlreadyExecutedError: The case already ran on this runner
            Exception: Whatever the scenario body raised, after recording
        """
        if self.state_of(case) is not ScenarioState.PENDING:
            raise ScenarioAlreadyExecutedError(
                f"Scenario '{case.title}' already executed ({self.state_of(case).value})"
            )

        record = self.reporter.create_test(case.title)
        self._states[case.ordinal] = ScenarioState.RUNNING
        self.context.record = record

        unmet = self.unmet_preconditions(case)
        if unmet:
            record.log(
                "WARNING",
                f"Unmet preconditions: {', '.join(sorted(unmet))}. "
                f"An earlier scenario did not provide them.",
            )

        logger.info(f"Running scenario {case.ordinal}: {case.title}")
        try:
            await case.scenario.body(self.context, **case.params)
        except Exception as e:
            self._states[case.ordinal] = ScenarioState.FAILED
            record.fail(f"{case.title} failed due to an error: {self._describe(e)}")
            await self._capture(case, record)
            self.outcomes.append(
                ScenarioOutcome(case, ScenarioState.FAILED, record, unmet, e)
            )
            raise
        finally:
            self.context.record = None

        self._states[case.ordinal] = ScenarioState.PASSED
        record.pass_()
        if self._all_cases_passed(case.scenario):
            self.context.facts.update(case.scenario.provides)
        outcome = ScenarioOutcome(case, ScenarioState.PASSED, record, unmet)
        self.outcomes.append(outcome)
        return outcome

    def _all_cases_passed(self, scenario: Scenario) -> bool:
        """Whether every case expanded from `scenario` has passed on this runner."""
        return all(
            self.state_of(c) is ScenarioState.PASSED
            for c in self.pipeline.cases()
            if c.scenario is scenario
        )

    async def run_all(self) -> List[ScenarioOutcome]:
        """Run every case in order, continuing after failures."""
        for case in self.pipeline.cases():
            try:
                await self.run_case(case)
            except Exception as e:
                logger.warning(f"Continuing after failed scenario '{case.title}': {e}")
        return list(self.outcomes)

    async def _capture(self, case: ScenarioCase, record: ScenarioRecord) -> None:
        if self.capture_failure is None:
            return
        try:
            await self.capture_failure(case.test_id)
        except Exception as e:
            record.log("WARNING", f"Failure capture unavailable: {e}")

    @staticmethod
    def _describe(error: BaseException) -> str:
        text = str(error).strip()
        if isinstance(error, AssertionError):
            return text or "assertion failed"
        return f"{type(error).__name__}: {text}" if text else type(error).__name__


__all__ = [
    "Scenario",
    "ScenarioAlreadyExecutedError",
    "ScenarioCase",
    "ScenarioContext",
    "ScenarioOutcome",
    "ScenarioPipeline",
    "ScenarioRunner",
    "ScenarioState",
]
