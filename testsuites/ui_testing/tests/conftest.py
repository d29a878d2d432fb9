"""
================================================================================
UI Testing Pytest Configuration
================================================================================

Session fixtures for the ordered board flow. Everything here is created
once per run and shared by every scenario:

- configuration and logging
- outcome reporter (flushed by the browser session on teardown)
- one browser session (browser, context, page)
- page objects, scenario context and runner

A setup failure errors every scenario before any of them runs.

================================================================================
"""

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from loguru import logger

from kanban_tools.common import init_logger
from kanban_tools.report_tools import OutcomeReporter
from kanban_tools.report_tools.allure_utils import attach_json
from testsuites.ui_testing.framework.browser_manager import BrowserSession
from testsuites.ui_testing.framework.config_loader import ConfigLoader
from testsuites.ui_testing.framework.scenario_runner import ScenarioContext, ScenarioRunner
from testsuites.ui_testing.pages.boards_page import BoardsPage
from testsuites.ui_testing.pages.login_page import LoginPage
from testsuites.ui_testing.scenarios.trello_flow import pipeline


# ================================================================================
# Configuration Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def config(config_path) -> ConfigLoader:
    """
    Session-scoped configuration, loaded once.

    Also initializes logging from the `logging` section.
    """
    loader = ConfigLoader(config_path)
    init_logger(loader)
    return loader


@pytest.fixture(scope="session")
def reporter(config: ConfigLoader) -> OutcomeReporter:
    """Outcome reporter for the whole run."""
    return OutcomeReporter.from_config(config)


# ================================================================================
# Browser Fixtures
# ================================================================================

@pytest_asyncio.fixture(scope="session", loop_scope="session")
async def browser_session(
    config: ConfigLoader,
    reporter: OutcomeReporter,
) -> AsyncGenerator[BrowserSession, None]:
    """
    Session-scoped browser session.

    One browser, context and page for the ordered scenarios. Teardown
    closes the browser, stops Playwright and flushes the reporter.
    """
    session = BrowserSession(config, reporter)
    await session.start()
    yield session
    await session.close()


# ================================================================================
# Page Object Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def login_page(browser_session: BrowserSession) -> LoginPage:
    settings = browser_session.settings
    return LoginPage(browser_session.page, settings.base_url, timeout=settings.default_timeout)


@pytest.fixture(scope="session")
def boards_page(browser_session: BrowserSession) -> BoardsPage:
    settings = browser_session.settings
    return BoardsPage(browser_session.page, settings.base_url, timeout=settings.default_timeout)


# ================================================================================
# Scenario Fixtures
# ================================================================================

@pytest.fixture(scope="session")
def scenario_context(
    browser_session: BrowserSession,
    login_page: LoginPage,
    boards_page: BoardsPage,
) -> ScenarioContext:
    """Shared context handed to every scenario body."""
    return ScenarioContext(
        login_page=login_page,
        boards_page=boards_page,
        settings=browser_session.settings,
    )


@pytest.fixture(scope="session")
def scenario_runner(
    scenario_context: ScenarioContext,
    reporter: OutcomeReporter,
    boards_page: BoardsPage,
) -> Generator[ScenarioRunner, None, None]:
    """Runner for the board flow; captures a screenshot on failure."""
    runner = ScenarioRunner(
        pipeline,
        scenario_context,
        reporter,
        capture_failure=boards_page.capture_failure,
    )
    yield runner
    attach_json(reporter.summary().to_dict(), name="Run Summary")
    logger.info(boards_page.get_locator_health_report())
