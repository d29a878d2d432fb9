"""
================================================================================
UI Testing Framework
================================================================================

Playwright-based UI automation framework for the kanban board suite.

Components:
    - smart_locator: Element resolution with ordered strategies
    - page_base: Base page object for common operations
    - browser_manager: Browser session lifecycle
    - config_loader: YAML/env configuration and session settings
    - scenario_runner: Ordered, stateful scenario pipeline
    - errors: Setup/teardown failure taxonomy

Author: Automation Team
License: MIT
================================================================================
"""

from .errors import ConfigurationError, SetupFailure, TeardownFailure
from .smart_locator import ElementNotFoundError, SmartElement, SmartLocator
from .page_base import BasePage
from .config_loader import ConfigLoader, SessionSettings
from .browser_manager import BrowserSession
from .scenario_runner import (
    ScenarioCase,
    ScenarioContext,
    ScenarioPipeline,
    ScenarioRunner,
    ScenarioState,
)

__all__ = [
    "BasePage",
    "BrowserSession",
    "ConfigLoader",
    "ConfigurationError",
    "ElementNotFoundError",
    "ScenarioCase",
    "ScenarioContext",
    "ScenarioPipeline",
    "ScenarioRunner",
    "ScenarioState",
    "SessionSettings",
    "SetupFailure",
    "SmartElement",
    "SmartLocator",
    "TeardownFailure",
]
