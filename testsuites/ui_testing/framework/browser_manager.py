"""
================================================================================
Browser Manager
================================================================================

Browser session lifecycle for the ordered UI scenarios.

One session per run:
    - resolve and validate configuration
    - start Playwright, launch one browser, open one context and one page
    - navigate to the board application
    - on close: browser, then Playwright, then the outcome reporter,
      each attempted even if an earlier step fails

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from typing import Any, Callable, Dict, List, Optional

from loguru import logger
from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Playwright,
)

from kanban_tools.report_tools.outcome_reporter import OutcomeReporter

from .config_loader import ConfigLoader, SessionSettings
from .errors import ConfigurationError, SetupFailure, TeardownFailure


class BrowserSession:
    """
    Owns the single browser/context/page shared by every scenario.

    Usage:
        async with BrowserSession(config, reporter) as session:
            boards = BoardsPage(session.page, session.settings.base_url)

        # Or with explicit lifecycle
        session = BrowserSession(config, reporter)
        await session.start()
        ...
        await session.close()
    """

    # Default browser launch options
    DEFAULT_LAUNCH_OPTIONS: Dict[str, Any] = {
        "args": ["--ignore-certificate-errors"],
    }

    def __init__(
        self,
        config: ConfigLoader,
        reporter: Optional[OutcomeReporter] = None,
        playwright_factory: Callable[[], Any] = async_playwright,
    ):
        """
        Initialize browser session.

        Args:
            config: Loaded configuration
            reporter: Outcome reporter flushed on close
            playwright_factory: Returns an object whose start() yields Playwright
        """
        self.config = config
        self.reporter = reporter
        self._playwright_factory = playwright_factory

        self.settings: Optional[SessionSettings] = None
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def __aenter__(self) -> "BrowserSession":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    @property
    def page(self) -> Page:
        if self._page is None:
            raise RuntimeError("Browser session not started. Call start() first.")
        return self._page

    @property
    def context(self) -> Optional[BrowserContext]:
        return self._context

    @property
    def browser(self) -> Optional[Browser]:
        return self._browser

    async def start(self) -> Page:
        """
        Run the one-time setup and return the shared page.

        Raises:
            SetupFailure: Configuration invalid, or browser launch/navigation failed
        """
        self.settings = SessionSettings.from_config(self.config)
        settings = self.settings

        if self.reporter is not None:
            self.reporter.add_system_info("Browser", settings.browser_type)
            self.reporter.add_system_info("Base URL", settings.base_url)

        try:
            self._playwright = await self._playwright_factory().start()

            browser_launcher = getattr(self._playwright, settings.browser_type)
            launch_options = {
                **self.DEFAULT_LAUNCH_OPTIONS,
                "headless": settings.headless,
                "slow_mo": settings.slow_mo,
            }
            self._browser = await browser_launcher.launch(**launch_options)
            logger.debug(
                f"Browser started: {settings.browser_type} "
                f"(headless={settings.headless})"
            )

            self._context = await self._browser.new_context(viewport=settings.viewport)
            self._context.set_default_timeout(settings.default_timeout)
            self._page = await self._context.new_page()

            logger.info(f"Navigating to URL: {settings.base_url}")
            await self._page.goto(settings.base_url)
        except ConfigurationError:
            raise
        except Exception as e:
            logger.error(f"Failed to complete setup. Aborting run. Due to: {e}")
            await self._release_quietly()
            raise SetupFailure(f"Failed to complete setup: {e}") from e

        return self._page

    async def _release_quietly(self) -> None:
        """Release whatever setup managed to create before failing."""
        errors = await self._shutdown()
        if errors:
            logger.warning(
                "Cleanup after failed setup was incomplete: "
                + "; ".join(str(e) for e in errors)
            )

    async def _shutdown(self) -> List[BaseException]:
        """Close the browser, then stop Playwright; return the errors raised."""
        errors: List[BaseException] = []

        if self._browser is not None:
            try:
                await self._browser.close()
            except Exception as e:
                logger.error(f"Failed to close browser: {e}")
                errors.append(e)
            finally:
                self._browser = None
                self._context = None
                self._page = None

        if self._playwright is not None:
            try:
                await self._playwright.stop()
            except Exception as e:
                logger.error(f"Failed to stop Playwright: {e}")
                errors.append(e)
            finally:
                self._playwright = None

        return errors

    async def close(self) -> None:
        """
        Close browser and Playwright, then flush the reporter.

        Raises:
            TeardownFailure: After every step was attempted, if any failed
        """
        errors = await self._shutdown()

        if self.reporter is not None:
            try:
                self.reporter.flush()
            except Exception as e:
                logger.error(f"Failed to flush outcome report: {e}")
                errors.append(e)

        logger.debug("Browser session closed")
        if errors:
            raise TeardownFailure(
                f"{len(errors)} teardown step(s) failed: "
                + "; ".join(str(e) for e in errors),
                errors,
            )


__all__ = [
    "BrowserSession",
]
