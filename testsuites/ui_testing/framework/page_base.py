"""
================================================================================
Base Page Object
================================================================================

Foundation class for Page Object Model implementation.

Provides:
    - Navigation and title/URL reads
    - Element declaration through SmartLocator strategies
    - Single-gesture drag and drop
    - Screenshot and failure capture for Allure

Page Objects are the only layer that talks to the automation engine;
scenarios call their intention-revealing operations.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

import allure
from loguru import logger
from playwright.async_api import Page

from .smart_locator import SmartElement, SmartLocator


# Default output directory for screenshots
SCREENSHOT_DIR = Path(__file__).parent.parent.parent.parent / "reports" / "screenshots"


class BasePage:
    """
    Base class for all page objects.

    Usage:
        class LoginPage(BasePage):
            async def login(self, username: str, password: str):
                await self.smart.fill("username_input", username)
                await self.smart.fill("password_input", password)
                await self.smart.click("login_submit")
    """

    def __init__(
        self,
        page: Page,
        base_url: str = "",
        timeout: int = 10000,
    ):
        """
        Initialize page object.

        Args:
            page: Playwright Page object
            base_url: Base URL for the application
            timeout: Wait budget in milliseconds for each element lookup
        """
        if page is None:
            raise ValueError("page is required")
        self.page = page
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.smart = SmartLocator(page)

    def smart_locator(
        self,
        name: str,
        test_id: Optional[str] = None,
        label: Optional[str] = None,
        placeholder: Optional[str] = None,
        structural: Optional[str] = None,
    ) -> SmartElement:
        """
        Declare an element by one or more resolution strategies.

        Strategies are tried test_id > label > placeholder > structural,
        whatever order they are passed in.

        Args:
            name: Human-readable element name for logging/Allure
            test_id: data-testid value
            label: Accessible label
            placeholder: Placeholder text
            structural: CSS or XPath selector

        Returns:
            SmartElement for a single element (or collection via locate_all)
        """
        return self.smart.element(
            name,
            test_id=test_id,
            label=label,
            placeholder=placeholder,
            structural=structural,
        )

    # =========================================================================
    # Navigation
    # =========================================================================

    async def goto(self, url: str) -> None:
        """
        Navigate to an absolute URL.

        Raises:
            ValueError: If url is empty
        """
        if not url or not url.strip():
            raise ValueError("URL cannot be empty.")
        with allure.step(f"Navigate to {url}"):
            await self.page.goto(url)
            logger.debug(f"Navigated to: {url}")

    async def page_title(self) -> str:
        """Get the title of the current page."""
        return await self.page.title()

    async def wait_for_url(
        self,
        url_pattern: str,
        timeout: Optional[int] = None,
    ) -> None:
        """
        Wait for URL to match pattern.

        Args:
            url_pattern: URL glob pattern (e.g. "**/boards")
            timeout: Timeout in milliseconds (engine default when None)
        """
        with allure.step(f"Wait for URL: {url_pattern}"):
            if timeout is None:
                await self.page.wait_for_url(url_pattern)
            else:
                await self.page.wait_for_url(url_pattern, timeout=timeout)

    # =========================================================================
    # Gestures
    # =========================================================================

    async def drag(self, source: SmartElement, target: SmartElement) -> None:
        """Drag `source` onto `target` in one gesture."""
        with allure.step(f"Drag: {source.name} -> {target.name}"):
            await source.drag_to(target, timeout=self.timeout)

    # =========================================================================
    # Screenshot and Debug Utilities
    # =========================================================================

    async def screenshot(
        self,
        name: str,
        full_page: bool = False,
        attach_to_allure: bool = True,
    ) -> Path:
        """
        Take screenshot and optionally attach to Allure.

        Args:
            name: Screenshot name (without extension)
            full_page: Capture full scrollable page
            attach_to_allure: Whether to attach to Allure report

        Returns:
            Path to saved screenshot
        """
        SCREENSHOT_DIR.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filepath = SCREENSHOT_DIR / f"{name}_{timestamp}.png"

        await self.page.screenshot(path=str(filepath), full_page=full_page)

        if attach_to_allure:
            allure.attach.file(
                str(filepath),
                name=name,
                attachment_type=allure.attachment_type.PNG,
            )

        logger.debug(f"Screenshot saved: {filepath}")
        return filepath

    async def capture_failure(self, test_name: str) -> Path:
        """
        Capture debugging information on scenario failure.

        Saves a full-page screenshot and attaches the current URL.
        """
        with allure.step("Capture failure details"):
            path = await self.screenshot(f"failure_{test_name}", full_page=True)
            allure.attach(
                self.page.url,
                name="Current URL",
                attachment_type=allure.attachment_type.TEXT,
            )
        return path

    def get_locator_health_report(self) -> str:
        """Get smart locator health report."""
        return self.smart.get_health_report()


__all__ = [
    "BasePage",
    "PageBase",
    "SCREENSHOT_DIR",
]

# Many Page Objects prefer PageBase naming
PageBase = BasePage
