"""
================================================================================
Login Page Object (Async / Playwright)
================================================================================

Login flow of the board application's identity provider.

The provider asks for the username first and the password on a second
screen, so the same submit button is clicked twice.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from testsuites.ui_testing.framework.page_base import PageBase


class LoginPage(PageBase):
    """Login page object (async)."""

    @allure.step("Verify login form is displayed")
    async def verify_form_displayed(self) -> bool:
        """Verify the username step of the login form is visible."""
        username_ok = await self.smart.is_visible("username_input")
        submit_ok = await self.smart.is_visible("login_submit")
        return username_ok and submit_ok

    async def click_login_link(self) -> None:
        await self.smart.click("login_link", timeout=self.timeout)

    async def enter_username(self, username: str) -> None:
        await self.smart.fill("username_input", username, timeout=self.timeout)

    async def enter_password(self, password: str) -> None:
        await self.smart.fill("password_input", password, timeout=self.timeout)

    async def click_login_submit(self) -> None:
        await self.smart.click("login_submit", timeout=self.timeout)

    @allure.step("Login (username={username})")
    async def login(self, username: str, password: str) -> None:
        """
        Perform login: open the form, submit the username, then the password.

        Args:
            username: Account email or username
            password: Account password
        """
        logger.info(f"Logging in as {username}")
        await self.click_login_link()
        await self.enter_username(username)
        await self.click_login_submit()
        await self.enter_password(password)
        await self.click_login_submit()
