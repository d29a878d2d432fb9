"""
================================================================================
Smart Locator
================================================================================

Element resolution with ordered locator strategies:
    - Multiple strategies per element, tried in a fixed priority order
    - Automatic degradation when a higher-priority strategy fails
    - Usage analytics for locator maintenance

Strategy priority (most stable first):
    1. test_id      exact data-testid attribute match
    2. label        accessible label match
    3. placeholder  placeholder text match
    4. structural   CSS / XPath (ancestor, descendant, sibling text matches)

Every call re-resolves against the live page; nothing is cached.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from loguru import logger
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Locator, Page


STRATEGY_PRIORITY: Tuple[str, ...] = ("test_id", "label", "placeholder", "structural")


class ElementNotFoundError(Exception):
    """Raised when all locator strategies fail to find element."""
    pass


def xpath_literal(value: str) -> str:
    """
    Quote a string for use inside an XPath expression.

    XPath 1.0 has no escape character, so values holding both quote kinds
    are assembled with concat().

    >>> xpath_literal("In Progress")
    "'In Progress'"
    >>> xpath_literal("Bob's Pool")
    '"Bob\\'s Pool"'
    """
    if "'" not in value:
        return f"'{value}'"
    if '"' not in value:
        return f'"{value}"'
    parts = value.split("'")
    return "concat(" + ", \"'\", ".join(f"'{part}'" for part in parts) + ")"


@dataclass
class LocatorHealth:
    """
    Tracks locator health and usage statistics.

    Attributes:
        element_name: Human-readable element name
        primary_strategy: The highest-priority strategy declared
        primary_value: Value of the highest-priority strategy
        used_fallback: Whether a lower-priority strategy was used
        fallback_strategy: Strategy used instead (if any)
        fallback_value: Value used instead (if any)
    """
    element_name: str
    primary_strategy: str
    primary_value: str
    used_fallback: bool = False
    fallback_strategy: Optional[str] = None
    fallback_value: Optional[str] = None


class SmartLocator:
    """
    Element locator with ordered fallback strategies.

    Two usage styles:
        1) **Library mode**: `SmartLocator(page)` then
           `await smart.fill("username_input", "user")` using the class-level
           `LOCATORS` map.
        2) **Element mode**: `smart.element("Board Name", test_id="board-name-display")`
           returns a `SmartElement` bound to one element.

    Usage:
        >>> smart = SmartLocator(page)
        >>> await smart.click("login_submit")
        >>> board_name = smart.element("Board Name", test_id="board-name-display")
        >>> await board_name.inner_text()
    """

    # Named elements shared by the authentication flow
    # Format: element_name -> {strategy: value}
    LOCATORS: Dict[str, Dict[str, str]] = {
        "login_link": {
            "structural": "//a[text()='Log in' and contains(@class, 'Buttonsstyles')]",
        },
        "username_input": {
            "structural": "#username",
        },
        "password_input": {
            "structural": "#password",
        },
        "login_submit": {
            "structural": "#login-submit",
        },
    }

    def __init__(self, page: Page):
        """
        Initialize SmartLocator with Playwright page.

        Args:
            page: Playwright Page object
        """
        self.page = page
        self._fallback_used: Dict[str, LocatorHealth] = {}

    def element(self, name: str, **strategies: Optional[str]) -> "SmartElement":
        """
        Bind a single element description.

        Args:
            name: Human-readable element name for logging/Allure
            **strategies: test_id / label / placeholder / structural values;
                None values are ignored

        Returns:
            SmartElement resolving through this locator
        """
        locators = {k: v for k, v in strategies.items() if v is not None}
        return SmartElement(self, name, locators)

    # =========================================================================
    # Resolution
    # =========================================================================

    def _resolve_target(
        self,
        target: Union[str, Dict[str, str]],
        element_name: Optional[str] = None,
    ) -> Tuple[str, List[Tuple[str, str]]]:
        if isinstance(target, dict):
            locators = target
            display_name = element_name or "custom_element"
        else:
            locators = self.LOCATORS.get(target, {})
            display_name = target

        if not locators:
            raise ElementNotFoundError(
                f"No locators defined for element: {display_name}"
            )

        unknown = set(locators) - set(STRATEGY_PRIORITY)
        if unknown:
            raise ValueError(
                f"Unknown locator strategies for '{display_name}': {sorted(unknown)}"
            )

        ordered = [(s, locators[s]) for s in STRATEGY_PRIORITY if s in locators]
        return display_name, ordered

    def _build(self, strategy: str, value: str) -> Locator:
        if strategy == "test_id":
            return self.page.get_by_test_id(value)
        if strategy == "label":
            return self.page.get_by_label(value, exact=True)
        if strategy == "placeholder":
            return self.page.get_by_placeholder(value, exact=True)
        return self.page.locator(value)

    async def locate(
        self,
        target: Union[str, Dict[str, str]],
        timeout: int = 5000,
        element_name: Optional[str] = None,
    ) -> Locator:
        """
        Locate a single visible element.

        Tries each strategy in priority order until one succeeds.
        Records fallback usage for the health report.

        Args:
            target: Element key (str) in `LOCATORS` or a strategy map (dict)
            timeout: Timeout in milliseconds for each attempt
            element_name: Human-readable name when `target` is a dict

        Returns:
            Playwright Locator for the found element

        Raises:
            ElementNotFoundError: When all strategies fail
        """
        display_name, ordered = self._resolve_target(target, element_name)
        primary_strategy, primary_value = ordered[0]

        errors = []

        for strategy, value in ordered:
            try:
                locator = self._build(strategy, value)
                await locator.wait_for(state="visible", timeout=timeout)
            except PlaywrightError as e:
                errors.append(f"{strategy}: {value} -> {str(e)[:80]}")
                continue

            if strategy != primary_strategy:
                logger.warning(
                    f"Element '{display_name}' used fallback: {strategy} -> {value}"
                )
                self._fallback_used[display_name] = LocatorHealth(
                    element_name=display_name,
                    primary_strategy=primary_strategy,
                    primary_value=primary_value,
                    used_fallback=True,
                    fallback_strategy=strategy,
                    fallback_value=value,
                )
            else:
                logger.debug(f"Element '{display_name}' found: {strategy} -> {value}")

            return locator

        error_msg = (
            f"All locators failed for '{display_name}':\n"
            + "\n".join(f"  - {err}" for err in errors)
        )
        logger.error(error_msg)
        raise ElementNotFoundError(error_msg)

    def locate_all(
        self,
        target: Union[str, Dict[str, str]],
        element_name: Optional[str] = None,
    ) -> Locator:
        """
        Collection handle built from the highest-priority strategy.

        Does not wait: an empty collection is a valid answer.
        """
        _, ordered = self._resolve_target(target, element_name)
        strategy, value = ordered[0]
        return self._build(strategy, value)

    # =========================================================================
    # Gestures
    # =========================================================================

    async def click(
        self,
        target: Union[str, Dict[str, str]],
        timeout: int = 5000,
        element_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """
        Click element using smart location.

        Args:
            target: Element key (str) or strategy map (dict)
            timeout: Timeout for element location
            element_name: Optional human-readable name when `target` is a dict
            **kwargs: Additional arguments passed to click() (e.g. button="right")
        """
        locator = await self.locate(target, timeout=timeout, element_name=element_name)
        await locator.click(**kwargs)

    async def fill(
        self,
        target: Union[str, Dict[str, str]],
        value: str,
        timeout: int = 5000,
        element_name: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        """
        Fill input element using smart location.

        Args:
            target: Element key (str) or strategy map (dict)
            value: Value to fill
            timeout: Timeout for element location
            element_name: Optional human-readable name when `target` is a dict
            **kwargs: Additional arguments passed to fill()
        """
        locator = await self.locate(target, timeout=timeout, element_name=element_name)
        await locator.fill(value, **kwargs)

    async def get_text(
        self,
        target: Union[str, Dict[str, str]],
        timeout: int = 5000,
        element_name: Optional[str] = None,
    ) -> str:
        """
        Get rendered (inner) text of element.

        Returns:
            Inner text of element
        """
        locator = await self.locate(target, timeout=timeout, element_name=element_name)
        return await locator.inner_text()

    async def is_visible(
        self,
        target: Union[str, Dict[str, str]],
        element_name: Optional[str] = None,
    ) -> bool:
        """
        Check visibility right now, without waiting.

        Returns:
            True if any strategy matches a visible element, False otherwise
        """
        display_name, ordered = self._resolve_target(target, element_name)
        for strategy, value in ordered:
            try:
                if await self._build(strategy, value).is_visible():
                    return True
            except PlaywrightError as e:
                logger.debug(f"Visibility check '{display_name}' ({strategy}) failed: {e}")
        return False

    async def count(
        self,
        target: Union[str, Dict[str, str]],
        element_name: Optional[str] = None,
    ) -> int:
        """Number of elements currently matching the target."""
        return await self.locate_all(target, element_name=element_name).count()

    async def all_inner_texts(
        self,
        target: Union[str, Dict[str, str]],
        element_name: Optional[str] = None,
    ) -> List[str]:
        """Inner texts of every element currently matching, in DOM order."""
        return await self.locate_all(target, element_name=element_name).all_inner_texts()

    def get_health_report(self) -> str:
        """
        Generate locator health report.

        Identifies elements that only resolved through a lower-priority
        strategy (maintenance candidates).

        Returns:
            Formatted health report string
        """
        if not self._fallback_used:
            return "All elements used primary locators. No maintenance needed."

        report_lines = [
            "Locator Health Report - Fallbacks Used:",
            "",
            "The following elements used fallback locators.",
            "Consider updating the primary selectors:",
            "",
        ]

        for element_name, health in self._fallback_used.items():
            report_lines.extend([
                f"  [{element_name}]",
                f"    Failed primary: {health.primary_strategy} -> {health.primary_value}",
                f"    Used: {health.fallback_strategy} -> {health.fallback_value}",
                "",
            ])

        return "\n".join(report_lines)


class SmartElement:
    """
    A single element description bound to a SmartLocator.

    Page Objects expose these as properties (static elements) or methods
    (elements parameterized by list or card name).
    """

    def __init__(self, smart: SmartLocator, name: str, locators: Dict[str, str]):
        self.smart = smart
        self.name = name
        self.locators = locators

    def __repr__(self) -> str:
        return f"SmartElement({self.name!r}, {self.locators!r})"

    async def locate(self, timeout: int = 5000) -> Locator:
        return await self.smart.locate(self.locators, timeout=timeout, element_name=self.name)

    def locate_all(self) -> Locator:
        return self.smart.locate_all(self.locators, element_name=self.name)

    async def click(self, timeout: int = 5000, **kwargs: Any) -> None:
        await self.smart.click(self.locators, timeout=timeout, element_name=self.name, **kwargs)

    async def fill(self, value: str, timeout: int = 5000, **kwargs: Any) -> None:
        await self.smart.fill(self.locators, value, timeout=timeout, element_name=self.name, **kwargs)

    async def inner_text(self, timeout: int = 5000) -> str:
        return await self.smart.get_text(self.locators, timeout=timeout, element_name=self.name)

    async def is_visible(self) -> bool:
        return await self.smart.is_visible(self.locators, element_name=self.name)

    async def count(self) -> int:
        return await self.smart.count(self.locators, element_name=self.name)

    async def all_inner_texts(self) -> List[str]:
        return await self.smart.all_inner_texts(self.locators, element_name=self.name)

    async def drag_to(self, target: "SmartElement", timeout: int = 5000) -> None:
        """Drag this element onto `target` in a single gesture."""
        source = await self.locate(timeout=timeout)
        destination = await target.locate(timeout=timeout)
        await source.drag_to(destination)


__all__ = [
    "SmartLocator",
    "SmartElement",
    "ElementNotFoundError",
    "LocatorHealth",
    "STRATEGY_PRIORITY",
    "xpath_literal",
]
