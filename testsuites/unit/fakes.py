"""
In-memory stand-ins for the Playwright objects the framework touches.

FakePage keeps a registry of elements keyed by (strategy, value), the same
pairs SmartLocator builds from, and records every gesture in `actions`.
Registrations may be callables so reads reflect state changed between calls.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError


Key = Tuple[str, str]


class FakeElement:
    def __init__(self, text: str = "", visible: bool = True):
        self.text = text
        self.visible = visible

    def __repr__(self) -> str:
        return f"FakeElement({self.text!r}, visible={self.visible})"


class FakeLocator:
    def __init__(self, page: "FakePage", key: Key):
        self.page = page
        self.key = key

    def _elements(self) -> List[FakeElement]:
        return self.page.lookup(self.key)

    def _single_visible(self) -> Optional[FakeElement]:
        visible = [e for e in self._elements() if e.visible]
        if len(visible) > 1:
            raise PlaywrightError(
                f"strict mode violation: {self.key} resolved to {len(visible)} elements"
            )
        return visible[0] if visible else None

    async def wait_for(self, state: str = "visible", timeout: float = 30000) -> None:
        self.page.waits.append((self.key, timeout))
        if self._single_visible() is None:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded waiting for {self.key}")

    async def is_visible(self) -> bool:
        return self._single_visible() is not None

    async def click(self, **kwargs: Any) -> None:
        self.page.record("click", self.key, kwargs)

    async def fill(self, value: str, **kwargs: Any) -> None:
        self.page.record("fill", self.key, value)

    async def inner_text(self) -> str:
        element = self._single_visible()
        return element.text if element else ""

    async def count(self) -> int:
        return len(self._elements())

    async def all_inner_texts(self) -> List[str]:
        return [e.text for e in self._elements()]

    async def drag_to(self, target: "FakeLocator") -> None:
        self.page.record("drag", self.key, target.key)


class FakePage:
    """Minimal async Page with a pluggable element registry."""

    def __init__(self, url: str = "about:blank", title: str = ""):
        self.url = url
        self._title = title
        self._registry: Dict[Key, Union[List[FakeElement], Callable[[], List[FakeElement]]]] = {}
        self._handlers: Dict[Tuple[str, Key], Callable[..., None]] = {}
        self.actions: List[Tuple[str, Key, Any]] = []
        self.waits: List[Tuple[Key, float]] = []

    # -- registry -----------------------------------------------------------

    def add(self, strategy: str, value: str, *elements: FakeElement) -> None:
        self._registry[(strategy, value)] = list(elements)

    def add_dynamic(self, strategy: str, value: str, source: Callable[[], List[FakeElement]]) -> None:
        self._registry[(strategy, value)] = source

    def add_element(self, smart_element: Any, *elements: FakeElement) -> None:
        """Register elements under the highest-priority strategy of a SmartElement."""
        for strategy, value in smart_element.locators.items():
            self.add(strategy, value, *elements)
            return

    def remove(self, strategy: str, value: str) -> None:
        self._registry.pop((strategy, value), None)

    def on(self, action: str, key: Key, handler: Callable[..., None]) -> None:
        self._handlers[(action, key)] = handler

    def lookup(self, key: Key) -> List[FakeElement]:
        found = self._registry.get(key, [])
        return list(found() if callable(found) else found)

    def record(self, action: str, key: Key, payload: Any = None) -> None:
        self.actions.append((action, key, payload))
        handler = self._handlers.get((action, key))
        if handler is not None:
            handler(payload)

    # -- Page API -----------------------------------------------------------

    def get_by_test_id(self, value: str) -> FakeLocator:
        return FakeLocator(self, ("test_id", value))

    def get_by_label(self, value: str, exact: bool = False) -> FakeLocator:
        return FakeLocator(self, ("label", value))

    def get_by_placeholder(self, value: str, exact: bool = False) -> FakeLocator:
        return FakeLocator(self, ("placeholder", value))

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, ("structural", selector))

    async def goto(self, url: str, **kwargs: Any) -> None:
        self.url = url
        self.actions.append(("goto", ("url", url), kwargs))

    async def title(self) -> str:
        return self._title

    async def wait_for_url(self, pattern: str, **kwargs: Any) -> None:
        self.actions.append(("wait_for_url", ("url", pattern), kwargs))

    async def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        data = b"\x89PNG fake"
        if path:
            Path(path).write_bytes(data)
        self.actions.append(("screenshot", ("path", str(path)), full_page))
        return data


# =============================================================================
# Engine lifecycle fakes
# =============================================================================

class FakeContext:
    def __init__(self, page: FakePage, options: Dict[str, Any]):
        self.page = page
        self.options = options
        self.default_timeout: Optional[float] = None

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    async def new_page(self) -> FakePage:
        return self.page


class FakeBrowser:
    def __init__(self, page: FakePage, close_error: Optional[Exception] = None):
        self.page = page
        self.close_error = close_error
        self.contexts: List[FakeContext] = []
        self.closed = False

    async def new_context(self, **options: Any) -> FakeContext:
        context = FakeContext(self.page, options)
        self.contexts.append(context)
        return context

    async def close(self) -> None:
        self.closed = True
        if self.close_error is not None:
            raise self.close_error


class FakeBrowserType:
    def __init__(self, name: str, browser: FakeBrowser, launch_error: Optional[Exception] = None):
        self.name = name
        self.browser = browser
        self.launch_error = launch_error
        self.launch_options: Optional[Dict[str, Any]] = None

    async def launch(self, **options: Any) -> FakeBrowser:
        self.launch_options = options
        if self.launch_error is not None:
            raise self.launch_error
        return self.browser


class FakePlaywright:
    def __init__(
        self,
        page: Optional[FakePage] = None,
        launch_error: Optional[Exception] = None,
        close_error: Optional[Exception] = None,
        stop_error: Optional[Exception] = None,
    ):
        self.page = page or FakePage()
        self.browser = FakeBrowser(self.page, close_error=close_error)
        self.chromium = FakeBrowserType("chromium", self.browser, launch_error)
        self.firefox = FakeBrowserType("firefox", self.browser, launch_error)
        self.webkit = FakeBrowserType("webkit", self.browser, launch_error)
        self.stop_error = stop_error
        self.stopped = False

    async def stop(self) -> None:
        self.stopped = True
        if self.stop_error is not None:
            raise self.stop_error


class FakePlaywrightFactory:
    """Callable standing in for `async_playwright`; counts invocations."""

    def __init__(self, playwright: FakePlaywright):
        self.playwright = playwright
        self.calls = 0

    def __call__(self) -> "FakePlaywrightFactory":
        self.calls += 1
        return self

    async def start(self) -> FakePlaywright:
        return self.playwright
