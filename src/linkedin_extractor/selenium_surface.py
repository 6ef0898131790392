"""Selenium implementation of the renderable surface.

WebDriver calls block and a WebDriver session is not safe to use from
several threads at once, so every call runs in a worker thread while
holding a per-surface ``asyncio.Lock``. Concurrent reads issued by the
extractors are therefore serialized at this boundary.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Optional

from selenium.common.exceptions import (
    ElementClickInterceptedException,
    ElementNotInteractableException,
    StaleElementReferenceException,
    TimeoutException,
    WebDriverException,
)
from selenium.webdriver.common.by import By
from selenium.webdriver.remote.webdriver import WebDriver
from selenium.webdriver.remote.webelement import WebElement
from selenium.webdriver.support.ui import WebDriverWait

from .errors import SurfaceError
from .scraper_errors import ElementDetached
from .surface import ScrollMetrics

logger = logging.getLogger(__name__)

XPATH_PREFIXES = ("/", "./", "(")

SCROLL_METRICS_SCRIPT = """
const el = arguments[0] || document.scrollingElement || document.documentElement;
return [el.scrollTop, el.clientHeight, el.scrollHeight];
"""

SCROLL_BY_SCRIPT = """
const el = arguments[0] || document.scrollingElement || document.documentElement;
const amount = arguments[1] === null ? el.clientHeight : arguments[1];
el.scrollBy(0, amount);
"""


def to_locator(selector: str, scoped: bool = False) -> tuple[str, str]:
    """Translate a selector string into a Selenium ``(By, value)`` pair.

    XPath selectors anchored at the document root (``//a``) are made
    relative when searching under an element, otherwise Selenium would
    search the whole page.
    """
    if selector.startswith(XPATH_PREFIXES):
        if scoped and selector.startswith("//"):
            selector = "." + selector
        return By.XPATH, selector
    return By.CSS_SELECTOR, selector


class SeleniumSurface:
    """Renderable surface backed by a Selenium WebDriver."""

    def __init__(self, driver: WebDriver, default_timeout: float = 10.0):
        self.driver = driver
        self.default_timeout = default_timeout
        self._lock = asyncio.Lock()

    async def _call(self, fn: Callable[..., Any], *args: Any) -> Any:
        async with self._lock:
            return await asyncio.to_thread(self._guarded, fn, *args)

    @staticmethod
    def _guarded(fn: Callable[..., Any], *args: Any) -> Any:
        try:
            return fn(*args)
        except StaleElementReferenceException as e:
            raise ElementDetached(details={"error": e.msg}) from e
        except WebDriverException as e:
            raise SurfaceError(
                f"WebDriver call failed: {e.msg}",
                details={"operation": getattr(fn, "__name__", repr(fn))},
            ) from e

    def _root(self, scope: Optional[WebElement]):
        return scope if scope is not None else self.driver

    def _find(self, selector: str, scope: Optional[WebElement]) -> Optional[WebElement]:
        by, value = to_locator(selector, scope is not None)
        found = self._root(scope).find_elements(by, value)
        return found[0] if found else None

    def _find_all(self, selector: str, scope: Optional[WebElement]) -> list[WebElement]:
        by, value = to_locator(selector, scope is not None)
        return list(self._root(scope).find_elements(by, value))

    def _text(self, selector: str, scope: Optional[WebElement]) -> Optional[str]:
        element = self._find(selector, scope)
        return None if element is None else element.get_attribute("textContent")

    def _attribute(
        self, selector: str, name: str, scope: Optional[WebElement]
    ) -> Optional[str]:
        element = self._find(selector, scope)
        return None if element is None else element.get_attribute(name)

    def _click(self, element: WebElement) -> None:
        try:
            element.click()
        except (ElementClickInterceptedException, ElementNotInteractableException):
            # Covered by a sticky header or off-screen: dispatch the click directly
            logger.debug("Native click refused, falling back to script click")
            self.driver.execute_script("arguments[0].click();", element)

    def _wait_for_appearance(
        self, selector: str, scope: Optional[WebElement], timeout: float
    ) -> Optional[WebElement]:
        by, value = to_locator(selector, scope is not None)
        try:
            return WebDriverWait(self._root(scope), timeout).until(
                lambda root: next(iter(root.find_elements(by, value)), False)
            )
        except TimeoutException:
            return None

    def _wait_for_disappearance(
        self, selector: str, scope: Optional[WebElement], timeout: float
    ) -> bool:
        by, value = to_locator(selector, scope is not None)
        try:
            WebDriverWait(self._root(scope), timeout).until(
                lambda root: not root.find_elements(by, value)
            )
            return True
        except TimeoutException:
            return False

    def _scroll_metrics(self, element: Optional[WebElement]) -> ScrollMetrics:
        position, viewport, limit = self.driver.execute_script(
            SCROLL_METRICS_SCRIPT, element
        )
        return ScrollMetrics(
            position=float(position), viewport=float(viewport), limit=float(limit)
        )

    async def text_content(
        self, selector: str, scope: Optional[WebElement] = None
    ) -> Optional[str]:
        return await self._call(self._text, selector, scope)

    async def text_of(self, element: WebElement) -> Optional[str]:
        return await self._call(element.get_attribute, "textContent")

    async def attribute(
        self, selector: str, name: str, scope: Optional[WebElement] = None
    ) -> Optional[str]:
        return await self._call(self._attribute, selector, name, scope)

    async def query(
        self, selector: str, scope: Optional[WebElement] = None
    ) -> Optional[WebElement]:
        return await self._call(self._find, selector, scope)

    async def query_all(
        self, selector: str, scope: Optional[WebElement] = None
    ) -> list[WebElement]:
        return await self._call(self._find_all, selector, scope)

    async def click(self, element: WebElement) -> None:
        await self._call(self._click, element)

    async def wait_for_appearance(
        self,
        selector: str,
        scope: Optional[WebElement] = None,
        timeout: Optional[float] = None,
    ) -> Optional[WebElement]:
        timeout = self.default_timeout if timeout is None else timeout
        return await self._call(self._wait_for_appearance, selector, scope, timeout)

    async def wait_for_disappearance(
        self,
        selector: str,
        scope: Optional[WebElement] = None,
        timeout: Optional[float] = None,
    ) -> bool:
        timeout = self.default_timeout if timeout is None else timeout
        return await self._call(self._wait_for_disappearance, selector, scope, timeout)

    async def scroll_by(
        self, element: Optional[WebElement], amount: Optional[float] = None
    ) -> None:
        await self._call(self.driver.execute_script, SCROLL_BY_SCRIPT, element, amount)

    async def scroll_metrics(self, element: Optional[WebElement] = None) -> ScrollMetrics:
        return await self._call(self._scroll_metrics, element)

    async def delay(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
