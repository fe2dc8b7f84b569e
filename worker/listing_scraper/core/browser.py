"""Playwright-backed page automation used by the extraction pipeline."""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from listing_scraper.core.config import Settings, get_settings
from listing_scraper.scrape.navigation import NavigationError

logger = logging.getLogger(__name__)

VIEWPORT = {"width": 1920, "height": 1080}
LAUNCH_ARGS = ("--no-sandbox", "--disable-setuid-sandbox", "--disable-dev-shm-usage")


class SessionError(RuntimeError):
    """Raised when the browser session cannot be started."""


class PlaywrightPage:
    """Thin wrapper exposing the page operations the pipeline relies on."""

    def __init__(self, page: Any) -> None:
        self._page = page

    async def navigate(self, url: str, *, wait_until: str = "networkidle", timeout_ms: int) -> None:
        try:
            await self._page.goto(url, wait_until=wait_until, timeout=timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise NavigationError(f"{url} did not reach {wait_until} within {timeout_ms} ms") from exc
        except PlaywrightError as exc:
            raise NavigationError(f"navigation to {url} failed: {exc}") from exc

    async def query_all(self, selector: str) -> List[Any]:
        return await self._page.query_selector_all(selector)

    async def query_one(self, selector: str, scope: Any = None) -> Optional[Any]:
        target = scope if scope is not None else self._page
        return await target.query_selector(selector)

    async def read_text(self, element: Any) -> str:
        return await element.inner_text()

    async def read_attribute(self, element: Any, name: str) -> Optional[str]:
        return await element.get_attribute(name)

    async def click(self, element: Any, *, timeout_ms: int) -> None:
        await element.click(timeout=timeout_ms)

    async def scroll_by(self, element: Any, distance: int) -> None:
        await element.evaluate("(el, distance) => el.scrollBy(0, distance)", distance)

    async def measure_extent(self, element: Any) -> int:
        return int(await element.evaluate("el => el.scrollHeight"))

    def current_url(self) -> str:
        return self._page.url

    async def wait(self, duration_ms: int) -> None:
        await self._page.wait_for_timeout(duration_ms)

    async def wait_for_selector(self, selector: str, *, timeout_ms: int) -> None:
        try:
            await self._page.wait_for_selector(selector, state="attached", timeout=timeout_ms)
        except PlaywrightTimeoutError as exc:
            raise NavigationError(f"{selector} not queryable within {timeout_ms} ms") from exc
        except PlaywrightError as exc:
            raise NavigationError(f"waiting for {selector} failed: {exc}") from exc


class BrowserSession:
    """Owns one browser, one context and one page for the duration of a run.

    Use as ``async with BrowserSession(settings) as page``; the browser is
    released exactly once on every exit path.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or get_settings()
        self._playwright = None
        self._browser = None
        self._closed = False

    async def start(self) -> PlaywrightPage:
        try:
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(
                headless=self.settings.headless,
                args=list(LAUNCH_ARGS),
            )
            context = await self._browser.new_context(viewport=VIEWPORT, locale="en-US")
            page = await context.new_page()
        except PlaywrightError as exc:
            await self.close()
            raise SessionError(f"browser session failed to start: {exc}") from exc
        logger.info("Browser session started (headless=%s)", self.settings.headless)
        return PlaywrightPage(page)

    async def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            if self._browser is not None:
                await self._browser.close()
        finally:
            self._browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
        logger.info("Browser session closed")

    async def __aenter__(self) -> PlaywrightPage:
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:  # noqa: D401
        await self.close()
