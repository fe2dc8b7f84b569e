"""Search navigation and listing detail opening."""

import logging
from typing import Any, Optional
from urllib.parse import quote

from listing_scraper.core.config import Settings

logger = logging.getLogger(__name__)

DETAIL_PANE_SELECTOR = 'div[role="main"][aria-label]'


class NavigationError(RuntimeError):
    """Raised when a navigation or detail open does not settle in time."""


def build_search_url(query: str, base_url: str) -> str:
    tokens = (query or "").split()
    if not tokens:
        raise ValueError("Query must be provided for map searches.")
    joined = "+".join(quote(token, safe="") for token in tokens)
    return f"{base_url.rstrip('/')}/maps/search/{joined}"


def detail_pane_selector(name: Optional[str]) -> str:
    """Selector for the detail pane of ``name``; generic when the name is unknown."""
    if not name:
        return DETAIL_PANE_SELECTOR
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'div[role="main"][aria-label="{escaped}"]'


async def open_search(page: Any, query: str, settings: Settings) -> str:
    url = build_search_url(query, settings.base_url)
    logger.info("Opening search %s", url)
    await page.navigate(url, wait_until="networkidle", timeout_ms=settings.navigation_timeout_ms)
    logger.info("Search page settled for query=%s", query)
    return url


async def open_detail(page: Any, listing: Any, name: Optional[str], settings: Settings) -> None:
    """Activate ``listing`` and wait until its detail pane can be queried.

    Raises NavigationError when the click or the pane wait times out; callers
    treat that as "no detail available" for this listing only.
    """
    try:
        await page.click(listing, timeout_ms=settings.detail_timeout_ms)
    except NavigationError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise NavigationError(f"could not activate listing {name!r}: {exc}") from exc
    await page.wait_for_selector(detail_pane_selector(name), timeout_ms=settings.detail_timeout_ms)
