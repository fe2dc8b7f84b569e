"""Scroll the results feed until it stops growing."""

import asyncio
import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)

FEED_SELECTOR = 'div[role="feed"]'
SCROLL_DISTANCE = 1000
SCROLL_SETTLE_MS = 2000
# Bounds run time on feeds that never stabilize.
MAX_SCROLL_ITERATIONS = 50


async def load_all(page: Any, feed_selector: str = FEED_SELECTOR, timeout_s: Optional[float] = None) -> int:
    """Scroll the feed until an iteration produces no growth.

    Each page call is limited to ``timeout_s`` seconds; a call that runs over
    ends scrolling like any other page error. Returns the number of scroll
    iterations performed; 0 when the feed is missing. Never raises for
    feed-level problems.
    """
    try:
        feed = await asyncio.wait_for(page.query_one(feed_selector), timeout=timeout_s)
    except asyncio.TimeoutError:
        logger.warning("Locating feed %s timed out after %ss", feed_selector, timeout_s)
        return 0
    except Exception as exc:  # noqa: BLE001
        logger.warning("Unable to locate feed %s: %s", feed_selector, exc)
        return 0
    if feed is None:
        logger.warning("Feed %s not found; nothing to scroll", feed_selector)
        return 0

    iterations = 0
    while iterations < MAX_SCROLL_ITERATIONS:
        iterations += 1
        try:
            before = await asyncio.wait_for(page.measure_extent(feed), timeout=timeout_s)
            await asyncio.wait_for(page.scroll_by(feed, SCROLL_DISTANCE), timeout=timeout_s)
            await page.wait(SCROLL_SETTLE_MS)
            after = await asyncio.wait_for(page.measure_extent(feed), timeout=timeout_s)
        except asyncio.TimeoutError:
            logger.warning("Scrolling stopped after %d iterations: feed call exceeded %ss", iterations, timeout_s)
            return iterations
        except Exception as exc:  # noqa: BLE001
            logger.warning("Scrolling stopped after %d iterations: %s", iterations, exc)
            return iterations

        logger.debug("Scroll iteration %d: extent %s -> %s", iterations, before, after)
        if after <= before:
            logger.info("Feed stabilized after %d scroll iterations (extent=%s)", iterations, after)
            return iterations

    logger.warning("Feed still growing after %d scroll iterations; stopping", MAX_SCROLL_ITERATIONS)
    return iterations
