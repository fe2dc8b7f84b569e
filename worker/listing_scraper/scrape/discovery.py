"""Enumerate listing anchors present in the loaded feed."""

import asyncio
import logging
import re
from typing import Any, List, Optional

logger = logging.getLogger(__name__)

LISTING_LINK_SELECTOR = 'a[href*="/maps/place/"]'
LISTING_URL_PATTERN = re.compile(r"^https?://[^/]+/maps/place/")


async def discover_listings(page: Any, timeout_s: Optional[float] = None) -> List[Any]:
    """Return listing anchors in the order they appear on the page.

    A page query that exceeds ``timeout_s`` yields no listings; an anchor
    whose href cannot be read in time is skipped.
    """
    try:
        anchors = await asyncio.wait_for(page.query_all(LISTING_LINK_SELECTOR), timeout=timeout_s)
    except asyncio.TimeoutError:
        logger.warning("Listing query timed out after %ss; no listings found", timeout_s)
        return []
    listings: List[Any] = []
    for anchor in anchors:
        try:
            href = await asyncio.wait_for(page.read_attribute(anchor, "href"), timeout=timeout_s)
        except Exception as exc:  # noqa: BLE001
            logger.debug("Skipping anchor without readable href: %r", exc)
            continue
        if href and LISTING_URL_PATTERN.match(href):
            listings.append(anchor)
    logger.info("Found %d listings", len(listings))
    return listings
