"""Assemble one Business record per opened listing."""

import logging
from typing import Any, Optional

from listing_scraper.core.config import Settings
from listing_scraper.models import Business
from listing_scraper.scrape.coordinates import decode_coordinates
from listing_scraper.scrape.fields import default_detail_fields, extract_detail_fields, extract_name

logger = logging.getLogger(__name__)


async def assemble(page: Any, listing: Any, settings: Settings, *, name: Optional[str] = None, detail_open: bool = True) -> Business:
    """Build a complete record; every field falls back to its default.

    When ``detail_open`` is false the pane (and the page URL) may still show a
    previous listing, so detail fields and coordinates keep their defaults.
    """
    if name is None:
        name = await extract_name(page, listing, settings.field_timeout_s)

    if detail_open:
        fields = await extract_detail_fields(page, settings.field_timeout_s)
        latitude, longitude = decode_coordinates(page.current_url())
    else:
        fields = default_detail_fields()
        latitude, longitude = None, None

    record = Business(
        name=name,
        address=fields["address"],
        website=fields["website"],
        phone_number=fields["phone_number"],
        reviews_count=fields["reviews_count"],
        reviews_average=fields["reviews_average"],
        latitude=latitude,
        longitude=longitude,
    )
    logger.debug("Assembled %s", record)
    return record
