"""CLI job that scrapes one map search into a spreadsheet."""

from __future__ import annotations

import argparse
import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from listing_scraper.core.browser import BrowserSession
from listing_scraper.core.config import ConfigError, Settings, get_settings
from listing_scraper.etl.export import export_filename, write_excel
from listing_scraper.models import Business
from listing_scraper.scrape.aggregator import assemble
from listing_scraper.scrape.discovery import discover_listings
from listing_scraper.scrape.fields import extract_name
from listing_scraper.scrape.loader import load_all
from listing_scraper.scrape.navigation import NavigationError, open_detail, open_search

logger = logging.getLogger(__name__)


async def scrape(
    search_query: str,
    desired_count: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> List[Business]:
    """Run the full pipeline for one query and return records in discovery order.

    ``desired_count`` is accepted for callers but does not bound scrolling or
    discovery; every listing the feed yields is opened. Records are not
    deduplicated.
    """
    settings = settings or get_settings()
    if not search_query or not search_query.strip():
        raise ValueError("Search query must not be empty")

    logger.info("Starting scrape for query=%s desired_count=%s", search_query, desired_count)
    records: List[Business] = []

    async with BrowserSession(settings) as page:
        await open_search(page, search_query, settings)
        iterations = await load_all(page, timeout_s=settings.feed_timeout_s)
        listings = await discover_listings(page, timeout_s=settings.feed_timeout_s)
        logger.info("Discovered %d listings after %d scroll iterations", len(listings), iterations)

        for index, listing in enumerate(listings, start=1):
            name = await extract_name(page, listing, settings.field_timeout_s)
            detail_open = True
            try:
                await open_detail(page, listing, name, settings)
            except NavigationError as exc:
                logger.warning("Detail pane for listing %d (%s) unavailable: %s", index, name, exc)
                detail_open = False

            record = await assemble(page, listing, settings, name=name, detail_open=detail_open)
            records.append(record)
            logger.info("Added business %d/%d: %s", index, len(listings), record.name)

    logger.info("Completed scrape for query=%s: %d businesses", search_query, len(records))
    return records


def scrape_sync(
    search_query: str,
    desired_count: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> List[Business]:
    """Blocking wrapper around :func:`scrape` honouring the optional run timeout."""
    settings = settings or get_settings()
    coro = scrape(search_query, desired_count, settings)
    if settings.run_timeout_s:
        coro = asyncio.wait_for(coro, timeout=settings.run_timeout_s)
    return asyncio.run(coro)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Scrape map search listings into a spreadsheet")
    parser.add_argument("query", help="Search text, e.g. 'coffee shops near downtown'")
    parser.add_argument("--total", dest="total", type=int, default=None, help="Desired number of businesses (informational)")
    parser.add_argument("--output", dest="output", type=Path, default=None, help="Export file path (.xlsx)")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
        records = scrape_sync(args.query, args.total, settings)
        destination = args.output or Path(settings.output_dir) / export_filename(args.query)
        write_excel(records, destination)
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        raise SystemExit(2) from exc
    except Exception as exc:  # noqa: BLE001
        logger.error("Scrape failed: %s", exc, exc_info=True)
        raise SystemExit(1) from exc


if __name__ == "__main__":
    main()
