"""Utilities for turning scraped records into spreadsheet rows."""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

import pandas as pd

from listing_scraper.models import Business

logger = logging.getLogger(__name__)

SHEET_NAME = "Businesses"
EXPORT_COLUMNS = [
    "Name",
    "Address",
    "Website",
    "Phone",
    "Reviews Count",
    "Average Rating",
    "Coordinates",
]
ABSENT_MARKER = "null"


def format_coordinates(latitude: Optional[float], longitude: Optional[float]) -> str:
    lat = ABSENT_MARKER if latitude is None else latitude
    lon = ABSENT_MARKER if longitude is None else longitude
    return f"({lat}, {lon})"


def to_export_row(business: Business) -> Dict[str, Any]:
    return {
        "Name": business.name,
        "Address": business.address,
        "Website": business.website,
        "Phone": business.phone_number,
        "Reviews Count": business.reviews_count,
        "Average Rating": business.reviews_average,
        "Coordinates": format_coordinates(*business.coordinates),
    }


def export_filename(query: str, now: Optional[datetime] = None) -> str:
    """File name for a query's export, e.g. ``coffee_shops-20240101T120000Z.xlsx``."""
    slug = re.sub(r"[^a-z0-9]+", "_", (query or "").lower()).strip("_") or "businesses"
    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%dT%H%M%SZ")
    return f"{slug}-{stamp}.xlsx"


def write_excel(records: Iterable[Business], destination: Union[str, Path]) -> Path:
    """Write one sheet with a header row and one row per record.

    Raises OSError when the destination cannot be created or written.
    """
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)

    rows: List[Dict[str, Any]] = [to_export_row(record) for record in records]
    frame = pd.DataFrame(rows, columns=EXPORT_COLUMNS)
    frame.to_excel(path, index=False, sheet_name=SHEET_NAME, engine="openpyxl")

    logger.info("Wrote %d businesses to %s", len(rows), path)
    return path
