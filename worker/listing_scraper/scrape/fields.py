"""Per-field extractors for listing names and detail pane values.

Each field is read through :func:`extract_field`, which absorbs every failure
of its reader and substitutes the field's default. A broken selector for one
field therefore never hides the other fields of the same listing.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

ADDRESS_SELECTOR = 'button[data-item-id="address"] div'
WEBSITE_SELECTOR = 'a[data-item-id="authority"]'
PHONE_SELECTOR = 'button[data-item-id^="phone:tel:"] div'
REVIEWS_COUNT_SELECTOR = 'button[jsaction="pane.reviewChart.moreReviews"] div'
REVIEWS_AVERAGE_SELECTOR = 'div[jsaction="pane.reviewChart.moreReviews"] div[role="img"]'

MAX_RATING = 5.0


class FieldExtractionFailure(ValueError):
    """Raised by readers when a field's control is absent or unparseable."""


async def extract_field(
    field_name: str,
    reader: Callable[[], Awaitable[T]],
    default: T,
    timeout_s: Optional[float] = None,
) -> T:
    """Run ``reader`` and return its value, or ``default`` on any failure."""
    try:
        return await asyncio.wait_for(reader(), timeout=timeout_s)
    except FieldExtractionFailure as exc:
        logger.debug("Field %s unavailable: %s", field_name, exc)
    except asyncio.TimeoutError:
        logger.warning("Field %s timed out after %ss", field_name, timeout_s)
    except Exception as exc:  # noqa: BLE001
        logger.warning("Field %s extraction failed: %s", field_name, exc)
    return default


def parse_reviews_count(text: Optional[str]) -> int:
    """Parse the leading count of a "1,234 reviews" style label."""
    # NBSP and narrow NBSP are thousands separators, so only ASCII spaces split.
    token = (text or "").strip().split(" ")[0].strip("()")
    if not token:
        raise FieldExtractionFailure("empty reviews count text")
    digits = token.replace(",", "").replace(".", "").replace("\xa0", "").replace("\u202f", "")
    if not digits.isdigit():
        raise FieldExtractionFailure(f"non-numeric reviews count {token!r}")
    return int(digits)


def parse_reviews_average(label: Optional[str]) -> float:
    """Parse the leading rating of a "4,5 stars" style accessible label."""
    tokens = (label or "").split()
    if not tokens:
        raise FieldExtractionFailure("empty rating label")
    token = tokens[0].replace(",", ".")
    try:
        value = float(token)
    except ValueError as exc:
        raise FieldExtractionFailure(f"non-numeric rating {token!r}") from exc
    if not 0.0 <= value <= MAX_RATING:
        raise FieldExtractionFailure(f"rating {value} outside 0-{MAX_RATING}")
    return value


async def _require(page: Any, selector: str) -> Any:
    element = await page.query_one(selector)
    if element is None:
        raise FieldExtractionFailure(f"{selector} not present")
    return element


async def read_control_text(page: Any, selector: str) -> str:
    element = await _require(page, selector)
    text = await page.read_text(element)
    return (text or "").strip()


async def read_control_attribute(page: Any, selector: str, attribute: str) -> str:
    element = await _require(page, selector)
    value = await page.read_attribute(element, attribute)
    if value is None:
        raise FieldExtractionFailure(f"{selector} has no {attribute}")
    return value


@dataclass(frozen=True)
class DetailField:
    name: str
    read: Callable[[Any], Awaitable[Any]]
    default: Any


async def _read_reviews_count(page: Any) -> int:
    return parse_reviews_count(await read_control_text(page, REVIEWS_COUNT_SELECTOR))


async def _read_reviews_average(page: Any) -> float:
    return parse_reviews_average(await read_control_attribute(page, REVIEWS_AVERAGE_SELECTOR, "aria-label"))


DETAIL_FIELDS = (
    DetailField("address", lambda page: read_control_text(page, ADDRESS_SELECTOR), ""),
    DetailField("website", lambda page: read_control_text(page, WEBSITE_SELECTOR), ""),
    DetailField("phone_number", lambda page: read_control_text(page, PHONE_SELECTOR), ""),
    DetailField("reviews_count", _read_reviews_count, 0),
    DetailField("reviews_average", _read_reviews_average, 0.0),
)


async def extract_name(page: Any, listing: Any, timeout_s: Optional[float] = None) -> str:
    async def read() -> str:
        label = await page.read_attribute(listing, "aria-label")
        if label is None:
            raise FieldExtractionFailure("listing has no aria-label")
        return label.strip()

    return await extract_field("name", read, "", timeout_s)


async def extract_detail_fields(page: Any, timeout_s: Optional[float] = None) -> Dict[str, Any]:
    """Read all detail pane fields concurrently; keys follow DETAIL_FIELDS."""
    values = await asyncio.gather(
        *(extract_field(detail.name, lambda detail=detail: detail.read(page), detail.default, timeout_s) for detail in DETAIL_FIELDS)
    )
    return {detail.name: value for detail, value in zip(DETAIL_FIELDS, values)}


def default_detail_fields() -> Dict[str, Any]:
    return {detail.name: detail.default for detail in DETAIL_FIELDS}
