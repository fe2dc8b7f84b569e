"""Decode latitude/longitude from canonical listing URLs."""

import logging
import re
from typing import Optional, Tuple

logger = logging.getLogger(__name__)

# Listing URLs carry the place position as `...!3d<lat>!4d<lon>...` in their data blob.
COORDINATE_PATTERN = re.compile(r"!3d([-+]?[0-9]*\.?[0-9]+)!4d([-+]?[0-9]*\.?[0-9]+)")


class DecodeFailure(ValueError):
    """Raised when a URL does not carry an adjacent !3d/!4d coordinate pair."""


def parse_coordinates(url: str) -> Tuple[float, float]:
    match = COORDINATE_PATTERN.search(url or "")
    if not match:
        raise DecodeFailure("no !3d<lat>!4d<lon> marker pair in URL")
    return float(match.group(1)), float(match.group(2))


def decode_coordinates(url: str) -> Tuple[Optional[float], Optional[float]]:
    """Return ``(lat, lon)`` from the first marker pair, or ``(None, None)``."""
    try:
        return parse_coordinates(url)
    except DecodeFailure:
        logger.debug("No coordinates found in %s", url)
        return None, None
