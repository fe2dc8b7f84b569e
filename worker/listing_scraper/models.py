"""Core data models shared by the listing extraction pipeline."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional


@dataclass(frozen=True, slots=True)
class Business:
    """Immutable snapshot of one listing opened from the results feed."""

    name: str = ""
    address: str = ""
    website: str = ""
    phone_number: str = ""
    reviews_count: int = 0
    reviews_average: float = 0.0
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @property
    def coordinates(self) -> tuple:
        return self.latitude, self.longitude


def to_payload(records: List[Business]) -> Dict[str, List[Dict[str, Any]]]:
    """Convert a run's records into the JSON payload returned by the HTTP surface."""
    return {"businesses": [asdict(record) for record in records]}
