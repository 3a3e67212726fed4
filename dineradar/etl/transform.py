"""Utilities for transforming Google Maps responses into domain objects."""

import logging
from typing import Any, Dict, Optional

from dineradar.models import Candidate, TravelEstimate

logger = logging.getLogger(__name__)

_PRICE_LEVELS = {
    "PRICE_LEVEL_FREE": 0,
    "PRICE_LEVEL_INEXPENSIVE": 1,
    "PRICE_LEVEL_MODERATE": 2,
    "PRICE_LEVEL_EXPENSIVE": 3,
    "PRICE_LEVEL_VERY_EXPENSIVE": 4,
}


def price_to_level(value: Any) -> Optional[int]:
    """Map a Places price level (numeric or symbolic) onto 0..4."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if 0 <= value <= 4 else None
    if isinstance(value, float) and value.is_integer():
        return price_to_level(int(value))
    if isinstance(value, str):
        level = _PRICE_LEVELS.get(value)
        if level is None and value:
            logger.debug("Unrecognized price level %r", value)
        return level
    return None


def _safe_float(value: Any) -> Optional[float]:
    try:
        if value is None:
            return None
        return float(value)
    except (TypeError, ValueError):
        return None


def _safe_int(value: Any) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value)
    return None


def _open_now(place: Dict[str, Any]) -> Optional[bool]:
    hours = place.get("currentOpeningHours") or {}
    value = hours.get("openNow")
    return value if isinstance(value, bool) else None


def to_candidate(place: Dict[str, Any]) -> Candidate:
    location = place.get("location") or {}
    display_name = place.get("displayName") or {}

    return Candidate(
        id=place.get("id"),
        name=display_name.get("text"),
        address=place.get("formattedAddress"),
        lat=_safe_float(location.get("latitude")),
        lng=_safe_float(location.get("longitude")),
        rating=_safe_float(place.get("rating")),
        price_level=price_to_level(place.get("priceLevel")),
        phone=place.get("nationalPhoneNumber"),
        website=place.get("websiteUri"),
        maps_url=place.get("googleMapsUri"),
        is_open_now=_open_now(place),
    )


def to_travel_estimate(element: Optional[Dict[str, Any]]) -> Optional[TravelEstimate]:
    """Convert a Distance Matrix element; anything but status OK yields None."""
    if not isinstance(element, dict) or element.get("status") != "OK":
        return None
    distance = element.get("distance") or {}
    duration = element.get("duration") or {}
    return TravelEstimate(
        distance_text=distance.get("text"),
        duration_text=duration.get("text"),
        seconds=_safe_int(duration.get("value")),
    )
