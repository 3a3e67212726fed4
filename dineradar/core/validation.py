"""Request body validation for the search and resolve endpoints."""

from __future__ import annotations

import math
from typing import Any, Dict, List, Optional

from dineradar.core.errors import InvalidInput
from dineradar.models import MAX_CANDIDATES, TRAVEL_MODES, Coordinate, SearchRequest

_MISSING = object()


class _Errors:
    def __init__(self) -> None:
        self.fields: Dict[str, List[str]] = {}

    def add(self, name: str, message: str) -> None:
        self.fields.setdefault(name, []).append(message)

    def raise_if_any(self) -> None:
        if self.fields:
            raise InvalidInput(self.fields)


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def _is_integer(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    return isinstance(value, int) or (isinstance(value, float) and value.is_integer())


def _number(
    payload: Dict[str, Any],
    name: str,
    errors: _Errors,
    *,
    low: Optional[float] = None,
    high: Optional[float] = None,
    default: Any = _MISSING,
    integer: bool = False,
) -> Any:
    value = payload.get(name)
    if value is None:
        if default is _MISSING:
            errors.add(name, "Required")
        return default
    check = _is_integer if integer else _is_number
    if not check(value):
        errors.add(name, "Expected integer" if integer else "Expected number")
        return None
    # Out-of-range ints may be too large to convert to float.
    if low is not None and value < low:
        errors.add(name, f"Must be >= {low}")
        return None
    if high is not None and value > high:
        errors.add(name, f"Must be <= {high}")
        return None
    return int(value) if integer else float(value)


def _boolean(payload: Dict[str, Any], name: str, errors: _Errors, default: bool) -> bool:
    value = payload.get(name)
    if value is None:
        return default
    if not isinstance(value, bool):
        errors.add(name, "Expected boolean")
        return default
    return value


def _string(
    payload: Dict[str, Any],
    name: str,
    errors: _Errors,
    *,
    min_length: int = 0,
    max_length: Optional[int] = None,
) -> Optional[str]:
    value = payload.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        errors.add(name, "Expected string")
        return None
    value = value.strip()
    if len(value) < min_length:
        errors.add(name, f"Must contain at least {min_length} character(s)")
    if max_length is not None and len(value) > max_length:
        errors.add(name, f"Must contain at most {max_length} character(s)")
    return value


def _price_levels(payload: Dict[str, Any], errors: _Errors) -> Optional[List[int]]:
    value = payload.get("priceLevels")
    if value is None:
        return None
    if not isinstance(value, list):
        errors.add("priceLevels", "Expected array")
        return None
    if len(value) > 5:
        errors.add("priceLevels", "Must contain at most 5 element(s)")
    levels = []
    for item in value:
        if not _is_integer(item) or not 0 <= item <= 4:
            errors.add("priceLevels", "Price levels must be integers within 0..4")
            continue
        levels.append(int(item))
    return levels


def parse_search_request(payload: Any) -> SearchRequest:
    """Validate a camelCase JSON search body, raising InvalidInput with field detail."""
    if not isinstance(payload, dict):
        raise InvalidInput({}, ["Expected object"])

    errors = _Errors()
    lat = _number(payload, "lat", errors, low=-90, high=90)
    lng = _number(payload, "lng", errors, low=-180, high=180)
    radius = _number(payload, "radius", errors, low=100, high=5000, default=1500, integer=True)
    open_now = _boolean(payload, "openNow", errors, default=True)
    keyword = _string(payload, "keyword", errors, max_length=60)
    min_rating = _number(payload, "minRating", errors, low=0, high=5, default=0.0)
    price_levels = _price_levels(payload, errors)
    page = _number(payload, "page", errors, low=1, default=1, integer=True)
    page_size = _number(payload, "pageSize", errors, low=1, high=20, default=10, integer=True)
    max_results = _number(payload, "max", errors, low=1, high=MAX_CANDIDATES, default=None, integer=True)

    mode = payload.get("mode")
    if mode is None:
        mode = "walking"
    elif mode not in TRAVEL_MODES:
        errors.add("mode", f"Expected one of: {', '.join(TRAVEL_MODES)}")

    errors.raise_if_any()
    return SearchRequest(
        origin=Coordinate(lat, lng),
        radius=radius,
        open_now=open_now,
        keyword=keyword or None,
        min_rating=min_rating,
        price_levels=price_levels,
        page=page,
        page_size=page_size,
        max_results=max_results,
        mode=mode,
    )


def parse_resolve_query(payload: Any) -> str:
    if not isinstance(payload, dict):
        raise InvalidInput({}, ["Expected object"])
    errors = _Errors()
    query = _string(payload, "q", errors, min_length=2, max_length=100)
    if query is None and "q" not in errors.fields:
        errors.add("q", "Required")
    errors.raise_if_any()
    return query
