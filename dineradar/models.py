"""Core data models shared by the nearby search pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional

MAX_CANDIDATES = 60
TRAVEL_MODES = ("walking", "driving")


@dataclass(frozen=True, slots=True)
class Coordinate:
    lat: float
    lng: float

    def as_param(self) -> str:
        """Render as the ``lat,lng`` form the Distance Matrix API expects."""
        return f"{self.lat},{self.lng}"

    def to_dict(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True, slots=True)
class Candidate:
    """Normalized snapshot of a restaurant returned by Places nearby search."""

    id: Optional[str]
    name: Optional[str] = None
    address: Optional[str] = None
    lat: Optional[float] = None
    lng: Optional[float] = None
    rating: Optional[float] = None
    price_level: Optional[int] = None
    phone: Optional[str] = None
    website: Optional[str] = None
    maps_url: Optional[str] = None
    is_open_now: Optional[bool] = None

    @property
    def location(self) -> Optional[Coordinate]:
        if self.lat is None or self.lng is None:
            return None
        return Coordinate(self.lat, self.lng)


@dataclass(frozen=True, slots=True)
class TravelEstimate:
    distance_text: Optional[str]
    duration_text: Optional[str]
    seconds: Optional[int]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "distanceText": self.distance_text,
            "durationText": self.duration_text,
            "seconds": self.seconds,
        }


@dataclass(slots=True)
class ResultRecord:
    candidate: Candidate
    travel: Optional[TravelEstimate] = None

    def sort_key(self) -> float:
        if self.travel is None or self.travel.seconds is None:
            return float("inf")
        return float(self.travel.seconds)

    def to_dict(self) -> Dict[str, Any]:
        c = self.candidate
        return {
            "id": c.id,
            "name": c.name,
            "address": c.address,
            "phone": c.phone,
            "website": c.website,
            "mapsUrl": c.maps_url,
            "rating": c.rating,
            "priceLevel": c.price_level,
            "isOpenNow": c.is_open_now,
            "lat": c.lat,
            "lng": c.lng,
            "travel": self.travel.to_dict() if self.travel else None,
        }


@dataclass(frozen=True, slots=True)
class SearchFilters:
    min_rating: float = 0.0
    price_levels: Optional[FrozenSet[int]] = None
    open_now: bool = True
    keyword: Optional[str] = None


@dataclass(slots=True)
class SearchRequest:
    origin: Coordinate
    radius: int = 1500
    open_now: bool = True
    keyword: Optional[str] = None
    min_rating: float = 0.0
    price_levels: Optional[List[int]] = None
    page: int = 1
    page_size: int = 10
    max_results: Optional[int] = None
    mode: str = "walking"

    @property
    def want(self) -> int:
        """Number of candidates to gather before filtering."""
        return min(self.max_results or self.page_size, MAX_CANDIDATES)

    def filters(self) -> SearchFilters:
        return SearchFilters(
            min_rating=self.min_rating,
            price_levels=frozenset(self.price_levels) if self.price_levels else None,
            open_now=self.open_now,
            keyword=self.keyword or None,
        )


@dataclass(slots=True)
class SearchResponse:
    total: int
    page: int
    page_size: int
    results: List[ResultRecord]
    origin: Coordinate
    mode: str

    @property
    def count(self) -> int:
        return len(self.results)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "page": self.page,
            "pageSize": self.page_size,
            "count": self.count,
            "results": [record.to_dict() for record in self.results],
            "origin": self.origin.to_dict(),
            "mode": self.mode,
        }


class StopReason(str, Enum):
    """Why the candidate collector stopped paging."""

    TARGET_REACHED = "target_reached"
    EXHAUSTED = "exhausted"
    PAGE_LIMIT = "page_limit"
    MALFORMED = "malformed"


@dataclass(slots=True)
class CollectionResult:
    candidates: List[Candidate]
    stop_reason: StopReason
    pages_fetched: int = 0
