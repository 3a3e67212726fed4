"""Attach Distance Matrix travel estimates to collected candidates."""

import logging
from typing import Iterator, List, Optional, Sequence, Tuple, TypeVar

from dineradar.core.config import MATRIX_DESTINATION_LIMIT, Settings
from dineradar.etl.transform import to_travel_estimate
from dineradar.models import Candidate, Coordinate, TravelEstimate
from dineradar.vendors import distance_matrix

logger = logging.getLogger(__name__)

T = TypeVar("T")


def chunk(items: Sequence[T], size: int) -> Iterator[Sequence[T]]:
    if size < 1:
        raise ValueError("chunk size must be positive")
    for start in range(0, len(items), size):
        yield items[start : start + size]


def enrich(
    origin: Coordinate,
    destinations: Sequence[Optional[Coordinate]],
    mode: str,
    *,
    settings: Settings,
) -> List[Optional[TravelEstimate]]:
    """Return one estimate (or None) per destination, in input order.

    Destinations given as None are not sent to the provider and come back
    as None.
    """
    routable = [dest for dest in destinations if dest is not None]
    batch_size = min(settings.matrix_batch_size, MATRIX_DESTINATION_LIMIT)
    estimates: List[Optional[TravelEstimate]] = []

    for batch_no, batch in enumerate(chunk(routable, batch_size), start=1):
        payload = distance_matrix.travel_matrix(
            origin=origin.as_param(),
            destinations=[dest.as_param() for dest in batch],
            mode=mode,
            api_key=settings.google_api_key,
            timeout=settings.http_timeout,
        )
        rows = payload.get("rows") or [{}]
        elements = (rows[0] or {}).get("elements") or []
        if len(elements) != len(batch):
            logger.warning(
                "Matrix batch %d returned %d elements for %d destinations", batch_no, len(elements), len(batch)
            )
        for index in range(len(batch)):
            element = elements[index] if index < len(elements) else None
            estimates.append(to_travel_estimate(element))

    routed = iter(estimates)
    return [next(routed) if dest is not None else None for dest in destinations]


def pair_estimates(
    candidates: Sequence[Candidate],
    estimates: Sequence[Optional[TravelEstimate]],
) -> List[Tuple[Candidate, Optional[TravelEstimate]]]:
    if len(candidates) != len(estimates):
        raise ValueError(f"got {len(estimates)} travel estimates for {len(candidates)} candidates")
    return list(zip(candidates, estimates))
