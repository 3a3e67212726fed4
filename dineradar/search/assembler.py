"""Merge, rank, filter and paginate enriched candidates."""

from typing import List, Optional, Sequence, Tuple

from dineradar.models import Candidate, ResultRecord, SearchFilters, TravelEstimate
from dineradar.search.enricher import pair_estimates


def rank(records: Sequence[ResultRecord]) -> List[ResultRecord]:
    """Order by travel time, unknown durations last; ties keep provider order."""
    return sorted(records, key=ResultRecord.sort_key)


def matches(record: ResultRecord, filters: SearchFilters) -> bool:
    candidate = record.candidate

    if (candidate.rating or 0) < filters.min_rating:
        return False
    # An unknown price level never passes an active price filter.
    if filters.price_levels:
        if candidate.price_level is None or candidate.price_level not in filters.price_levels:
            return False
    if filters.open_now and candidate.is_open_now is not True:
        return False
    if filters.keyword:
        if not candidate.name or filters.keyword.lower() not in candidate.name.lower():
            return False
    return True


def paginate(records: Sequence[ResultRecord], page: int, page_size: int) -> List[ResultRecord]:
    if page < 1 or page_size < 1:
        raise ValueError("page and page_size must be positive")
    start = (page - 1) * page_size
    return list(records[start : start + page_size])


def assemble(
    candidates: Sequence[Candidate],
    estimates: Sequence[Optional[TravelEstimate]],
    filters: SearchFilters,
    page: int,
    page_size: int,
) -> Tuple[List[ResultRecord], int]:
    """Return the requested page and the filtered total."""
    records = [ResultRecord(candidate, travel) for candidate, travel in pair_estimates(candidates, estimates)]
    filtered = [record for record in rank(records) if matches(record, filters)]
    return paginate(filtered, page, page_size), len(filtered)
