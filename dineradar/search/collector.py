"""Gather nearby restaurant candidates across Places result pages."""

import logging
import time
from typing import List, Optional

from dineradar.core.config import Settings
from dineradar.etl.transform import to_candidate
from dineradar.models import MAX_CANDIDATES, Candidate, CollectionResult, Coordinate, StopReason
from dineradar.vendors import google_places

logger = logging.getLogger(__name__)

PAGE_SIZE_LIMIT = 20


def collect(
    origin: Coordinate,
    radius: int,
    open_now: bool,
    keyword: Optional[str],
    want: int,
    *,
    settings: Settings,
) -> CollectionResult:
    """Collect up to ``want`` candidates, nearest first as ranked by Places.

    Nearby search has no keyword parameter, so ``keyword`` is only logged
    here and applied later by the assembler.
    """
    if want < 1 or want > MAX_CANDIDATES:
        raise ValueError(f"want must be within 1..{MAX_CANDIDATES}, got {want}")

    logger.info(
        "Collecting %d candidates around %s radius=%d open_now=%s keyword=%s",
        want,
        origin.as_param(),
        radius,
        open_now,
        keyword,
    )

    collected: List[Candidate] = []
    page_token = None
    pages_fetched = 0

    while True:
        if pages_fetched >= settings.max_page_fetches:
            stop_reason = StopReason.PAGE_LIMIT
            break

        take = min(PAGE_SIZE_LIMIT, want - len(collected))
        response = google_places.search_nearby(
            lat=origin.lat,
            lng=origin.lng,
            radius=radius,
            open_now=open_now,
            max_result_count=take,
            api_key=settings.google_api_key,
            page_token=page_token,
            language_code=settings.language_code,
            region_code=settings.region_code,
            timeout=settings.http_timeout,
        )
        pages_fetched += 1

        places = response.get("places") if isinstance(response, dict) else None
        if not isinstance(places, list):
            logger.warning(
                "Nearby search page %d missing places; stopping with %d candidates. preview=%s",
                pages_fetched,
                len(collected),
                str(response)[:400],
            )
            stop_reason = StopReason.MALFORMED
            break

        collected.extend(to_candidate(place) for place in places[:take] if isinstance(place, dict))
        logger.info("Fetched %d places on page %d (total=%d)", len(places), pages_fetched, len(collected))

        if len(collected) >= want:
            stop_reason = StopReason.TARGET_REACHED
            break

        page_token = response.get("nextPageToken")
        # A target that fits in one page is served by a single call.
        if not page_token or want <= PAGE_SIZE_LIMIT:
            stop_reason = StopReason.EXHAUSTED
            break
        if pages_fetched >= settings.max_page_fetches:
            stop_reason = StopReason.PAGE_LIMIT
            break
        # Fresh page tokens are rejected until they propagate.
        time.sleep(settings.page_token_delay)

    logger.info("Collection stopped: reason=%s pages=%d candidates=%d", stop_reason.value, pages_fetched, len(collected))
    return CollectionResult(candidates=collected, stop_reason=stop_reason, pages_fetched=pages_fetched)
