"""Entry points tying collection, enrichment and assembly together."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from dineradar.core.config import Settings, get_settings
from dineradar.core.errors import ConfigError, UpstreamError
from dineradar.models import SearchRequest, SearchResponse
from dineradar.search import assembler, collector, enricher
from dineradar.vendors import google_places

logger = logging.getLogger(__name__)

NO_MATCH = "NO_MATCH"


def _require_settings(settings: Optional[Settings]) -> Settings:
    settings = settings or get_settings()
    if not settings.google_api_key:
        raise ConfigError("MAPS_SERVER_KEY is required")
    return settings


def search(request: SearchRequest, settings: Optional[Settings] = None) -> SearchResponse:
    settings = _require_settings(settings)
    origin = request.origin

    try:
        collection = collector.collect(
            origin,
            request.radius,
            request.open_now,
            request.keyword,
            request.want,
            settings=settings,
        )
    except Exception as exc:  # noqa: BLE001
        logger.error("search.collect failed: %s", exc)
        raise UpstreamError("collect", str(exc)) from exc

    candidates = collection.candidates
    if not candidates:
        logger.info("No candidates around %s (stop=%s)", origin.as_param(), collection.stop_reason.value)
        return SearchResponse(
            total=0, page=request.page, page_size=request.page_size, results=[], origin=origin, mode=request.mode
        )

    try:
        estimates = enricher.enrich(
            origin, [candidate.location for candidate in candidates], request.mode, settings=settings
        )
    except Exception as exc:  # noqa: BLE001
        logger.error("search.enrich failed: %s", exc)
        raise UpstreamError("enrich", str(exc)) from exc

    page_records, total = assembler.assemble(
        candidates, estimates, request.filters(), request.page, request.page_size
    )
    logger.info(
        "Search around %s: candidates=%d filtered=%d page=%d returned=%d",
        origin.as_param(),
        len(candidates),
        total,
        request.page,
        len(page_records),
    )
    return SearchResponse(
        total=total,
        page=request.page,
        page_size=request.page_size,
        results=page_records,
        origin=origin,
        mode=request.mode,
    )


def resolve(query: str, settings: Optional[Settings] = None) -> Dict[str, Any]:
    """Resolve a free-text place name to the coordinate of the first match."""
    settings = _require_settings(settings)
    try:
        payload = google_places.search_text(
            query,
            api_key=settings.google_api_key,
            language_code=settings.language_code,
            region_code=settings.region_code,
            timeout=settings.http_timeout,
        )
    except Exception as exc:  # noqa: BLE001
        logger.error("resolve failed: %s", exc)
        raise UpstreamError("resolve", str(exc)) from exc

    places = payload.get("places") if isinstance(payload, dict) else None
    first = places[0] if isinstance(places, list) and places else None
    location = first.get("location") if isinstance(first, dict) else None
    if not location:
        logger.info("No match for query=%s", query)
        return {"ok": False, "message": NO_MATCH}

    return {
        "ok": True,
        "name": (first.get("displayName") or {}).get("text"),
        "lat": location.get("latitude"),
        "lng": location.get("longitude"),
    }
