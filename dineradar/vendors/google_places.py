"""Client utilities for the Google Places API (v1)."""

import logging
from typing import Any, Dict, Optional

import requests

from dineradar.core.errors import GooglePlacesError

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://places.googleapis.com/v1"

NEARBY_FIELD_MASK = ",".join(
    [
        "places.id",
        "places.displayName.text",
        "places.formattedAddress",
        "places.location.latitude",
        "places.location.longitude",
        "places.rating",
        "places.priceLevel",
        "places.nationalPhoneNumber",
        "places.websiteUri",
        "places.googleMapsUri",
        "places.currentOpeningHours.openNow",
        "nextPageToken",
    ]
)
TEXT_SEARCH_FIELD_MASK = "places.displayName,places.location"


def _error_message(response: Any) -> Optional[str]:
    try:
        payload = response.json()
    except ValueError:
        return None
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return error.get("message") or error.get("status")
    return None


def _post(method: str, body: Dict[str, Any], api_key: str, field_mask: str, timeout: Optional[float]) -> Dict[str, Any]:
    headers = {
        "Content-Type": "application/json",
        "X-Goog-Api-Key": api_key,
        "X-Goog-FieldMask": field_mask,
    }
    response = _SESSION.post(f"{_BASE_URL}/places:{method}", json=body, headers=headers, timeout=timeout)
    if response.status_code >= 400:
        message = _error_message(response)
        logger.error("%s failed: http_status=%s, error_message=%s", method, response.status_code, message)
        raise GooglePlacesError(message or f"HTTP {response.status_code}")
    return response.json()


def search_nearby(
    *,
    lat: float,
    lng: float,
    radius: int,
    open_now: bool,
    max_result_count: int,
    api_key: str,
    page_token: Optional[str] = None,
    language_code: str = "en",
    region_code: str = "AU",
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """Fetch one page of restaurants around a point, nearest first.

    The payload is returned as-is; callers decide what a missing ``places``
    field means.
    """
    body: Dict[str, Any] = {
        "includedTypes": ["restaurant"],
        "rankPreference": "DISTANCE",
        "locationRestriction": {
            "circle": {"center": {"latitude": lat, "longitude": lng}, "radius": radius},
        },
        "openNow": open_now,
        "languageCode": language_code,
        "regionCode": region_code,
        "maxResultCount": max_result_count,
    }
    if page_token:
        body["pageToken"] = page_token
    return _post("searchNearby", body, api_key, NEARBY_FIELD_MASK, timeout)


def search_text(
    query: str,
    api_key: str,
    language_code: str = "en",
    region_code: str = "AU",
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    body = {"textQuery": query, "languageCode": language_code, "regionCode": region_code}
    return _post("searchText", body, api_key, TEXT_SEARCH_FIELD_MASK, timeout)
