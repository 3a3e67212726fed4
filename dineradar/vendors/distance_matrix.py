"""Client utilities for the Google Distance Matrix API."""

import logging
from typing import Any, Dict, Iterable, Optional

import requests

logger = logging.getLogger(__name__)
_SESSION = requests.Session()
_BASE_URL = "https://maps.googleapis.com/maps/api/distancematrix/json"


def travel_matrix(
    origin: str,
    destinations: Iterable[str],
    mode: str,
    api_key: str,
    timeout: Optional[float] = None,
) -> Dict[str, Any]:
    """Query travel distance and duration from one origin to many destinations.

    A non-OK top-level status is logged and the payload returned as-is, so
    its missing elements degrade to unknown travel estimates.
    """
    params = {
        "origins": origin,
        "destinations": "|".join(destinations),
        "mode": mode,
        "key": api_key,
    }
    response = _SESSION.get(_BASE_URL, params=params, timeout=timeout)
    response.raise_for_status()
    payload = response.json()
    status = payload.get("status")
    if status is not None and status != "OK":
        logger.warning("travel_matrix degraded: status=%s, error_message=%s", status, payload.get("error_message"))
    return payload
