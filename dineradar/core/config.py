"""Application configuration helpers."""

import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

# Distance Matrix rejects more than 25 destinations per request.
MATRIX_DESTINATION_LIMIT = 25


@dataclass(frozen=True)
class Settings:
    google_api_key: str
    port: int = 3000
    max_page_fetches: int = 5
    page_token_delay: float = 1.2
    matrix_batch_size: int = MATRIX_DESTINATION_LIMIT
    http_timeout: Optional[float] = None
    language_code: str = "en"
    region_code: str = "AU"
    static_dir: str = "public"


def _optional_float(raw: Optional[str]) -> Optional[float]:
    if raw is None or not raw.strip():
        return None
    return float(raw)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings from environment variables with sensible defaults."""
    load_dotenv()

    google_api_key = os.getenv("MAPS_SERVER_KEY") or os.getenv("GOOGLE_MAPS_KEY", "")
    port = int(os.getenv("PORT", "3000"))
    max_page_fetches = int(os.getenv("SEARCH_MAX_PAGE_FETCHES", "5"))
    page_token_delay = float(os.getenv("SEARCH_PAGE_TOKEN_DELAY", "1.2"))
    matrix_batch_size = int(os.getenv("MATRIX_BATCH_SIZE", str(MATRIX_DESTINATION_LIMIT)))
    http_timeout = _optional_float(os.getenv("HTTP_TIMEOUT_SECONDS"))
    language_code = os.getenv("PLACES_LANGUAGE_CODE", "en")
    region_code = os.getenv("PLACES_REGION_CODE", "AU")
    static_dir = os.getenv("STATIC_DIR", "public")

    if not google_api_key:
        logger.warning("MAPS_SERVER_KEY is not configured; Google Maps requests will fail.")
    if matrix_batch_size < 1 or matrix_batch_size > MATRIX_DESTINATION_LIMIT:
        logger.warning(
            "MATRIX_BATCH_SIZE=%s is outside 1..%d; clamping.", matrix_batch_size, MATRIX_DESTINATION_LIMIT
        )
        matrix_batch_size = max(1, min(matrix_batch_size, MATRIX_DESTINATION_LIMIT))

    return Settings(
        google_api_key=google_api_key,
        port=port,
        max_page_fetches=max_page_fetches,
        page_token_delay=page_token_delay,
        matrix_batch_size=matrix_batch_size,
        http_timeout=http_timeout,
        language_code=language_code,
        region_code=region_code,
        static_dir=static_dir,
    )
