"""CLI job to run a nearby restaurant search and print the JSON response."""

import argparse
import json
import logging
import sys
from typing import List, Optional

from dineradar.core.config import get_settings
from dineradar.core.errors import ConfigError, InvalidInput, UpstreamError
from dineradar.core.validation import parse_search_request
from dineradar.search import orchestrator

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Search restaurants near a point, ranked by travel time")
    parser.add_argument("--lat", dest="lat", type=float, required=True, help="Origin latitude")
    parser.add_argument("--lng", dest="lng", type=float, required=True, help="Origin longitude")
    parser.add_argument("--radius", dest="radius", type=int, default=1500, help="Search radius in meters")
    parser.add_argument("--keyword", dest="keyword", help="Case-insensitive name filter")
    parser.add_argument("--min-rating", dest="min_rating", type=float, default=0.0, help="Minimum rating")
    parser.add_argument(
        "--price-level",
        dest="price_levels",
        type=int,
        action="append",
        help="Accepted price level (0-4); repeat for several",
    )
    parser.add_argument("--page", dest="page", type=int, default=1, help="1-based result page")
    parser.add_argument("--page-size", dest="page_size", type=int, default=10, help="Results per page")
    parser.add_argument("--max", dest="max_results", type=int, help="Total candidates to gather (1-60)")
    parser.add_argument("--mode", dest="mode", choices=("walking", "driving"), default="walking")
    parser.add_argument(
        "--any-hours",
        dest="open_now",
        action="store_false",
        help="Include places that are closed or have unknown hours",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args(argv)

    payload = {
        "lat": args.lat,
        "lng": args.lng,
        "radius": args.radius,
        "openNow": args.open_now,
        "keyword": args.keyword,
        "minRating": args.min_rating,
        "priceLevels": args.price_levels,
        "page": args.page,
        "pageSize": args.page_size,
        "max": args.max_results,
        "mode": args.mode,
    }

    try:
        search_request = parse_search_request(payload)
        response = orchestrator.search(search_request, get_settings())
    except InvalidInput as exc:
        logger.error("Invalid arguments: %s", exc.detail()["fieldErrors"])
        return 2
    except ConfigError as exc:
        logger.error("Configuration error: %s", exc)
        return 2
    except UpstreamError as exc:
        logger.error("Search failed during %s: %s", exc.operation, exc.message)
        return 1

    json.dump(response.to_dict(), sys.stdout, ensure_ascii=False, indent=2)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
