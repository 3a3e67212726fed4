"""HTTP entrypoint serving the restaurant search API and the static client."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from dineradar.core.config import Settings, get_settings
from dineradar.core.errors import ConfigError, InvalidInput, UpstreamError
from dineradar.core.validation import parse_resolve_query, parse_search_request
from dineradar.search import orchestrator

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _bad_input(exc: InvalidInput) -> Any:
    return jsonify({"error": "BAD_INPUT", "detail": exc.detail()}), 400


def _config_error(exc: ConfigError) -> Any:
    logger.error("Configuration error: %s", exc)
    return jsonify({"error": "CONFIG_ERROR"}), 500


def create_app(settings: Optional[Settings] = None) -> Flask:
    settings = settings or get_settings()
    static_dir = os.path.abspath(settings.static_dir)

    app = Flask(__name__, static_folder=static_dir, static_url_path="")
    CORS(app)

    # ---------- Routes ----------

    @app.get("/")
    def root() -> Any:
        """Serve the bundled client when present."""
        if os.path.isfile(os.path.join(static_dir, "index.html")):
            return app.send_static_file("index.html")
        return "ok", 200

    @app.get("/health")
    def health() -> Any:
        return jsonify({"ok": True, "time": datetime.now(timezone.utc).isoformat()}), 200

    @app.post("/api/search")
    def search() -> Any:
        """
        Search restaurants around a point.
        Required JSON fields: lat, lng
        Optional: radius, openNow, keyword, minRating, priceLevels, page, pageSize, max, mode
        """
        payload: Dict[str, Any] = request.get_json(silent=True)
        try:
            search_request = parse_search_request(payload)
        except InvalidInput as exc:
            return _bad_input(exc)

        try:
            response = orchestrator.search(search_request, settings)
        except ConfigError as exc:
            return _config_error(exc)
        except UpstreamError as exc:
            logger.error("SEARCH_ERROR during %s: %s", exc.operation, exc.message)
            return jsonify({"error": "UPSTREAM_ERROR", "message": exc.message}), 502

        return jsonify(response.to_dict()), 200

    @app.post("/api/resolve")
    def resolve() -> Any:
        """Resolve a place name (JSON field ``q``) to a coordinate."""
        payload: Dict[str, Any] = request.get_json(silent=True)
        try:
            query = parse_resolve_query(payload)
        except InvalidInput as exc:
            return _bad_input(exc)

        try:
            result = orchestrator.resolve(query, settings)
        except ConfigError as exc:
            return _config_error(exc)
        except UpstreamError as exc:
            logger.error("RESOLVE_ERROR: %s", exc.message)
            return jsonify({"error": "UPSTREAM_ERROR"}), 502

        return jsonify(result), 200

    return app


def main() -> None:
    settings = get_settings()
    app = create_app(settings)
    logger.info("[BOOT] Binding on 0.0.0.0:%d", settings.port)
    app.run(host="0.0.0.0", port=settings.port)


if __name__ == "__main__":
    main()
