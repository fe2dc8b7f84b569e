"""HTTP entrypoint that runs a scrape and returns the businesses as JSON."""

from __future__ import annotations

import logging
from typing import Any, Dict

from flask import Flask, jsonify, request

from listing_scraper.core.config import get_settings
from listing_scraper.jobs.run_scrape import scrape_sync
from listing_scraper.models import to_payload

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)

# ---------- Routes ----------


@app.get("/healthz")
def healthcheck() -> Any:
    return jsonify({"status": "ok"}), 200


@app.post("/scrape")
def run_scrape() -> Any:
    """
    Scrape one search synchronously.
    Required JSON fields: searchFor
    Optional: total (int, informational only)
    """
    payload: Dict[str, Any] = request.get_json(silent=True) or {}

    search_for = str(payload.get("searchFor") or "").strip()
    if not search_for:
        return jsonify({"error": "missing fields: searchFor"}), 400

    total_raw = payload.get("total")
    total = None
    if total_raw is not None:
        try:
            total = int(total_raw)
        except (TypeError, ValueError):
            return jsonify({"error": "total must be numeric"}), 400
        if total < 0:
            return jsonify({"error": "total must not be negative"}), 400

    logger.info("Scrape requested: searchFor=%s total=%s", search_for, total)
    try:
        records = scrape_sync(search_for, total)
    except Exception as exc:  # noqa: BLE001
        logger.exception("Scrape failed for %s: %s", search_for, exc)
        return jsonify({"error": "An error occurred while scraping data."}), 500

    return jsonify(to_payload(records)), 200


def main() -> None:
    port = get_settings().worker_port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
