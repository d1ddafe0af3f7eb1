"""
Scrim Desk: Flask Server
JSON endpoints for the team dashboard plus the GRID relay.

/api/scrims        scrimmage games imported from the scrim workbook
/api/players/...   per-match stat lines from GRID (live or fallback)
/api/grid/probe    checks a GRID API key
/functions/v1/grid-api   relay that forwards GraphQL calls to GRID
"""

import logging
from datetime import datetime, timezone

from flask import Flask, jsonify, request
from flask_cors import CORS
from cachetools import TTLCache

from scrimdesk import config, grid, relay, sheets
from scrimdesk.errors import ConfigurationError, RemoteError, ScrimDeskError

# ─── Setup ───
app = Flask(__name__, static_folder=None)
CORS(app, allow_headers=relay.CORS_ALLOW_HEADERS + ["x-grid-api-key"], send_wildcard=True)
logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
log = logging.getLogger("scrimdesk")

# ─── Caches ───
# One entry per workbook id; a failed import is never cached
scrims_cache = TTLCache(maxsize=32, ttl=config.SCRIM_CACHE_TTL_SECONDS)


def _error_status(error):
    if isinstance(error, ConfigurationError):
        return 400
    if isinstance(error, RemoteError):
        return 502
    return 500


# ═══════════════════════════════════════
# SCRIM IMPORT (Google Sheets)
# ═══════════════════════════════════════

def import_scrims(sheet_id):
    """Import (or return cached) scrim games for one workbook."""
    if sheet_id in scrims_cache:
        return scrims_cache[sheet_id]

    log.info(f"Importing scrims from workbook {sheet_id}...")
    client = sheets.SheetsClient(config.GOOGLE_SHEETS_API_KEY)
    matches = sheets.parse_scrim_tabs(client, sheet_id, year=config.SCRIM_YEAR)

    scrims_cache[sheet_id] = matches
    log.info(f"Cached {len(matches)} scrim games for workbook {sheet_id}")
    return matches


@app.route("/api/scrims")
def api_scrims():
    """Return all scrim games of the requested (or default) workbook."""
    sheet_id = request.args.get("sheetId") or config.SCRIM_SHEET_ID
    if not sheet_id:
        return jsonify({"error": "sheetId is required"}), 400

    try:
        matches = import_scrims(sheet_id)
    except ScrimDeskError as e:
        log.warning(f"Scrim import failed for {sheet_id}: {e}")
        return jsonify({"error": str(e)}), _error_status(e)

    return jsonify({
        "matches": [m.to_dict() for m in matches],
        "count": len(matches),
    })


# ═══════════════════════════════════════
# GRID PLAYER STATS
# ═══════════════════════════════════════

def _grid_service():
    # Key per request (dashboard settings) falls back to the server's own key
    api_key = request.headers.get("X-Grid-Api-Key") or config.GRID_API_KEY
    client = grid.GridRelayClient(
        api_key,
        relay_url=config.RELAY_URL,
        relay_token=config.RELAY_TOKEN,
        timeout=config.REQUEST_TIMEOUT_SECONDS,
    )
    return grid.GridService(client)


@app.route("/api/players/<player_id>/performance")
def api_player_performance(player_id):
    """Return a player's recent stat lines; `source` tells live from fallback."""
    result = _grid_service().fetch_player_performance(player_id)
    return jsonify({
        "performances": [r.to_dict() for r in result.rows],
        "count": len(result.rows),
        "source": result.source,
    })


@app.route("/api/grid/probe")
def api_grid_probe():
    """Check whether GRID accepts the API key."""
    result = _grid_service().probe()
    return jsonify(result.to_dict())


# ═══════════════════════════════════════
# GRID RELAY
# ═══════════════════════════════════════

@app.route("/functions/v1/grid-api", methods=["POST", "OPTIONS"])
def grid_relay():
    """Forward {apiKey, query, variables} to GRID and return its JSON verbatim."""
    if request.method == "OPTIONS":
        return "ok", 200

    payload = request.get_json(silent=True)
    try:
        data = relay.forward_graphql(payload)
    except ScrimDeskError as e:
        log.warning(f"Error calling GRID API: {e}")
        return jsonify(relay.relay_error_body(e)), 400

    return jsonify(data)


# ═══════════════════════════════════════
# STATUS
# ═══════════════════════════════════════

@app.route("/api/status")
def api_status():
    """Health check: what is configured and what is cached."""
    return jsonify({
        "ok": True,
        "sources": {
            "sheets": {
                "keyConfigured": bool(config.GOOGLE_SHEETS_API_KEY),
                "defaultWorkbook": config.SCRIM_SHEET_ID,
                "cachedWorkbooks": len(scrims_cache),
                "scrimYear": config.SCRIM_YEAR,
            },
            "grid": {
                "keyConfigured": bool(config.GRID_API_KEY),
                "relay": config.RELAY_URL,
            },
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    })


# ═══════════════════════════════════════
# STARTUP
# ═══════════════════════════════════════

if __name__ == "__main__":
    log.info("=" * 50)
    log.info("Scrim Desk: starting server")
    log.info(f"Scrim workbook: {config.SCRIM_SHEET_ID or '(per request)'} (year {config.SCRIM_YEAR})")
    log.info(f"GRID endpoint: {config.GRID_GRAPHQL_URL}")
    log.info(f"Server: http://localhost:{config.SERVER_PORT}")
    log.info("=" * 50)

    app.run(
        host=config.SERVER_HOST,
        port=config.SERVER_PORT,
        debug=config.DEBUG,
        threaded=True,
    )
