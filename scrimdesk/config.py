"""
Scrim Desk: Configuration
Edit this file (or set the matching environment variables) to point the
importer at your workbook and GRID credentials.
"""

import os


# ═══════════════════════════════════════
# GOOGLE SHEETS (scrim workbook)
# ═══════════════════════════════════════

GOOGLE_SHEETS_API_KEY = os.environ.get("GOOGLE_SHEETS_API_KEY", "")
SCRIM_SHEET_ID = os.environ.get("SCRIM_SHEET_ID", "")   # default workbook for /api/scrims

SHEETS_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"

# Tab names carry DD/MM only; the year has to come from somewhere else
SCRIM_YEAR = int(os.environ.get("SCRIM_YEAR", "2024"))

SCRIM_CELL_RANGE = "A1:AF50"          # Cells fetched per scrim tab
SCRIM_MAX_GAMES_PER_TAB = 6           # Data rows 1..6, row 0 is the header
SCRIM_DEFAULT_DURATION_SECONDS = 1500  # No duration column in the sheet (25 min)

SCRIM_CACHE_TTL_SECONDS = 300         # Import cache lifetime per workbook


# ═══════════════════════════════════════
# GRID STATISTICS API
# ═══════════════════════════════════════

GRID_API_KEY = os.environ.get("GRID_API_KEY", "")
GRID_GRAPHQL_URL = os.environ.get("GRID_GRAPHQL_URL", "https://api.grid.gg/live-data-feed/graphql")

# Relay the client talks to (forwards to GRID_GRAPHQL_URL with the GRID key)
RELAY_URL = os.environ.get("RELAY_URL", "http://localhost:5000/functions/v1/grid-api")
RELAY_TOKEN = os.environ.get("RELAY_TOKEN", "")

GRID_MATCHES_PER_PLAYER = 10          # One page, no pagination


# ═══════════════════════════════════════
# HTTP
# ═══════════════════════════════════════

REQUEST_TIMEOUT_SECONDS = 15
USER_AGENT = "ScrimDesk/1.0"


# ═══════════════════════════════════════
# SERVER
# ═══════════════════════════════════════

SERVER_HOST = os.environ.get("SERVER_HOST", "0.0.0.0")
SERVER_PORT = int(os.environ.get("SERVER_PORT", "5000"))
DEBUG = os.environ.get("DEBUG", "1") == "1"
