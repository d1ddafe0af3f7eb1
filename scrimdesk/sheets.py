"""
Scrim workbook import (Google Sheets API v4).

Each scrimmage session lives in its own tab named like "SCRIM 15/01". A tab
holds a header row and up to six game rows; the two rosters and the winner
sit at fixed columns (see ScrimLayout). Tabs are fetched one at a time in
workbook order, and any fetch failure aborts the whole import.
"""

import logging
import re
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple
from urllib.parse import quote

import requests

from scrimdesk import config
from scrimdesk.errors import ConfigurationError, ParseError, RemoteError
from scrimdesk.models import MATCH_TYPE_SCRIM, MatchRecord

log = logging.getLogger("scrimdesk.sheets")

# "SCRIM 15/01", "scrim  03/11 (bo3)": day first, then month
SCRIM_TAB_RE = re.compile(r"SCRIM\s+(\d{2})/(\d{2})", re.IGNORECASE)

_HTTP_HEADERS = {"User-Agent": config.USER_AGENT}


# ═══════════════════════════════════════
# SHEET FETCHER
# ═══════════════════════════════════════

class SheetsClient:
    """Read-only, key-authenticated access to one Google Sheets API base URL."""

    def __init__(self, api_key, base_url=config.SHEETS_API_BASE, timeout=config.REQUEST_TIMEOUT_SECONDS):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def _get_json(self, url, params=None):
        if not self.api_key:
            raise ConfigurationError("Google Sheets API key not configured")

        query = {"key": self.api_key}
        query.update(params or {})
        try:
            resp = requests.get(url, params=query, headers=_HTTP_HEADERS, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteError(f"Google Sheets request failed: {e}") from e

        if not resp.ok:
            raise RemoteError(
                f"Google Sheets API error: {resp.status_code} {resp.reason}",
                status=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError as e:
            raise RemoteError(f"Google Sheets returned a non-JSON body: {e}", status=resp.status_code) from e

    def fetch_range(self, workbook_id, range_a1) -> List[List[str]]:
        """Return the cell grid for an A1 range, e.g. "Sheet1!A1:AF50".

        An empty or sparse range comes back without a "values" field; that
        is an empty grid, not an error.
        """
        if not workbook_id:
            raise ConfigurationError("Workbook id is required")

        range_path = quote(range_a1, safe="")
        url = f"{self.base_url}/{workbook_id}/values/{range_path}"
        data = self._get_json(url)

        rows = data.get("values") or []
        return [[str(cell) for cell in row] for row in rows]

    def fetch_sheet_titles(self, workbook_id) -> List[str]:
        """Return the workbook's tab titles in the order the API lists them."""
        if not workbook_id:
            raise ConfigurationError("Workbook id is required")

        url = f"{self.base_url}/{workbook_id}"
        data = self._get_json(url, params={"fields": "sheets.properties.title"})

        titles = []
        for sheet in data.get("sheets") or []:
            title = (sheet.get("properties") or {}).get("title", "")
            if title:
                titles.append(title)
        return titles


# ═══════════════════════════════════════
# SCRIM TAB PARSER
# ═══════════════════════════════════════

@dataclass(frozen=True)
class ScrimLayout:
    """Column convention of a scrim tab (0-based indexes into a row).

    Defaults: rosters in F–J (blue) and K–O (red), winner in P. The first
    blue player doubles as the team label and as the "row has a game" anchor.
    Side ranges are half-open (start, stop).
    """

    anchor_col: int = 5
    team1_col: int = 5
    team2_col: int = 10
    winner_col: int = 15
    blue_cols: Tuple[int, int] = (5, 10)
    red_cols: Tuple[int, int] = (10, 15)
    max_games: int = config.SCRIM_MAX_GAMES_PER_TAB
    cell_range: str = config.SCRIM_CELL_RANGE
    default_team1: str = "Blue Team"
    default_team2: str = "Red Team"
    default_winner: str = "Blue"
    duration_seconds: int = config.SCRIM_DEFAULT_DURATION_SECONDS


DEFAULT_LAYOUT = ScrimLayout()


def is_scrim_tab(title):
    return bool(SCRIM_TAB_RE.search(title or ""))


def parse_tab_date(title, year) -> str:
    """Tab "SCRIM 15/01" with year 2024 → "2024-01-15". Raises ParseError on bad dates."""
    m = SCRIM_TAB_RE.search(title or "")
    if not m:
        raise ParseError(f"Tab {title!r} has no DD/MM date")
    day, month = int(m.group(1)), int(m.group(2))
    try:
        return date(year, month, day).isoformat()
    except ValueError as e:
        raise ParseError(f"Tab {title!r} has an impossible date: {e}") from e


def _tab_date_as_written(title, year):
    m = SCRIM_TAB_RE.search(title)
    return f"{year:04d}-{m.group(2)}-{m.group(1)}"


def _cell(row, idx):
    return row[idx].strip() if idx < len(row) and row[idx] is not None else ""


def _side(row, cols):
    start, stop = cols
    players = (_cell(row, i) for i in range(start, stop))
    return tuple(p for p in players if p)[:5]


def parse_scrim_row(tab_name, row_index, row, match_date, layout=DEFAULT_LAYOUT) -> Optional[MatchRecord]:
    """Build one MatchRecord from a data row, or None when the anchor cell is empty."""
    if not _cell(row, layout.anchor_col):
        return None

    return MatchRecord(
        id=f"{tab_name}_{row_index}",
        date=match_date,
        team1=_cell(row, layout.team1_col) or layout.default_team1,
        team2=_cell(row, layout.team2_col) or layout.default_team2,
        winner=_cell(row, layout.winner_col) or layout.default_winner,
        blue_side=_side(row, layout.blue_cols),
        red_side=_side(row, layout.red_cols),
        duration_seconds=layout.duration_seconds,
        match_type=MATCH_TYPE_SCRIM,
    )


def parse_scrim_tab(tab_name, grid, match_date, layout=DEFAULT_LAYOUT) -> List[MatchRecord]:
    records = []
    last_row = min(len(grid) - 1, layout.max_games)
    for i in range(1, last_row + 1):
        record = parse_scrim_row(tab_name, i, grid[i] or [], match_date, layout)
        if record is None:
            log.debug(f"{tab_name}: row {i} has no anchor cell, skipped")
            continue
        records.append(record)
    return records


def _tab_range(title, cell_range):
    # Quote the tab name; embedded quotes are doubled per A1 notation
    escaped = title.replace("'", "''")
    return f"'{escaped}'!{cell_range}"


def parse_scrim_tabs(client, workbook_id, layout=DEFAULT_LAYOUT, year=None) -> List[MatchRecord]:
    """Import every "SCRIM DD/MM" tab of a workbook as MatchRecords.

    Tabs are read sequentially in workbook order (not sorted by date).
    ConfigurationError / RemoteError from any fetch propagate and nothing
    already parsed is returned. A tab whose DD/MM cannot exist (31/02) is
    still imported, dated exactly as written.
    """
    year = year or config.SCRIM_YEAR

    titles = client.fetch_sheet_titles(workbook_id)
    scrim_titles = [t for t in titles if is_scrim_tab(t)]
    log.info(f"Workbook {workbook_id}: {len(scrim_titles)} scrim tabs out of {len(titles)}")

    matches = []
    for title in scrim_titles:
        try:
            match_date = parse_tab_date(title, year)
        except ParseError as e:
            # Still a scrim tab; keep its games with the date as the sheet wrote it
            match_date = _tab_date_as_written(title, year)
            log.warning(f"{e} (using {match_date} as written)")

        grid = client.fetch_range(workbook_id, _tab_range(title, layout.cell_range))
        records = parse_scrim_tab(title, grid, match_date, layout)
        log.debug(f"{title}: {len(records)} games from {len(grid)} rows")
        matches.extend(records)

    log.info(f"Workbook {workbook_id}: imported {len(matches)} scrim games")
    return matches
