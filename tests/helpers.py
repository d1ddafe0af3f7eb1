"""Shared test factories and HTTP fakes.

Builders for scrim sheet rows/grids and GRID GraphQL payloads with sensible
defaults, plus minimal stand-ins for requests.get / requests.post.
"""

from urllib.parse import unquote

import requests

HEADER_ROW = [
    "Game", "Patch", "Side", "Result", "Notes",
    "Top", "Jungle", "Mid", "ADC", "Support",
    "Top", "Jungle", "Mid", "ADC", "Support",
    "Winner",
]

DEFAULT_BLUE = ["Zeus", "Oner", "Faker", "Gumayusi", "Keria"]
DEFAULT_RED = ["Kiin", "Canyon", "Chovy", "Peyz", "Lehends"]

_NO_JSON = object()


# ─── Scrim Sheet Factories ────────────────────────────────────────

def make_row(blue=None, red=None, winner="T1", prefix=None):
    """Build one scrim data row: A–E free text, F–J blue, K–O red, P winner.

    Pass a shorter blue/red list to leave trailing roster cells empty; use
    "" for an empty cell in the middle.
    """
    blue = list(DEFAULT_BLUE if blue is None else blue)
    red = list(DEFAULT_RED if red is None else red)
    blue += [""] * (5 - len(blue))
    red += [""] * (5 - len(red))
    prefix = list(prefix if prefix is not None else ["1", "14.1", "Blue", "W", ""])
    return prefix + blue + red + [winner]


def make_grid(*rows):
    """Header row followed by the given data rows."""
    return [list(HEADER_ROW)] + [list(r) for r in rows]


def make_valid_grid(n):
    return make_grid(*[make_row(prefix=[str(i + 1), "", "", "", ""]) for i in range(n)])


# ─── GRID Payload Factories ───────────────────────────────────────

def make_participant(player_id, champion="Ahri", **stats):
    base = {
        "kills": 3,
        "deaths": 1,
        "assists": 7,
        "totalMinionsKilled": 210,
        "goldEarned": 12000,
        "totalDamageDealtToChampions": 18000,
    }
    base.update(stats)
    return {
        "player": {"id": player_id},
        "champion": {"id": champion.lower(), "name": champion},
        "stats": base,
    }


def make_match_node(match_id, duration, participants):
    return {
        "id": match_id,
        "startTime": "2024-01-15T18:00:00Z",
        "duration": duration,
        "participants": participants,
    }


def make_player_data(player_id, nodes):
    """The `data` object of a GetPlayerMatches response."""
    return {"player": {"id": player_id, "matches": {"nodes": nodes}}}


# ─── HTTP Fakes ───────────────────────────────────────────────────

class FakeResponse:
    def __init__(self, status_code=200, json_data=_NO_JSON, reason=None):
        self.status_code = status_code
        self._json = json_data
        self.reason = reason or ("OK" if status_code < 400 else "Error")

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        if self._json is _NO_JSON:
            raise ValueError("No JSON object could be decoded")
        return self._json


class FakeHttp:
    """Callable stand-in for requests.post: records calls, replays responses."""

    def __init__(self):
        self.calls = []
        self._queue = []

    def respond(self, status_code=200, json_data=_NO_JSON, reason=None):
        self._queue.append(FakeResponse(status_code, json_data, reason))

    def fail(self, exc=None):
        self._queue.append(exc or requests.ConnectionError("connection refused"))

    def __call__(self, url, json=None, headers=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "json": json, "headers": headers or {}, "timeout": timeout})
        if not self._queue:
            raise AssertionError(f"Unexpected POST to {url}")
        item = self._queue.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


class FakeSheetsApi:
    """Callable stand-in for requests.get serving the Sheets v4 endpoints.

    `tabs` maps tab title → cell grid (insertion order = workbook order).
    `errors` maps a tab title (or "__metadata__") → (status, reason).
    """

    METADATA = "__metadata__"

    def __init__(self, tabs=None):
        self.tabs = dict(tabs or {})
        self.errors = {}
        self.calls = []

    def __call__(self, url, params=None, headers=None, timeout=None, **kwargs):
        self.calls.append({"url": url, "params": dict(params or {})})

        if "/values/" in url:
            range_a1 = unquote(url.split("/values/", 1)[1])
            title = range_a1.rsplit("!", 1)[0]
            if title.startswith("'") and title.endswith("'"):
                title = title[1:-1].replace("''", "'")
            if title in self.errors:
                return FakeResponse(*self._error(title))
            grid = self.tabs.get(title)
            return FakeResponse(200, {"range": range_a1} if not grid else {"range": range_a1, "values": grid})

        if self.METADATA in self.errors:
            return FakeResponse(*self._error(self.METADATA))
        return FakeResponse(200, {"sheets": [{"properties": {"title": t}} for t in self.tabs]})

    def _error(self, key):
        status, reason = self.errors[key]
        return status, {"error": {"code": status, "message": reason}}, reason

    def value_calls(self):
        return [c for c in self.calls if "/values/" in c["url"]]
