"""
GRID statistics API access through the relay.

The browser-facing side never talks to GRID directly: every GraphQL call is
POSTed to the relay (see relay.py) together with the GRID API key, and the
relay makes the authenticated call upstream.

Player stats follow an "always usable" contract: whatever goes wrong, the
caller gets rows back. PerformanceResult.source says whether they are live or
the canned demo rows.
"""

import logging
from typing import Dict, List

import requests

from scrimdesk import config
from scrimdesk.errors import ConfigurationError, RemoteError
from scrimdesk.models import (
    KDA,
    SOURCE_FALLBACK,
    SOURCE_LIVE,
    PerformanceResult,
    PlayerPerformance,
    ProbeResult,
)

log = logging.getLogger("scrimdesk.grid")

PLAYER_MATCHES_QUERY = """
query GetPlayerMatches($playerId: String!) {
  player(id: $playerId) {
    id
    matches(first: %d) {
      nodes {
        id
        startTime
        duration
        participants {
          player {
            id
          }
          champion {
            id
            name
          }
          stats {
            kills
            deaths
            assists
            totalMinionsKilled
            goldEarned
            totalDamageDealtToChampions
          }
        }
      }
    }
  }
}
""" % config.GRID_MATCHES_PER_PLAYER

# Cheapest query GRID answers for any valid key
PROBE_QUERY = """
query {
  leagues {
    id
    name
  }
}
"""

PROBE_OK_MESSAGE = "Connection to GRID API established."
PROBE_UNREACHABLE_MESSAGE = "Connection error. Check your API key and try again."
RELAY_ERROR_MESSAGE = "Error connecting to GRID API"

# Served when GRID is unavailable or has nothing for the player
FALLBACK_ROWS = (
    PlayerPerformance(
        player_id="player1",
        champion_id="Jinx",
        kda=KDA(kills=8, deaths=2, assists=5),
        cs=245,
        gold=15420,
        damage=28500,
        game_time_seconds=1860,
    ),
    PlayerPerformance(
        player_id="player2",
        champion_id="Thresh",
        kda=KDA(kills=1, deaths=4, assists=12),
        cs=45,
        gold=9200,
        damage=8900,
        game_time_seconds=1860,
    ),
)


# ═══════════════════════════════════════
# RELAY CLIENT
# ═══════════════════════════════════════

class GridRelayClient:
    """POSTs GraphQL queries to the relay.

    `api_key` authenticates to GRID (the relay forwards it); `relay_token` is
    the bearer token for the relay endpoint itself.
    """

    def __init__(self, api_key, relay_url=config.RELAY_URL, relay_token=config.RELAY_TOKEN,
                 timeout=config.REQUEST_TIMEOUT_SECONDS):
        self.api_key = api_key
        self.relay_url = relay_url
        self.relay_token = relay_token
        self.timeout = timeout

    def call(self, query, variables=None) -> Dict:
        """Run one query and return the raw JSON body (with its "data" field)."""
        if not self.api_key:
            raise ConfigurationError("GRID API key not configured")

        payload = {"apiKey": self.api_key, "query": query}
        if variables is not None:
            payload["variables"] = variables

        headers = {
            "Content-Type": "application/json",
            "User-Agent": config.USER_AGENT,
            "Authorization": f"Bearer {self.relay_token or ''}",
        }

        try:
            resp = requests.post(self.relay_url, json=payload, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise RemoteError(f"GRID relay request failed: {e}") from e

        try:
            body = resp.json()
        except ValueError:
            body = None

        if not isinstance(body, dict):
            raise RemoteError(
                f"GRID relay returned a non-JSON body ({resp.status_code} {resp.reason})",
                status=resp.status_code,
            )

        if not resp.ok or body.get("data") is None:
            raise RemoteError(_error_message(body), status=resp.status_code)

        return body


def _error_message(body):
    if body.get("error"):
        return str(body["error"])
    # Plain GraphQL error list (relay answered 200 but GRID rejected the query)
    errors = body.get("errors") or []
    if errors and isinstance(errors[0], dict) and errors[0].get("message"):
        return str(errors[0]["message"])
    return RELAY_ERROR_MESSAGE


# ═══════════════════════════════════════
# PLAYER DATA TRANSFORM
# ═══════════════════════════════════════

def _count(value):
    """GRID stat → non-negative int (missing or junk values count as 0)."""
    try:
        return max(int(float(value or 0)), 0)
    except (TypeError, ValueError, OverflowError):
        return 0


def _transform_participant(participant, duration):
    stats = participant.get("stats") or {}
    champion = participant.get("champion") or {}
    return PlayerPerformance(
        player_id=str(participant["player"]["id"]),
        champion_id=champion.get("name") or "",
        kda=KDA(
            kills=_count(stats.get("kills")),
            deaths=_count(stats.get("deaths")),
            assists=_count(stats.get("assists")),
        ),
        cs=_count(stats.get("totalMinionsKilled")),
        gold=_count(stats.get("goldEarned")),
        damage=_count(stats.get("totalDamageDealtToChampions")),
        game_time_seconds=duration,
    )


def transform_player_matches(data) -> List[PlayerPerformance]:
    """Flatten player → matches → participants into one row per match.

    Only participants whose player id equals the id GRID returned for the
    queried player are kept. No player object means no rows.
    """
    player = (data or {}).get("player")
    if not player or player.get("id") is None:
        return []
    own_id = str(player["id"])

    rows = []
    nodes = (player.get("matches") or {}).get("nodes") or []
    for match in nodes:
        duration = _count(match.get("duration"))
        for participant in match.get("participants") or []:
            pid = (participant.get("player") or {}).get("id")
            if pid is None or str(pid) != own_id:
                continue
            rows.append(_transform_participant(participant, duration))
    return rows


def fallback_performance() -> List[PlayerPerformance]:
    return list(FALLBACK_ROWS)


# ═══════════════════════════════════════
# SERVICE
# ═══════════════════════════════════════

class GridService:
    def __init__(self, client: GridRelayClient):
        self.client = client

    def fetch_player_performance(self, player_id) -> PerformanceResult:
        """Last matches of a player as PlayerPerformance rows. Never raises."""
        try:
            body = self.client.call(PLAYER_MATCHES_QUERY, {"playerId": player_id})
            rows = transform_player_matches(body.get("data"))
        except Exception as e:
            log.warning(f"GRID player fetch failed for {player_id}: {e} (serving fallback rows)")
            return PerformanceResult(rows=fallback_performance(), source=SOURCE_FALLBACK)

        if not rows:
            log.warning(f"GRID returned no matches for {player_id} (serving fallback rows)")
            return PerformanceResult(rows=fallback_performance(), source=SOURCE_FALLBACK)

        log.info(f"GRID: {len(rows)} performance rows for {player_id}")
        return PerformanceResult(rows=rows, source=SOURCE_LIVE)

    def probe(self) -> ProbeResult:
        """Check that GRID accepts the configured key. Never raises."""
        try:
            self.client.call(PROBE_QUERY)
        except ConfigurationError as e:
            return ProbeResult(accepted=False, message=str(e))
        except RemoteError as e:
            log.warning(f"GRID probe rejected: {e}")
            message = str(e) if e.status is not None else PROBE_UNREACHABLE_MESSAGE
            return ProbeResult(accepted=False, message=message)
        except Exception as e:
            log.warning(f"GRID probe failed: {e}")
            return ProbeResult(accepted=False, message=PROBE_UNREACHABLE_MESSAGE)

        return ProbeResult(accepted=True, message=PROBE_OK_MESSAGE)
