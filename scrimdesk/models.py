"""
Record shapes shared by both importers.

Everything here is frozen: a record is built once by the sheet parser or the
GRID transformer and handed to the caller as-is. `to_dict()` produces the
camelCase JSON the dashboard frontend reads.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Tuple

MATCH_TYPE_SCRIM = "scrim"
MATCH_TYPE_CHAMPIONSHIP = "championship"
MATCH_TYPES = (MATCH_TYPE_SCRIM, MATCH_TYPE_CHAMPIONSHIP)

SOURCE_LIVE = "live"
SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True)
class MatchRecord:
    id: str
    date: str
    team1: str
    team2: str
    winner: str
    blue_side: Tuple[str, ...] = ()
    red_side: Tuple[str, ...] = ()
    duration_seconds: int = 0
    match_type: str = MATCH_TYPE_SCRIM

    def __post_init__(self):
        if len(self.blue_side) > 5 or len(self.red_side) > 5:
            raise ValueError(f"{self.id}: a side holds at most 5 players")
        if self.match_type not in MATCH_TYPES:
            raise ValueError(f"{self.id}: unknown match type {self.match_type!r}")

    def to_dict(self) -> Dict:
        return {
            "id": self.id,
            "date": self.date,
            "team1": self.team1,
            "team2": self.team2,
            "winner": self.winner,
            "blueSide": list(self.blue_side),
            "redSide": list(self.red_side),
            "durationSeconds": self.duration_seconds,
            "matchType": self.match_type,
        }


@dataclass(frozen=True)
class KDA:
    kills: int = 0
    deaths: int = 0
    assists: int = 0


@dataclass(frozen=True)
class PlayerPerformance:
    player_id: str
    champion_id: str
    kda: KDA
    cs: int = 0
    gold: int = 0
    damage: int = 0
    game_time_seconds: int = 0

    def to_dict(self) -> Dict:
        return {
            "playerId": self.player_id,
            "championId": self.champion_id,
            "kda": {
                "kills": self.kda.kills,
                "deaths": self.kda.deaths,
                "assists": self.kda.assists,
            },
            "cs": self.cs,
            "gold": self.gold,
            "damage": self.damage,
            "gameTimeSeconds": self.game_time_seconds,
        }


@dataclass(frozen=True)
class PerformanceResult:
    """Rows from GRID, tagged with where they came from.

    `source` is "live" when the rows were built from a real response and
    "fallback" when the canned demo rows were substituted.
    """

    rows: List[PlayerPerformance] = field(default_factory=list)
    source: str = SOURCE_LIVE

    @property
    def is_fallback(self) -> bool:
        return self.source == SOURCE_FALLBACK


@dataclass(frozen=True)
class ProbeResult:
    accepted: bool
    message: str

    def to_dict(self) -> Dict:
        return {"success": self.accepted, "message": self.message}
