import sys

from scrimdesk import config
from scrimdesk.grid import GridRelayClient, GridService

PLAYER_ID = sys.argv[1] if len(sys.argv) > 1 else ""

client = GridRelayClient(config.GRID_API_KEY, relay_url=config.RELAY_URL, relay_token=config.RELAY_TOKEN)
service = GridService(client)

probe = service.probe()
print(f"Probe via {config.RELAY_URL}: {'OK' if probe.accepted else 'FAILED'} ({probe.message})")

if PLAYER_ID:
    result = service.fetch_player_performance(PLAYER_ID)
    print(f"\n=== {PLAYER_ID}: {len(result.rows)} rows ({result.source}) ===")
    for r in result.rows:
        print(f"  {r.champion_id:<12} {r.kda.kills}/{r.kda.deaths}/{r.kda.assists}  "
              f"cs={r.cs} gold={r.gold} dmg={r.damage} t={r.game_time_seconds}s")
