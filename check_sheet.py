import sys

from scrimdesk import config
from scrimdesk.sheets import SheetsClient, is_scrim_tab, parse_scrim_tabs

SHEET_ID = sys.argv[1] if len(sys.argv) > 1 else config.SCRIM_SHEET_ID

client = SheetsClient(config.GOOGLE_SHEETS_API_KEY)
titles = client.fetch_sheet_titles(SHEET_ID)

print(f"Workbook {SHEET_ID}: {len(titles)} tabs")
for t in titles:
    print(f"  {'SCRIM' if is_scrim_tab(t) else '     '}  {t}")

scrim_tabs = [t for t in titles if is_scrim_tab(t)]
if scrim_tabs:
    first = scrim_tabs[0]
    rows = client.fetch_range(SHEET_ID, f"'{first}'!{config.SCRIM_CELL_RANGE}")
    print(f"\n=== {first}: {len(rows)} rows ===")
    for ri in range(min(8, len(rows))):
        vals = {i: rows[ri][i] for i in range(len(rows[ri])) if rows[ri][i].strip()}
        print(f"  Row {ri}: {vals}")

print("\n=== PARSED ===")
for m in parse_scrim_tabs(client, SHEET_ID):
    print(f"  {m.id} {m.date}  {m.team1} vs {m.team2}  winner={m.winner}")
    print(f"    blue={list(m.blue_side)}")
    print(f"    red={list(m.red_side)}")
