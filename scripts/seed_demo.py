#!/usr/bin/env python3
"""Seed a demo game log.

Creates a demo database with a couple of weeks of games across roles so
the stats, daily summary and notes endpoints have something to show.

Usage:
    python scripts/seed_demo.py

This script:
1. Opens (or creates) the demo database
2. Logs demo games through the record store
3. Prints the overall rollup and champion leaderboard
"""

from __future__ import annotations

import sys
from datetime import date, timedelta
from pathlib import Path

# Add src to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT / "src"))

from ranklog.aggregation.stats import champion_leaderboard, compute_rollup  # noqa: E402
from ranklog.db.session import Database  # noqa: E402
from ranklog.models.domain import GameDraft  # noqa: E402
from ranklog.records.store import RecordStore  # noqa: E402

# Constants
DEMO_DB_PATH = PROJECT_ROOT / "demo.db"
DEMO_START = date(2026, 10, 1)

# (role, slots, kills, deaths, assists, kp, cs, win, notes)
DEMO_GAMES = [
    ("adc", {"my_adc": "Jinx", "my_support": "Thresh", "enemy_adc": "Caitlyn", "enemy_support": "Lux"},
     5, 5, 5, 55.0, 7.8, True, "Good trade patterns in lane.\nNeed to ward river before drake."),
    ("adc", {"my_adc": "Jinx", "my_support": "Nautilus", "enemy_adc": "Ezreal", "enemy_support": "Karma"},
     2, 0, 2, 40.0, 8.4, True, None),
    ("adc", {"my_adc": "Jinx", "my_support": "Lulu", "enemy_adc": "Draven", "enemy_support": "Leona"},
     3, 4, 3, 35.0, 6.9, False, "Died to level 2 all-in, bad wave state."),
    ("support", {"my_support": "Thresh", "my_adc": "Kai'Sa", "my_jungle": "Vi",
                 "enemy_support": "Rakan", "enemy_adc": "Xayah", "enemy_jungle": "Lee Sin"},
     1, 3, 14, 68.0, 1.2, True, "Hooks landed well, should roam mid more."),
    ("mid", {"my_mid": "Ahri", "my_jungle": "Vi", "enemy_mid": "Syndra", "enemy_jungle": "Elise"},
     7, 2, 6, 62.0, 8.1, True, None),
    ("top", {"my_top": "Ornn", "my_jungle": "Sejuani", "enemy_top": "Darius", "enemy_jungle": "Graves"},
     0, 6, 4, 30.0, 6.2, False, "Missed teleport timing, practice wave management."),
]


def seed_database(store: RecordStore) -> None:
    """Log every demo game once."""
    if store.list_all():
        print(f"Demo games already exist in {DEMO_DB_PATH}")
        return

    for i, (role, slots, kills, deaths, assists, kp, cs, win, notes) in enumerate(DEMO_GAMES):
        draft = GameDraft(
            role=role,
            slots=slots,
            kills=kills,
            deaths=deaths,
            assists=assists,
            kill_participation=kp,
            cs_per_min=cs,
            win=win,
            notes=notes,
            occurred_on=DEMO_START + timedelta(days=i // 2),
        )
        record_id = store.create(draft)
        print(f"  Created game {record_id}: {role} {kills}/{deaths}/{assists}")


def print_stats(store: RecordStore) -> None:
    """Print the overall rollup and leaderboard."""
    records = store.list_all()
    overall = compute_rollup(records)
    print(
        f"{overall.games_played} games, {overall.win_rate}% WR, "
        f"KDA {overall.avg_kda:.2f}, CS/min {overall.avg_cs_per_min}"
    )
    for standing in champion_leaderboard(records):
        print(f"  {standing.champion}: {standing.games} games, {standing.win_rate}% WR")


def main() -> int:
    """Main entry point."""
    print("=" * 60)
    print("Ranklog Demo Seeding Script")
    print("=" * 60)

    database = Database.open(f"sqlite:///{DEMO_DB_PATH}")
    try:
        store = RecordStore(database)

        print("\n[1/2] Seeding games...")
        seed_database(store)

        print("\n[2/2] Computing stats...")
        print_stats(store)
    finally:
        database.close()

    print("\n" + "=" * 60)
    print("Demo seeding complete!")
    print(f"Database: {DEMO_DB_PATH}")
    print("=" * 60)
    return 0


if __name__ == "__main__":
    sys.exit(main())
