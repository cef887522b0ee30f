"""Performance rollups over game records.

All functions are pure: they take a list of records (usually the output of
ranklog.records.query) and derive averages, win rates, per-day buckets and
per-champion standings. An empty input yields zero-valued rollups.

Zero-games policy: win rate is 0 when there are no games.
Zero-deaths policy: KDA is kills + assists when average deaths is 0.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Sequence

from ranklog.models.domain import GameRecordEntity

DEFAULT_LEADERBOARD_SIZE = 10
DEFAULT_RECENT_DAYS = 7


def round_half_up(value: float, places: int = 0) -> float:
    """Round with halves away from zero (2.5 -> 3, 0.125 -> 0.13)."""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(repr(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def win_rate(wins: int, games: int) -> int:
    """Whole-number win percentage; 0 when there are no games."""
    if games == 0:
        return 0
    return int(round_half_up(wins / games * 100))


def kda_ratio(kills: float, deaths: float, assists: float) -> float:
    """KDA from (average or total) kills, deaths and assists."""
    if deaths == 0:
        return kills + assists
    return (kills + assists) / deaths


@dataclass
class StatsRollup:
    """Averages over a set of games."""

    games_played: int
    wins: int
    losses: int
    win_rate: int
    avg_kills: float
    avg_deaths: float
    avg_assists: float
    avg_kda: float
    avg_kill_participation: float
    avg_cs_per_min: float


@dataclass
class DailyRollup:
    """Rollup for one calendar day."""

    day: date
    stats: StatsRollup


@dataclass
class ChampionStanding:
    """Leaderboard row for one tracked champion."""

    champion: str
    games: int
    wins: int
    win_rate: int
    avg_kda: float
    avg_cs_per_min: float
    avg_kill_participation: float


def compute_rollup(records: Sequence[GameRecordEntity]) -> StatsRollup:
    """Compute overall averages for a set of games.

    Args:
        records: Games to aggregate (may be empty).

    Returns:
        StatsRollup; all zeros for no games.
    """
    count = len(records)
    if count == 0:
        return StatsRollup(
            games_played=0,
            wins=0,
            losses=0,
            win_rate=0,
            avg_kills=0.0,
            avg_deaths=0.0,
            avg_assists=0.0,
            avg_kda=0.0,
            avg_kill_participation=0.0,
            avg_cs_per_min=0.0,
        )

    wins = sum(1 for r in records if r.win)
    avg_kills = sum(r.kills for r in records) / count
    avg_deaths = sum(r.deaths for r in records) / count
    avg_assists = sum(r.assists for r in records) / count

    return StatsRollup(
        games_played=count,
        wins=wins,
        losses=count - wins,
        win_rate=win_rate(wins, count),
        avg_kills=round_half_up(avg_kills, 1),
        avg_deaths=round_half_up(avg_deaths, 1),
        avg_assists=round_half_up(avg_assists, 1),
        avg_kda=round_half_up(kda_ratio(avg_kills, avg_deaths, avg_assists), 2),
        avg_kill_participation=round_half_up(
            sum(r.kill_participation for r in records) / count, 1
        ),
        avg_cs_per_min=round_half_up(sum(r.cs_per_min for r in records) / count, 1),
    )


def group_by_day(records: Sequence[GameRecordEntity]) -> dict[date, list[GameRecordEntity]]:
    """Bucket records by their calendar day, preserving input order."""
    buckets: dict[date, list[GameRecordEntity]] = defaultdict(list)
    for record in records:
        buckets[record.occurred_on].append(record)
    return dict(buckets)


def daily_rollups(
    records: Sequence[GameRecordEntity], newest_first: bool = False
) -> list[DailyRollup]:
    """Per-day rollups.

    occurred_on is already a calendar day in the reference timezone, so
    grouping does not depend on where the server runs.

    Args:
        records: Games to bucket.
        newest_first: Sort days descending instead of ascending.

    Returns:
        One DailyRollup per day with at least one game.
    """
    buckets = group_by_day(records)
    days = sorted(buckets, reverse=newest_first)
    return [DailyRollup(day=day, stats=compute_rollup(buckets[day])) for day in days]


def recent_days(
    records: Sequence[GameRecordEntity], days: int = DEFAULT_RECENT_DAYS
) -> list[DailyRollup]:
    """Most recent `days` days with games, newest first."""
    return daily_rollups(records, newest_first=True)[:days]


def champion_leaderboard(
    records: Sequence[GameRecordEntity], top_n: int = DEFAULT_LEADERBOARD_SIZE
) -> list[ChampionStanding]:
    """Most played tracked champions.

    Sorted by games played (descending), ties broken by champion name.

    Args:
        records: Games to rank.
        top_n: Maximum number of rows.

    Returns:
        Up to top_n ChampionStanding rows.
    """
    by_champion: dict[str, list[GameRecordEntity]] = defaultdict(list)
    for record in records:
        by_champion[record.tracked_champion].append(record)

    standings = []
    for champion, games in by_champion.items():
        rollup = compute_rollup(games)
        standings.append(
            ChampionStanding(
                champion=champion,
                games=rollup.games_played,
                wins=rollup.wins,
                win_rate=rollup.win_rate,
                avg_kda=rollup.avg_kda,
                avg_cs_per_min=rollup.avg_cs_per_min,
                avg_kill_participation=rollup.avg_kill_participation,
            )
        )

    standings.sort(key=lambda s: (-s.games, s.champion))
    return standings[:top_n]
