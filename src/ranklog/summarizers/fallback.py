"""Deterministic champion summary used when the collaborator is unavailable."""

from __future__ import annotations

from typing import Sequence

from ranklog.aggregation.stats import round_half_up, win_rate
from ranklog.summarizers.base import SummarizableRecord


def _average(values: list[float]) -> float:
    return round_half_up(sum(values) / len(values), 1) if values else 0.0


def fallback_summary(champion: str, records: Sequence[SummarizableRecord]) -> str:
    """Record and average stats for a champion, as plain text."""
    games = len(records)
    wins = sum(1 for r in records if r.win)
    losses = games - wins
    plural = "s" if games != 1 else ""

    avg_kills = _average([r.kills for r in records])
    avg_deaths = _average([r.deaths for r in records])
    avg_assists = _average([r.assists for r in records])
    avg_kp = _average([r.kill_participation for r in records])
    avg_cs = _average([r.cs_per_min for r in records])

    return (
        f"{champion} Performance Summary:\n\n"
        f"Record: {wins}W-{losses}L ({win_rate(wins, games)}% WR) across {games} game{plural}\n\n"
        f"Average Stats:\n"
        f"- KDA: {avg_kills:.1f}/{avg_deaths:.1f}/{avg_assists:.1f}\n"
        f"- Kill Participation: {avg_kp:.1f}%\n"
        f"- CS/min: {avg_cs:.1f}\n\n"
        f"Keep reviewing your game notes to identify patterns and areas for improvement."
    )
