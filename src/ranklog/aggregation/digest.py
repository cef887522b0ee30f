"""Day-by-day digests and the per-champion notes log.

Both views are deterministic text/structure built from stored records;
neither calls the summarization collaborator.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Sequence

from ranklog.aggregation.stats import DEFAULT_RECENT_DAYS, group_by_day, win_rate
from ranklog.models.domain import GameRecordEntity

# Keyword groups scanned in notes, with the line added when any matches
NOTE_THEMES: tuple[tuple[tuple[str, ...], str], ...] = (
    (("good", "well"), "+ Had some strong performances"),
    (("mistake", "died"), "! Identified areas for improvement"),
    (("improve", "practice"), "> Set practice goals"),
)


@dataclass
class DailyDigest:
    """Games, result tally and notes for one day."""

    day: date
    games_played: int
    wins: int
    losses: int
    win_rate: int
    notes: str
    summary: str


@dataclass
class ChampionNoteGroup:
    """Noted games for one tracked champion, newest first."""

    champion: str
    records: list[GameRecordEntity]
    wins: int
    losses: int
    win_rate: int


def describe_day(games: Sequence[GameRecordEntity], notes: str) -> str:
    """Build the text digest for one day's games."""
    wins = sum(1 for g in games if g.win)
    losses = len(games) - wins
    plural = "s" if len(games) != 1 else ""
    lines = [
        f"Played {len(games)} game{plural}: {wins}W-{losses}L "
        f"({win_rate(wins, len(games))}% WR)"
    ]

    lowered = notes.lower()
    themes = [text for keywords, text in NOTE_THEMES if any(k in lowered for k in keywords)]
    if themes:
        lines.append("")
        lines.extend(themes)

    return "\n".join(lines)


def daily_digests(
    records: Sequence[GameRecordEntity], days: int = DEFAULT_RECENT_DAYS
) -> list[DailyDigest]:
    """Digest of the most recent `days` days with games, newest first.

    Args:
        records: Games, newest first.
        days: Maximum number of days returned.

    Returns:
        List of DailyDigest.
    """
    buckets = group_by_day(records)
    digests = []
    for day in sorted(buckets, reverse=True)[:days]:
        games = buckets[day]
        notes = "\n\n".join(g.notes for g in games if g.notes)
        wins = sum(1 for g in games if g.win)
        digests.append(
            DailyDigest(
                day=day,
                games_played=len(games),
                wins=wins,
                losses=len(games) - wins,
                win_rate=win_rate(wins, len(games)),
                notes=notes,
                summary=describe_day(games, notes),
            )
        )
    return digests


def champion_note_groups(records: Sequence[GameRecordEntity]) -> list[ChampionNoteGroup]:
    """Group games that have notes by tracked champion.

    Groups are ordered by their most recent game.
    """
    by_champion: dict[str, list[GameRecordEntity]] = defaultdict(list)
    for record in records:
        if record.notes:
            by_champion[record.tracked_champion].append(record)

    groups = []
    for champion, games in by_champion.items():
        games.sort(key=lambda g: (g.created_at, g.record_id), reverse=True)
        wins = sum(1 for g in games if g.win)
        groups.append(
            ChampionNoteGroup(
                champion=champion,
                records=games,
                wins=wins,
                losses=len(games) - wins,
                win_rate=win_rate(wins, len(games)),
            )
        )

    groups.sort(key=lambda g: (g.records[0].created_at, g.records[0].record_id), reverse=True)
    return groups
