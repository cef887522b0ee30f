"""Stats API endpoints.

GET /api/stats - Overall, daily and per-champion rollups for a filter
GET /api/daily-summary - Recent days with tallies and note themes
GET /api/notes-log - Noted games grouped by champion
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from ranklog.aggregation.digest import champion_note_groups, daily_digests
from ranklog.aggregation.stats import (
    DEFAULT_RECENT_DAYS,
    champion_leaderboard,
    compute_rollup,
    daily_rollups,
)
from ranklog.api.app import get_app_settings, get_record_store, validation_http_error
from ranklog.api.routes.games import game_filter_params
from ranklog.config import Settings
from ranklog.core.errors import ValidationError
from ranklog.models.types import (
    ChampionNotesDetail,
    ChampionStandingDetail,
    DailyDigestDetail,
    DailyDigestResponse,
    DailyRollupDetail,
    NotesLogResponse,
    StatsResponse,
    StatsRollupDetail,
)
from ranklog.records.query import GameFilter, query_games
from ranklog.records.store import RecordStore

router = APIRouter()


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    game_filter: GameFilter = Depends(game_filter_params),
    store: RecordStore = Depends(get_record_store),
    settings: Settings = Depends(get_app_settings),
) -> StatsResponse:
    """Aggregate the games matching the filters.

    Daily rollups are ascending (chart order).
    """
    try:
        records = query_games(store, game_filter)
    except ValidationError as e:
        raise validation_http_error(e) from e

    return StatsResponse(
        overall=StatsRollupDetail.from_rollup(compute_rollup(records)),
        daily=[DailyRollupDetail.from_daily(d) for d in daily_rollups(records)],
        champions=[
            ChampionStandingDetail.from_standing(s)
            for s in champion_leaderboard(records, top_n=settings.leaderboard_size)
        ],
    )


@router.get("/daily-summary", response_model=DailyDigestResponse)
def get_daily_summary(
    days: int = Query(DEFAULT_RECENT_DAYS, ge=1, le=31),
    store: RecordStore = Depends(get_record_store),
) -> DailyDigestResponse:
    """Digest of the most recent days with games, newest first."""
    digests = daily_digests(store.list_all(), days=days)
    return DailyDigestResponse(summaries=[DailyDigestDetail.from_digest(d) for d in digests])


@router.get("/notes-log", response_model=NotesLogResponse)
def get_notes_log(store: RecordStore = Depends(get_record_store)) -> NotesLogResponse:
    """Noted games grouped by tracked champion."""
    groups = champion_note_groups(store.list_all())
    return NotesLogResponse(champions=[ChampionNotesDetail.from_group(g) for g in groups])
