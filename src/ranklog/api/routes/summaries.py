"""Summary API endpoints.

POST /api/champion-summary - Summarize the given games for a champion
GET /api/champions/{champion}/summary - Summarize a champion's stored games
POST /api/summarize - Digest free-text notes
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ranklog.api.app import get_record_store, get_summary_cache, validation_http_error
from ranklog.core.errors import ValidationError
from ranklog.models.types import (
    ChampionSummaryRequest,
    ChampionSummaryResponse,
    NotesSummaryRequest,
    NotesSummaryResponse,
)
from ranklog.records.query import GameFilter, query_games
from ranklog.records.store import RecordStore
from ranklog.summarizers.cache import SummaryCache
from ranklog.summarizers.notes import summarize_notes

router = APIRouter()


@router.post("/champion-summary", response_model=ChampionSummaryResponse)
def summarize_champion(
    request: ChampionSummaryRequest,
    cache: SummaryCache = Depends(get_summary_cache),
) -> ChampionSummaryResponse:
    """Summarize a champion's games, reusing the cached text when unchanged.

    Raises:
        HTTPException: 422 if no games are provided.
    """
    if not request.records:
        raise validation_http_error(ValidationError("records", "no games provided"))

    result = cache.get_or_compute(request.champion, request.records)
    return ChampionSummaryResponse(summary=result.summary, cached=result.cached)


@router.get("/champions/{champion}/summary", response_model=ChampionSummaryResponse)
def summarize_stored_champion(
    champion: str,
    role: str | None = None,
    match_category: str | None = None,
    store: RecordStore = Depends(get_record_store),
    cache: SummaryCache = Depends(get_summary_cache),
) -> ChampionSummaryResponse:
    """Summarize every stored game where the player was on champion.

    Raises:
        HTTPException: 404 if there are no such games, 422 for bad filters.
    """
    game_filter = GameFilter(
        role=role,
        tracked_champion=champion,
        match_category=match_category,
    )
    try:
        records = query_games(store, game_filter)
    except ValidationError as e:
        raise validation_http_error(e) from e

    if not records:
        raise HTTPException(status_code=404, detail=f"No games found for {champion}")

    result = cache.get_or_compute(champion, records)
    return ChampionSummaryResponse(summary=result.summary, cached=result.cached)


@router.post("/summarize", response_model=NotesSummaryResponse)
def summarize_game_notes(request: NotesSummaryRequest) -> NotesSummaryResponse:
    """Digest notes into strengths, mistakes and action items.

    Raises:
        HTTPException: 422 if notes are blank.
    """
    if not request.notes.strip():
        raise validation_http_error(ValidationError("notes", "no notes provided"))

    return NotesSummaryResponse(summary=summarize_notes(request.notes))
