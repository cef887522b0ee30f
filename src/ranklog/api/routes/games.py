"""Games API endpoints.

POST /api/games - Log a game
GET /api/games - List games (filtered, newest first)
GET /api/games/{game_id} - Get one game
PATCH /api/games/{game_id} - Partially update a game
DELETE /api/games/{game_id} - Delete a game
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Response

from ranklog.api.app import get_record_store, validation_http_error
from ranklog.core.errors import NoOpUpdate, NotFound, ValidationError
from ranklog.models.types import (
    GameCreatedResponse,
    GameDetail,
    GameDraftPayload,
    GameListResponse,
    GameUpdatePayload,
)
from ranklog.records.query import GameFilter, query_games
from ranklog.records.store import RecordStore

router = APIRouter()


def game_filter_params(
    role: str | None = None,
    tracked_champion: str | None = None,
    opposing_champion: str | None = None,
    match_category: str | None = None,
    limit: int | None = None,
) -> GameFilter:
    """Dependency collecting query-string filters."""
    return GameFilter(
        role=role,
        tracked_champion=tracked_champion,
        opposing_champion=opposing_champion,
        match_category=match_category,
        limit=limit,
    )


@router.post("/games", response_model=GameCreatedResponse, status_code=201)
def create_game(
    payload: GameDraftPayload,
    store: RecordStore = Depends(get_record_store),
) -> GameCreatedResponse:
    """Log a new game.

    Raises:
        HTTPException: 422 naming the invalid field.
    """
    try:
        record_id = store.create(payload.to_draft())
    except ValidationError as e:
        raise validation_http_error(e) from e

    return GameCreatedResponse(id=record_id)


@router.get("/games", response_model=GameListResponse)
def list_games(
    game_filter: GameFilter = Depends(game_filter_params),
    store: RecordStore = Depends(get_record_store),
) -> GameListResponse:
    """List games matching the filters, newest first."""
    try:
        records = query_games(store, game_filter)
    except ValidationError as e:
        raise validation_http_error(e) from e

    return GameListResponse(games=[GameDetail.from_entity(r) for r in records])


@router.get("/games/{game_id}", response_model=GameDetail)
def get_game(
    game_id: int,
    store: RecordStore = Depends(get_record_store),
) -> GameDetail:
    """Get one game.

    Raises:
        HTTPException: 404 if game not found.
    """
    try:
        record = store.get(game_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return GameDetail.from_entity(record)


@router.patch("/games/{game_id}", response_model=GameDetail)
def update_game(
    game_id: int,
    payload: GameUpdatePayload,
    store: RecordStore = Depends(get_record_store),
) -> GameDetail:
    """Apply the fields present in the body to a game.

    Raises:
        HTTPException: 400 for an empty body, 404 if game not found,
            422 naming an invalid field.
    """
    try:
        record = store.update(game_id, payload.model_dump(exclude_unset=True))
    except NoOpUpdate as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except ValidationError as e:
        raise validation_http_error(e) from e

    return GameDetail.from_entity(record)


@router.delete("/games/{game_id}", status_code=204)
def delete_game(
    game_id: int,
    store: RecordStore = Depends(get_record_store),
) -> Response:
    """Delete a game.

    Raises:
        HTTPException: 404 if game not found.
    """
    try:
        store.delete(game_id)
    except NotFound as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return Response(status_code=204)
