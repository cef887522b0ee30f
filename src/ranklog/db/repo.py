"""Repository pattern for database operations.

Encapsulates all SQLAlchemy queries, keeping domain logic pure.
Returns domain models (not SQLAlchemy entities) to external callers.
"""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from ranklog.core.calendar import as_utc
from ranklog.core.roles import ALL_SLOTS
from ranklog.db.schema import ChampionSummary, Game
from ranklog.models.domain import (
    ChampionSummaryEntity,
    GameRecordEntity,
    build_lineup,
    lineup_slots,
)

if TYPE_CHECKING:
    from sqlalchemy.orm import Session as DbSession
else:
    DbSession = Session

# Re-export for external use
__all__ = ["DbSession"]


# ============================================================================
# Converters: SQLAlchemy <-> Domain
# ============================================================================


def _game_to_entity(game: Game) -> GameRecordEntity:
    """Convert SQLAlchemy Game to domain entity."""
    slots = {slot: getattr(game, slot) for slot in ALL_SLOTS}
    return GameRecordEntity(
        record_id=game.id,
        lineup=build_lineup(game.role, slots),
        kills=game.kills,
        deaths=game.deaths,
        assists=game.assists,
        kill_participation=game.kill_participation,
        cs_per_min=game.cs_per_min,
        win=bool(game.win),
        match_category=game.match_category,
        occurred_on=game.occurred_on,
        created_at=as_utc(game.created_at),
        notes=game.notes,
        video_url=game.video_url,
        ai_summary=game.ai_summary,
    )


def _apply_entity(game: Game, entity: GameRecordEntity) -> None:
    """Copy every mutable entity field onto a Game row."""
    active = lineup_slots(entity.lineup)
    game.role = entity.role
    for slot in ALL_SLOTS:
        setattr(game, slot, active.get(slot))
    game.kills = entity.kills
    game.deaths = entity.deaths
    game.assists = entity.assists
    game.kill_participation = entity.kill_participation
    game.cs_per_min = entity.cs_per_min
    game.win = entity.win
    game.match_category = entity.match_category
    game.occurred_on = entity.occurred_on
    game.notes = entity.notes
    game.video_url = entity.video_url
    game.ai_summary = entity.ai_summary


def _summary_to_entity(row: ChampionSummary) -> ChampionSummaryEntity:
    """Convert SQLAlchemy ChampionSummary to domain entity."""
    return ChampionSummaryEntity(
        champion=row.champion,
        summary=row.summary,
        fingerprint=row.fingerprint,
        updated_at=as_utc(row.updated_at),
    )


# ============================================================================
# Game Repository
# ============================================================================


def create_game(session: DbSession, entity: GameRecordEntity) -> int:
    """Insert a game and return its assigned id.

    entity.record_id is ignored; the database assigns the id.
    """
    game = Game(created_at=entity.created_at)
    _apply_entity(game, entity)
    session.add(game)
    session.flush()
    return game.id


def get_game(session: DbSession, record_id: int) -> GameRecordEntity | None:
    """Get game by ID."""
    game = session.get(Game, record_id)
    return _game_to_entity(game) if game else None


def list_games(session: DbSession) -> list[GameRecordEntity]:
    """Get all games, newest first (ties broken by higher id)."""
    games = session.query(Game).order_by(Game.created_at.desc(), Game.id.desc()).all()
    return [_game_to_entity(g) for g in games]


def replace_game(session: DbSession, entity: GameRecordEntity) -> bool:
    """Overwrite a stored game with entity values.

    Returns:
        False if no game has entity.record_id.
    """
    game = session.get(Game, entity.record_id)
    if game is None:
        return False
    _apply_entity(game, entity)
    return True


def delete_game(session: DbSession, record_id: int) -> bool:
    """Delete game by ID. Returns False if it did not exist."""
    game = session.get(Game, record_id)
    if game is None:
        return False
    session.delete(game)
    return True


# ============================================================================
# Champion Summary Repository
# ============================================================================


def get_champion_summary(session: DbSession, champion: str) -> ChampionSummaryEntity | None:
    """Get cached summary for a champion."""
    row = session.get(ChampionSummary, champion)
    return _summary_to_entity(row) if row else None


def upsert_champion_summary(
    session: DbSession,
    champion: str,
    summary: str,
    fingerprint: str,
    updated_at: datetime,
) -> ChampionSummaryEntity:
    """Create or overwrite the single cached summary for a champion."""
    row = session.get(ChampionSummary, champion)
    if row is None:
        row = ChampionSummary(champion=champion)
        session.add(row)
    row.summary = summary
    row.fingerprint = fingerprint
    row.updated_at = updated_at
    return ChampionSummaryEntity(
        champion=champion,
        summary=summary,
        fingerprint=fingerprint,
        updated_at=updated_at,
    )
