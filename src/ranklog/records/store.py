"""Record store for logged games.

The store is the only writer of game records. Every draft and every
partial update is validated against the role schema before it reaches the
database; validation failures name the offending field.
"""

from __future__ import annotations

import logging
import math
import threading
from datetime import date, datetime
from typing import Any, Mapping
from urllib.parse import urlparse

from ranklog.core.calendar import reference_day, utc_now
from ranklog.core.errors import NoOpUpdate, NotFound, ValidationError
from ranklog.core.roles import ALL_SLOTS
from ranklog.db import repo
from ranklog.db.session import Database
from ranklog.models.domain import (
    DEFAULT_MATCH_CATEGORY,
    MATCH_CATEGORIES,
    GameDraft,
    GameRecordEntity,
    build_lineup,
    lineup_slots,
)
from ranklog.summarizers.notes import summarize_notes

logger = logging.getLogger(__name__)

# Fields a partial update may touch; slots are handled together with role
EDITABLE_FIELDS = frozenset(
    {
        "role",
        "kills",
        "deaths",
        "assists",
        "kill_participation",
        "cs_per_min",
        "win",
        "notes",
        "video_url",
        "match_category",
        "occurred_on",
        *ALL_SLOTS,
    }
)

# Editable fields an update may set to null (clearing them)
NULLABLE_FIELDS = frozenset({"notes", "video_url", *ALL_SLOTS})


# ============================================================================
# Field validation
# ============================================================================


def _require_count(name: str, value: Any) -> int:
    if value is None:
        raise ValidationError(name, "is required")
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(name, "must be an integer")
    if value < 0:
        raise ValidationError(name, "must be non-negative")
    return value


def _require_real(name: str, value: Any, upper: float | None = None) -> float:
    if value is None:
        raise ValidationError(name, "is required")
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(name, "must be a number")
    value = float(value)
    if math.isnan(value) or math.isinf(value):
        raise ValidationError(name, "must be finite")
    if value < 0:
        raise ValidationError(name, "must be non-negative")
    if upper is not None and value > upper:
        raise ValidationError(name, f"must be at most {upper:g}")
    return value


def _optional_text(value: Any) -> str | None:
    """Normalize optional text; blank strings clear the field."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise TypeError(f"expected str, got {type(value).__name__}")
    value = value.strip()
    return value or None


def _check_video_url(value: Any) -> str | None:
    try:
        url = _optional_text(value)
    except TypeError as e:
        raise ValidationError("video_url", str(e)) from e
    if url is None:
        return None
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValidationError("video_url", "must be an http(s) URL")
    return url


def _check_notes(value: Any) -> str | None:
    try:
        return _optional_text(value)
    except TypeError as e:
        raise ValidationError("notes", str(e)) from e


def _check_category(value: Any) -> str:
    if value is None:
        return DEFAULT_MATCH_CATEGORY
    if value not in MATCH_CATEGORIES:
        raise ValidationError("match_category", f"unknown category {value!r}")
    return value


def _check_win(value: Any) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValidationError("win", "must be a boolean")
    return value


def _check_date(value: Any, created_at: datetime) -> date:
    if value is None:
        return reference_day(created_at)
    if isinstance(value, datetime) or not isinstance(value, date):
        raise ValidationError("occurred_on", "must be a calendar date")
    return value


def validate_draft(draft: GameDraft, record_id: int, created_at: datetime) -> GameRecordEntity:
    """Validate a draft and build the record it describes.

    Args:
        draft: Unvalidated input.
        record_id: Id to assign (0 for records not yet persisted).
        created_at: Creation timestamp (UTC).

    Returns:
        GameRecordEntity holding only the role's active slots.

    Raises:
        ValidationError: On the first invalid field.
        InvalidRole: If draft.role is unknown.
    """
    lineup = build_lineup(draft.role, draft.slots)
    notes = _check_notes(draft.notes)

    return GameRecordEntity(
        record_id=record_id,
        lineup=lineup,
        kills=_require_count("kills", draft.kills),
        deaths=_require_count("deaths", draft.deaths),
        assists=_require_count("assists", draft.assists),
        kill_participation=_require_real(
            "kill_participation", draft.kill_participation, upper=100.0
        ),
        cs_per_min=_require_real("cs_per_min", draft.cs_per_min),
        win=_check_win(draft.win),
        match_category=_check_category(draft.match_category),
        occurred_on=_check_date(draft.occurred_on, created_at),
        created_at=created_at,
        notes=notes,
        video_url=_check_video_url(draft.video_url),
        ai_summary=_optional_text(draft.ai_summary),
    )


def _draft_from_record(record: GameRecordEntity) -> GameDraft:
    return GameDraft(
        role=record.role,
        slots=dict(lineup_slots(record.lineup)),
        kills=record.kills,
        deaths=record.deaths,
        assists=record.assists,
        kill_participation=record.kill_participation,
        cs_per_min=record.cs_per_min,
        win=record.win,
        notes=record.notes,
        video_url=record.video_url,
        match_category=record.match_category,
        occurred_on=record.occurred_on,
        ai_summary=record.ai_summary,
    )


# ============================================================================
# Store
# ============================================================================


class RecordStore:
    """CRUD over game records.

    Writes are serialized through a single lock, so concurrent updates to the
    same record resolve as last-write-wins per whole update call.
    """

    def __init__(self, database: Database):
        """Initialize store.

        Args:
            database: Open database handle.
        """
        self.database = database
        self._write_lock = threading.Lock()

    def create(self, draft: GameDraft) -> int:
        """Validate and persist a new game.

        When the draft carries notes but no per-record summary, one is
        derived from the notes now; it is never recomputed afterwards.

        Args:
            draft: Game input.

        Returns:
            Assigned record id.

        Raises:
            ValidationError: If any field is invalid.
        """
        entity = validate_draft(draft, record_id=0, created_at=utc_now())
        if entity.ai_summary is None and entity.notes:
            entity.ai_summary = summarize_notes(entity.notes)

        with self._write_lock, self.database.session() as session:
            record_id = repo.create_game(session, entity)

        logger.info(f"Created game {record_id} ({entity.role}, {entity.tracked_champion})")
        return record_id

    def get(self, record_id: int) -> GameRecordEntity:
        """Get one game.

        Raises:
            NotFound: If no game has record_id.
        """
        with self.database.session() as session:
            record = repo.get_game(session, record_id)
        if record is None:
            raise NotFound(record_id)
        return record

    def update(self, record_id: int, fields: Mapping[str, Any]) -> GameRecordEntity:
        """Apply a partial update.

        Keys absent from fields are left untouched. The merged record is
        validated with the same rules as create.

        Args:
            record_id: Game to update.
            fields: Subset of EDITABLE_FIELDS.

        Returns:
            The updated record.

        Raises:
            NoOpUpdate: If fields is empty.
            ValidationError: If a key is not editable, a non-nullable key is
                null, or a value is invalid.
            NotFound: If no game has record_id.
        """
        if not fields:
            raise NoOpUpdate()

        for key, value in fields.items():
            if key not in EDITABLE_FIELDS:
                raise ValidationError(key, "field cannot be updated")
            if value is None and key not in NULLABLE_FIELDS:
                raise ValidationError(key, "cannot be null")

        with self._write_lock, self.database.session() as session:
            current = repo.get_game(session, record_id)
            if current is None:
                raise NotFound(record_id)

            draft = _draft_from_record(current)
            for key, value in fields.items():
                if key in ALL_SLOTS:
                    draft.slots[key] = value
                else:
                    setattr(draft, key, value)

            updated = validate_draft(draft, record_id=record_id, created_at=current.created_at)
            repo.replace_game(session, updated)

        logger.info(f"Updated game {record_id}: {sorted(fields)}")
        return updated

    def delete(self, record_id: int) -> None:
        """Delete one game.

        Raises:
            NotFound: If no game has record_id.
        """
        with self._write_lock, self.database.session() as session:
            deleted = repo.delete_game(session, record_id)
        if not deleted:
            raise NotFound(record_id)
        logger.info(f"Deleted game {record_id}")

    def list_all(self) -> list[GameRecordEntity]:
        """All games, newest first."""
        with self.database.session() as session:
            return repo.list_games(session)


__all__ = ["EDITABLE_FIELDS", "RecordStore", "validate_draft"]
