"""Shared pytest fixtures for ranklog tests."""

from __future__ import annotations

from typing import Sequence

import pytest

from ranklog.core.errors import CollaboratorUnavailable
from ranklog.db.session import Database, create_db_engine
from ranklog.models.domain import GameDraft
from ranklog.records.store import RecordStore
from ranklog.summarizers.base import SummarizableRecord, SummarizerBase


class RecordingSummarizer(SummarizerBase):
    """Summarizer that returns numbered summaries and records each call."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, list[int]]] = []

    def summarize(self, champion: str, records: Sequence[SummarizableRecord]) -> str:
        self.calls.append((champion, [r.record_id for r in records]))
        return f"{champion} summary #{len(self.calls)}"


class FailingSummarizer(SummarizerBase):
    """Summarizer that is always unavailable."""

    def __init__(self) -> None:
        self.calls = 0

    def summarize(self, champion: str, records: Sequence[SummarizableRecord]) -> str:
        self.calls += 1
        raise CollaboratorUnavailable("quota exceeded")


@pytest.fixture
def database():
    """Create an in-memory database handle with schema."""
    database = Database(create_db_engine("sqlite:///:memory:"))
    database.init_schema()
    yield database
    database.close()


@pytest.fixture
def store(database: Database) -> RecordStore:
    """Record store over the in-memory database."""
    return RecordStore(database)


@pytest.fixture
def summarizer() -> RecordingSummarizer:
    """Recording summarizer."""
    return RecordingSummarizer()


@pytest.fixture
def failing_summarizer() -> FailingSummarizer:
    """Summarizer that always fails."""
    return FailingSummarizer()


@pytest.fixture
def make_draft():
    """Factory for valid drafts; keyword overrides replace defaults."""

    def _make(role: str = "adc", slots: dict | None = None, **overrides) -> GameDraft:
        default_slots = {
            "top": {"my_top": "Ornn", "my_jungle": "Sejuani",
                    "enemy_top": "Darius", "enemy_jungle": "Graves"},
            "jungle": {"my_jungle": "Vi", "my_mid": "Ahri", "my_support": "Thresh",
                       "enemy_jungle": "Elise", "enemy_mid": "Syndra", "enemy_support": "Rakan"},
            "mid": {"my_mid": "Ahri", "my_jungle": "Vi",
                    "enemy_mid": "Syndra", "enemy_jungle": "Elise"},
            "adc": {"my_adc": "Jinx", "my_support": "Thresh",
                    "enemy_adc": "Caitlyn", "enemy_support": "Lux"},
            "support": {"my_support": "Thresh", "my_adc": "Kai'Sa", "my_jungle": "Vi",
                        "enemy_support": "Rakan", "enemy_adc": "Xayah", "enemy_jungle": "Lee Sin"},
        }
        values = {
            "kills": 5,
            "deaths": 2,
            "assists": 10,
            "kill_participation": 60.0,
            "cs_per_min": 7.5,
            "win": True,
        }
        values.update(overrides)
        return GameDraft(
            role=role,
            slots=dict(slots if slots is not None else default_slots.get(role, {})),
            **values,
        )

    return _make
