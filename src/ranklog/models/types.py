"""Pydantic models for the ranklog API.

Request models accept loosely typed input and leave range checks to the
record store, so every validation failure carries the same field-named
error shape.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, Field

from ranklog.aggregation.digest import ChampionNoteGroup, DailyDigest
from ranklog.aggregation.stats import ChampionStanding, DailyRollup, StatsRollup
from ranklog.core.roles import ALL_SLOTS
from ranklog.models.domain import GameDraft, GameRecordEntity, lineup_slots


class GameDraftPayload(BaseModel):
    """New game submission."""

    role: str = "adc"
    my_top: str | None = None
    my_jungle: str | None = None
    my_mid: str | None = None
    my_adc: str | None = None
    my_support: str | None = None
    enemy_top: str | None = None
    enemy_jungle: str | None = None
    enemy_mid: str | None = None
    enemy_adc: str | None = None
    enemy_support: str | None = None
    kills: int | None = None
    deaths: int | None = None
    assists: int | None = None
    kill_participation: float | None = None
    cs_per_min: float | None = None
    win: bool = False
    notes: str | None = None
    video_url: str | None = None
    match_category: str = "solo_queue"
    occurred_on: date | None = None
    ai_summary: str | None = None

    def to_draft(self) -> GameDraft:
        """Convert to the store's draft type."""
        return GameDraft(
            role=self.role,
            slots={slot: getattr(self, slot) for slot in ALL_SLOTS},
            kills=self.kills,
            deaths=self.deaths,
            assists=self.assists,
            kill_participation=self.kill_participation,
            cs_per_min=self.cs_per_min,
            win=self.win,
            notes=self.notes,
            video_url=self.video_url,
            match_category=self.match_category,
            occurred_on=self.occurred_on,
            ai_summary=self.ai_summary,
        )


class GameUpdatePayload(BaseModel):
    """Partial update; only fields present in the request body are applied."""

    role: str | None = None
    my_top: str | None = None
    my_jungle: str | None = None
    my_mid: str | None = None
    my_adc: str | None = None
    my_support: str | None = None
    enemy_top: str | None = None
    enemy_jungle: str | None = None
    enemy_mid: str | None = None
    enemy_adc: str | None = None
    enemy_support: str | None = None
    kills: int | None = None
    deaths: int | None = None
    assists: int | None = None
    kill_participation: float | None = None
    cs_per_min: float | None = None
    win: bool | None = None
    notes: str | None = None
    video_url: str | None = None
    match_category: str | None = None
    occurred_on: date | None = None

    model_config = {"extra": "forbid"}


class GameCreatedResponse(BaseModel):
    """Response for game creation."""

    id: int


class GameDetail(BaseModel):
    """Game record for API responses (flat slots)."""

    id: int
    role: str
    my_top: str | None = None
    my_jungle: str | None = None
    my_mid: str | None = None
    my_adc: str | None = None
    my_support: str | None = None
    enemy_top: str | None = None
    enemy_jungle: str | None = None
    enemy_mid: str | None = None
    enemy_adc: str | None = None
    enemy_support: str | None = None
    kills: int
    deaths: int
    assists: int
    kill_participation: float
    cs_per_min: float
    win: bool
    notes: str | None
    video_url: str | None
    match_category: Literal["solo_queue", "flex", "scrim", "official_match"]
    occurred_on: date
    ai_summary: str | None
    created_at: datetime

    @classmethod
    def from_entity(cls, entity: GameRecordEntity) -> "GameDetail":
        return cls(
            id=entity.record_id,
            role=entity.role,
            **lineup_slots(entity.lineup),
            kills=entity.kills,
            deaths=entity.deaths,
            assists=entity.assists,
            kill_participation=entity.kill_participation,
            cs_per_min=entity.cs_per_min,
            win=entity.win,
            notes=entity.notes,
            video_url=entity.video_url,
            match_category=entity.match_category,
            occurred_on=entity.occurred_on,
            ai_summary=entity.ai_summary,
            created_at=entity.created_at,
        )


class GameListResponse(BaseModel):
    """Filtered game list."""

    games: list[GameDetail]


class SummaryRecord(BaseModel):
    """Game fields needed to summarize a champion."""

    id: int
    win: bool
    kills: int = Field(ge=0)
    deaths: int = Field(ge=0)
    assists: int = Field(ge=0)
    kill_participation: float = Field(ge=0, le=100)
    cs_per_min: float = Field(0.0, ge=0)
    notes: str | None = None
    ai_summary: str | None = None

    @property
    def record_id(self) -> int:
        return self.id


class ChampionSummaryRequest(BaseModel):
    """Champion summary request."""

    champion: str = Field(min_length=1)
    records: list[SummaryRecord]


class ChampionSummaryResponse(BaseModel):
    """Champion summary, flagged when served from cache."""

    summary: str
    cached: bool


class NotesSummaryRequest(BaseModel):
    """Free-text notes to summarize."""

    notes: str


class NotesSummaryResponse(BaseModel):
    """Notes digest."""

    summary: str


class StatsRollupDetail(BaseModel):
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

    @classmethod
    def from_rollup(cls, rollup: StatsRollup) -> "StatsRollupDetail":
        return cls(**vars(rollup))


class DailyRollupDetail(StatsRollupDetail):
    """Rollup for one calendar day."""

    day: date

    @classmethod
    def from_daily(cls, daily: DailyRollup) -> "DailyRollupDetail":
        return cls(day=daily.day, **vars(daily.stats))


class ChampionStandingDetail(BaseModel):
    """Leaderboard row."""

    champion: str
    games: int
    wins: int
    win_rate: int
    avg_kda: float
    avg_cs_per_min: float
    avg_kill_participation: float

    @classmethod
    def from_standing(cls, standing: ChampionStanding) -> "ChampionStandingDetail":
        return cls(**vars(standing))


class StatsResponse(BaseModel):
    """Overall, daily (ascending) and per-champion stats for a filter."""

    overall: StatsRollupDetail
    daily: list[DailyRollupDetail]
    champions: list[ChampionStandingDetail]


class DailyDigestDetail(BaseModel):
    """One day's tally, notes and text digest."""

    day: date
    games_played: int
    wins: int
    losses: int
    win_rate: int
    notes: str
    summary: str

    @classmethod
    def from_digest(cls, digest: DailyDigest) -> "DailyDigestDetail":
        return cls(**vars(digest))


class DailyDigestResponse(BaseModel):
    """Recent days, newest first."""

    summaries: list[DailyDigestDetail]


class ChampionNotesDetail(BaseModel):
    """Noted games for one champion."""

    champion: str
    games: list[GameDetail]
    wins: int
    losses: int
    win_rate: int

    @classmethod
    def from_group(cls, group: ChampionNoteGroup) -> "ChampionNotesDetail":
        return cls(
            champion=group.champion,
            games=[GameDetail.from_entity(r) for r in group.records],
            wins=group.wins,
            losses=group.losses,
            win_rate=group.win_rate,
        )


class NotesLogResponse(BaseModel):
    """Champion notes groups, most recently played first."""

    champions: list[ChampionNotesDetail]
