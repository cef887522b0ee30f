"""Database schema for ranklog.

Game records keep all ten participant slots as nullable columns; which of
them are populated is decided by the role (see ranklog.core.roles).
"""

from datetime import date, datetime, timezone

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class Game(Base):
    """A single logged match."""

    __tablename__ = "games"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    role: Mapped[str] = mapped_column(String(16), nullable=False)

    my_top: Mapped[str | None] = mapped_column(String(64), nullable=True)
    my_jungle: Mapped[str | None] = mapped_column(String(64), nullable=True)
    my_mid: Mapped[str | None] = mapped_column(String(64), nullable=True)
    my_adc: Mapped[str | None] = mapped_column(String(64), nullable=True)
    my_support: Mapped[str | None] = mapped_column(String(64), nullable=True)
    enemy_top: Mapped[str | None] = mapped_column(String(64), nullable=True)
    enemy_jungle: Mapped[str | None] = mapped_column(String(64), nullable=True)
    enemy_mid: Mapped[str | None] = mapped_column(String(64), nullable=True)
    enemy_adc: Mapped[str | None] = mapped_column(String(64), nullable=True)
    enemy_support: Mapped[str | None] = mapped_column(String(64), nullable=True)

    kills: Mapped[int] = mapped_column(Integer, nullable=False)
    deaths: Mapped[int] = mapped_column(Integer, nullable=False)
    assists: Mapped[int] = mapped_column(Integer, nullable=False)
    kill_participation: Mapped[float] = mapped_column(Float, nullable=False)
    cs_per_min: Mapped[float] = mapped_column(Float, nullable=False)
    win: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    video_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    match_category: Mapped[str] = mapped_column(
        String(32), nullable=False, default="solo_queue"
    )
    occurred_on: Mapped[date] = mapped_column(Date, nullable=False)
    ai_summary: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )

    __table_args__ = (Index("ix_games_created_at", "created_at"),)


class ChampionSummary(Base):
    """Cached narrative summary for one champion.

    Invariant: at most one row per champion (primary key).
    """

    __tablename__ = "champion_summaries"

    champion: Mapped[str] = mapped_column(String(64), primary_key=True)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    fingerprint: Mapped[str] = mapped_column(String(64), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )
