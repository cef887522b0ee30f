"""Domain models for ranklog.

Pure Python dataclasses representing domain entities.
These models are independent of SQLAlchemy and used throughout
the application for clean separation from the database layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Any, ClassVar, Literal, Mapping, Union

from ranklog.core.errors import InvalidRole, ValidationError
from ranklog.core.roles import Role, Side, active_slots, is_role, resolve_slots, tracked_slot

# ============================================================================
# Lineups (one variant per role)
# ============================================================================


@dataclass(frozen=True)
class TopLineup:
    """Champions around a top-lane game."""

    role: ClassVar[Role] = "top"

    my_top: str
    my_jungle: str
    enemy_top: str
    enemy_jungle: str


@dataclass(frozen=True)
class JungleLineup:
    """Champions around a jungle game."""

    role: ClassVar[Role] = "jungle"

    my_jungle: str
    my_mid: str
    my_support: str
    enemy_jungle: str
    enemy_mid: str
    enemy_support: str


@dataclass(frozen=True)
class MidLineup:
    """Champions around a mid-lane game."""

    role: ClassVar[Role] = "mid"

    my_mid: str
    my_jungle: str
    enemy_mid: str
    enemy_jungle: str


@dataclass(frozen=True)
class AdcLineup:
    """Champions around a bot-lane carry game."""

    role: ClassVar[Role] = "adc"

    my_adc: str
    my_support: str
    enemy_adc: str
    enemy_support: str


@dataclass(frozen=True)
class SupportLineup:
    """Champions around a support game."""

    role: ClassVar[Role] = "support"

    my_support: str
    my_adc: str
    my_jungle: str
    enemy_support: str
    enemy_adc: str
    enemy_jungle: str


Lineup = Union[TopLineup, JungleLineup, MidLineup, AdcLineup, SupportLineup]

LINEUP_TYPES: dict[str, type] = {
    "top": TopLineup,
    "jungle": JungleLineup,
    "mid": MidLineup,
    "adc": AdcLineup,
    "support": SupportLineup,
}


def build_lineup(role: str, values: Mapping[str, Any]) -> Lineup:
    """Build the lineup variant for a role from flat slot values.

    Only the role's active slots are read; any other slot keys are ignored.

    Args:
        role: Role tag.
        values: Mapping of slot name to champion name.

    Returns:
        Lineup variant for the role.

    Raises:
        InvalidRole: If role is unknown.
        ValidationError: If an active slot is missing or blank.
    """
    if not is_role(role):
        raise InvalidRole(role)

    slots: dict[str, str] = {}
    for spec in resolve_slots(role):
        champion = values.get(spec.slot_name)
        if not isinstance(champion, str) or not champion.strip():
            raise ValidationError(spec.slot_name, f"required for role {role}")
        slots[spec.slot_name] = champion.strip()

    return LINEUP_TYPES[role](**slots)


def lineup_slots(lineup: Lineup) -> dict[str, str]:
    """Flatten a lineup into slot name -> champion."""
    return {f.name: getattr(lineup, f.name) for f in fields(lineup)}


def side_champions(lineup: Lineup, side: Side) -> list[str]:
    """Champions on one side of a lineup, in resolver order."""
    return [getattr(lineup, slot) for slot in active_slots(lineup.role, side)]


# ============================================================================
# Game Record Domain
# ============================================================================

MatchCategory = Literal["solo_queue", "flex", "scrim", "official_match"]

MATCH_CATEGORIES: tuple[str, ...] = ("solo_queue", "flex", "scrim", "official_match")
DEFAULT_MATCH_CATEGORY: MatchCategory = "solo_queue"


@dataclass
class GameDraft:
    """Unvalidated input for a new game record.

    Slot values are flat (my_top ... enemy_support); the store keeps only
    those active for the role.
    """

    role: str
    slots: dict[str, str | None] = field(default_factory=dict)
    kills: Any = None
    deaths: Any = None
    assists: Any = None
    kill_participation: Any = None
    cs_per_min: Any = None
    win: bool = False
    notes: str | None = None
    video_url: str | None = None
    match_category: str = DEFAULT_MATCH_CATEGORY
    occurred_on: date | None = None
    ai_summary: str | None = None


@dataclass
class GameRecordEntity:
    """Domain model for a logged game."""

    record_id: int
    lineup: Lineup
    kills: int
    deaths: int
    assists: int
    kill_participation: float
    cs_per_min: float
    win: bool
    match_category: MatchCategory
    occurred_on: date
    created_at: datetime
    notes: str | None = None
    video_url: str | None = None
    ai_summary: str | None = None

    @property
    def role(self) -> Role:
        return self.lineup.role

    @property
    def tracked_champion(self) -> str:
        return getattr(self.lineup, tracked_slot(self.role))

    @property
    def kda(self) -> float:
        """Per-game KDA; zero deaths counts as kills + assists."""
        if self.deaths == 0:
            return float(self.kills + self.assists)
        return (self.kills + self.assists) / self.deaths


# ============================================================================
# Summary Cache Domain
# ============================================================================


@dataclass
class ChampionSummaryEntity:
    """Domain model for a cached champion narrative."""

    champion: str
    summary: str
    fingerprint: str
    updated_at: datetime
