"""Filtered, time-ordered views over the record store.

Filters are composed from small named predicates instead of assembling
query strings, so each rule can be tested on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

from ranklog.core.errors import InvalidRole, ValidationError
from ranklog.core.roles import Side, is_role
from ranklog.models.domain import MATCH_CATEGORIES, GameRecordEntity, side_champions
from ranklog.records.store import RecordStore

Predicate = Callable[[GameRecordEntity], bool]

ALL = "all"


@dataclass(frozen=True)
class GameFilter:
    """Optional filters for a game query. None (or "all") means no filter."""

    role: str | None = None
    tracked_champion: str | None = None
    opposing_champion: str | None = None
    match_category: str | None = None
    limit: int | None = None


# ============================================================================
# Predicates
# ============================================================================


def role_matches(role: str) -> Predicate:
    """Keep records logged for role."""

    def predicate(record: GameRecordEntity) -> bool:
        return record.role == role

    return predicate


def champion_in_slots(champion: str, side: Side) -> Predicate:
    """Keep records where any active slot on side holds champion.

    Matching is exact and case-sensitive on the stored name.
    """

    def predicate(record: GameRecordEntity) -> bool:
        return champion in side_champions(record.lineup, side)

    return predicate


def category_matches(match_category: str) -> Predicate:
    """Keep records of one match category."""

    def predicate(record: GameRecordEntity) -> bool:
        return record.match_category == match_category

    return predicate


def build_predicates(game_filter: GameFilter) -> list[Predicate]:
    """Translate a GameFilter into predicates.

    Raises:
        InvalidRole: If role is neither "all" nor a known role.
        ValidationError: If match_category is unknown or limit < 1.
    """
    predicates: list[Predicate] = []

    if game_filter.role and game_filter.role != ALL:
        if not is_role(game_filter.role):
            raise InvalidRole(game_filter.role)
        predicates.append(role_matches(game_filter.role))

    if game_filter.tracked_champion:
        predicates.append(champion_in_slots(game_filter.tracked_champion, "my"))

    if game_filter.opposing_champion:
        predicates.append(champion_in_slots(game_filter.opposing_champion, "enemy"))

    if game_filter.match_category and game_filter.match_category != ALL:
        if game_filter.match_category not in MATCH_CATEGORIES:
            raise ValidationError(
                "match_category", f"unknown category {game_filter.match_category!r}"
            )
        predicates.append(category_matches(game_filter.match_category))

    if game_filter.limit is not None and game_filter.limit < 1:
        raise ValidationError("limit", "must be at least 1")

    return predicates


def apply_filter(
    records: Iterable[GameRecordEntity], game_filter: GameFilter
) -> list[GameRecordEntity]:
    """Filter records already ordered newest first.

    Pure function - order of the input is preserved and limit keeps the
    first N matches.
    """
    predicates = build_predicates(game_filter)
    matched = [r for r in records if all(p(r) for p in predicates)]
    if game_filter.limit is not None:
        matched = matched[: game_filter.limit]
    return matched


def query_games(store: RecordStore, game_filter: GameFilter | None = None) -> list[GameRecordEntity]:
    """Run a filtered query over every stored game, newest first."""
    game_filter = game_filter or GameFilter()
    # Validate before touching the store
    build_predicates(game_filter)
    return apply_filter(store.list_all(), game_filter)
