"""Role schema resolution.

Maps a role tag to the participant slots that are meaningful for it.
This table is the single source of truth for record validation, champion
filtering and leaderboard grouping.
"""

from __future__ import annotations

from typing import Literal, NamedTuple

from ranklog.core.errors import InvalidRole

Role = Literal["top", "jungle", "mid", "adc", "support"]
Side = Literal["my", "enemy"]

ROLES: tuple[Role, ...] = ("top", "jungle", "mid", "adc", "support")

# All ten slot columns, in storage order
ALL_SLOTS: tuple[str, ...] = tuple(
    f"{side}_{role}" for side in ("my", "enemy") for role in ROLES
)


class SlotSpec(NamedTuple):
    """One active participant slot for a role."""

    slot_name: str
    side: Side
    is_tracked: bool


# Lanes paired with each role; the first entry is the tracked player's own lane
_ROLE_LANES: dict[str, tuple[str, ...]] = {
    "top": ("top", "jungle"),
    "jungle": ("jungle", "mid", "support"),
    "mid": ("mid", "jungle"),
    "adc": ("adc", "support"),
    "support": ("support", "adc", "jungle"),
}


def _build_slot_table() -> dict[str, tuple[SlotSpec, ...]]:
    table: dict[str, tuple[SlotSpec, ...]] = {}
    for role, lanes in _ROLE_LANES.items():
        my_side = [SlotSpec(f"my_{lane}", "my", i == 0) for i, lane in enumerate(lanes)]
        enemy_side = [SlotSpec(f"enemy_{lane}", "enemy", False) for lane in lanes]
        table[role] = tuple(my_side + enemy_side)
    return table


_SLOT_TABLE = _build_slot_table()


def is_role(value: object) -> bool:
    """Return True if value is a known role tag."""
    return isinstance(value, str) and value in _SLOT_TABLE


def resolve_slots(role: str) -> list[SlotSpec]:
    """Get the ordered active slots for a role.

    My-side slots come first (tracked player leading), then enemy-side slots
    in the same lane order.

    Args:
        role: Role tag.

    Returns:
        List of SlotSpec for the role.

    Raises:
        InvalidRole: If role is not recognized.
    """
    if not is_role(role):
        raise InvalidRole(role)
    return list(_SLOT_TABLE[role])


def active_slots(role: str, side: Side) -> list[str]:
    """Get active slot names on one side for a role."""
    return [spec.slot_name for spec in resolve_slots(role) if spec.side == side]


def tracked_slot(role: str) -> str:
    """Get the slot holding the tracked player's champion."""
    for spec in resolve_slots(role):
        if spec.is_tracked:
            return spec.slot_name
    raise InvalidRole(role)  # pragma: no cover - every role has a tracked slot
