"""Tests for role schema resolution.

Invariants:
1. Each role activates its own lane plus fixed partner lanes, mirrored on both sides
2. Exactly one tracked slot per role, on the player's side
3. Unknown roles are rejected
"""

import pytest

from ranklog.core.errors import InvalidRole, ValidationError
from ranklog.core.roles import (
    ALL_SLOTS,
    ROLES,
    active_slots,
    is_role,
    resolve_slots,
    tracked_slot,
)


class TestResolveSlots:
    """Tests for resolve_slots mapping."""

    @pytest.mark.parametrize(
        "role,my_side,enemy_side",
        [
            ("top", ["my_top", "my_jungle"], ["enemy_top", "enemy_jungle"]),
            (
                "jungle",
                ["my_jungle", "my_mid", "my_support"],
                ["enemy_jungle", "enemy_mid", "enemy_support"],
            ),
            ("mid", ["my_mid", "my_jungle"], ["enemy_mid", "enemy_jungle"]),
            ("adc", ["my_adc", "my_support"], ["enemy_adc", "enemy_support"]),
            (
                "support",
                ["my_support", "my_adc", "my_jungle"],
                ["enemy_support", "enemy_adc", "enemy_jungle"],
            ),
        ],
    )
    def test_active_slots_per_role(self, role, my_side, enemy_side):
        """Each role maps to its documented slots in order."""
        assert active_slots(role, "my") == my_side
        assert active_slots(role, "enemy") == enemy_side

    def test_my_side_listed_before_enemy_side(self):
        """Resolver output lists my-side slots first."""
        sides = [spec.side for spec in resolve_slots("support")]
        assert sides == ["my", "my", "my", "enemy", "enemy", "enemy"]

    @pytest.mark.parametrize("role", ROLES)
    def test_single_tracked_slot(self, role):
        """Exactly one tracked slot, and it is the player's own lane."""
        tracked = [spec for spec in resolve_slots(role) if spec.is_tracked]
        assert len(tracked) == 1
        assert tracked[0].slot_name == f"my_{role}"
        assert tracked_slot(role) == f"my_{role}"

    @pytest.mark.parametrize("role", ROLES)
    def test_slots_are_known_columns(self, role):
        """Active slots are a subset of the ten storage slots."""
        assert {spec.slot_name for spec in resolve_slots(role)} <= set(ALL_SLOTS)

    def test_ten_storage_slots(self):
        """There are ten slot columns."""
        assert len(ALL_SLOTS) == 10


class TestInvalidRole:
    """Tests for unknown role tags."""

    @pytest.mark.parametrize("role", ["bot", "ADC", "", "all"])
    def test_unknown_role_raises(self, role):
        """Unknown role tags raise InvalidRole."""
        with pytest.raises(InvalidRole):
            resolve_slots(role)

    def test_invalid_role_is_validation_error_on_role(self):
        """InvalidRole names the role field."""
        with pytest.raises(ValidationError) as exc_info:
            tracked_slot("bot")
        assert exc_info.value.field == "role"

    def test_is_role(self):
        """is_role accepts only known tags."""
        assert is_role("mid")
        assert not is_role("middle")
        assert not is_role(None)
