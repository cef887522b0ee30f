"""Error kinds raised by the record store, query engine and summary cache.

Routes translate these into HTTP responses; domain code never returns
error sentinels.
"""

from __future__ import annotations


class RanklogError(Exception):
    """Base class for all ranklog errors."""


class ValidationError(RanklogError):
    """A submitted field is missing or out of range."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class InvalidRole(ValidationError):
    """Role tag is not one of the five known roles."""

    def __init__(self, role: object):
        super().__init__("role", f"unknown role {role!r}")
        self.role = role


class NotFound(RanklogError):
    """No game record with the given id."""

    def __init__(self, record_id: int):
        super().__init__(f"Game {record_id} not found")
        self.record_id = record_id


class NoOpUpdate(RanklogError):
    """Update payload carried no fields."""

    def __init__(self) -> None:
        super().__init__("No fields to update")


class CollaboratorUnavailable(RanklogError):
    """Summarization collaborator failed, timed out, or is not configured."""


class StoreUnavailable(RanklogError):
    """Persistence layer could not be reached."""
