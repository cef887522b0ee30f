"""Base summarizer interface.

Summarizers implement a narrow interface: summarize(champion, records) -> text.
They must NOT write to the database or decide caching.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol, Sequence


class SummarizableRecord(Protocol):
    """Fields a summarizer reads from each game."""

    record_id: int
    win: bool
    kills: int
    deaths: int
    assists: int
    kill_participation: float
    cs_per_min: float
    notes: str | None
    ai_summary: str | None


class SummarizerBase(ABC):
    """Abstract base class for champion summarizers."""

    @abstractmethod
    def summarize(self, champion: str, records: Sequence[SummarizableRecord]) -> str:
        """Write a short narrative about a champion's games.

        Args:
            champion: Champion name.
            records: Games on that champion, newest first.

        Returns:
            Narrative text.

        Raises:
            CollaboratorUnavailable: If the summary could not be produced.
        """
        pass
