"""Tests for the fingerprinted champion summary cache.

Invariants:
1. Same record-id set (any order) is served from cache
2. A changed set recomputes and overwrites the single entry
3. Fallback summaries are returned but never stored
"""

from typing import Sequence

from sqlalchemy import func, select

from ranklog.core.identity import record_set_fingerprint
from ranklog.db import repo
from ranklog.db.schema import ChampionSummary
from ranklog.models.types import SummaryRecord
from ranklog.summarizers.base import SummarizableRecord, SummarizerBase
from ranklog.summarizers.cache import SummaryCache


def records_for(ids):
    return [
        SummaryRecord(id=i, win=i % 2 == 1, kills=5, deaths=2, assists=7, kill_participation=55.0)
        for i in ids
    ]


def count_entries(database) -> int:
    with database.session() as session:
        return session.scalar(select(func.count()).select_from(ChampionSummary))


class TestSummaryCache:
    """Tests for SummaryCache.get_or_compute."""

    def test_first_call_computes(self, database, summarizer):
        """Cache miss calls the summarizer and stores the result."""
        cache = SummaryCache(database, summarizer)

        result = cache.get_or_compute("Jinx", records_for([1, 2, 3]))

        assert result.summary == "Jinx summary #1"
        assert result.cached is False
        with database.session() as session:
            entry = repo.get_champion_summary(session, "Jinx")
        assert entry.fingerprint == record_set_fingerprint([1, 2, 3])

    def test_same_set_is_cached(self, database, summarizer):
        """Same ids in a different order hit the cache."""
        cache = SummaryCache(database, summarizer)
        cache.get_or_compute("Jinx", records_for([1, 2, 3]))

        result = cache.get_or_compute("Jinx", records_for([3, 1, 2]))

        assert result.summary == "Jinx summary #1"
        assert result.cached is True
        assert len(summarizer.calls) == 1

    def test_changed_set_recomputes(self, database, summarizer):
        """Adding a game invalidates the entry."""
        cache = SummaryCache(database, summarizer)
        cache.get_or_compute("Jinx", records_for([1, 2, 3]))

        result = cache.get_or_compute("Jinx", records_for([1, 2, 3, 4]))

        assert result.summary == "Jinx summary #2"
        assert result.cached is False
        assert summarizer.calls[-1] == ("Jinx", [1, 2, 3, 4])
        assert count_entries(database) == 1

    def test_removed_game_recomputes(self, database, summarizer):
        """Shrinking the set also invalidates the entry."""
        cache = SummaryCache(database, summarizer)
        cache.get_or_compute("Jinx", records_for([1, 2, 3]))

        assert cache.get_or_compute("Jinx", records_for([1, 2])).cached is False
        assert len(summarizer.calls) == 2

    def test_one_entry_per_champion(self, database, summarizer):
        """Champions are cached independently."""
        cache = SummaryCache(database, summarizer)
        cache.get_or_compute("Jinx", records_for([1]))
        cache.get_or_compute("Ahri", records_for([2]))

        assert count_entries(database) == 2
        assert cache.get_or_compute("Jinx", records_for([1])).cached is True
        assert cache.get_or_compute("Ahri", records_for([2])).cached is True

    def test_fallback_not_stored(self, database, failing_summarizer):
        """Fallback text is returned uncached and the next call retries."""
        cache = SummaryCache(database, failing_summarizer)

        first = cache.get_or_compute("Jinx", records_for([1, 2]))
        second = cache.get_or_compute("Jinx", records_for([1, 2]))

        assert first.summary.startswith("Jinx Performance Summary:")
        assert first.cached is False
        assert second.cached is False
        assert failing_summarizer.calls == 2
        assert count_entries(database) == 0

    def test_fallback_keeps_previous_entry(self, database, summarizer, failing_summarizer):
        """A failed recompute leaves the old entry in place."""
        SummaryCache(database, summarizer).get_or_compute("Jinx", records_for([1]))

        result = SummaryCache(database, failing_summarizer).get_or_compute(
            "Jinx", records_for([1, 2])
        )

        assert result.cached is False
        with database.session() as session:
            entry = repo.get_champion_summary(session, "Jinx")
        assert entry.summary == "Jinx summary #1"
        assert entry.fingerprint == record_set_fingerprint([1])

    def test_overlapping_recompute_last_write_wins(self, database):
        """Two callers seeing a stale entry both compute; the later write stays."""

        class InterleavingSummarizer(SummarizerBase):
            def __init__(self):
                self.calls = 0
                self.cache = None

            def summarize(self, champion: str, records: Sequence[SummarizableRecord]) -> str:
                self.calls += 1
                call = self.calls
                if call == 1:
                    # Another caller finishes while this one is still computing
                    self.cache.get_or_compute(champion, records)
                return f"{champion} summary #{call}"

        summarizer = InterleavingSummarizer()
        cache = SummaryCache(database, summarizer)
        summarizer.cache = cache

        result = cache.get_or_compute("Jinx", records_for([1, 2]))

        assert summarizer.calls == 2
        assert result.summary == "Jinx summary #1"
        assert count_entries(database) == 1
        assert cache.get_or_compute("Jinx", records_for([1, 2])).summary == "Jinx summary #1"
