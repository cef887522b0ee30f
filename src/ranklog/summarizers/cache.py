"""Fingerprinted champion summary cache.

One entry per champion. An entry is served only while its fingerprint equals
the fingerprint of the record-id set being summarized; otherwise the
summarizer is called again and the entry overwritten.

Fallback summaries are returned but never stored, so the next call retries
the collaborator instead of pinning a degraded result.

Concurrency: two callers that both see a stale fingerprint will both call
the summarizer and both write. The last write wins; exactly-once
computation is not guaranteed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from sqlalchemy.exc import IntegrityError

from ranklog.core.calendar import utc_now
from ranklog.core.errors import CollaboratorUnavailable
from ranklog.core.identity import record_set_fingerprint
from ranklog.db import repo
from ranklog.db.session import Database
from ranklog.summarizers.base import SummarizableRecord, SummarizerBase
from ranklog.summarizers.fallback import fallback_summary

logger = logging.getLogger(__name__)


@dataclass
class SummaryResult:
    """Summary text and whether it came from the cache."""

    summary: str
    cached: bool


class SummaryCache:
    """Cache of champion summaries keyed by record-set fingerprint."""

    def __init__(self, database: Database, summarizer: SummarizerBase):
        """Initialize cache.

        Args:
            database: Open database handle holding cache entries.
            summarizer: External collaborator used on cache misses.
        """
        self.database = database
        self.summarizer = summarizer

    def get_or_compute(
        self, champion: str, records: Sequence[SummarizableRecord]
    ) -> SummaryResult:
        """Return the cached summary for records, recomputing if stale.

        Args:
            champion: Champion name (cache key).
            records: Games the summary should describe.

        Returns:
            SummaryResult; cached=True only when served from a stored entry.
        """
        fingerprint = record_set_fingerprint(r.record_id for r in records)

        with self.database.session() as session:
            entry = repo.get_champion_summary(session, champion)

        if entry is not None and entry.fingerprint == fingerprint:
            logger.debug(f"Summary cache hit for {champion}")
            return SummaryResult(summary=entry.summary, cached=True)

        try:
            summary = self.summarizer.summarize(champion, records)
        except CollaboratorUnavailable as e:
            logger.info(f"Using fallback summary for {champion}: {e}")
            return SummaryResult(summary=fallback_summary(champion, records), cached=False)

        self._store(champion, summary, fingerprint)

        logger.info(f"Summary cache refreshed for {champion} ({len(records)} games)")
        return SummaryResult(summary=summary, cached=False)

    def _store(self, champion: str, summary: str, fingerprint: str) -> None:
        """Upsert the entry, retrying once if a concurrent writer inserted first."""
        for attempt in range(2):
            try:
                with self.database.session() as session:
                    repo.upsert_champion_summary(
                        session,
                        champion=champion,
                        summary=summary,
                        fingerprint=fingerprint,
                        updated_at=utc_now(),
                    )
                return
            except IntegrityError:
                if attempt:
                    raise
                logger.debug(f"Concurrent summary insert for {champion}, retrying as update")
