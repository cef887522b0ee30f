"""Chat-completions summarizer.

Calls an OpenAI-compatible /chat/completions endpoint to write a coaching
summary for one champion. Any failure, including a missing API key, is
reported as CollaboratorUnavailable so callers can fall back.
"""

from __future__ import annotations

import logging
from typing import Sequence

import httpx

from ranklog.aggregation.stats import win_rate
from ranklog.core.errors import CollaboratorUnavailable
from ranklog.summarizers.base import SummarizableRecord, SummarizerBase

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"
DEFAULT_MODEL = "gpt-4o-mini"
DEFAULT_TIMEOUT_S = 15.0

SYSTEM_PROMPT = (
    "You are a League of Legends coach providing an overall performance summary "
    "for a player on a specific champion. Analyze their games and provide a "
    "150-200 word summary covering:\n"
    "- Overall performance trends and win rate context\n"
    "- Key strengths they've demonstrated\n"
    "- Common mistakes or patterns to improve\n"
    "- Specific actionable advice for this champion\n\n"
    "Use plain text with simple bullet points (dashes, not asterisks). "
    "Be concise and actionable."
)


def build_user_prompt(champion: str, records: Sequence[SummarizableRecord]) -> str:
    """Render the champion record and per-game lines for the prompt."""
    wins = sum(1 for r in records if r.win)
    losses = len(records) - wins

    game_lines = []
    for i, record in enumerate(records, start=1):
        result = "Won" if record.win else "Lost"
        game_lines.append(
            f"Game {i} ({result}): KDA {record.kills}/{record.deaths}/{record.assists}, "
            f"KP {record.kill_participation:g}%\n"
            f"Notes: {record.notes or 'No notes'}\n"
            f"AI Summary: {record.ai_summary or ''}"
        )

    return (
        f"Champion: {champion}\n"
        f"Record: {wins}W-{losses}L ({win_rate(wins, len(records))}% WR)\n"
        f"Total games: {len(records)}\n\n" + "\n\n".join(game_lines)
    )


class ChatCompletionSummarizer(SummarizerBase):
    """Summarizer backed by a chat-completions HTTP API."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        timeout_s: float = DEFAULT_TIMEOUT_S,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize summarizer.

        Args:
            api_key: Bearer token. None or empty disables remote calls.
            base_url: API root, e.g. https://api.openai.com/v1.
            model: Model name.
            timeout_s: Overall request timeout in seconds.
            transport: Optional httpx transport (tests use MockTransport).
        """
        self.api_key = api_key or None
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = httpx.Timeout(timeout_s, connect=min(timeout_s, 5.0))
        self.transport = transport

    def summarize(self, champion: str, records: Sequence[SummarizableRecord]) -> str:
        if self.api_key is None:
            logger.debug("No summarizer API key configured")
            raise CollaboratorUnavailable("No summarizer API key configured")

        payload = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": build_user_prompt(champion, records)},
            ],
            "temperature": 0.7,
            "max_tokens": 300,
        }

        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers={"Authorization": f"Bearer {self.api_key}"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.InvalidURL as e:
            logger.warning(f"Summarizer base URL is invalid: {e}")
            raise CollaboratorUnavailable(f"Invalid summarizer URL: {e}") from e
        except httpx.TimeoutException as e:
            logger.warning(f"Summarizer timed out for {champion}: {e}")
            raise CollaboratorUnavailable("Summarizer timed out") from e
        except httpx.HTTPError as e:
            logger.warning(f"Summarizer request failed for {champion}: {e}")
            raise CollaboratorUnavailable(f"Summarizer request failed: {e}") from e
        except ValueError as e:
            logger.warning(f"Summarizer returned invalid JSON for {champion}")
            raise CollaboratorUnavailable("Summarizer returned invalid JSON") from e

        try:
            content = data["choices"][0]["message"]["content"]
        except (KeyError, IndexError, TypeError) as e:
            raise CollaboratorUnavailable("Summarizer response missing content") from e

        if not isinstance(content, str) or not content.strip():
            raise CollaboratorUnavailable("Summarizer returned an empty summary")

        return content.strip()
