"""Deterministic digest of a single game's notes.

Picks the first line that reads as a strength, a mistake, and an action
item. Used to fill a record's ai_summary at creation.
"""

from __future__ import annotations

ACTION_KEYWORDS = ("need to", "should", "improve", "practice")
MISTAKE_KEYWORDS = ("mistake", "died", "bad", "missed")
POSITIVE_KEYWORDS = ("good", "well", "won", "outplayed")

EMPTY_NOTES_SUMMARY = "No notes to summarize."
DEFAULT_NOTES_SUMMARY = "Keep practicing and learning from each game!"


def _first_match(lines: list[str], keywords: tuple[str, ...]) -> str | None:
    for line in lines:
        lowered = line.lower()
        if any(k in lowered for k in keywords):
            return line
    return None


def summarize_notes(notes: str) -> str:
    """Summarize free-text notes into strengths, mistakes and action items.

    Args:
        notes: Notes text, one thought per line.

    Returns:
        Up to three labelled lines, or a default message.
    """
    lines = [line.strip() for line in notes.splitlines() if line.strip()]
    if not lines:
        return EMPTY_NOTES_SUMMARY

    parts = []
    positive = _first_match(lines, POSITIVE_KEYWORDS)
    if positive:
        parts.append(f"Strengths: {positive}")
    mistake = _first_match(lines, MISTAKE_KEYWORDS)
    if mistake:
        parts.append(f"Areas to improve: {mistake}")
    action = _first_match(lines, ACTION_KEYWORDS)
    if action:
        parts.append(f"Action items: {action}")

    return "\n".join(parts) or DEFAULT_NOTES_SUMMARY
