"""
Trim primitives for fitting resume text into a layout budget.

All functions are pure: they never mutate their inputs and accept ``None``
wherever a string or list is expected.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from rattle_fit.schema import DisplaySkills

ELLIPSIS = "…"

# Trailing marks dropped before the ellipsis so we never render ".…"
_TRAILING_PUNCTUATION = (".", "!", "?", ",")


def trim_to_word_limit(text: Optional[str], max_words: int) -> str:
    """
    Truncate text to a maximum word count.

    Args:
        text: Text to trim
        max_words: Maximum number of words

    Returns:
        The stripped text when it already fits, otherwise the first
        ``max_words`` words joined by single spaces plus an ellipsis.
    """
    if not text:
        return ""
    if max_words <= 0:
        return ""

    words = text.split()
    if len(words) <= max_words:
        return text.strip()

    trimmed = " ".join(words[:max_words])
    if trimmed.endswith(_TRAILING_PUNCTUATION):
        trimmed = trimmed[:-1].rstrip()
    return trimmed + ELLIPSIS


def trim_to_char_limit(text: Optional[str], max_chars: int) -> str:
    """Truncate text so the result, ellipsis included, is at most ``max_chars`` long."""
    if not text:
        return ""
    if len(text) <= max_chars:
        return text
    if max_chars <= 0:
        return ""
    return text[:max_chars - 1].rstrip() + ELLIPSIS


def get_display_skills(skills: Optional[Sequence[str]], max_shown: int) -> DisplaySkills:
    """Split skills into the visible slice and a count of hidden entries."""
    if not skills:
        return DisplaySkills(visible=[], overflow=0)

    max_shown = max(0, max_shown)
    if len(skills) <= max_shown:
        return DisplaySkills(visible=list(skills), overflow=0)
    return DisplaySkills(visible=list(skills[:max_shown]), overflow=len(skills) - max_shown)


def truncate_bullets(
    bullets: Optional[Sequence[str]],
    max_bullets: int,
    max_words_per_bullet: Optional[int] = None,
) -> Tuple[List[str], int]:
    """
    Truncate a list of bullet points.

    Args:
        bullets: List of bullet point strings
        max_bullets: Maximum number of bullets to keep
        max_words_per_bullet: Optional maximum words per kept bullet

    Returns:
        Tuple of (truncated_bullets, num_removed)
    """
    if not bullets:
        return [], 0

    truncated = list(bullets[:max(0, max_bullets)])
    if max_words_per_bullet is not None:
        truncated = [trim_to_word_limit(bullet, max_words_per_bullet) for bullet in truncated]

    return truncated, len(bullets) - len(truncated)
