"""
Text utility functions.
"""
from typing import Iterable, List, Optional


def normalize_answer(text: Optional[str]) -> str:
    """
    Normalize a quiz answer for comparison.

    Answers are compared case-insensitively after trimming surrounding
    whitespace; everything else (inner spacing, punctuation, accents) must
    match exactly.

    Args:
        text: Raw answer text (None is treated as empty)

    Returns:
        Trimmed, case-folded text
    """
    return (text or "").strip().casefold()


def answers_match(given: Optional[str], expected: Optional[str]) -> bool:
    """Check whether a given answer equals the expected one after normalization."""
    return normalize_answer(given) == normalize_answer(expected)


def clean_variations(variations: Optional[Iterable[str]]) -> List[str]:
    """
    Trim paraphrase variations and drop the empty ones, preserving order.

    Args:
        variations: Raw variation strings

    Returns:
        List of non-empty, trimmed variations
    """
    if not variations:
        return []
    return [v.strip() for v in variations if v and v.strip()]
