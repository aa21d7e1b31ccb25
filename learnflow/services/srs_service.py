"""
SRS (Spaced Repetition System) service implementing the Leitner system.

Boxes run from 1 (new, due immediately) to 5 (mastered). A correct answer
moves a card up one box, a wrong answer sends it straight back to box 1.
"""
import logging
from datetime import datetime, timedelta
from typing import Iterable, List

from learnflow.schemas.card import Card

logger = logging.getLogger(__name__)


# Leitner box review intervals
# Box 1 = immediately, Box 2 = 1 day, Box 3 = 3 days, Box 4 = 1 week, Box 5 = 2 weeks (mastered)
LEITNER_INTERVALS = {
    1: timedelta(0),
    2: timedelta(days=1),
    3: timedelta(days=3),
    4: timedelta(days=7),
    5: timedelta(days=14),
}
MIN_BOX = 1
MAX_BOX = 5


def calculate_next_review_at(box: int, now: datetime) -> datetime:
    """
    Calculate the next review time based on the Leitner box.

    Args:
        box: Leitner box (1-5); out-of-range values are clamped
        now: Time of the review

    Returns:
        Datetime for next review
    """
    box = max(MIN_BOX, min(MAX_BOX, box))
    return now + LEITNER_INTERVALS[box]


def update_leitner_box(current_box: int, correct: bool) -> int:
    """
    Update Leitner box based on a review result.

    Args:
        current_box: Current Leitner box (1-5)
        correct: Whether the card was answered correctly

    Returns:
        New Leitner box
    """
    if correct:
        # Success: move up one box (max box 5)
        return min(MAX_BOX, current_box + 1)
    # Failure: hard reset to box 1, whatever the previous box was
    return MIN_BOX


def rate_card(card: Card, correct: bool, now: datetime) -> Card:
    """
    Apply one review to a card.

    Args:
        card: Card being reviewed (left unchanged)
        correct: Whether the user knew the answer
        now: Time of the review

    Returns:
        New Card with updated box, review count and review timestamps
    """
    new_box = update_leitner_box(card.box, correct)
    rated = card.model_copy(update={
        "box": new_box,
        "reviews": card.reviews + 1,
        "last_review": now,
        "next_review": calculate_next_review_at(new_box, now),
    })
    logger.debug(f"Rated card {card.id}: correct={correct}, box {card.box} -> {new_box}")
    return rated


def reset_card_progress(card: Card) -> Card:
    """Return the card as if it had never been reviewed."""
    return card.model_copy(update={
        "box": MIN_BOX,
        "reviews": 0,
        "last_review": None,
        "next_review": None,
    })


def reset_progress(cards: Iterable[Card]) -> List[Card]:
    """Reset the Leitner state of every card in a collection."""
    return [reset_card_progress(card) for card in cards]
