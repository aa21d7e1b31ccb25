"""
Study queue service: selects and orders the due cards of a collection.
"""
import logging
import random
from datetime import datetime
from typing import List, MutableSequence, Sequence, TypeVar

from learnflow.schemas.card import Card
from learnflow.schemas.session import QueueEntry, StudyQueue

logger = logging.getLogger(__name__)

T = TypeVar("T")


def shuffle_in_place(items: MutableSequence[T], rng: random.Random) -> None:
    """Fisher-Yates shuffle driven by the injected random source."""
    for i in range(len(items) - 1, 0, -1):
        j = rng.randint(0, i)
        items[i], items[j] = items[j], items[i]


def is_due(card: Card, now: datetime) -> bool:
    """A card is due when it has no next review time or that time has passed."""
    return card.next_review is None or card.next_review <= now


def build_study_queue(cards: Sequence[Card], now: datetime, rng: random.Random) -> StudyQueue:
    """
    Build the study queue from the full collection.

    Due cards are sorted by box (lowest first) and the whole sorted list is
    then shuffled, so the resulting order is a uniform shuffle of the due
    set; box priority does not survive the shuffle.

    Args:
        cards: Full card collection
        now: Current time used for the due check
        rng: Random source for the shuffle

    Returns:
        StudyQueue with the cursor at 0
    """
    due = [
        QueueEntry(card=card, original_index=index)
        for index, card in enumerate(cards)
        if is_due(card, now)
    ]
    due.sort(key=lambda entry: entry.card.box)

    shuffle_in_place(due, rng)

    logger.debug(f"Built study queue: {len(due)} due of {len(cards)} card(s)")
    return StudyQueue(entries=due, cursor=0)


def reshuffle_queue(queue: StudyQueue, rng: random.Random) -> StudyQueue:
    """Shuffle the current queue again (no re-filtering) and reset the cursor."""
    entries: List[QueueEntry] = list(queue.entries)
    shuffle_in_place(entries, rng)
    return StudyQueue(entries=entries, cursor=0)


def remove_current(queue: StudyQueue) -> StudyQueue:
    """
    Drop the card under the cursor after it has been rated.

    The cursor stays on the same position (which now holds the next card),
    clamped to the end of the shortened queue.
    """
    if queue.current() is None:
        return queue
    entries = [entry for i, entry in enumerate(queue.entries) if i != queue.cursor]
    cursor = min(queue.cursor, len(entries) - 1) if entries else 0
    return StudyQueue(entries=entries, cursor=cursor)
