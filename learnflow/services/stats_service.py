"""
Collection statistics.
"""
from typing import Sequence

from learnflow.schemas.card import Card, CollectionStats
from learnflow.services.srs_service import MAX_BOX, MIN_BOX


def calculate_stats(cards: Sequence[Card]) -> CollectionStats:
    """
    Count cards per learning stage.

    new = box 1, learning = boxes 2-4, mastered = box 5.
    """
    total = len(cards)
    mastered = sum(1 for c in cards if c.box >= MAX_BOX)
    learning = sum(1 for c in cards if MIN_BOX < c.box < MAX_BOX)
    new = sum(1 for c in cards if c.box == MIN_BOX)
    progress = (mastered / total * 100) if total > 0 else 0.0
    return CollectionStats(total=total, mastered=mastered, learning=learning, new=new, progress=progress)
