"""
Models package - SQLModel tables backing the shared (remote) store.
"""
from learnflow.models.shared_card import SharedCard
from learnflow.models.shared_paraphrase import SharedParaphrase

__all__ = [
    'SharedCard',
    'SharedParaphrase',
]
