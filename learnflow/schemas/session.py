"""
Study and test session schemas.

Sessions are ephemeral: they live in the study controller's state and are
never written to the cache or the shared store.
"""
from enum import Enum
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import datetime

from learnflow.schemas.card import Card, CardId
from learnflow.schemas.paraphrase import Paraphrase, ParaphraseId


class TestType(str, Enum):
    """How test answers are collected."""
    __test__ = False  # not a pytest test class

    WRITTEN = "written"
    MULTIPLE_CHOICE = "multiple-choice"


class ParaphraseMode(str, Enum):
    """What the user has to recall in a paraphrase test."""
    RECALL_VARIATIONS = "recall-variations"
    RECALL_ORIGINAL = "recall-original"


class QueueEntry(BaseModel):
    """A due card together with its index in the collection at build time."""
    card: Card
    original_index: int


class StudyQueue(BaseModel):
    """Ordered due cards for one review session."""
    entries: List[QueueEntry] = Field(default_factory=list)
    cursor: int = 0

    def current(self) -> Optional[QueueEntry]:
        if 0 <= self.cursor < len(self.entries):
            return self.entries[self.cursor]
        return None


class AnswerRecord(BaseModel):
    """One answered question: what was given, what was expected."""
    given: str
    correct: str
    is_correct: bool


class Score(BaseModel):
    """Result of a completed test."""
    correct: int
    total: int
    percentage: int


class TestSession(BaseModel):
    """A bounded card quiz."""
    __test__ = False  # not a pytest test class

    test_type: TestType
    cards: List[Card]
    index: int = 0
    answers: Dict[CardId, AnswerRecord] = Field(default_factory=dict)
    complete: bool = False
    options: List[str] = Field(default_factory=list)  # multiple-choice options for the current card

    def current(self) -> Optional[Card]:
        if self.complete or self.index >= len(self.cards):
            return None
        return self.cards[self.index]


class ParaphraseTestSession(BaseModel):
    """A bounded paraphrase quiz."""
    mode: ParaphraseMode
    items: List[Paraphrase]
    prompts: Dict[ParaphraseId, str] = Field(default_factory=dict)
    index: int = 0
    answers: Dict[ParaphraseId, AnswerRecord] = Field(default_factory=dict)
    complete: bool = False

    def current(self) -> Optional[Paraphrase]:
        if self.complete or self.index >= len(self.items):
            return None
        return self.items[self.index]


class SyncWarning(BaseModel):
    """Non-fatal, dismissible notice that the shared store could not be reached."""
    message: str
    created: datetime


class AppState(BaseModel):
    """Everything the study controller owns: collections, sessions and warnings."""
    cards: List[Card] = Field(default_factory=list)
    paraphrases: List[Paraphrase] = Field(default_factory=list)
    queue: StudyQueue = Field(default_factory=StudyQueue)
    test: Optional[TestSession] = None
    paraphrase_test: Optional[ParaphraseTestSession] = None
    warnings: List[SyncWarning] = Field(default_factory=list)
