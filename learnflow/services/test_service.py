"""
Test (quiz) generation service.

Builds bounded written or multiple-choice quizzes from the card collection,
records answers and scores completed sessions.
"""
import logging
import math
import random
from typing import Dict, List, Mapping, Optional, Sequence

from learnflow.core.exceptions import ValidationError
from learnflow.schemas.card import Card, CardId, DEFAULT_UNIT
from learnflow.schemas.session import AnswerRecord, Score, TestSession, TestType
from learnflow.services.queue_service import shuffle_in_place
from learnflow.utils.text_utils import answers_match

logger = logging.getLogger(__name__)

DISTRACTOR_COUNT = 3
MULTIPLE_CHOICE_MIN_CARDS = DISTRACTOR_COUNT + 1


def get_unique_units(cards: Sequence[Card]) -> List[str]:
    """Sorted list of the distinct units used in a collection."""
    return sorted({card.unit or DEFAULT_UNIT for card in cards})


def filter_by_units(cards: Sequence[Card], units: Optional[Sequence[str]]) -> List[Card]:
    """Cards whose unit is in ``units``; an empty selection means every card."""
    if not units:
        return list(cards)
    selected = set(units)
    return [card for card in cards if (card.unit or DEFAULT_UNIT) in selected]


def percentage(correct: int, total: int) -> int:
    """Rounded percentage (halves round up); 0 when there is nothing to score."""
    if total <= 0:
        return 0
    return int(math.floor(100 * correct / total + 0.5))


def calculate_score(answers: Mapping[CardId, AnswerRecord], total: int) -> Score:
    """Score a set of answers against the number of questions in the session."""
    correct_count = sum(1 for answer in answers.values() if answer.is_correct)
    return Score(correct=correct_count, total=total, percentage=percentage(correct_count, total))


def generate_multiple_choice_options(
    card: Card,
    session_cards: Sequence[Card],
    rng: random.Random,
) -> List[str]:
    """
    Build the answer options for one multiple-choice question.

    Distractors are the backs of up to three other cards sampled from the
    same test session (not the whole collection), so duplicate backs within
    the session show up as duplicate options.

    Args:
        card: Card being asked
        session_cards: All cards of the current test session
        rng: Random source for sampling and ordering

    Returns:
        Shuffled options, always containing ``card.back``
    """
    others = [c for c in session_cards if c.id != card.id]
    distractors = rng.sample(others, min(DISTRACTOR_COUNT, len(others)))
    options = [card.back] + [c.back for c in distractors]
    shuffle_in_place(options, rng)
    return options


def start_test(
    cards: Sequence[Card],
    units: Optional[Sequence[str]],
    count_cap: int,
    test_type: TestType,
    rng: random.Random,
) -> TestSession:
    """
    Start a new test session.

    Args:
        cards: Full card collection
        units: Units to draw from (empty or None for all units)
        count_cap: Maximum number of questions (10 for a quiz, 20 for a whole unit)
        test_type: Written or multiple-choice
        rng: Random source for selection and options

    Returns:
        Fresh TestSession positioned on its first question

    Raises:
        ValidationError: If there are no candidate cards, or a multiple-choice
            test would have fewer than four questions
    """
    if not cards:
        raise ValidationError("No cards available for testing")

    candidates = filter_by_units(cards, units)
    if not candidates:
        raise ValidationError("No cards found in selected units")

    size = min(count_cap, len(candidates))
    if test_type == TestType.MULTIPLE_CHOICE and size < MULTIPLE_CHOICE_MIN_CARDS:
        raise ValidationError(
            f"Multiple choice tests need at least {MULTIPLE_CHOICE_MIN_CARDS} cards"
        )

    # Uniform sample without replacement: shuffle, then take the first `size`
    shuffled = list(candidates)
    shuffle_in_place(shuffled, rng)
    selected = shuffled[:size]

    options: List[str] = []
    if test_type == TestType.MULTIPLE_CHOICE:
        options = generate_multiple_choice_options(selected[0], selected, rng)

    logger.info(f"Started {test_type.value} test with {len(selected)} question(s)")
    return TestSession(test_type=test_type, cards=selected, options=options)


def answer_question(session: TestSession, answer: str, rng: random.Random) -> TestSession:
    """
    Record the answer for the current question and advance.

    Args:
        session: Current test session (left unchanged)
        answer: Typed or selected answer
        rng: Random source for the next question's options

    Returns:
        Updated TestSession (complete after the last question)

    Raises:
        ValidationError: If the session is already complete
    """
    card = session.current()
    if card is None:
        raise ValidationError("Test is already complete")

    answers: Dict[CardId, AnswerRecord] = dict(session.answers)
    answers[card.id] = AnswerRecord(
        given=answer,
        correct=card.back,
        is_correct=answers_match(answer, card.back),
    )

    next_index = session.index + 1
    if next_index < len(session.cards):
        options: List[str] = []
        if session.test_type == TestType.MULTIPLE_CHOICE:
            options = generate_multiple_choice_options(session.cards[next_index], session.cards, rng)
        return session.model_copy(update={"answers": answers, "index": next_index, "options": options})

    return session.model_copy(update={"answers": answers, "complete": True, "options": []})


def score_test_session(session: TestSession) -> Score:
    """Score of a test session (partial sessions count unanswered questions as wrong)."""
    return calculate_score(session.answers, len(session.cards))
