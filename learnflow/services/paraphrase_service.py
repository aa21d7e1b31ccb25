"""
Paraphrase trainer service.

Quizzes the user on paraphrase records, either asking for any accepted
variation of an original phrase or for the original given one variation.
"""
import logging
import random
from typing import Dict, List, Sequence, Tuple

from learnflow.core.exceptions import ValidationError
from learnflow.schemas.paraphrase import Paraphrase, ParaphraseDraft, ParaphraseId
from learnflow.schemas.session import AnswerRecord, ParaphraseMode, ParaphraseTestSession, Score
from learnflow.services.queue_service import shuffle_in_place
from learnflow.services.test_service import calculate_score
from learnflow.utils.text_utils import answers_match, clean_variations, normalize_answer

logger = logging.getLogger(__name__)


def validate_paraphrase_draft(draft: ParaphraseDraft) -> Tuple[str, List[str]]:
    """
    Trim a paraphrase draft and check it can be stored.

    Returns:
        (original, variations) with empty variations removed

    Raises:
        ValidationError: If the original is empty or no variation is left
    """
    original = draft.original.strip()
    if not original:
        raise ValidationError("Original phrase cannot be empty")
    variations = clean_variations(draft.variations)
    if not variations:
        raise ValidationError("At least one variation is required")
    return original, variations


def start_paraphrase_test(
    paraphrases: Sequence[Paraphrase],
    mode: ParaphraseMode,
    rng: random.Random,
    count_cap: int = 10,
) -> ParaphraseTestSession:
    """
    Start a paraphrase test.

    In recall-variations mode the prompt is the original phrase; in
    recall-original mode it is one of the variations picked at random.

    Args:
        paraphrases: Full paraphrase collection
        mode: What the user has to recall
        rng: Random source for selection and prompts
        count_cap: Maximum number of questions

    Returns:
        Fresh ParaphraseTestSession

    Raises:
        ValidationError: If no paraphrase with at least one variation exists
    """
    candidates = [p for p in paraphrases if clean_variations(p.variations)]
    if not candidates:
        raise ValidationError("No paraphrases available for testing")

    shuffled = list(candidates)
    shuffle_in_place(shuffled, rng)
    selected = shuffled[:min(count_cap, len(shuffled))]

    prompts: Dict[ParaphraseId, str] = {}
    for item in selected:
        if mode == ParaphraseMode.RECALL_VARIATIONS:
            prompts[item.id] = item.original
        else:
            prompts[item.id] = rng.choice(clean_variations(item.variations))

    logger.info(f"Started {mode.value} paraphrase test with {len(selected)} question(s)")
    return ParaphraseTestSession(mode=mode, items=selected, prompts=prompts)


def is_paraphrase_answer_correct(item: Paraphrase, mode: ParaphraseMode, answer: str) -> bool:
    """Check an answer: any stored variation counts, or the exact original."""
    if mode == ParaphraseMode.RECALL_VARIATIONS:
        given = normalize_answer(answer)
        return any(normalize_answer(v) == given for v in item.variations if v.strip())
    return answers_match(answer, item.original)


def answer_paraphrase_question(session: ParaphraseTestSession, answer: str) -> ParaphraseTestSession:
    """
    Record the answer for the current paraphrase and advance.

    Raises:
        ValidationError: If the session is already complete
    """
    item = session.current()
    if item is None:
        raise ValidationError("Paraphrase test is already complete")

    if session.mode == ParaphraseMode.RECALL_VARIATIONS:
        expected = " / ".join(clean_variations(item.variations))
    else:
        expected = item.original

    answers: Dict[ParaphraseId, AnswerRecord] = dict(session.answers)
    answers[item.id] = AnswerRecord(
        given=answer,
        correct=expected,
        is_correct=is_paraphrase_answer_correct(item, session.mode, answer),
    )

    next_index = session.index + 1
    if next_index < len(session.items):
        return session.model_copy(update={"answers": answers, "index": next_index})
    return session.model_copy(update={"answers": answers, "complete": True})


def paraphrase_score(session: ParaphraseTestSession) -> Score:
    """Score of a paraphrase test session."""
    return calculate_score(session.answers, len(session.items))
