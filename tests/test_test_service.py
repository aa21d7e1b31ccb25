import pytest

from learnflow.core.exceptions import ValidationError
from learnflow.schemas.session import AnswerRecord, TestType
from learnflow.services.test_service import (
    answer_question,
    calculate_score,
    filter_by_units,
    generate_multiple_choice_options,
    get_unique_units,
    percentage,
    score_test_session,
    start_test,
)
from conftest import make_card


def test_units_are_sorted_and_unique(cards):
    assert get_unique_units(cards) == ["Unit 1", "Unit 2"]


def test_empty_unit_selection_means_all_cards(cards):
    assert len(filter_by_units(cards, [])) == len(cards)
    assert [c.id for c in filter_by_units(cards, ["Unit 2"])] == [3, 4]


@pytest.mark.parametrize("correct,total,expected", [
    (0, 0, 0),
    (1, 3, 33),
    (2, 3, 67),
    (1, 8, 13),
    (5, 5, 100),
])
def test_percentage_rounding(correct, total, expected):
    assert percentage(correct, total) == expected


def test_score_counts_unanswered_questions():
    answers = {1: AnswerRecord(given="a", correct="a", is_correct=True)}

    score = calculate_score(answers, 4)

    assert (score.correct, score.total, score.percentage) == (1, 4, 25)


def test_written_test_from_one_unit(cards, rng):
    session = start_test(cards, ["Unit 1"], 10, TestType.WRITTEN, rng)

    assert sorted(c.id for c in session.cards) == [1, 2, 5]
    assert session.index == 0
    assert not session.complete
    assert session.options == []


def test_test_size_is_capped(rng):
    many = [make_card(i) for i in range(30)]

    session = start_test(many, None, 10, TestType.WRITTEN, rng)

    assert len(session.cards) == 10
    assert len({c.id for c in session.cards}) == 10


def test_no_cards_at_all(rng):
    with pytest.raises(ValidationError, match="No cards available for testing"):
        start_test([], None, 10, TestType.WRITTEN, rng)


def test_no_cards_in_selected_units(cards, rng):
    with pytest.raises(ValidationError, match="No cards found in selected units"):
        start_test(cards, ["Unit 9"], 10, TestType.WRITTEN, rng)


def test_multiple_choice_needs_four_cards(cards, rng):
    with pytest.raises(ValidationError):
        start_test(cards, ["Unit 1"], 10, TestType.MULTIPLE_CHOICE, rng)


def test_multiple_choice_options(cards, rng):
    session = start_test(cards, None, 10, TestType.MULTIPLE_CHOICE, rng)

    assert len(session.options) == 4
    assert session.current().back in session.options
    assert len(set(session.options)) == 4


def test_options_contain_correct_answer_once(cards, rng):
    for card in cards:
        options = generate_multiple_choice_options(card, cards, rng)
        assert len(options) == 4
        assert options.count(card.back) == 1


def test_answers_are_trimmed_and_case_insensitive(rng):
    cards = [make_card(1, front="capital of France", back="Paris")]
    session = start_test(cards, None, 10, TestType.WRITTEN, rng)

    session = answer_question(session, "Paris ", rng)

    assert session.answers[1].is_correct
    assert session.complete


def test_misspelled_answer_is_wrong(rng):
    cards = [make_card(1, back="Paris")]
    session = start_test(cards, None, 10, TestType.WRITTEN, rng)

    session = answer_question(session, "Pariss", rng)

    assert not session.answers[1].is_correct
    assert session.answers[1].correct == "Paris"


def test_full_written_session(cards, rng):
    session = start_test(cards, None, 10, TestType.WRITTEN, rng)
    expected = [c.back for c in session.cards]

    for i, back in enumerate(expected):
        session = answer_question(session, back if i % 2 == 0 else "nope", rng)

    assert session.complete
    assert session.current() is None
    score = score_test_session(session)
    assert (score.correct, score.total, score.percentage) == (3, 5, 60)


def test_answer_after_completion_is_rejected(rng):
    session = start_test([make_card(1)], None, 10, TestType.WRITTEN, rng)
    session = answer_question(session, "back 1", rng)

    with pytest.raises(ValidationError):
        answer_question(session, "again", rng)


def test_multiple_choice_refreshes_options(cards, rng):
    session = start_test(cards, None, 10, TestType.MULTIPLE_CHOICE, rng)

    session = answer_question(session, session.options[0], rng)

    assert session.index == 1
    assert session.current().back in session.options
