from types import SimpleNamespace

import pytest

from english_station.quiz.scoring import answer_key, percentage, score_submission
from english_station.shared.errors import InvalidQuiz


def _q(qid, answers):
    return SimpleNamespace(
        id=qid,
        answers=[SimpleNamespace(id=aid, is_correct=ok) for aid, ok in answers],
    )


@pytest.fixture
def questions():
    # question n has answers 10n (correct), 10n+1, 10n+2
    return [_q(n, [(10 * n, True), (10 * n + 1, False), (10 * n + 2, False)]) for n in (1, 2, 3)]


def test_all_correct_scores_100(questions):
    s = score_submission(questions, [(1, 10), (2, 20), (3, 30)])
    assert (s.score, s.total_questions, s.correct_answers) == (100, 3, 3)


def test_none_correct_scores_0(questions):
    s = score_submission(questions, [(1, 11), (2, 22), (3, 31)])
    assert s.score == 0
    assert s.correct_answers == 0


def test_one_of_three_rounds_to_33(questions):
    s = score_submission(questions, [(1, 10), (2, 21), (3, 32)])
    assert (s.score, s.total_questions, s.correct_answers) == (33, 3, 1)


def test_two_of_three_rounds_up_to_67(questions):
    assert score_submission(questions, [(1, 10), (2, 20)]).score == 67


def test_unanswered_questions_count_against_the_score(questions):
    s = score_submission(questions, [(1, 10)])
    assert s.total_questions == 3
    assert s.score == 33


def test_unknown_questions_are_ignored(questions):
    s = score_submission(questions, [(99, 990), (1, 10)])
    assert s.correct_answers == 1


def test_question_counted_once(questions):
    s = score_submission(questions, [(1, 10), (1, 10), (1, 10)])
    assert s.correct_answers == 1
    assert s.score == 33


def test_first_selection_for_a_question_is_graded(questions):
    s = score_submission(questions, [(1, 11), (1, 10)])
    assert s.correct_answers == 0


def test_no_questions_is_invalid_quiz():
    with pytest.raises(InvalidQuiz):
        score_submission([], [(1, 10)])


def test_first_correct_answer_is_authoritative():
    q = _q(1, [(5, False), (6, True), (7, True)])
    assert answer_key([q]) == {1: 6}
    assert score_submission([q], [(1, 7)]).correct_answers == 0


def test_question_without_correct_answer_never_matches():
    q = _q(1, [(5, False), (6, False)])
    assert answer_key([q]) == {1: None}
    assert score_submission([q], [(1, 5)]).score == 0


@pytest.mark.parametrize("correct,total,expected", [
    (1, 8, 13),
    (1, 3, 33),
    (2, 3, 67),
    (1, 2, 50),
    (0, 5, 0),
    (5, 5, 100),
])
def test_percentage_rounds_half_up(correct, total, expected):
    assert percentage(correct, total) == expected
