"""
Grading of a submitted quiz attempt.

Works on anything shaped like the ORM objects (``question.id``,
``question.answers``, ``answer.id``, ``answer.is_correct``), so it has no
knowledge of the session or the storage behind it.
"""
from dataclasses import dataclass
from typing import Iterable, Optional

from ..shared.errors import InvalidQuiz


@dataclass(frozen=True)
class ScoreSummary:
    score: int
    total_questions: int
    correct_answers: int


def answer_key(questions) -> dict[int, Optional[int]]:
    """
    Map question id -> id of its correct answer.
    The first answer flagged correct wins; a question with none maps to None.
    """
    key: dict[int, Optional[int]] = {}
    for q in questions:
        correct = next((a for a in q.answers if a.is_correct), None)
        key[q.id] = correct.id if correct else None
    return key


def percentage(correct: int, total: int) -> int:
    # round half up, exact in integers: 1/3 -> 33, 1/8 -> 13
    return (correct * 200 + total) // (2 * total)


def score_submission(questions, selections: Iterable[tuple[int, int]]) -> ScoreSummary:
    """
    Grade ``selections`` (``(question_id, answer_id)`` pairs) against ``questions``.

    Selections for unknown questions are ignored and each question is counted
    at most once (the first selection for it is the one graded).
    Raises InvalidQuiz when there are no questions to grade against.
    """
    questions = list(questions)
    total = len(questions)
    if total == 0:
        raise InvalidQuiz("Quiz has no questions and cannot be scored")

    key = answer_key(questions)
    graded: set[int] = set()
    correct = 0

    for question_id, answer_id in selections:
        if question_id not in key or question_id in graded:
            continue
        graded.add(question_id)

        expected = key[question_id]
        if expected is not None and answer_id == expected:
            correct += 1

    return ScoreSummary(
        score=percentage(correct, total),
        total_questions=total,
        correct_answers=correct,
    )
