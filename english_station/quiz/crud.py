import logging
import uuid

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from ..lessons.models import Lesson
from ..shared.errors import NotFound, UpstreamFailure
from ..users.models import User
from .models import Answer, Question, Quiz, QuizResult
from .scoring import ScoreSummary, score_submission

logger = logging.getLogger("english_station.quiz")


def _quiz_query(db: Session):
    return db.query(Quiz).options(
        selectinload(Quiz.lesson),
        selectinload(Quiz.questions).selectinload(Question.answers),
    )


def _build_questions(questions: list[dict]) -> list[Question]:
    return [
        Question(
            content=q["content"],
            type=q.get("type") or "multiple-choice",
            answers=[Answer(content=a["content"], is_correct=bool(a["is_correct"])) for a in q["answers"]],
        )
        for q in questions
    ]


def _require_lesson(db: Session, lesson_id: int) -> None:
    if not db.get(Lesson, lesson_id):
        raise NotFound("Lesson not found")


def list_quizzes(db: Session, lesson_id: int | None = None):
    q = _quiz_query(db)
    if lesson_id is not None:
        q = q.filter(Quiz.lesson_id == lesson_id)
    return q.order_by(Quiz.created_at.desc(), Quiz.id.desc()).all()


def get_quiz(db: Session, quiz_id: int) -> Quiz | None:
    return _quiz_query(db).filter(Quiz.id == quiz_id).first()


def create_quiz(db: Session, payload: dict) -> Quiz:
    _require_lesson(db, payload["lesson_id"])

    quiz = Quiz(
        title=payload["title"],
        description=payload.get("description") or "",
        lesson_id=payload["lesson_id"],
        time_limit=payload.get("time_limit"),
        questions=_build_questions(payload.get("questions") or []),
    )
    db.add(quiz)
    db.commit()
    return get_quiz(db, quiz.id)


def update_quiz(db: Session, quiz_id: int, payload: dict) -> Quiz | None:
    """
    Replace a quiz and its whole question set.
    Old questions and answers are removed and the new ones inserted in the
    same transaction, so readers never see a quiz without its questions.
    """
    quiz = get_quiz(db, quiz_id)
    if not quiz:
        return None
    _require_lesson(db, payload["lesson_id"])

    try:
        quiz.title = payload["title"]
        quiz.description = payload.get("description") or ""
        quiz.lesson_id = payload["lesson_id"]
        quiz.time_limit = payload.get("time_limit")
        quiz.questions = _build_questions(payload.get("questions") or [])
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise

    db.expire_all()
    return get_quiz(db, quiz_id)


def delete_quiz(db: Session, quiz_id: int) -> bool:
    quiz = db.get(Quiz, quiz_id)
    if not quiz:
        return False
    db.delete(quiz)
    db.commit()
    return True


def submit_quiz(
    db: Session,
    quiz_id: int,
    user_id: str,
    selections: list[tuple[int, int]],
    raw_answers: list,
) -> tuple[ScoreSummary, QuizResult]:
    """
    Grade a submission and record it as a new QuizResult.

    ``selections`` are the parsed ``(question_id, answer_id)`` pairs used for
    grading. ``raw_answers`` is the submitted list exactly as the client sent
    it and is stored unchanged on the result row. Every call inserts exactly
    one row, repeated attempts included.
    """
    quiz = get_quiz(db, quiz_id)
    if not quiz:
        raise NotFound("Quiz not found")
    if not db.get(User, user_id):
        raise NotFound("User not found")

    summary = score_submission(quiz.questions, selections)

    result = QuizResult(
        id=str(uuid.uuid4()),
        user_id=user_id,
        quiz_id=quiz_id,
        score=summary.score,
        answers=list(raw_answers),
    )
    try:
        db.add(result)
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Error saving quiz result for quiz %s", quiz_id)
        raise UpstreamFailure("Failed to submit quiz") from e

    db.refresh(result)
    logger.info(
        "Quiz %s submitted by %s: %s/%s correct, score %s",
        quiz_id, user_id, summary.correct_answers, summary.total_questions, summary.score,
    )
    return summary, result


def list_results_for_user(db: Session, user_id: str):
    return (
        db.query(QuizResult)
        .options(selectinload(QuizResult.quiz).selectinload(Quiz.lesson))
        .filter(QuizResult.user_id == user_id)
        .order_by(QuizResult.created_at.desc(), QuizResult.id.desc())
        .all()
    )
