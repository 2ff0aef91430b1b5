from fastapi import APIRouter, Depends, Query, Request, Response, status
from sqlalchemy.orm import Session

from ..shared.database import db_dependency
from ..shared.errors import NotFound
from .crud import (
    create_quiz, delete_quiz, get_quiz,
    list_quizzes, list_results_for_user, submit_quiz, update_quiz,
)
from .schemas import (
    QuizAdminOut, QuizIn, QuizOut,
    QuizResultOut, QuizResultWithQuizOut, SubmitQuizIn, SubmitQuizOut,
)


def build_router(SessionLocal) -> APIRouter:
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.get("", response_model=list[QuizOut])
    def get_all(lesson_id: int | None = Query(default=None, alias="lessonId"), db: Session = Depends(get_db)):
        return list_quizzes(db, lesson_id)

    @router.get("/results/{user_id}", response_model=list[QuizResultWithQuizOut])
    def results(user_id: str, db: Session = Depends(get_db)):
        return list_results_for_user(db, user_id)

    @router.get("/{quiz_id}", response_model=QuizOut)
    def get_one(quiz_id: int, db: Session = Depends(get_db)):
        quiz = get_quiz(db, quiz_id)
        if not quiz:
            raise NotFound("Quiz not found")
        return quiz

    @router.post("", response_model=QuizAdminOut, status_code=status.HTTP_201_CREATED)
    def create(payload: QuizIn, db: Session = Depends(get_db)):
        return create_quiz(db, payload.model_dump())

    @router.put("/{quiz_id}", response_model=QuizAdminOut)
    def update(quiz_id: int, payload: QuizIn, db: Session = Depends(get_db)):
        quiz = update_quiz(db, quiz_id, payload.model_dump())
        if not quiz:
            raise NotFound("Quiz not found")
        return quiz

    @router.delete("/{quiz_id}", status_code=status.HTTP_204_NO_CONTENT)
    def remove(quiz_id: int, db: Session = Depends(get_db)):
        if not delete_quiz(db, quiz_id):
            raise NotFound("Quiz not found")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    @router.post("/{quiz_id}/submit", response_model=SubmitQuizOut)
    async def submit(quiz_id: int, payload: SubmitQuizIn, request: Request, db: Session = Depends(get_db)):
        # the stored copy is the body as sent, not the parsed model
        raw_answers = (await request.json())["answers"]
        selections = [(a.question_id, a.answer_id) for a in payload.answers]
        summary, result = submit_quiz(db, quiz_id, payload.user_id, selections, raw_answers)
        return SubmitQuizOut(
            score=summary.score,
            total_questions=summary.total_questions,
            correct_answers=summary.correct_answers,
            quiz_result=QuizResultOut.model_validate(result),
        )

    return router
