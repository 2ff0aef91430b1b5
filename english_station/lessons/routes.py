from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from ..shared.database import db_dependency
from ..shared.errors import NotFound
from ..shared.schemas import LEVEL_PATTERN
from .crud import (
    add_vocabulary, create_lesson, delete_lesson, delete_vocabulary,
    get_lesson, list_lessons, list_vocabulary, update_lesson,
)
from .schemas import LessonDetailOut, LessonIn, LessonOut, VocabularyIn, VocabularyOut


def build_router(SessionLocal) -> APIRouter:
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    def require_lesson(db: Session, lesson_id: int):
        lesson = get_lesson(db, lesson_id)
        if not lesson:
            raise NotFound("Lesson not found")
        return lesson

    @router.get("", response_model=list[LessonOut])
    def get_all(level: str | None = Query(default=None, pattern=LEVEL_PATTERN), db: Session = Depends(get_db)):
        return list_lessons(db, level)

    @router.get("/{lesson_id}", response_model=LessonDetailOut)
    def get_one(lesson_id: int, db: Session = Depends(get_db)):
        return require_lesson(db, lesson_id)

    @router.post("", response_model=LessonOut, status_code=status.HTTP_201_CREATED)
    def create(payload: LessonIn, db: Session = Depends(get_db)):
        return create_lesson(db, payload.model_dump())

    @router.put("/{lesson_id}", response_model=LessonOut)
    def update(lesson_id: int, payload: LessonIn, db: Session = Depends(get_db)):
        lesson = update_lesson(db, lesson_id, payload.model_dump())
        if not lesson:
            raise NotFound("Lesson not found")
        return lesson

    @router.delete("/{lesson_id}", status_code=status.HTTP_204_NO_CONTENT)
    def remove(lesson_id: int, db: Session = Depends(get_db)):
        if not delete_lesson(db, lesson_id):
            raise NotFound("Lesson not found")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    # Vocabulary belongs to a lesson
    @router.get("/{lesson_id}/vocabulary", response_model=list[VocabularyOut])
    def get_vocabulary(lesson_id: int, db: Session = Depends(get_db)):
        require_lesson(db, lesson_id)
        return list_vocabulary(db, lesson_id)

    @router.post("/{lesson_id}/vocabulary", response_model=VocabularyOut, status_code=status.HTTP_201_CREATED)
    def create_vocabulary(lesson_id: int, payload: VocabularyIn, db: Session = Depends(get_db)):
        require_lesson(db, lesson_id)
        return add_vocabulary(db, lesson_id, payload.model_dump())

    @router.delete("/vocabulary/{vocab_id}", status_code=status.HTTP_204_NO_CONTENT)
    def remove_vocabulary(vocab_id: int, db: Session = Depends(get_db)):
        if not delete_vocabulary(db, vocab_id):
            raise NotFound("Vocabulary item not found")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
