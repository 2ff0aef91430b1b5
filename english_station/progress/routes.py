from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from ..shared.database import db_dependency
from ..shared.errors import NotFound
from .crud import delete_progress, list_progress, list_progress_for_lesson, list_progress_for_user, upsert_progress
from .schemas import ProgressFullOut, ProgressOut, ProgressUpsertIn, ProgressWithLessonOut, ProgressWithUserOut


def build_router(SessionLocal) -> APIRouter:
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.get("", response_model=list[ProgressFullOut])
    def get_all(db: Session = Depends(get_db)):
        return list_progress(db)

    @router.get("/user/{user_id}", response_model=list[ProgressWithLessonOut])
    def by_user(user_id: str, db: Session = Depends(get_db)):
        return list_progress_for_user(db, user_id)

    @router.get("/lesson/{lesson_id}", response_model=list[ProgressWithUserOut])
    def by_lesson(lesson_id: int, db: Session = Depends(get_db)):
        return list_progress_for_lesson(db, lesson_id)

    @router.post("", response_model=ProgressOut)
    def upsert(payload: ProgressUpsertIn, response: Response, db: Session = Depends(get_db)):
        p, created = upsert_progress(db, payload.user_id, payload.lesson_id, payload.completed, payload.progress)
        response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
        return p

    @router.delete("/{progress_id}", status_code=status.HTTP_204_NO_CONTENT)
    def remove(progress_id: str, db: Session = Depends(get_db)):
        if not delete_progress(db, progress_id):
            raise NotFound("Progress not found")
        return Response(status_code=status.HTTP_204_NO_CONTENT)

    return router
