import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..quiz.crud import get_quiz
from ..quiz.schemas import QuizAdminOut
from ..shared.database import db_dependency
from ..shared.errors import NotFound
from ..shared.schemas import MessageOut
from ..users.crud import delete_user, list_users, set_admin
from ..users.schemas import UserOut

logger = logging.getLogger("english_station.admin")


def build_router(SessionLocal) -> APIRouter:
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.get("/users", response_model=list[UserOut])
    def users(db: Session = Depends(get_db)):
        return list_users(db)

    @router.put("/users/{user_id}/promote", response_model=UserOut)
    def promote(user_id: str, db: Session = Depends(get_db)):
        user = set_admin(db, user_id, True)
        if not user:
            raise NotFound("User not found")
        logger.info("Promoted user %s to admin", user_id)
        return user

    @router.put("/users/{user_id}/demote", response_model=UserOut)
    def demote(user_id: str, db: Session = Depends(get_db)):
        user = set_admin(db, user_id, False)
        if not user:
            raise NotFound("User not found")
        logger.info("Demoted user %s", user_id)
        return user

    @router.delete("/users/{user_id}", response_model=MessageOut)
    def remove_user(user_id: str, db: Session = Depends(get_db)):
        if not delete_user(db, user_id):
            raise NotFound("User not found")
        return MessageOut(message="User deleted successfully")

    @router.get("/quizzes/{quiz_id}", response_model=QuizAdminOut)
    def quiz(quiz_id: int, db: Session = Depends(get_db)):
        q = get_quiz(db, quiz_id)
        if not q:
            raise NotFound("Quiz not found")
        return q

    return router
