import uuid

from sqlalchemy.orm import Session, selectinload

from ..lessons.models import Lesson
from ..shared.errors import NotFound
from ..users.models import User
from .models import Progress


def list_progress(db: Session):
    return (
        db.query(Progress)
        .options(selectinload(Progress.user), selectinload(Progress.lesson))
        .order_by(Progress.created_at.desc())
        .all()
    )


def list_progress_for_user(db: Session, user_id: str):
    return (
        db.query(Progress)
        .options(selectinload(Progress.lesson))
        .filter(Progress.user_id == user_id)
        .order_by(Progress.updated_at.desc())
        .all()
    )


def list_progress_for_lesson(db: Session, lesson_id: int):
    return (
        db.query(Progress)
        .options(selectinload(Progress.user))
        .filter(Progress.lesson_id == lesson_id)
        .order_by(Progress.updated_at.desc())
        .all()
    )


def get_progress(db: Session, user_id: str, lesson_id: int) -> Progress | None:
    return (
        db.query(Progress)
        .filter(Progress.user_id == user_id, Progress.lesson_id == lesson_id)
        .first()
    )


def upsert_progress(db: Session, user_id: str, lesson_id: int, completed: bool, progress: int) -> tuple[Progress, bool]:
    """
    Create the (user, lesson) progress row or overwrite its values.
    Returns the row and whether it was created.
    """
    if not db.get(User, user_id):
        raise NotFound("User not found")
    if not db.get(Lesson, lesson_id):
        raise NotFound("Lesson not found")

    p = get_progress(db, user_id, lesson_id)
    created = p is None

    if created:
        p = Progress(id=str(uuid.uuid4()), user_id=user_id, lesson_id=lesson_id)
        db.add(p)

    p.completed = completed
    p.progress = progress

    db.commit()
    db.refresh(p)
    return p, created


def delete_progress(db: Session, progress_id: str) -> bool:
    p = db.get(Progress, progress_id)
    if not p:
        return False
    db.delete(p)
    db.commit()
    return True
