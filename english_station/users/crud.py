import uuid

from sqlalchemy import or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from ..progress.models import Progress
from ..quiz.models import Quiz, QuizResult
from ..shared.errors import Conflict
from ..shared.security import hash_password
from .models import User


def list_users(db: Session):
    return db.query(User).order_by(User.created_at.desc()).all()


def get_user(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)


def get_user_detail(db: Session, user_id: str) -> User | None:
    return (
        db.query(User)
        .options(
            selectinload(User.progress_records).selectinload(Progress.lesson),
            selectinload(User.quiz_results).selectinload(QuizResult.quiz).selectinload(Quiz.lesson),
        )
        .filter(User.id == user_id)
        .first()
    )


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_user_by_refresh_token(db: Session, refresh_token: str) -> User | None:
    return db.query(User).filter(User.refresh_token == refresh_token).first()


def _ensure_unique(db: Session, email: str | None, username: str | None, exclude_id: str | None = None) -> None:
    clauses = []
    if email:
        clauses.append(User.email == email)
    if username:
        clauses.append(User.username == username)
    if not clauses:
        return

    q = db.query(User).filter(or_(*clauses))
    if exclude_id:
        q = q.filter(User.id != exclude_id)
    if q.first():
        raise Conflict("User already exists")


def _commit_unique(db: Session) -> None:
    # a concurrent registration can still win the race to the unique index
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict("User already exists")


def create_user(db: Session, email: str, username: str, password: str) -> User:
    _ensure_unique(db, email, username)

    user = User(
        id=str(uuid.uuid4()),
        email=email,
        username=username,
        password=hash_password(password),
    )
    db.add(user)
    _commit_unique(db)
    db.refresh(user)
    return user


def update_user(db: Session, user_id: str, payload: dict) -> User | None:
    """
    Partial update: only keys present in ``payload`` are touched.
    A new password is hashed before it is stored.
    """
    user = get_user(db, user_id)
    if not user:
        return None

    _ensure_unique(db, payload.get("email"), payload.get("username"), exclude_id=user_id)

    for field, value in payload.items():
        if field == "password":
            value = hash_password(value)
        if hasattr(user, field):
            setattr(user, field, value)

    _commit_unique(db)
    db.refresh(user)
    return user


def set_refresh_token(db: Session, user: User, refresh_token: str | None) -> User:
    user.refresh_token = refresh_token
    db.commit()
    db.refresh(user)
    return user


def set_admin(db: Session, user_id: str, is_admin: bool) -> User | None:
    user = get_user(db, user_id)
    if not user:
        return None
    user.is_admin = is_admin
    db.commit()
    db.refresh(user)
    return user


def delete_user(db: Session, user_id: str) -> bool:
    user = get_user(db, user_id)
    if not user:
        return False
    db.delete(user)
    db.commit()
    return True
