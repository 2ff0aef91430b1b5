from sqlalchemy.orm import Session, selectinload

from .models import Lesson, Vocabulary


def list_lessons(db: Session, level: str | None = None):
    q = db.query(Lesson)
    if level:
        q = q.filter(Lesson.level == level)
    return q.order_by(Lesson.created_at.asc(), Lesson.id.asc()).all()


def get_lesson(db: Session, lesson_id: int) -> Lesson | None:
    return (
        db.query(Lesson)
        .options(selectinload(Lesson.vocabulary))
        .filter(Lesson.id == lesson_id)
        .first()
    )


def create_lesson(db: Session, payload: dict) -> Lesson:
    lesson = Lesson(**payload)
    db.add(lesson)
    db.commit()
    db.refresh(lesson)
    return lesson


def update_lesson(db: Session, lesson_id: int, payload: dict) -> Lesson | None:
    lesson = get_lesson(db, lesson_id)
    if not lesson:
        return None

    for field, value in payload.items():
        setattr(lesson, field, value)

    db.commit()
    db.refresh(lesson)
    return lesson


def delete_lesson(db: Session, lesson_id: int) -> bool:
    lesson = db.get(Lesson, lesson_id)
    if not lesson:
        return False
    db.delete(lesson)
    db.commit()
    return True


def list_vocabulary(db: Session, lesson_id: int):
    return db.query(Vocabulary).filter(Vocabulary.lesson_id == lesson_id).order_by(Vocabulary.id.asc()).all()


def add_vocabulary(db: Session, lesson_id: int, payload: dict) -> Vocabulary:
    v = Vocabulary(lesson_id=lesson_id, **payload)
    db.add(v)
    db.commit()
    db.refresh(v)
    return v


def delete_vocabulary(db: Session, vocab_id: int) -> bool:
    v = db.get(Vocabulary, vocab_id)
    if not v:
        return False
    db.delete(v)
    db.commit()
    return True
