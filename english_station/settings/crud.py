from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .models import Setting


def get_settings(db: Session) -> dict[str, Any]:
    return {s.key: s.value for s in db.query(Setting).order_by(Setting.key.asc()).all()}


def upsert_settings(db: Session, values: dict[str, Any]) -> None:
    # all keys land in one commit or none do
    try:
        for key, value in values.items():
            s = db.get(Setting, key)
            if s:
                s.value = value
            else:
                db.add(Setting(key=key, value=value))
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
