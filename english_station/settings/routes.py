from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..shared.database import db_dependency
from ..shared.schemas import MessageOut
from .crud import get_settings, upsert_settings
from .schemas import SettingsUpdateIn


def build_router(SessionLocal) -> APIRouter:
    router = APIRouter()
    get_db = db_dependency(SessionLocal)

    @router.get("", response_model=dict)
    def get_all(db: Session = Depends(get_db)):
        return get_settings(db)

    @router.post("", response_model=MessageOut)
    def update(payload: SettingsUpdateIn, db: Session = Depends(get_db)):
        upsert_settings(db, payload.settings)
        return MessageOut(message="Settings updated successfully")

    return router
