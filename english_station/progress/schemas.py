from datetime import datetime
from typing import Optional

from pydantic import Field

from ..lessons.schemas import LessonOut
from ..shared.schemas import CamelModel


class ProgressUpsertIn(CamelModel):
    user_id: str = Field(min_length=1)
    lesson_id: int
    completed: bool = False
    progress: int = Field(default=0, ge=0, le=100)


class UserSummaryOut(CamelModel):
    id: str
    username: str


class ProgressOut(CamelModel):
    id: str
    user_id: str
    lesson_id: int
    completed: bool
    progress: int
    created_at: datetime
    updated_at: datetime


class ProgressWithLessonOut(ProgressOut):
    lesson: Optional[LessonOut] = None


class ProgressWithUserOut(ProgressOut):
    user: Optional[UserSummaryOut] = None


class ProgressFullOut(ProgressOut):
    user: Optional[UserSummaryOut] = None
    lesson: Optional[LessonOut] = None
