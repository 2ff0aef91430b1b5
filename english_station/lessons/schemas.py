from datetime import datetime
from typing import Optional

from pydantic import Field

from ..shared.schemas import LEVEL_PATTERN, CamelModel


class LessonIn(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    content: str = ""
    level: Optional[str] = Field(default=None, pattern=LEVEL_PATTERN, description="CEFR level A1..C2")


class LessonOut(LessonIn):
    id: int
    created_at: datetime
    updated_at: datetime


class VocabularyIn(CamelModel):
    word: str = Field(min_length=1, max_length=255)
    meaning: str = Field(min_length=1)
    example: str = ""


class VocabularyOut(VocabularyIn):
    id: int
    lesson_id: int
    created_at: datetime


class LessonDetailOut(LessonOut):
    vocabulary: list[VocabularyOut] = []
