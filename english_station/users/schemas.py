from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from ..progress.schemas import ProgressWithLessonOut
from ..quiz.schemas import QuizResultWithQuizOut
from ..shared.schemas import LEVEL_PATTERN, CamelModel

MAX_BCRYPT_BYTES = 72


def _bcrypt_max_bytes(v: Optional[str]) -> Optional[str]:
    if v is not None and len(v.encode("utf-8")) > MAX_BCRYPT_BYTES:
        raise ValueError("Password too long (max 72 bytes for bcrypt).")
    return v


class RegisterIn(CamelModel):
    email: EmailStr
    username: str = Field(min_length=3, max_length=100)
    password: str = Field(min_length=8, max_length=128)

    @field_validator("password")
    @classmethod
    def bcrypt_max_bytes(cls, v: str) -> str:
        return _bcrypt_max_bytes(v)


class UserUpdateIn(CamelModel):
    email: Optional[EmailStr] = None
    username: Optional[str] = Field(default=None, min_length=3, max_length=100)
    password: Optional[str] = Field(default=None, min_length=8, max_length=128)
    level: Optional[str] = Field(default=None, pattern=LEVEL_PATTERN)

    @field_validator("password")
    @classmethod
    def bcrypt_max_bytes(cls, v: Optional[str]) -> Optional[str]:
        return _bcrypt_max_bytes(v)


class LoginIn(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=128)


class RefreshIn(CamelModel):
    refresh_token: Optional[str] = None


class VerifyIn(CamelModel):
    token: str


class VerifyOut(CamelModel):
    sub: str
    email: str


class TokenPairOut(CamelModel):
    token: str
    refresh_token: str


class UserOut(CamelModel):
    id: str
    email: str
    username: str
    is_admin: bool
    level: str
    overall_progress: int
    lessons_completed: int
    streak: int
    created_at: datetime
    updated_at: datetime


class LoginOut(CamelModel):
    id: str
    email: str
    username: str
    is_admin: bool
    token: str
    refresh_token: str


class UserDetailOut(UserOut):
    progress: list[ProgressWithLessonOut] = Field(
        default_factory=list, validation_alias="progress_records", serialization_alias="progress"
    )
    quiz_results: list[QuizResultWithQuizOut] = []
