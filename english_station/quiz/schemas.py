from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from ..lessons.schemas import LessonOut
from ..shared.schemas import CamelModel


# Authoring
class AnswerIn(CamelModel):
    content: str = Field(min_length=1)
    is_correct: bool = False


class QuestionIn(CamelModel):
    content: str = Field(min_length=1)
    type: str = Field(default="multiple-choice", max_length=50)
    answers: list[AnswerIn]

    @field_validator("answers")
    @classmethod
    def exactly_one_correct(cls, v: list[AnswerIn]) -> list[AnswerIn]:
        if len(v) < 2:
            raise ValueError("A question needs at least two answers.")
        correct = sum(1 for a in v if a.is_correct)
        if correct != 1:
            raise ValueError(f"A question needs exactly one correct answer (got {correct}).")
        return v


class QuizIn(CamelModel):
    title: str = Field(min_length=1, max_length=255)
    description: str = ""
    lesson_id: int
    time_limit: Optional[int] = Field(default=None, ge=1, description="Seconds")
    questions: list[QuestionIn] = []


# Learner view: no correctness flags before submission
class AnswerOut(CamelModel):
    id: int
    content: str


class QuestionOut(CamelModel):
    id: int
    content: str
    type: str
    answers: list[AnswerOut]


class QuizSummaryOut(CamelModel):
    id: int
    title: str
    description: str
    lesson_id: int
    time_limit: Optional[int] = None
    created_at: datetime
    updated_at: datetime
    lesson: Optional[LessonOut] = None


class QuizOut(QuizSummaryOut):
    questions: list[QuestionOut] = []


# Authoring view
class AnswerAdminOut(AnswerOut):
    is_correct: bool


class QuestionAdminOut(QuestionOut):
    answers: list[AnswerAdminOut]


class QuizAdminOut(QuizSummaryOut):
    questions: list[QuestionAdminOut] = []


# Submission
class SubmitAnswerIn(CamelModel):
    question_id: int
    answer_id: int


class SubmitQuizIn(CamelModel):
    user_id: str = Field(min_length=1)
    answers: list[SubmitAnswerIn]


class QuizResultOut(CamelModel):
    id: str
    user_id: str
    quiz_id: int
    score: int
    answers: list[dict[str, Any]]
    created_at: datetime


class QuizResultWithQuizOut(QuizResultOut):
    quiz: QuizSummaryOut


class SubmitQuizOut(CamelModel):
    score: int
    total_questions: int
    correct_answers: int
    quiz_result: QuizResultOut
