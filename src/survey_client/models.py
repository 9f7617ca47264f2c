"""Pydantic shapes for the backend's JSON payloads."""

from __future__ import annotations

from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class Role(StrEnum):
    STUDENT = "student"
    PROFESSOR = "professor"
    ADMIN = "admin"


class QuestionType(StrEnum):
    NPS = "nps"
    FREE_TEXT = "free_text"
    RATING = "rating"
    MULTIPLE_CHOICE = "multiple_choice"


class UserProfile(BaseModel):
    """User record as returned by ``/login`` and cached in session storage.

    Every field is optional and unknown keys are kept, so any JSON object
    the backend sends round-trips through the session cache.
    """

    model_config = ConfigDict(extra="allow")

    id: int | str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    role: str | None = None
    requested_role: str | None = None
    created_at: datetime | str | None = None
    updated_at: datetime | str | None = None

    @property
    def full_name(self) -> str:
        return " ".join(str(part) for part in (self.first_name, self.last_name) if part)


class Credentials(BaseModel):
    email: str
    password: str


class Registration(BaseModel):
    model_config = ConfigDict(extra="allow")

    first_name: str
    last_name: str
    email: str
    password: str
    requested_role: Role = Role.STUDENT


class SemesterDraft(BaseModel):
    name: str
    year: int
    period: int = Field(ge=1, le=2)
    start_date: datetime
    end_date: datetime
    is_active: bool = False


class SubjectDraft(BaseModel):
    name: str
    code: str
    description: str | None = None
    professor_id: int


class EnrollmentDraft(BaseModel):
    student_id: int
    subject_id: int
    semester_id: int


class SurveyDraft(BaseModel):
    title: str
    description: str | None = None
    subject_id: int
    semester_id: int
    is_active: bool = True
    open_date: datetime | None = None
    close_date: datetime | None = None


class QuestionDraft(BaseModel):
    type: QuestionType
    text: str
    required: bool = False
    order: int
    # JSON-encoded option list for multiple choice questions.
    options: str | None = None


class ResponseSubmission(BaseModel):
    survey_id: int
    question_id: int
    answer: str
