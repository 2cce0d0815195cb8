import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String
from sqlmodel import Field, SQLModel

from app.core.time import utc_now
from app.models.quiz import JSONDocument


class FeedbackMode(str):
    IMMEDIATE = "immediate"
    END = "end"


class Progress(SQLModel, table=True):
    """In-flight attempt snapshot. One row per quiz, overwritten on every save."""

    __tablename__ = "progress"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    quiz_id: str = Field(sa_column=Column(String, unique=True, nullable=False, index=True))
    current_question_index: int = Field(default=0, ge=0)
    # question id -> ordered list of selected option ids
    answers: dict[str, list[str]] = Field(default_factory=dict, sa_column=Column(JSONDocument, default=dict))
    skipped_questions: list[str] = Field(default_factory=list, sa_column=Column(JSONDocument, default=list))
    hints_used: list[str] = Field(default_factory=list, sa_column=Column(JSONDocument, default=list))
    mode: str = Field(default=FeedbackMode.END)
    started_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True)))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True)))


class Attempt(SQLModel, table=True):
    """Scored, immutable record of a finished attempt."""

    __tablename__ = "attempts"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    quiz_id: str = Field(foreign_key="quizzes.id", index=True)
    # Snapshot of per-question results, independent of later quiz edits
    answers: list[dict] = Field(default_factory=list, sa_column=Column(JSONDocument, default=list))
    score: float = Field(default=0.0, ge=0)
    total_points: int = Field(default=0, ge=0)
    percentage: float = Field(default=0.0, ge=0)
    started_at: datetime = Field(sa_column=Column(DateTime(timezone=True), nullable=False))
    completed_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True)))
    duration: int = Field(default=0, ge=0)
    mode: str
    questions_skipped: int = Field(default=0, ge=0)
    hints_used: list[str] = Field(default_factory=list, sa_column=Column(JSONDocument, default=list))
