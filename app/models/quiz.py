import uuid
from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Column, DateTime, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Field, Relationship, SQLModel

from app.core.time import utc_now

# JSONB on Postgres, plain JSON elsewhere (tests run on SQLite)
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class QuestionType(str):
    SINGLE = "single"
    MULTIPLE = "multiple"


class Quiz(SQLModel, table=True):
    __tablename__ = "quizzes"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    title: str = Field(default="Untitled Quiz")
    description: str = Field(default="")
    time_limit: Optional[int] = None
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSONDocument, default=list))
    share_code: Optional[str] = Field(
        default=None, sa_column=Column(String, unique=True, nullable=True, index=True)
    )
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True)))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True)))

    questions: List["Question"] = Relationship(
        back_populates="quiz",
        sa_relationship_kwargs={"order_by": "Question.position"},
    )


class Question(SQLModel, table=True):
    __tablename__ = "questions"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    quiz_id: str = Field(foreign_key="quizzes.id")
    text: str
    hint: str = Field(default="")
    image_url: str = Field(default="")
    # [{"id", "text", "is_correct", "rationale", "image_url"}, ...]
    options: list[dict] = Field(default_factory=list, sa_column=Column(JSONDocument, default=list))
    type: str = Field(default=QuestionType.SINGLE)
    position: int = Field(sa_column=Column(Integer), default=0)

    quiz: Optional[Quiz] = Relationship(back_populates="questions")
