import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from app.core.time import utc_now
from app.models.quiz import JSONDocument


class QuizDraft(SQLModel, table=True):
    __tablename__ = "quiz_drafts"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    title: str = Field(default="Untitled Quiz")
    description: str = Field(default="")
    time_limit: Optional[int] = None
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSONDocument, default=list))
    auto_generate_share_code: bool = Field(default=True)
    # Questions are embedded documents; the whole list is replaced on every save
    questions: list[dict] = Field(default_factory=list, sa_column=Column(JSONDocument, default=list))
    current_step: int = Field(default=1, ge=1, le=3)
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True)))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime(timezone=True)))
