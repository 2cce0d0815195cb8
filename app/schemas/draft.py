from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.schemas.quiz import AnswerOptionIn, QuestionRead, QuizContent, QuizRead


class DraftSave(QuizContent):
    id: Optional[str] = None
    auto_generate_share_code: bool = True
    current_step: int = Field(default=1, ge=1, le=3)


class DraftRead(BaseModel):
    id: str
    title: str
    description: str
    time_limit: Optional[int]
    tags: List[str]
    auto_generate_share_code: bool
    questions: List[QuestionRead]
    current_step: int
    created_at: datetime
    updated_at: datetime


class DraftListItem(BaseModel):
    id: str
    title: str
    question_count: int
    current_step: int
    created_at: datetime
    updated_at: datetime


class PublishResult(BaseModel):
    quiz_id: str
    quiz: QuizRead
    message: str = "Quiz published successfully"


class OptionCheck(BaseModel):
    """One option being edited, checked against its siblings (which include it)."""

    option: AnswerOptionIn
    options: List[AnswerOptionIn] = Field(default_factory=list)


class OptionCheckResult(BaseModel):
    errors: List[str]
    valid: bool

