from datetime import datetime
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, Field

Mode = Literal["immediate", "end"]


class SubmittedAnswer(BaseModel):
    question_id: str
    selected_option_ids: List[str] = Field(default_factory=list)


class AnswerResult(BaseModel):
    question_id: str
    selected_option_ids: List[str]
    correct_option_ids: List[str]
    points_earned: float
    is_correct: bool


class ScoreResult(BaseModel):
    score: float
    total_points: int
    percentage: float
    answers: List[AnswerResult]
    questions_skipped: int


class AnswerCheck(BaseModel):
    selected_option_ids: List[str] = Field(default_factory=list)


class AttemptCreate(BaseModel):
    quiz_id: str
    answers: List[SubmittedAnswer] = Field(default_factory=list)
    started_at: Optional[datetime] = None
    mode: Mode
    hints_used: List[str] = Field(default_factory=list)


class AttemptRead(BaseModel):
    id: str
    quiz_id: str
    answers: List[AnswerResult]
    score: float
    total_points: int
    percentage: float
    started_at: datetime
    completed_at: datetime
    duration: int
    mode: str
    questions_skipped: int
    hints_used: List[str]


class AttemptHistoryItem(AttemptRead):
    quiz_title: Optional[str] = None


class ProgressSave(BaseModel):
    current_question_index: int = Field(default=0, ge=0)
    answers: Dict[str, List[str]] = Field(default_factory=dict)
    skipped_questions: List[str] = Field(default_factory=list)
    hints_used: List[str] = Field(default_factory=list)
    mode: Mode = "end"
    started_at: Optional[datetime] = None


class ProgressRead(BaseModel):
    id: str
    quiz_id: str
    current_question_index: int
    answers: Dict[str, List[str]]
    skipped_questions: List[str]
    hints_used: List[str]
    mode: str
    started_at: datetime
    updated_at: datetime
