from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, Field

from app.schemas.attempt import AttemptRead


class AnswerOptionIn(BaseModel):
    id: Optional[str] = None
    text: str = ""
    is_correct: bool = Field(default=False, validation_alias=AliasChoices("is_correct", "isCorrect"))
    rationale: str = ""
    image_url: str = Field(default="", validation_alias=AliasChoices("image_url", "imageUrl"))


class QuestionIn(BaseModel):
    """Question as sent by authors. `type` is never accepted, it is always derived."""

    id: Optional[str] = None
    # Exported files use "question", "answerOptions" and camelCase option fields
    text: str = Field(default="", validation_alias=AliasChoices("text", "question"))
    hint: str = ""
    image_url: str = Field(default="", validation_alias=AliasChoices("image_url", "imageUrl"))
    options: List[AnswerOptionIn] = Field(
        default_factory=list, validation_alias=AliasChoices("options", "answerOptions")
    )


class QuizContent(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    time_limit: Optional[int] = Field(default=None, validation_alias=AliasChoices("time_limit", "timeLimit"))
    tags: List[str] = Field(default_factory=list)
    questions: List[QuestionIn] = Field(default_factory=list)


class QuizCreate(QuizContent):
    auto_generate_share_code: bool = True
    share_code: Optional[str] = None


class QuizRename(BaseModel):
    title: str


class AnswerOptionRead(BaseModel):
    id: str
    text: str
    is_correct: bool
    rationale: str = ""
    image_url: str = ""


class QuestionRead(BaseModel):
    id: str
    text: str
    hint: str = ""
    image_url: str = ""
    type: str
    options: List[AnswerOptionRead]
    position: int = 0


class QuizRead(BaseModel):
    id: str
    title: str
    description: str
    time_limit: Optional[int]
    tags: List[str]
    share_code: Optional[str]
    created_at: datetime
    updated_at: datetime
    questions: List[QuestionRead] = Field(default_factory=list)


class QuizListItem(BaseModel):
    id: str
    title: str
    share_code: Optional[str]
    created_at: datetime
    updated_at: datetime
    question_count: int
    attempt_count: int
    best_score: Optional[float]
    last_attempt: Optional[datetime]


class AnswerOptionExport(BaseModel):
    text: str
    is_correct: bool
    rationale: str
    image_url: str


class QuestionExport(BaseModel):
    text: str
    hint: str
    image_url: str
    options: List[AnswerOptionExport]


class QuizExport(BaseModel):
    title: str
    description: str
    time_limit: Optional[int]
    tags: List[str]
    questions: List[QuestionExport]


class ShareCodeRead(BaseModel):
    share_code: str


class QuizSummary(BaseModel):
    total_questions: int
    total_options: int
    multi_select_count: int
    single_select_count: int
    with_images: int
    with_hints: int
    with_rationales: int


class QuizDetail(BaseModel):
    quiz: QuizRead
    attempts: List[AttemptRead]
