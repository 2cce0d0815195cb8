from app.schemas.attempt import (
    AnswerCheck,
    AnswerResult,
    AttemptCreate,
    AttemptHistoryItem,
    AttemptRead,
    ProgressRead,
    ProgressSave,
    ScoreResult,
    SubmittedAnswer,
)
from app.schemas.draft import DraftListItem, DraftRead, DraftSave, OptionCheck, OptionCheckResult, PublishResult
from app.schemas.quiz import (
    AnswerOptionIn,
    AnswerOptionRead,
    QuestionExport,
    QuestionIn,
    QuestionRead,
    QuizContent,
    QuizCreate,
    QuizDetail,
    QuizExport,
    QuizListItem,
    QuizRead,
    QuizRename,
    QuizSummary,
    ShareCodeRead,
)

__all__ = [
    "AnswerCheck",
    "AnswerResult",
    "AttemptCreate",
    "AttemptHistoryItem",
    "AttemptRead",
    "ProgressRead",
    "ProgressSave",
    "ScoreResult",
    "SubmittedAnswer",
    "DraftListItem",
    "DraftRead",
    "DraftSave",
    "OptionCheck",
    "OptionCheckResult",
    "PublishResult",
    "AnswerOptionIn",
    "AnswerOptionRead",
    "QuestionExport",
    "QuestionIn",
    "QuestionRead",
    "QuizContent",
    "QuizCreate",
    "QuizDetail",
    "QuizExport",
    "QuizListItem",
    "QuizRead",
    "QuizRename",
    "QuizSummary",
    "ShareCodeRead",
]
