from app.models import Attempt, Progress, Question, Quiz, QuizDraft
from app.schemas import (
    AnswerOptionRead,
    AnswerResult,
    AttemptRead,
    DraftRead,
    ProgressRead,
    QuestionIn,
    QuestionRead,
    QuizContent,
    QuizRead,
)
from app.services.validation import infer_question_type


def serialize_question(question: Question) -> QuestionRead:
    return QuestionRead(
        id=question.id,
        text=question.text,
        hint=question.hint or "",
        image_url=question.image_url or "",
        type=infer_question_type(question.options),
        options=[AnswerOptionRead(**option) for option in question.options],
        position=question.position if question.position is not None else 0,
    )


def serialize_quiz(quiz: Quiz) -> QuizRead:
    ordered_questions = sorted(quiz.questions, key=lambda q: q.position or 0)
    return QuizRead(
        id=quiz.id,
        title=quiz.title,
        description=quiz.description or "",
        time_limit=quiz.time_limit,
        tags=list(quiz.tags or []),
        share_code=quiz.share_code,
        created_at=quiz.created_at,
        updated_at=quiz.updated_at,
        questions=[serialize_question(q) for q in ordered_questions],
    )


def serialize_draft(draft: QuizDraft) -> DraftRead:
    return DraftRead(
        id=draft.id,
        title=draft.title,
        description=draft.description or "",
        time_limit=draft.time_limit,
        tags=list(draft.tags or []),
        auto_generate_share_code=draft.auto_generate_share_code,
        questions=[
            QuestionRead(
                id=q["id"],
                text=q.get("text", ""),
                hint=q.get("hint", ""),
                image_url=q.get("image_url", ""),
                type=infer_question_type(q.get("options", [])),
                options=[AnswerOptionRead(**option) for option in q.get("options", [])],
                position=position,
            )
            for position, q in enumerate(draft.questions or [])
        ],
        current_step=draft.current_step,
        created_at=draft.created_at,
        updated_at=draft.updated_at,
    )


def draft_content(draft: QuizDraft) -> QuizContent:
    return QuizContent(
        title=draft.title,
        description=draft.description,
        time_limit=draft.time_limit,
        tags=list(draft.tags or []),
        questions=[QuestionIn.model_validate(q) for q in draft.questions or []],
    )


def serialize_progress(progress: Progress) -> ProgressRead:
    return ProgressRead(
        id=progress.id,
        quiz_id=progress.quiz_id,
        current_question_index=progress.current_question_index,
        answers={question_id: list(option_ids) for question_id, option_ids in (progress.answers or {}).items()},
        skipped_questions=list(progress.skipped_questions or []),
        hints_used=list(progress.hints_used or []),
        mode=progress.mode,
        started_at=progress.started_at,
        updated_at=progress.updated_at,
    )


def serialize_attempt(attempt: Attempt) -> AttemptRead:
    return AttemptRead(
        id=attempt.id,
        quiz_id=attempt.quiz_id,
        answers=[AnswerResult(**answer) for answer in attempt.answers or []],
        score=attempt.score,
        total_points=attempt.total_points,
        percentage=attempt.percentage,
        started_at=attempt.started_at,
        completed_at=attempt.completed_at,
        duration=attempt.duration,
        mode=attempt.mode,
        questions_skipped=attempt.questions_skipped,
        hints_used=list(attempt.hints_used or []),
    )
