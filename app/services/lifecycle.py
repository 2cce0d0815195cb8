"""Draft publication and attempt-taking state transitions.

Drafts move Draft -> Published (or are discarded). Attempts move
NotStarted -> InProgress (one Progress row per quiz) -> Submitted (an
immutable Attempt, Progress removed). Each transition is a single
read-modify-write committed once; concurrent progress saves are last write
wins.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.errors import NotFoundError, ValidationError
from app.core.time import ensure_utc, utc_now
from app.models import Attempt, Progress, Quiz, QuizDraft
from app.schemas import AnswerResult, AttemptCreate, DraftSave, ProgressSave
from app.services.quizzes import DEFAULT_TITLE, build_quiz, load_quiz
from app.services.scoring import score_attempt, score_question
from app.services.serializers import draft_content, serialize_question
from app.services.share_codes import ShareCodeGenerator
from app.services.validation import normalize_question, validate_quiz_content

logger = logging.getLogger("lifecycle")


# Drafts


async def load_draft(db: AsyncSession, draft_id: str) -> QuizDraft:
    draft = await db.get(QuizDraft, draft_id)
    if not draft:
        raise NotFoundError("Draft not found")
    return draft


async def list_drafts(db: AsyncSession) -> List[QuizDraft]:
    result = await db.exec(select(QuizDraft).order_by(QuizDraft.updated_at.desc()))
    return list(result.all())


async def save_draft(db: AsyncSession, payload: DraftSave) -> QuizDraft:
    """Create or overwrite a draft. Partial content is fine; nothing is validated here."""
    draft = await db.get(QuizDraft, payload.id) if payload.id else None
    if draft is None:
        draft = QuizDraft(id=payload.id) if payload.id else QuizDraft()
        db.add(draft)

    draft.title = payload.title if payload.title is not None else DEFAULT_TITLE
    draft.description = payload.description or ""
    draft.time_limit = payload.time_limit
    draft.tags = list(payload.tags)
    draft.auto_generate_share_code = payload.auto_generate_share_code
    draft.current_step = payload.current_step
    # Type is re-derived from the options on every save
    draft.questions = [normalize_question(question) for question in payload.questions]
    draft.updated_at = utc_now()

    await db.commit()
    logger.info(
        "Draft saved draft=%s step=%s questions=%s", draft.id, draft.current_step, len(draft.questions)
    )
    return draft


async def discard_draft(db: AsyncSession, draft_id: str) -> None:
    draft = await load_draft(db, draft_id)
    await db.delete(draft)
    await db.commit()
    logger.info("Draft discarded draft=%s", draft_id)


async def publish_draft(db: AsyncSession, draft_id: str, generate_share_code: ShareCodeGenerator) -> Quiz:
    """Turn a draft into a quiz. Either the quiz exists and the draft is gone, or nothing changed."""
    draft = await load_draft(db, draft_id)
    content = draft_content(draft)
    errors = validate_quiz_content(content)
    if errors:
        logger.info("Draft publish rejected draft=%s violations=%s", draft_id, len(errors))
        raise ValidationError(errors)

    share_code = generate_share_code() if draft.auto_generate_share_code else None
    quiz = build_quiz(content, share_code=share_code)
    db.add(quiz)
    await db.delete(draft)
    await db.commit()
    await db.refresh(quiz, attribute_names=["questions"])
    logger.info("Draft published draft=%s quiz=%s share_code=%s", draft_id, quiz.id, quiz.share_code)
    return quiz


# Progress


async def get_progress(db: AsyncSession, quiz_id: str) -> Optional[Progress]:
    result = await db.exec(select(Progress).where(Progress.quiz_id == quiz_id))
    return result.first()


def _same_session(progress: Progress, started_at: Optional[datetime]) -> bool:
    return started_at is None or ensure_utc(progress.started_at) == ensure_utc(started_at)


async def save_progress(db: AsyncSession, quiz_id: str, payload: ProgressSave) -> Progress:
    progress = await get_progress(db, quiz_id)
    if progress is None:
        progress = Progress(quiz_id=quiz_id, mode=payload.mode, started_at=payload.started_at or utc_now())
        db.add(progress)
    elif not _same_session(progress, payload.started_at):
        # A new session for the same quiz replaces the old one
        progress.mode = payload.mode
        progress.started_at = payload.started_at
    elif progress.mode != payload.mode:
        logger.warning(
            "Ignoring mode change quiz=%s stored=%s requested=%s", quiz_id, progress.mode, payload.mode
        )

    progress.current_question_index = payload.current_question_index
    progress.answers = {question_id: list(option_ids) for question_id, option_ids in payload.answers.items()}
    progress.skipped_questions = list(payload.skipped_questions)
    progress.hints_used = list(payload.hints_used)
    progress.updated_at = utc_now()
    await db.commit()
    logger.debug("Progress saved quiz=%s index=%s", quiz_id, progress.current_question_index)
    return progress


async def clear_progress(db: AsyncSession, quiz_id: str) -> None:
    await db.exec(delete(Progress).where(Progress.quiz_id == quiz_id))
    await db.commit()


# Attempts


async def check_answer(db: AsyncSession, quiz_id: str, question_id: str, selected: List[str]) -> AnswerResult:
    """Score a single question without recording anything (immediate feedback mode)."""
    quiz = await load_quiz(db, quiz_id)
    question = next((q for q in quiz.questions if q.id == question_id), None)
    if question is None:
        raise NotFoundError("Question not found")
    return score_question(serialize_question(question), selected)


async def submit_attempt(db: AsyncSession, payload: AttemptCreate) -> Attempt:
    quiz = await load_quiz(db, payload.quiz_id)
    questions = [serialize_question(q) for q in sorted(quiz.questions, key=lambda q: q.position or 0)]
    result = score_attempt(questions, payload.answers)

    progress = await get_progress(db, quiz.id)
    completed_at = utc_now()
    if payload.started_at is not None:
        started_at = ensure_utc(payload.started_at)
    elif progress is not None:
        started_at = ensure_utc(progress.started_at)
    else:
        started_at = completed_at
    hints_used = payload.hints_used or (list(progress.hints_used or []) if progress else [])

    attempt = Attempt(
        quiz_id=quiz.id,
        answers=[answer.model_dump() for answer in result.answers],
        score=result.score,
        total_points=result.total_points,
        percentage=result.percentage,
        started_at=started_at,
        completed_at=completed_at,
        duration=max(0, int((completed_at - started_at).total_seconds())),
        mode=payload.mode,
        questions_skipped=result.questions_skipped,
        hints_used=hints_used,
    )
    db.add(attempt)
    if progress is not None:
        await db.delete(progress)
    await db.commit()
    logger.info(
        "Attempt submitted quiz=%s attempt=%s score=%.2f/%s percentage=%s skipped=%s mode=%s",
        quiz.id,
        attempt.id,
        attempt.score,
        attempt.total_points,
        attempt.percentage,
        attempt.questions_skipped,
        attempt.mode,
    )
    return attempt


async def load_attempt(db: AsyncSession, attempt_id: str) -> Attempt:
    attempt = await db.get(Attempt, attempt_id)
    if not attempt:
        raise NotFoundError("Attempt not found")
    return attempt


async def list_attempts(db: AsyncSession, quiz_id: Optional[str] = None) -> List[Attempt]:
    statement = select(Attempt).order_by(Attempt.completed_at.desc())
    if quiz_id is not None:
        statement = statement.where(Attempt.quiz_id == quiz_id)
    result = await db.exec(statement)
    return list(result.all())


async def quiz_titles(db: AsyncSession, quiz_ids: List[str]) -> dict:
    if not quiz_ids:
        return {}
    result = await db.exec(select(Quiz.id, Quiz.title).where(Quiz.id.in_(quiz_ids)))
    return {row[0]: row[1] for row in result.all()}


async def delete_attempt(db: AsyncSession, attempt_id: str) -> None:
    attempt = await load_attempt(db, attempt_id)
    await db.delete(attempt)
    await db.commit()
    logger.info("Attempt deleted attempt=%s", attempt_id)
