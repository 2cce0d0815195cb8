import logging
from typing import List, Optional

from sqlalchemy import delete, func
from sqlalchemy.orm import selectinload
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from app.core.errors import NotFoundError, ValidationError
from app.core.time import utc_now
from app.models import Attempt, Progress, Question, Quiz
from app.schemas import QuizContent, QuizCreate, QuizListItem
from app.services.share_codes import ShareCodeGenerator
from app.services.validation import normalize_question, validate_quiz_content, validate_title

logger = logging.getLogger("lifecycle")

DEFAULT_TITLE = "Untitled Quiz"


def build_quiz(content: QuizContent, share_code: Optional[str] = None, keep_ids: bool = False) -> Quiz:
    """Assemble a transient Quiz with its questions; the caller adds and commits it."""
    quiz = Quiz(
        title=content.title or DEFAULT_TITLE,
        description=content.description or "",
        time_limit=content.time_limit or None,
        tags=list(content.tags),
        share_code=share_code,
    )
    for idx, question in enumerate(content.questions):
        document = normalize_question(question, keep_ids=keep_ids)
        quiz.questions.append(
            Question(
                id=document["id"],
                text=document["text"],
                hint=document["hint"],
                image_url=document["image_url"],
                options=document["options"],
                type=document["type"],
                position=idx,
            )
        )
    return quiz


async def load_quiz(db: AsyncSession, quiz_id: str) -> Quiz:
    result = await db.exec(select(Quiz).options(selectinload(Quiz.questions)).where(Quiz.id == quiz_id))
    quiz = result.first()
    if not quiz:
        raise NotFoundError("Quiz not found")
    return quiz


async def load_quiz_by_share_code(db: AsyncSession, code: str) -> Quiz:
    result = await db.exec(select(Quiz).options(selectinload(Quiz.questions)).where(Quiz.share_code == code))
    quiz = result.first()
    if not quiz:
        raise NotFoundError("Quiz not found")
    return quiz


async def _store(db: AsyncSession, quiz: Quiz) -> Quiz:
    db.add(quiz)
    await db.commit()
    await db.refresh(quiz, attribute_names=["questions"])
    return quiz


async def create_quiz(db: AsyncSession, payload: QuizCreate, generate_share_code: ShareCodeGenerator) -> Quiz:
    errors = validate_quiz_content(payload)
    if errors:
        raise ValidationError(errors)
    if payload.auto_generate_share_code:
        share_code = generate_share_code()
    else:
        share_code = payload.share_code or None
    quiz = await _store(db, build_quiz(payload, share_code=share_code))
    logger.info("Quiz created quiz=%s questions=%s share_code=%s", quiz.id, len(quiz.questions), quiz.share_code)
    return quiz


async def import_quiz(db: AsyncSession, payload: QuizContent) -> Quiz:
    errors = validate_quiz_content(payload)
    if errors:
        raise ValidationError(errors)
    quiz = await _store(db, build_quiz(payload))
    logger.info("Quiz imported quiz=%s questions=%s", quiz.id, len(quiz.questions))
    return quiz


async def list_quizzes(db: AsyncSession) -> List[QuizListItem]:
    result = await db.exec(select(Quiz).options(selectinload(Quiz.questions)).order_by(Quiz.updated_at.desc()))
    quizzes = result.all()
    stats_result = await db.exec(
        select(
            Attempt.quiz_id,
            func.count(Attempt.id),
            func.max(Attempt.percentage),
            func.max(Attempt.completed_at),
        ).group_by(Attempt.quiz_id)
    )
    stats = {row[0]: row[1:] for row in stats_result.all()}
    items = []
    for quiz in quizzes:
        attempt_count, best_score, last_attempt = stats.get(quiz.id, (0, None, None))
        items.append(
            QuizListItem(
                id=quiz.id,
                title=quiz.title,
                share_code=quiz.share_code,
                created_at=quiz.created_at,
                updated_at=quiz.updated_at,
                question_count=len(quiz.questions),
                attempt_count=attempt_count,
                best_score=best_score,
                last_attempt=last_attempt,
            )
        )
    return items


async def rename_quiz(db: AsyncSession, quiz_id: str, title: str) -> Quiz:
    errors = validate_title(title) if title.strip() else ["Quiz title is required"]
    if errors:
        raise ValidationError(errors)
    quiz = await load_quiz(db, quiz_id)
    quiz.title = title
    quiz.updated_at = utc_now()
    await db.commit()
    logger.info("Quiz renamed quiz=%s", quiz_id)
    return quiz


async def delete_quiz(db: AsyncSession, quiz_id: str) -> None:
    quiz = await db.get(Quiz, quiz_id)
    if not quiz:
        raise NotFoundError("Quiz not found")
    # Deleting a quiz takes its progress, attempts and questions with it
    await db.exec(delete(Progress).where(Progress.quiz_id == quiz_id))
    await db.exec(delete(Attempt).where(Attempt.quiz_id == quiz_id))
    await db.exec(delete(Question).where(Question.quiz_id == quiz_id))
    await db.delete(quiz)
    await db.commit()
    logger.info("Quiz deleted quiz=%s", quiz_id)


async def ensure_share_code(db: AsyncSession, quiz_id: str, generate_share_code: ShareCodeGenerator) -> str:
    quiz = await load_quiz(db, quiz_id)
    if not quiz.share_code:
        quiz.share_code = generate_share_code()
        quiz.updated_at = utc_now()
        await db.commit()
        logger.info("Share code assigned quiz=%s code=%s", quiz_id, quiz.share_code)
    return quiz.share_code


async def duplicate_quiz(db: AsyncSession, quiz_id: str) -> Quiz:
    source = await load_quiz(db, quiz_id)
    content = QuizContent(
        title=f"{source.title} (Copy)",
        description=source.description,
        time_limit=source.time_limit,
        tags=list(source.tags or []),
        questions=[
            {"text": q.text, "hint": q.hint, "image_url": q.image_url, "options": q.options}
            for q in source.questions
        ],
    )
    # Fresh ids so attempts of the copy never collide with the source quiz
    quiz = await _store(db, build_quiz(content, keep_ids=False))
    logger.info("Quiz duplicated source=%s copy=%s", quiz_id, quiz.id)
    return quiz
