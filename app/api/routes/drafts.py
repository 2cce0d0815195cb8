from typing import List

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from app.dependencies import get_db_session, get_share_code_generator
from app.schemas import (
    DraftListItem,
    DraftRead,
    DraftSave,
    OptionCheck,
    OptionCheckResult,
    PublishResult,
    QuizSummary,
)
from app.services import lifecycle
from app.services.serializers import draft_content, serialize_draft, serialize_quiz
from app.services.share_codes import ShareCodeGenerator
from app.services.validation import summarize_questions, validate_option

router = APIRouter(prefix="/api/drafts", tags=["drafts"])


@router.get("", response_model=List[DraftListItem])
async def list_drafts(db: AsyncSession = Depends(get_db_session)):
    drafts = await lifecycle.list_drafts(db)
    return [
        DraftListItem(
            id=d.id,
            title=d.title,
            question_count=len(d.questions or []),
            current_step=d.current_step,
            created_at=d.created_at,
            updated_at=d.updated_at,
        )
        for d in drafts
    ]


@router.post("", response_model=DraftRead)
async def save_draft(payload: DraftSave, db: AsyncSession = Depends(get_db_session)):
    draft = await lifecycle.save_draft(db, payload)
    return serialize_draft(draft)


@router.post("/options/validate", response_model=OptionCheckResult)
async def check_option(payload: OptionCheck):
    options = payload.options or [payload.option]
    errors = validate_option(payload.option, options)
    return OptionCheckResult(errors=errors, valid=not errors)


@router.get("/{draft_id}", response_model=DraftRead)
async def get_draft(draft_id: str, db: AsyncSession = Depends(get_db_session)):
    return serialize_draft(await lifecycle.load_draft(db, draft_id))


@router.get("/{draft_id}/summary", response_model=QuizSummary)
async def draft_summary(draft_id: str, db: AsyncSession = Depends(get_db_session)):
    draft = await lifecycle.load_draft(db, draft_id)
    return summarize_questions(draft_content(draft).questions)


@router.delete("/{draft_id}")
async def discard_draft(draft_id: str, db: AsyncSession = Depends(get_db_session)):
    await lifecycle.discard_draft(db, draft_id)
    return {"deleted": draft_id}


@router.post("/{draft_id}/publish", response_model=PublishResult, status_code=201)
async def publish_draft(
    draft_id: str,
    db: AsyncSession = Depends(get_db_session),
    generate_share_code: ShareCodeGenerator = Depends(get_share_code_generator),
):
    quiz = await lifecycle.publish_draft(db, draft_id, generate_share_code)
    return PublishResult(quiz_id=quiz.id, quiz=serialize_quiz(quiz))
