from typing import List

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from app.dependencies import get_db_session
from app.schemas import AttemptCreate, AttemptHistoryItem, AttemptRead
from app.services import lifecycle
from app.services.serializers import serialize_attempt

router = APIRouter(prefix="/api/attempts", tags=["attempts"])


@router.get("", response_model=List[AttemptHistoryItem])
async def list_attempts(db: AsyncSession = Depends(get_db_session)):
    attempts = await lifecycle.list_attempts(db)
    titles = await lifecycle.quiz_titles(db, list({a.quiz_id for a in attempts}))
    return [
        AttemptHistoryItem(**serialize_attempt(a).model_dump(), quiz_title=titles.get(a.quiz_id))
        for a in attempts
    ]


@router.get("/quiz/{quiz_id}", response_model=List[AttemptRead])
async def list_quiz_attempts(quiz_id: str, db: AsyncSession = Depends(get_db_session)):
    attempts = await lifecycle.list_attempts(db, quiz_id=quiz_id)
    return [serialize_attempt(a) for a in attempts]


@router.get("/{attempt_id}", response_model=AttemptRead)
async def get_attempt(attempt_id: str, db: AsyncSession = Depends(get_db_session)):
    return serialize_attempt(await lifecycle.load_attempt(db, attempt_id))


@router.post("", response_model=AttemptRead, status_code=201)
async def submit_attempt(payload: AttemptCreate, db: AsyncSession = Depends(get_db_session)):
    attempt = await lifecycle.submit_attempt(db, payload)
    return serialize_attempt(attempt)


@router.delete("/{attempt_id}")
async def delete_attempt(attempt_id: str, db: AsyncSession = Depends(get_db_session)):
    await lifecycle.delete_attempt(db, attempt_id)
    return {"deleted": attempt_id}
