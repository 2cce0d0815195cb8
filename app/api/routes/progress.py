from typing import Optional

from fastapi import APIRouter, Depends
from sqlmodel.ext.asyncio.session import AsyncSession

from app.dependencies import get_db_session
from app.schemas import ProgressRead, ProgressSave
from app.services import lifecycle
from app.services.serializers import serialize_progress

router = APIRouter(prefix="/api/progress", tags=["progress"])


@router.get("/{quiz_id}", response_model=Optional[ProgressRead])
async def get_progress(quiz_id: str, db: AsyncSession = Depends(get_db_session)):
    progress = await lifecycle.get_progress(db, quiz_id)
    # No progress is a normal answer, not a 404
    return serialize_progress(progress) if progress else None


@router.post("/{quiz_id}", response_model=ProgressRead)
async def save_progress(quiz_id: str, payload: ProgressSave, db: AsyncSession = Depends(get_db_session)):
    progress = await lifecycle.save_progress(db, quiz_id, payload)
    return serialize_progress(progress)


@router.delete("/{quiz_id}")
async def clear_progress(quiz_id: str, db: AsyncSession = Depends(get_db_session)):
    await lifecycle.clear_progress(db, quiz_id)
    return {"cleared": quiz_id}
