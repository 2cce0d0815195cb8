import re
from typing import List

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlmodel.ext.asyncio.session import AsyncSession

from app.dependencies import get_db_session, get_share_code_generator
from app.schemas import (
    AnswerCheck,
    AnswerResult,
    QuestionExport,
    QuizContent,
    QuizCreate,
    QuizDetail,
    QuizExport,
    QuizListItem,
    QuizRead,
    QuizRename,
    ShareCodeRead,
)
from app.services import lifecycle
from app.services import quizzes as quiz_service
from app.services.serializers import serialize_attempt, serialize_quiz
from app.services.share_codes import ShareCodeGenerator

router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])


@router.get("", response_model=List[QuizListItem])
async def list_quizzes(db: AsyncSession = Depends(get_db_session)):
    return await quiz_service.list_quizzes(db)


@router.post("", response_model=QuizRead, status_code=201)
async def create_quiz(
    payload: QuizCreate,
    db: AsyncSession = Depends(get_db_session),
    generate_share_code: ShareCodeGenerator = Depends(get_share_code_generator),
):
    quiz = await quiz_service.create_quiz(db, payload, generate_share_code)
    return serialize_quiz(quiz)


@router.post("/import", response_model=QuizRead, status_code=201)
async def import_quiz(payload: QuizContent, db: AsyncSession = Depends(get_db_session)):
    quiz = await quiz_service.import_quiz(db, payload)
    return serialize_quiz(quiz)


@router.get("/shared/{code}", response_model=QuizRead)
async def get_shared_quiz(code: str, db: AsyncSession = Depends(get_db_session)):
    quiz = await quiz_service.load_quiz_by_share_code(db, code)
    return serialize_quiz(quiz)


@router.get("/{quiz_id}", response_model=QuizDetail)
async def get_quiz(quiz_id: str, db: AsyncSession = Depends(get_db_session)):
    quiz = await quiz_service.load_quiz(db, quiz_id)
    attempts = await lifecycle.list_attempts(db, quiz_id=quiz_id)
    return QuizDetail(quiz=serialize_quiz(quiz), attempts=[serialize_attempt(a) for a in attempts])


@router.put("/{quiz_id}", response_model=QuizRead)
async def rename_quiz(quiz_id: str, payload: QuizRename, db: AsyncSession = Depends(get_db_session)):
    quiz = await quiz_service.rename_quiz(db, quiz_id, payload.title)
    return serialize_quiz(quiz)


@router.delete("/{quiz_id}")
async def delete_quiz(quiz_id: str, db: AsyncSession = Depends(get_db_session)):
    await quiz_service.delete_quiz(db, quiz_id)
    return {"deleted": quiz_id}


@router.get("/{quiz_id}/export", response_model=QuizExport)
async def export_quiz(quiz_id: str, db: AsyncSession = Depends(get_db_session)):
    quiz = serialize_quiz(await quiz_service.load_quiz(db, quiz_id))
    export = QuizExport(
        title=quiz.title,
        description=quiz.description,
        time_limit=quiz.time_limit,
        tags=quiz.tags,
        questions=[
            QuestionExport(
                text=q.text,
                hint=q.hint,
                image_url=q.image_url,
                options=[o.model_dump(exclude={"id"}) for o in q.options],
            )
            for q in quiz.questions
        ],
    )
    filename = re.sub(r"[^a-z0-9]", "_", quiz.title, flags=re.IGNORECASE)
    return JSONResponse(
        content=export.model_dump(),
        headers={"Content-Disposition": f'attachment; filename="{filename}.json"'},
    )


@router.post("/{quiz_id}/share", response_model=ShareCodeRead)
async def share_quiz(
    quiz_id: str,
    db: AsyncSession = Depends(get_db_session),
    generate_share_code: ShareCodeGenerator = Depends(get_share_code_generator),
):
    code = await quiz_service.ensure_share_code(db, quiz_id, generate_share_code)
    return ShareCodeRead(share_code=code)


@router.post("/{quiz_id}/duplicate", response_model=QuizRead, status_code=201)
async def duplicate_quiz(quiz_id: str, db: AsyncSession = Depends(get_db_session)):
    quiz = await quiz_service.duplicate_quiz(db, quiz_id)
    return serialize_quiz(quiz)


@router.post("/{quiz_id}/questions/{question_id}/check", response_model=AnswerResult)
async def check_answer(
    quiz_id: str,
    question_id: str,
    payload: AnswerCheck,
    db: AsyncSession = Depends(get_db_session),
):
    return await lifecycle.check_answer(db, quiz_id, question_id, payload.selected_option_ids)
