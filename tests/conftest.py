import itertools
import os

# Must be set before app.db builds its engine
os.environ.setdefault("QUIZ_DATABASE_URL", "sqlite+aiosqlite://")

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from app.db import get_session, init_db
from app.dependencies import get_db_session, get_share_code_generator
from app.main import app
from app.schemas import AnswerOptionRead, QuestionRead


def make_question(text, options, hint=""):
    """Build an authoring payload: options are (text, is_correct) pairs."""
    return {
        "text": text,
        "hint": hint,
        "options": [{"text": label, "is_correct": correct} for label, correct in options],
    }


def make_quiz(title="Capitals of Europe", questions=None, **extra):
    if questions is None:
        questions = [
            make_question("What is the capital of France?", [("Paris", True), ("Lyon", False)]),
            make_question("Which are Baltic capitals?", [("Riga", True), ("Tallinn", True), ("Oslo", False)]),
        ]
    return {"title": title, "questions": questions, **extra}


def read_question(question_id, options):
    """Build a scorable question: options are (id, is_correct) pairs."""
    return QuestionRead(
        id=question_id,
        text=f"Question {question_id}",
        type="multiple" if sum(1 for _, c in options if c) > 1 else "single",
        options=[AnswerOptionRead(id=oid, text=oid, is_correct=correct) for oid, correct in options],
    )


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def share_codes():
    counter = itertools.count(1)
    return lambda: f"QUIZ-{next(counter):08X}"


@pytest_asyncio.fixture
async def client(engine, share_codes):
    async def override_db_session():
        async with get_session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_share_code_generator] = lambda: share_codes
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def quiz(client):
    r = await client.post("/api/quizzes", json=make_quiz())
    assert r.status_code == 201, r.text
    return r.json()
