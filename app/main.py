import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.routes import attempts, drafts, progress, quizzes, root
from app.core.config import settings
from app.core.logging import configure_logging
from app.db import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    await init_db()
    logging.getLogger(__name__).info("Quiz Maker ready")
    yield

app = FastAPI(title="Quiz Maker", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(root.router)
app.include_router(quizzes.router)
app.include_router(drafts.router)
app.include_router(progress.router)
app.include_router(attempts.router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
