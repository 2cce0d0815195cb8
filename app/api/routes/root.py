from fastapi import APIRouter

from app.core.time import utc_now

router = APIRouter(prefix="/api")


@router.get("/health")
async def health():
    return {"status": "ok", "timestamp": utc_now().isoformat()}
