from app.db import get_session
from app.services.share_codes import ShareCodeGenerator, generate_share_code


async def get_db_session():
    async with get_session() as session:
        yield session


def get_share_code_generator() -> ShareCodeGenerator:
    return generate_share_code
