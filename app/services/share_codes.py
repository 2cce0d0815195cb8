import uuid
from typing import Callable

from app.core.config import settings

ShareCodeGenerator = Callable[[], str]


def generate_share_code() -> str:
    """Return e.g. ``QUIZ-3F9A1C07``."""
    return f"{settings.share_code_prefix}{uuid.uuid4().hex[:8].upper()}"
