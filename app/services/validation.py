"""Authoring rules for quiz content.

Everything here is pure: the validators return human readable violations
instead of raising, so callers decide whether a list of problems is fatal
(publish, create, import) or just advisory (saving a draft).
"""
import uuid
from typing import List, Optional, Sequence

from app.models.quiz import QuestionType
from app.schemas.quiz import AnswerOptionIn, QuestionIn, QuizContent, QuizSummary

TITLE_MIN = 3
TITLE_MAX = 200
DESCRIPTION_MAX = 1000
TIME_LIMIT_RANGE = (5, 180)
MAX_TAGS = 10
TAG_MAX = 30
MAX_QUESTIONS = 100
QUESTION_TEXT_MIN = 5
HINT_MAX = 300
OPTIONS_RANGE = (2, 8)
OPTION_TEXT_MAX = 200
RATIONALE_MAX = 300


def new_id() -> str:
    return str(uuid.uuid4())


def infer_question_type(options: Sequence) -> str:
    correct = sum(1 for option in options if _is_correct(option))
    return QuestionType.MULTIPLE if correct > 1 else QuestionType.SINGLE


def _is_correct(option) -> bool:
    if isinstance(option, dict):
        return option.get("is_correct") is True
    return option.is_correct is True


def _option_key(text: Optional[str]) -> str:
    # Duplicates are compared trimmed and case-insensitively everywhere
    return (text or "").strip().lower()


def has_duplicate_options(options: Sequence[AnswerOptionIn]) -> bool:
    keys = [_option_key(option.text) for option in options if _option_key(option.text)]
    return len(keys) != len(set(keys))


def normalize_question(question: QuestionIn, keep_ids: bool = True) -> dict:
    """Return the stored document form of a question with ids filled and type derived."""
    seen: set[str] = set()
    options = []
    for option in question.options:
        option_id = option.id if keep_ids and option.id and option.id not in seen else new_id()
        seen.add(option_id)
        options.append(
            {
                "id": option_id,
                "text": option.text,
                "is_correct": option.is_correct,
                "rationale": option.rationale or "",
                "image_url": option.image_url or "",
            }
        )
    return {
        "id": question.id if keep_ids and question.id else new_id(),
        "text": question.text,
        "hint": question.hint or "",
        "image_url": question.image_url or "",
        "options": options,
        "type": infer_question_type(question.options),
    }


def validate_title(title: Optional[str]) -> List[str]:
    errors = []
    if title and len(title.strip()) < TITLE_MIN:
        errors.append(f"Quiz title must be at least {TITLE_MIN} characters")
    if title and len(title) > TITLE_MAX:
        errors.append(f"Quiz title must not exceed {TITLE_MAX} characters")
    return errors


def validate_option(option: AnswerOptionIn, all_options: Sequence[AnswerOptionIn]) -> List[str]:
    """Check one option in the context of its siblings (``all_options`` includes it)."""
    errors = []
    if not option.text or not option.text.strip():
        errors.append("Option text is required")
    elif len(option.text) > OPTION_TEXT_MAX:
        errors.append(f"Option text must not exceed {OPTION_TEXT_MAX} characters")
    key = _option_key(option.text)
    if key and sum(1 for other in all_options if _option_key(other.text) == key) > 1:
        errors.append("Option text must be unique")
    return errors


def validate_question(question: QuestionIn, number: int) -> List[str]:
    prefix = f"Question {number}"
    errors = []
    text = question.text
    if not text or not text.strip():
        errors.append(f"{prefix}: question text is required")
    elif len(text.strip()) < QUESTION_TEXT_MIN:
        errors.append(f"{prefix}: question text must be at least {QUESTION_TEXT_MIN} characters")
    if question.hint and len(question.hint) > HINT_MAX:
        errors.append(f"{prefix}: hint must not exceed {HINT_MAX} characters")

    options = question.options
    if len(options) < OPTIONS_RANGE[0]:
        errors.append(f"{prefix}: must have at least {OPTIONS_RANGE[0]} answer options")
    if len(options) > OPTIONS_RANGE[1]:
        errors.append(f"{prefix}: maximum {OPTIONS_RANGE[1]} answer options allowed")
    if not any(option.is_correct for option in options):
        errors.append(f"{prefix}: at least one correct answer is required")
    if has_duplicate_options(options):
        errors.append(f"{prefix}: option texts must be unique")

    for index, option in enumerate(options, start=1):
        label = f"{prefix}, Option {index}"
        if not option.text or not option.text.strip():
            errors.append(f"{label}: option text is required")
        elif len(option.text) > OPTION_TEXT_MAX:
            errors.append(f"{label}: option text must not exceed {OPTION_TEXT_MAX} characters")
        if option.rationale and len(option.rationale) > RATIONALE_MAX:
            errors.append(f"{label}: rationale must not exceed {RATIONALE_MAX} characters")
    return errors


def validate_quiz_content(content: QuizContent) -> List[str]:
    """Return every rule the content violates; an empty list means it can be published."""
    errors = validate_title(content.title)

    if content.description and len(content.description) > DESCRIPTION_MAX:
        errors.append(f"Description must not exceed {DESCRIPTION_MAX} characters")

    if content.time_limit is not None:
        low, high = TIME_LIMIT_RANGE
        if content.time_limit < low or content.time_limit > high:
            errors.append(f"Time limit must be between {low} and {high} minutes")

    if len(content.tags) > MAX_TAGS:
        errors.append(f"Maximum {MAX_TAGS} tags allowed")
    for index, tag in enumerate(content.tags, start=1):
        if len(tag) > TAG_MAX:
            errors.append(f"Tag {index} must not exceed {TAG_MAX} characters")

    if not content.questions:
        errors.append("Quiz must have at least one question")
        return errors
    if len(content.questions) > MAX_QUESTIONS:
        errors.append(f"Maximum {MAX_QUESTIONS} questions allowed")

    for number, question in enumerate(content.questions, start=1):
        errors.extend(validate_question(question, number))
    return errors


def summarize_questions(questions: Sequence[QuestionIn]) -> QuizSummary:
    multi = sum(1 for q in questions if infer_question_type(q.options) == QuestionType.MULTIPLE)
    return QuizSummary(
        total_questions=len(questions),
        total_options=sum(len(q.options) for q in questions),
        multi_select_count=multi,
        single_select_count=len(questions) - multi,
        with_images=sum(1 for q in questions if q.image_url or any(o.image_url for o in q.options)),
        with_hints=sum(1 for q in questions if q.hint),
        with_rationales=sum(1 for q in questions if any(o.rationale for o in q.options)),
    )
