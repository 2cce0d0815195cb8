"""Partial-credit scoring for single and multi-select questions.

Each question is worth exactly one point. With ``k`` correct options every
correct pick earns ``1/k`` and every wrong pick costs ``1/k``; a question
never drops below zero. Nothing here touches the database.
"""
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence

from app.core.errors import InvalidInputError
from app.schemas.attempt import AnswerResult, ScoreResult, SubmittedAnswer
from app.schemas.quiz import QuestionRead

logger = logging.getLogger("scoring")

CORRECT_TOLERANCE = 0.001


def round_percentage(value: float) -> float:
    """Round to two decimals with ties going up (3.125 -> 3.13)."""
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def correct_option_ids(question: QuestionRead) -> List[str]:
    return [option.id for option in question.options if option.is_correct]


def score_question(question: QuestionRead, selected: Optional[Sequence[str]]) -> AnswerResult:
    correct_ids = correct_option_ids(question)
    # Selections are an ordered set
    chosen = list(dict.fromkeys(selected or []))
    if not chosen:
        return AnswerResult(
            question_id=question.id,
            selected_option_ids=[],
            correct_option_ids=correct_ids,
            points_earned=0.0,
            is_correct=False,
        )
    if not correct_ids:
        raise InvalidInputError(f"Question {question.id} has no correct option")

    correct_set = set(correct_ids)
    selected_correct = [option_id for option_id in chosen if option_id in correct_set]
    selected_wrong = [option_id for option_id in chosen if option_id not in correct_set]

    weight = 1 / len(correct_ids)
    points = len(selected_correct) * weight - len(selected_wrong) * weight
    points = min(1.0, max(0.0, points))
    return AnswerResult(
        question_id=question.id,
        selected_option_ids=chosen,
        correct_option_ids=correct_ids,
        points_earned=points,
        is_correct=points >= 1 - CORRECT_TOLERANCE,
    )


def score_attempt(questions: Sequence[QuestionRead], answers: Sequence[SubmittedAnswer]) -> ScoreResult:
    if not questions:
        raise InvalidInputError("Cannot score a quiz with no questions")

    selections: Dict[str, List[str]] = {}
    for answer in answers:
        # First submission for a question wins
        selections.setdefault(answer.question_id, answer.selected_option_ids)

    results = [score_question(question, selections.get(question.id)) for question in questions]
    score = sum(result.points_earned for result in results)
    total_points = len(questions)
    skipped = sum(1 for result in results if not result.selected_option_ids)

    logger.debug(
        "Scored questions=%s score=%.3f skipped=%s", total_points, score, skipped
    )
    return ScoreResult(
        score=score,
        total_points=total_points,
        percentage=round_percentage(score / total_points * 100),
        answers=results,
        questions_skipped=skipped,
    )
