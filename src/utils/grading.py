"""Assessment grading engine.

This module turns a learner's submitted answers into graded answers, a score
and a percentage. It is pure: nothing here touches the database, so the
result manager decides what gets persisted.

Grading rules:
    * An answer is correct only under the typed equality of its question
      kind. There is no partial credit and no fuzzy matching.
    * Unanswered questions (missing or null entries) are not graded. They add
      no points and no penalty.
    * The percentage denominator is always the assessment's stored
      ``total_points``, rounded half-up to an integer. A zero total gives 0.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Sequence, Tuple

from core.exceptions import ValidationError
from schemas.assessment import (
    MultipleChoiceQuestion,
    Question,
    ShortAnswerQuestion,
    TrueFalseQuestion,
)
from schemas.result import AnswerValue, GradedAnswer

logger = logging.getLogger(__name__)


@dataclass
class GradingOutcome:
    """Outcome of grading one submission.

    Attributes:
        answers: Graded answers, one per answered question, in question order.
        score: Sum of awarded points.
        total_points: Denominator used for the percentage.
        percentage: Integer percentage, rounded half-up.
    """

    answers: List[GradedAnswer]
    score: int
    total_points: int
    percentage: int


def compute_total_points(questions: Sequence[Question]) -> int:
    """Sum the point values of a question list."""
    return sum(question.points for question in questions)


def _resolve_option(
    question: MultipleChoiceQuestion, answer: AnswerValue
) -> Optional[str]:
    # bool is a subclass of int and is never a valid option index
    if isinstance(answer, bool):
        return None
    if isinstance(answer, int):
        if 0 <= answer < len(question.options):
            return question.options[answer]
        return None
    return answer


def _resolve_bool(answer: AnswerValue) -> Optional[bool]:
    if isinstance(answer, bool):
        return answer
    if isinstance(answer, str):
        lowered = answer.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
    return None


def grade_answer(question: Question, answer: AnswerValue) -> Tuple[bool, int]:
    """Grade a single answer against its question.

    Args:
        question: The question being answered.
        answer: Raw answer value. Multiple-choice accepts the option text or
            its zero-based index; true-false accepts a bool or "true"/"false"
            in any case; short-answer accepts a string compared verbatim.

    Returns:
        Tuple of (is_correct, points awarded). Answers that cannot be read
        for the question kind are incorrect.
    """
    if isinstance(question, MultipleChoiceQuestion):
        is_correct = _resolve_option(question, answer) == question.correct_answer
    elif isinstance(question, TrueFalseQuestion):
        resolved = _resolve_bool(answer)
        is_correct = resolved is not None and resolved == question.correct_answer
    elif isinstance(question, ShortAnswerQuestion):
        is_correct = isinstance(answer, str) and answer == question.correct_answer
    else:
        raise TypeError(f"Unsupported question type: {type(question).__name__}")

    return is_correct, question.points if is_correct else 0


def calculate_percentage(score: int, total_points: int) -> int:
    """Compute round(score / total_points * 100) with half-up rounding.

    Python's built-in round() rounds halves to even (12.5 -> 12); grading
    rounds them up (12.5 -> 13).

    Args:
        score: Points awarded.
        total_points: Points available.

    Returns:
        Integer percentage, or 0 when total_points is 0.
    """
    if total_points <= 0:
        return 0
    ratio = Decimal(score) * 100 / Decimal(total_points)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def grade_submission(
    questions: Sequence[Question],
    total_points: int,
    answers: Sequence[Optional[AnswerValue]],
    allow_partial: bool = True,
) -> GradingOutcome:
    """Grade a full submission.

    Args:
        questions: Ordered questions of the assessment.
        total_points: The assessment's stored total, used as denominator even
            when it no longer matches the current questions.
        answers: Answers by question index; None marks an unanswered question.
        allow_partial: Whether a submission may leave questions unanswered.

    Returns:
        GradingOutcome for the submission.

    Raises:
        ValidationError: If there are more answers than questions, or the
            submission is partial while allow_partial is False.
    """
    if len(answers) > len(questions):
        raise ValidationError(
            f"Submitted {len(answers)} answers for {len(questions)} questions"
        )

    graded: List[GradedAnswer] = []
    score = 0
    for index, answer in enumerate(answers):
        if answer is None:
            continue
        is_correct, points = grade_answer(questions[index], answer)
        score += points
        graded.append(
            GradedAnswer(
                question_index=index,
                answer=answer,
                is_correct=is_correct,
                points=points,
            )
        )

    if not allow_partial and len(graded) < len(questions):
        raise ValidationError(
            f"All {len(questions)} questions must be answered, got {len(graded)}"
        )

    if total_points == 0:
        logger.warning("Grading against an assessment worth 0 points")

    return GradingOutcome(
        answers=graded,
        score=score,
        total_points=total_points,
        percentage=calculate_percentage(score, total_points),
    )
