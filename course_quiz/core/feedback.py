"""Performance review text shown after a quiz has been graded."""

from __future__ import annotations

from course_quiz.constants.quiz_constants import (
    FEEDBACK_PERFECT,
    FEEDBACK_RETRY,
    FEEDBACK_STRONG,
)


def performance_message(score: int, question_count: int) -> str:
    if question_count > 0 and score >= question_count:
        return FEEDBACK_PERFECT
    if question_count > 0 and score >= question_count / 2:
        return FEEDBACK_STRONG
    return FEEDBACK_RETRY
