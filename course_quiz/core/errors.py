"""Exception hierarchy shared by the quiz session layers."""

from __future__ import annotations


class QuizSessionError(Exception):
    """Base class for every error raised by the quiz session layers."""


class InvalidIndex(QuizSessionError, IndexError):
    """Raised when a quiz id, question index or option index does not exist."""


class AlreadySubmitted(QuizSessionError):
    """Raised when a submitted quiz is mutated or submitted again."""


class UnansweredQuestions(QuizSessionError):
    """Raised when submission is attempted before every question is answered."""


class NotSubmitted(QuizSessionError):
    """Raised when a result is requested for a quiz that was never graded."""


class SubmissionInProgress(QuizSessionError):
    """Raised when a quiz is touched while its submission is still in flight."""


class GradingFailed(QuizSessionError):
    """The grading service rejected a submission. The message is user-facing."""


class CatalogError(QuizSessionError):
    """Raised when the quiz catalog cannot be fetched or is malformed."""
