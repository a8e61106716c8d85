from __future__ import annotations

from datetime import datetime, timezone
from threading import Event

import pytest

from course_quiz.core.course_backend import CourseBackend
from course_quiz.core.errors import GradingFailed
from course_quiz.core.models import (
    CourseInfo,
    GradeResult,
    QuestionType,
    Quiz,
    QuizQuestion,
)
from course_quiz.core.quiz_manager import QuizManager

GRADED_AT = datetime(2026, 3, 1, 12, 30, tzinfo=timezone.utc)


def make_quiz(quiz_id: str = "quiz-1", title: str = "Recording basics") -> Quiz:
    return Quiz(
        id=quiz_id,
        title=title,
        questions=[
            QuizQuestion("Which microphone is directional?", ["A", "B", "C"], QuestionType.SINGLE),
            QuizQuestion("Pick the lossless formats", ["X", "Y"], QuestionType.MULTIPLE),
        ],
    )


def make_three_question_quiz(quiz_id: str = "quiz-3") -> Quiz:
    return Quiz(
        id=quiz_id,
        title="Mixing",
        questions=[
            QuizQuestion("Q1", ["a", "b"], QuestionType.SINGLE),
            QuizQuestion("Q2", ["a", "b", "c"], QuestionType.MULTIPLE),
            QuizQuestion("Q3", ["a", "b"], QuestionType.SINGLE),
        ],
    )


class FakeBackend(CourseBackend):
    """In-memory course API. Grades with a fixed score or raises a queued error."""

    def __init__(self, quizzes: list[Quiz] | None = None, score: int = 2) -> None:
        self.course = CourseInfo(id="course-1", title="Audio Engineering")
        self.quizzes = quizzes if quizzes is not None else [make_quiz(), make_three_question_quiz()]
        self.score = score
        self.error: Exception | None = None
        self.grade_calls: list[tuple[str, list]] = []
        self.release: Event | None = None
        self.entered = Event()

    def fetch_course(self, course_id: str) -> CourseInfo:
        return self.course

    def fetch_quizzes(self, course_id: str) -> list[Quiz]:
        return list(self.quizzes)

    def grade(self, quiz_id: str, answers: list) -> GradeResult:
        self.grade_calls.append((quiz_id, answers))
        self.entered.set()
        if self.release is not None:
            self.release.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return GradeResult(score=self.score, submitted_at=GRADED_AT)


def grader(score: int):
    def grade(quiz_id: str, answers: list) -> GradeResult:
        return GradeResult(score=score, submitted_at=GRADED_AT)

    return grade


def failing_grader(message: str = "Network Error"):
    def grade(quiz_id: str, answers: list) -> GradeResult:
        raise GradingFailed(message)

    return grade


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def manager(backend: FakeBackend) -> QuizManager:
    quiz_manager = QuizManager(backend)
    quiz_manager.load_course("course-1")
    return quiz_manager
