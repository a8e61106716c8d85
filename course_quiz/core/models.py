"""Domain models for course quizzes and the student's answers."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Union

from course_quiz.constants.quiz_constants import UNANSWERED


class QuestionType(str, Enum):
    """How many options of a question may be selected."""

    SINGLE = "single"
    MULTIPLE = "multiple"

    @classmethod
    def parse(cls, raw: str | None) -> "QuestionType":
        # Anything that is not explicitly "multiple" behaves as single choice.
        if raw is not None and raw.strip().lower() == cls.MULTIPLE.value:
            return cls.MULTIPLE
        return cls.SINGLE


class QuizStatus(str, Enum):
    """Lifecycle of one quiz attempt."""

    IN_PROGRESS = "in_progress"
    SUBMITTING = "submitting"
    SUBMITTED = "submitted"


@dataclass(frozen=True, slots=True)
class SingleAnswer:
    """Selection for a single-choice question."""

    selected: int = UNANSWERED

    @property
    def is_answered(self) -> bool:
        return self.selected != UNANSWERED

    def select(self, option_index: int) -> "SingleAnswer":
        return SingleAnswer(selected=option_index)

    def is_selected(self, option_index: int) -> bool:
        return self.selected == option_index

    def to_payload(self) -> int:
        return self.selected


@dataclass(frozen=True, slots=True)
class MultipleAnswer:
    """Selection for a multiple-choice question. Selecting toggles membership."""

    selected: frozenset[int] = frozenset()

    @property
    def is_answered(self) -> bool:
        return bool(self.selected)

    def select(self, option_index: int) -> "MultipleAnswer":
        return MultipleAnswer(selected=self.selected ^ {option_index})

    def is_selected(self, option_index: int) -> bool:
        return option_index in self.selected

    def to_payload(self) -> list[int]:
        return sorted(self.selected)


Answer = Union[SingleAnswer, MultipleAnswer]


@dataclass(frozen=True, slots=True)
class QuizQuestion:
    """Question as served by the course API. Correct answers are never included."""

    question_text: str
    options: list[str]
    question_type: QuestionType = QuestionType.SINGLE

    def empty_answer(self) -> Answer:
        if self.question_type is QuestionType.MULTIPLE:
            return MultipleAnswer()
        return SingleAnswer()


@dataclass(frozen=True, slots=True)
class QuizSubmission:
    """A graded attempt previously stored by the course API."""

    student_id: str
    answers: list[int | list[int]]
    score: int
    submitted_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class Quiz:
    """A named, ordered set of questions belonging to a course."""

    id: str
    title: str
    questions: list[QuizQuestion]
    submissions: list[QuizSubmission] = field(default_factory=list)
    course_id: str | None = None
    lesson_id: str | None = None

    @property
    def question_count(self) -> int:
        return len(self.questions)


@dataclass(frozen=True, slots=True)
class CourseInfo:
    """Course metadata shown above the quiz list."""

    id: str
    title: str


@dataclass(frozen=True, slots=True)
class GradeResult:
    """Outcome returned by the grading service."""

    score: int
    submitted_at: datetime


@dataclass(slots=True)
class QuizAnswerState:
    """Client-local record of one student's attempt at a quiz."""

    answers: list[Answer]
    status: QuizStatus = QuizStatus.IN_PROGRESS
    score: int = 0
    submitted_at: datetime | None = None
    attempt: int = 0

    @property
    def submitted(self) -> bool:
        return self.status is QuizStatus.SUBMITTED

    @property
    def all_answered(self) -> bool:
        return all(answer.is_answered for answer in self.answers)

    def answers_payload(self) -> list[int | list[int]]:
        return [answer.to_payload() for answer in self.answers]
