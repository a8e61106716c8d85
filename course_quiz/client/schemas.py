"""Pydantic schemas for the JSON exchanged with the course platform API."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from course_quiz.core.models import (
    CourseInfo,
    Quiz,
    QuestionType,
    QuizQuestion,
    QuizSubmission,
)


class _ApiModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class QuestionPayload(_ApiModel):
    question: str
    options: list[str] = Field(default_factory=list)
    type: Optional[str] = None

    def to_domain(self) -> QuizQuestion:
        return QuizQuestion(
            question_text=self.question,
            options=list(self.options),
            question_type=QuestionType.parse(self.type),
        )


class SubmissionPayload(_ApiModel):
    student: Any = None
    answers: list[int | list[int]] = Field(default_factory=list)
    score: int = 0
    submitted_at: Optional[datetime] = Field(default=None, alias="submittedAt")

    @field_validator("student", mode="before")
    @classmethod
    def _student_reference(cls, value: Any) -> Any:
        # The API either returns the id or a populated user document.
        if isinstance(value, dict):
            return value.get("_id") or value.get("id") or ""
        return value

    def to_domain(self) -> QuizSubmission:
        return QuizSubmission(
            student_id=str(self.student or ""),
            answers=list(self.answers),
            score=self.score,
            submitted_at=self.submitted_at,
        )


class QuizPayload(_ApiModel):
    id: str = Field(alias="_id")
    title: str = ""
    course: Optional[str] = None
    lesson: Optional[str] = None
    questions: list[QuestionPayload] = Field(default_factory=list)
    submissions: list[SubmissionPayload] = Field(default_factory=list)

    @field_validator("course", "lesson", mode="before")
    @classmethod
    def _reference_id(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return value.get("_id") or value.get("id")
        return value

    def to_domain(self) -> Quiz:
        return Quiz(
            id=self.id,
            title=self.title,
            questions=[question.to_domain() for question in self.questions],
            submissions=[submission.to_domain() for submission in self.submissions],
            course_id=self.course,
            lesson_id=self.lesson,
        )


class CoursePayload(_ApiModel):
    id: str = Field(alias="_id")
    title: str = ""

    def to_domain(self) -> CourseInfo:
        return CourseInfo(id=self.id, title=self.title)


class SubmitRequest(_ApiModel):
    answers: list[int | list[int]]


class SubmitResponse(_ApiModel):
    score: int
    submitted_at: Optional[datetime] = Field(default=None, alias="submittedAt")
