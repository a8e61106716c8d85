"""Service holding the quizzes fetched for the current course."""

from __future__ import annotations

from dataclasses import replace
import logging

from course_quiz.constants.quiz_constants import UNTITLED_QUIZ_TITLE
from course_quiz.core.errors import CatalogError, InvalidIndex
from course_quiz.core.models import CourseInfo, Quiz, QuizQuestion

logger = logging.getLogger(__name__)


class QuizCatalog:
    """Read-only, validated view of one course's quizzes."""

    def __init__(self) -> None:
        self._course: CourseInfo | None = None
        self._quizzes: list[Quiz] = []

    def load(self, course: CourseInfo, quizzes: list[Quiz]) -> list[Quiz]:
        """Replace the catalog. Returns the normalized quizzes.

        Malformed quizzes are skipped with a warning so the rest of the course
        stays usable. Duplicate ids make the whole listing ambiguous and raise.
        """
        prepared: list[Quiz] = []
        for quiz in quizzes:
            try:
                prepared.append(self._prepare_quiz(quiz))
            except CatalogError as exc:
                logger.warning("Skipping quiz %r of course %s: %s", quiz.id, course.id, exc)
        seen: set[str] = set()
        for quiz in prepared:
            if quiz.id in seen:
                raise CatalogError(f"Duplicate quiz id {quiz.id!r} in course {course.id!r}.")
            seen.add(quiz.id)
        self._course = course
        self._quizzes = prepared
        return list(prepared)

    def get_course(self) -> CourseInfo | None:
        return self._course

    def get_quizzes(self) -> list[Quiz]:
        return list(self._quizzes)

    def get_quiz(self, quiz_id: str) -> Quiz:
        for quiz in self._quizzes:
            if quiz.id == quiz_id:
                return quiz
        raise InvalidIndex(f"Unknown quiz id {quiz_id!r}")

    def get_quiz_number(self, quiz_id: str) -> int:
        """1-based position of the quiz in the course listing."""
        for index, quiz in enumerate(self._quizzes):
            if quiz.id == quiz_id:
                return index + 1
        raise InvalidIndex(f"Unknown quiz id {quiz_id!r}")

    def has_quizzes(self) -> bool:
        return bool(self._quizzes)

    def _prepare_quiz(self, quiz: Quiz) -> Quiz:
        quiz_id = quiz.id.strip()
        if not quiz_id:
            raise CatalogError("Quiz id must not be empty.")
        title = quiz.title.strip() or UNTITLED_QUIZ_TITLE
        questions = [self._prepare_question(quiz_id, q) for q in quiz.questions]
        return replace(quiz, id=quiz_id, title=title, questions=questions)

    @staticmethod
    def _prepare_question(quiz_id: str, question: QuizQuestion) -> QuizQuestion:
        cleaned_text = question.question_text.strip()
        if not cleaned_text:
            raise CatalogError(f"Quiz {quiz_id!r} contains a question without text.")
        options = [option.strip() for option in question.options]
        if not options:
            raise CatalogError(f"Question {cleaned_text!r} in quiz {quiz_id!r} has no options.")
        if any(not option for option in options):
            raise CatalogError(f"Option text cannot be empty (quiz {quiz_id!r}).")
        return replace(question, question_text=cleaned_text, options=options)
