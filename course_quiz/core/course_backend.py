"""Interface of the course platform API the quiz client depends on."""

from __future__ import annotations

from abc import ABC, abstractmethod

from course_quiz.core.models import CourseInfo, GradeResult, Quiz


class CourseBackend(ABC):
    @abstractmethod
    def fetch_course(self, course_id: str) -> CourseInfo:
        """
        Fetch the course metadata shown above the quiz list.

        :param course_id: Identifier of the course
        :return: The course id and title
        :raises CatalogError: If the course cannot be loaded
        """
        raise NotImplementedError

    @abstractmethod
    def fetch_quizzes(self, course_id: str) -> list[Quiz]:
        """
        Fetch the ordered quizzes of a course, without correct answers.

        :param course_id: Identifier of the course
        :return: Quizzes including any prior submissions of the current student
        :raises CatalogError: If the quizzes cannot be loaded
        """
        raise NotImplementedError

    @abstractmethod
    def grade(self, quiz_id: str, answers: list[int | list[int]]) -> GradeResult:
        """
        Submit a complete answer sequence for grading.

        :param quiz_id: Identifier of the quiz
        :param answers: One entry per question, an index or a sorted list of indices
        :return: The authoritative score and submission time
        :raises GradingFailed: If the request is rejected or cannot be delivered
        """
        raise NotImplementedError
