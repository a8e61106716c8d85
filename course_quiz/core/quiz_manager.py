"""Business logic for the quiz state shared between the desktop UI and the API."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
import logging
from threading import Lock

from course_quiz.constants.network_constants import GRADING_FAILED_MESSAGE
from course_quiz.core.course_backend import CourseBackend
from course_quiz.core.errors import GradingFailed, SubmissionInProgress
from course_quiz.core.feedback import performance_message
from course_quiz.core.models import (
    Answer,
    CourseInfo,
    GradeResult,
    Quiz,
    QuizQuestion,
    QuizStatus,
)
from course_quiz.core.services.quiz_catalog import QuizCatalog
from course_quiz.core.services.quiz_session import QuizSessionController

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class QuizSummary:
    """Entry of the quiz list."""

    quiz_id: str
    number: int
    title: str
    question_count: int
    status: QuizStatus


@dataclass(frozen=True, slots=True)
class QuizView:
    """Snapshot of one quiz handed to view code."""

    quiz_id: str
    number: int
    title: str
    questions: list[QuizQuestion]
    answers: list[Answer]
    status: QuizStatus
    score: int
    submitted_at: datetime | None
    can_submit: bool
    percent: int | None = None
    feedback: str | None = None

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def submitted(self) -> bool:
        return self.status is QuizStatus.SUBMITTED

    @property
    def submitting(self) -> bool:
        return self.status is QuizStatus.SUBMITTING


class QuizManager:
    """Facade for quiz services: catalog, answer state and the course backend.

    Views call this instead of the controller. It serializes state changes
    with one lock and refuses to touch a quiz while its grading request is in
    flight; the request itself runs outside the lock so other quizzes stay
    usable.
    """

    def __init__(self, backend: CourseBackend) -> None:
        self._lock = Lock()
        self._backend = backend
        self._catalog = QuizCatalog()
        self._session = QuizSessionController()
        self._selected_quiz_id: str | None = None

    # --- Catalog ---

    def load_course(self, course_id: str) -> list[QuizSummary]:
        """Fetch the course's quizzes and start fresh attempts for all of them."""
        course = self._backend.fetch_course(course_id)
        quizzes = self._backend.fetch_quizzes(course_id)
        self.load_quizzes(course, quizzes)
        summaries = self.get_quiz_summaries()
        logger.info("Loaded %d of %d quizzes for course %s", len(summaries), len(quizzes), course_id)
        return summaries

    def load_quizzes(self, course: CourseInfo, quizzes: list[Quiz]) -> None:
        with self._lock:
            prepared = self._catalog.load(course, quizzes)
            self._session.initialize(prepared)
            self._selected_quiz_id = prepared[0].id if prepared else None

    def get_course(self) -> CourseInfo | None:
        with self._lock:
            return self._catalog.get_course()

    def has_quizzes(self) -> bool:
        with self._lock:
            return self._catalog.has_quizzes()

    def get_quiz_summaries(self) -> list[QuizSummary]:
        with self._lock:
            return [
                QuizSummary(
                    quiz_id=quiz.id,
                    number=index + 1,
                    title=quiz.title,
                    question_count=quiz.question_count,
                    status=self._session.get_status(quiz.id),
                )
                for index, quiz in enumerate(self._catalog.get_quizzes())
            ]

    def select_quiz(self, quiz_id: str) -> QuizView:
        with self._lock:
            self._catalog.get_quiz(quiz_id)
            self._selected_quiz_id = quiz_id
            return self._build_view(quiz_id)

    def get_selected_quiz_id(self) -> str | None:
        with self._lock:
            return self._selected_quiz_id

    def get_quiz_view(self, quiz_id: str) -> QuizView:
        with self._lock:
            return self._build_view(quiz_id)

    # --- Answering ---

    def select_answer(self, quiz_id: str, question_index: int, option_index: int) -> Answer:
        with self._lock:
            self._ensure_not_in_flight(quiz_id)
            return self._session.select_answer(quiz_id, question_index, option_index)

    def can_submit(self, quiz_id: str) -> bool:
        with self._lock:
            return self._session.can_submit(quiz_id)

    def submit_quiz(self, quiz_id: str) -> GradeResult:
        """Send the quiz for grading and record the authoritative score."""
        with self._lock:
            self._ensure_not_in_flight(quiz_id)
            attempt, payload = self._session.begin_submission(quiz_id)

        try:
            result = self._backend.grade(quiz_id, payload)
        except GradingFailed as exc:
            logger.warning("Submission of quiz %s failed: %s", quiz_id, exc)
            with self._lock:
                self._session.abort_submission(quiz_id, attempt)
            raise
        except Exception as exc:
            logger.exception("Unexpected error while grading quiz %s", quiz_id)
            with self._lock:
                self._session.abort_submission(quiz_id, attempt)
            raise GradingFailed(GRADING_FAILED_MESSAGE) from exc

        with self._lock:
            recorded = self._session.complete_submission(quiz_id, attempt, result)
        if recorded:
            logger.info("Quiz %s graded: score %d", quiz_id, result.score)
        else:
            logger.info("Discarded grading result for quiz %s; the attempt was reset", quiz_id)
        return result

    def reset_quiz(self, quiz_id: str) -> QuizView:
        with self._lock:
            self._session.reset(quiz_id)
            return self._build_view(quiz_id)

    def percent_score(self, quiz_id: str) -> int:
        with self._lock:
            return self._session.percent_score(quiz_id)

    # --- Helpers (call with the lock held) ---

    def _ensure_not_in_flight(self, quiz_id: str) -> None:
        if self._session.get_status(quiz_id) is QuizStatus.SUBMITTING:
            raise SubmissionInProgress(f"Quiz {quiz_id} is being submitted; please wait.")

    def _build_view(self, quiz_id: str) -> QuizView:
        quiz = self._catalog.get_quiz(quiz_id)
        state = self._session.get_state(quiz_id)
        percent = None
        feedback = None
        if state.submitted:
            percent = self._session.percent_score(quiz_id)
            feedback = performance_message(state.score, quiz.question_count)
        return QuizView(
            quiz_id=quiz.id,
            number=self._catalog.get_quiz_number(quiz_id),
            title=quiz.title,
            questions=list(quiz.questions),
            answers=state.answers,
            status=state.status,
            score=state.score,
            submitted_at=state.submitted_at,
            can_submit=self._session.can_submit(quiz_id),
            percent=percent,
            feedback=feedback,
        )
