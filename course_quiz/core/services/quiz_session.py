"""Service tracking a student's answers for every quiz of a course."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace

from course_quiz.constants.network_constants import GRADING_FAILED_MESSAGE
from course_quiz.core.errors import (
    AlreadySubmitted,
    GradingFailed,
    InvalidIndex,
    NotSubmitted,
    UnansweredQuestions,
)
from course_quiz.core.models import (
    Answer,
    GradeResult,
    Quiz,
    QuizAnswerState,
    QuizStatus,
)

GradeCallable = Callable[[str, list], GradeResult]


class QuizSessionController:
    """Keeps one answer state per quiz and gates submission.

    Scores are never computed here; they come from the grading callable and
    are copied verbatim. Mutual exclusion of concurrent submissions on the
    same quiz is the caller's job (see ``QuizManager``).
    """

    def __init__(self) -> None:
        self._quizzes: dict[str, Quiz] = {}
        self._states: dict[str, QuizAnswerState] = {}
        # Attempt tokens only ever grow, so results from a replaced state never match.
        self._last_attempt = -1

    def initialize(self, quizzes: list[Quiz]) -> None:
        """Replace all state with fresh, unanswered attempts for ``quizzes``."""
        self._quizzes = {quiz.id: quiz for quiz in quizzes}
        self._states = {quiz.id: self._fresh_state(quiz) for quiz in quizzes}

    def quiz_ids(self) -> list[str]:
        return list(self._states)

    def select_answer(self, quiz_id: str, question_index: int, option_index: int) -> Answer:
        """Select an option, replacing for single choice and toggling for multiple."""
        quiz = self._get_quiz(quiz_id)
        state = self._states[quiz_id]
        if state.submitted:
            raise AlreadySubmitted(f"Quiz {quiz_id} has already been submitted.")
        if not 0 <= question_index < quiz.question_count:
            raise InvalidIndex(f"Question index {question_index} out of range")
        question = quiz.questions[question_index]
        if not 0 <= option_index < len(question.options):
            raise InvalidIndex(f"Option index {option_index} out of range")

        updated = state.answers[question_index].select(option_index)
        state.answers[question_index] = updated
        return updated

    def can_submit(self, quiz_id: str) -> bool:
        state = self._get_state(quiz_id)
        return state.status is QuizStatus.IN_PROGRESS and state.all_answered

    def begin_submission(self, quiz_id: str) -> tuple[int, list]:
        """Enter ``SUBMITTING`` and return the attempt token plus the answers payload."""
        state = self._get_state(quiz_id)
        if state.status is not QuizStatus.IN_PROGRESS:
            raise AlreadySubmitted(f"Quiz {quiz_id} is already {state.status.value}.")
        if not state.all_answered:
            unanswered = [i + 1 for i, answer in enumerate(state.answers) if not answer.is_answered]
            raise UnansweredQuestions(
                f"Answer every question before submitting (missing: {unanswered})."
            )
        state.status = QuizStatus.SUBMITTING
        return state.attempt, state.answers_payload()

    def complete_submission(self, quiz_id: str, attempt: int, result: GradeResult) -> bool:
        """Record a grading result. Returns False if the attempt was reset meanwhile."""
        state = self._get_state(quiz_id)
        if attempt != state.attempt or state.status is not QuizStatus.SUBMITTING:
            return False
        state.status = QuizStatus.SUBMITTED
        state.score = result.score
        state.submitted_at = result.submitted_at
        return True

    def abort_submission(self, quiz_id: str, attempt: int) -> None:
        state = self._get_state(quiz_id)
        if attempt == state.attempt and state.status is QuizStatus.SUBMITTING:
            state.status = QuizStatus.IN_PROGRESS

    def submit(self, quiz_id: str, grade: GradeCallable) -> GradeResult:
        """Grade the quiz through ``grade`` and record the result.

        On ``GradingFailed`` the answers and status are left as they were and
        the error propagates. Nothing is retried.
        """
        attempt, payload = self.begin_submission(quiz_id)
        try:
            result = grade(quiz_id, payload)
        except GradingFailed:
            self.abort_submission(quiz_id, attempt)
            raise
        except Exception as exc:
            self.abort_submission(quiz_id, attempt)
            raise GradingFailed(GRADING_FAILED_MESSAGE) from exc
        self.complete_submission(quiz_id, attempt, result)
        return result

    def reset(self, quiz_id: str) -> None:
        """Start a new attempt. Valid from any state."""
        self._states[quiz_id] = self._fresh_state(self._get_quiz(quiz_id))

    def percent_score(self, quiz_id: str) -> int:
        quiz = self._get_quiz(quiz_id)
        state = self._states[quiz_id]
        if not state.submitted:
            raise NotSubmitted(f"Quiz {quiz_id} has not been submitted.")
        if quiz.question_count == 0:
            return 0
        return round(state.score / quiz.question_count * 100)

    def get_status(self, quiz_id: str) -> QuizStatus:
        return self._get_state(quiz_id).status

    def get_answers(self, quiz_id: str) -> list[Answer]:
        return list(self._get_state(quiz_id).answers)

    def get_state(self, quiz_id: str) -> QuizAnswerState:
        """Return a copy of the quiz's state; mutating it has no effect."""
        state = self._get_state(quiz_id)
        return replace(state, answers=list(state.answers))

    def _get_quiz(self, quiz_id: str) -> Quiz:
        try:
            return self._quizzes[quiz_id]
        except KeyError:
            raise InvalidIndex(f"Unknown quiz id {quiz_id!r}") from None

    def _get_state(self, quiz_id: str) -> QuizAnswerState:
        try:
            return self._states[quiz_id]
        except KeyError:
            raise InvalidIndex(f"Unknown quiz id {quiz_id!r}") from None

    def _fresh_state(self, quiz: Quiz) -> QuizAnswerState:
        self._last_attempt += 1
        return QuizAnswerState(
            answers=[question.empty_answer() for question in quiz.questions],
            attempt=self._last_attempt,
        )
