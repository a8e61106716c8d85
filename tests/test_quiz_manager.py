from __future__ import annotations

from dataclasses import FrozenInstanceError
from threading import Event, Thread

import pytest

from conftest import FakeBackend, make_quiz
from course_quiz.constants.network_constants import GRADING_FAILED_MESSAGE
from course_quiz.constants.quiz_constants import (
    FEEDBACK_PERFECT,
    FEEDBACK_RETRY,
    FEEDBACK_STRONG,
)
from course_quiz.core.errors import (
    CatalogError,
    GradingFailed,
    InvalidIndex,
    SubmissionInProgress,
)
from course_quiz.core.feedback import performance_message
from course_quiz.core.models import CourseInfo, QuizStatus
from course_quiz.core.quiz_manager import QuizManager


def answer_quiz_one(manager: QuizManager) -> None:
    manager.select_answer("quiz-1", 0, 1)
    manager.select_answer("quiz-1", 1, 0)


def test_load_course_initializes_every_quiz_and_selects_the_first(manager):
    summaries = manager.get_quiz_summaries()
    assert [s.quiz_id for s in summaries] == ["quiz-1", "quiz-3"]
    assert [s.number for s in summaries] == [1, 2]
    assert [s.question_count for s in summaries] == [2, 3]
    assert all(s.status is QuizStatus.IN_PROGRESS for s in summaries)
    assert manager.get_selected_quiz_id() == "quiz-1"
    assert manager.get_course() == CourseInfo(id="course-1", title="Audio Engineering")


def test_load_course_with_no_quizzes():
    manager = QuizManager(FakeBackend(quizzes=[]))
    assert manager.load_course("course-1") == []
    assert manager.has_quizzes() is False
    assert manager.get_selected_quiz_id() is None


def test_refetching_the_catalog_discards_previous_answers(manager):
    answer_quiz_one(manager)
    manager.load_course("course-1")
    assert manager.can_submit("quiz-1") is False


def test_catalog_errors_propagate():
    backend = FakeBackend(quizzes=[make_quiz("dup"), make_quiz("dup")])
    with pytest.raises(CatalogError):
        QuizManager(backend).load_course("course-1")


def test_select_quiz_rejects_unknown_ids(manager):
    with pytest.raises(InvalidIndex):
        manager.select_quiz("nope")
    assert manager.get_selected_quiz_id() == "quiz-1"


def test_submit_quiz_grades_through_backend(manager, backend):
    answer_quiz_one(manager)
    result = manager.submit_quiz("quiz-1")

    assert result.score == 2
    assert backend.grade_calls == [("quiz-1", [1, [0]])]
    view = manager.get_quiz_view("quiz-1")
    assert view.submitted
    assert view.score == 2
    assert view.percent == 100
    assert view.feedback == FEEDBACK_PERFECT


def test_failed_submission_surfaces_message_and_keeps_answers(manager, backend):
    backend.error = GradingFailed("Please answer all questions")
    answer_quiz_one(manager)

    with pytest.raises(GradingFailed, match="Please answer all questions"):
        manager.submit_quiz("quiz-1")

    view = manager.get_quiz_view("quiz-1")
    assert view.status is QuizStatus.IN_PROGRESS
    assert view.can_submit is True
    assert [answer.to_payload() for answer in view.answers] == [1, [0]]
    assert len(backend.grade_calls) == 1


def test_unexpected_backend_error_is_reported_as_grading_failure(manager, backend):
    backend.error = RuntimeError("boom")
    answer_quiz_one(manager)
    with pytest.raises(GradingFailed, match=GRADING_FAILED_MESSAGE):
        manager.submit_quiz("quiz-1")
    assert manager.get_quiz_view("quiz-1").status is QuizStatus.IN_PROGRESS


def test_in_flight_submission_blocks_the_same_quiz_only(manager, backend):
    backend.release = Event()
    answer_quiz_one(manager)
    worker = Thread(target=manager.submit_quiz, args=("quiz-1",))
    worker.start()
    assert backend.entered.wait(timeout=5)

    try:
        assert manager.get_quiz_view("quiz-1").submitting
        assert manager.can_submit("quiz-1") is False
        with pytest.raises(SubmissionInProgress):
            manager.submit_quiz("quiz-1")
        with pytest.raises(SubmissionInProgress):
            manager.select_answer("quiz-1", 0, 0)

        manager.select_answer("quiz-3", 0, 1)
        assert manager.get_quiz_view("quiz-3").answers[0].selected == 1
    finally:
        backend.release.set()
        worker.join(timeout=5)

    assert len(backend.grade_calls) == 1
    assert manager.get_quiz_view("quiz-1").submitted


def test_reset_while_in_flight_wins_over_the_late_result(manager, backend):
    backend.release = Event()
    answer_quiz_one(manager)
    worker = Thread(target=manager.submit_quiz, args=("quiz-1",))
    worker.start()
    assert backend.entered.wait(timeout=5)

    view = manager.reset_quiz("quiz-1")
    assert view.status is QuizStatus.IN_PROGRESS
    backend.release.set()
    worker.join(timeout=5)

    view = manager.get_quiz_view("quiz-1")
    assert view.status is QuizStatus.IN_PROGRESS
    assert view.score == 0



def test_reloading_the_course_while_in_flight_drops_the_late_result(manager, backend):
    backend.release = Event()
    answer_quiz_one(manager)
    worker = Thread(target=manager.submit_quiz, args=("quiz-1",))
    worker.start()
    assert backend.entered.wait(timeout=5)

    manager.load_course("course-1")
    backend.release.set()
    worker.join(timeout=5)

    view = manager.get_quiz_view("quiz-1")
    assert view.status is QuizStatus.IN_PROGRESS
    assert view.score == 0
    assert all(not answer.is_answered for answer in view.answers)

def test_retake_after_submission(manager):
    answer_quiz_one(manager)
    manager.submit_quiz("quiz-1")

    view = manager.reset_quiz("quiz-1")

    assert view.status is QuizStatus.IN_PROGRESS
    assert view.score == 0
    assert view.percent is None
    assert not any(answer.is_answered for answer in view.answers)


def test_summaries_reflect_submitted_quizzes(manager):
    answer_quiz_one(manager)
    manager.submit_quiz("quiz-1")
    statuses = {s.quiz_id: s.status for s in manager.get_quiz_summaries()}
    assert statuses == {"quiz-1": QuizStatus.SUBMITTED, "quiz-3": QuizStatus.IN_PROGRESS}


@pytest.mark.parametrize(
    ("score", "total", "expected"),
    [
        (3, 3, FEEDBACK_PERFECT),
        (2, 3, FEEDBACK_STRONG),
        (1, 2, FEEDBACK_STRONG),
        (1, 3, FEEDBACK_RETRY),
        (0, 0, FEEDBACK_RETRY),
    ],
)
def test_performance_message_tiers(score, total, expected):
    assert performance_message(score, total) == expected


def test_quiz_view_cannot_be_modified(manager):
    view = manager.get_quiz_view("quiz-1")
    with pytest.raises(FrozenInstanceError):
        view.score = 3
