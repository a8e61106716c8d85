from __future__ import annotations

from datetime import datetime, timezone
import json

import httpx
import pytest

from course_quiz.client.rest_backend import RestCourseBackend
from course_quiz.constants.network_constants import GRADING_FAILED_MESSAGE
from course_quiz.core.errors import CatalogError, GradingFailed
from course_quiz.core.models import QuestionType

QUIZ_LIST = [
    {
        "_id": "q1",
        "title": "Recording basics",
        "course": "c1",
        "lesson": {"_id": "l1", "title": "Intro"},
        "questions": [
            {"question": "Pick one", "options": ["A", "B", "C"], "type": "single"},
            {"question": "Pick many", "options": ["X", "Y"], "type": "multiple"},
            {"question": "Legacy question", "options": ["Yes", "No"]},
        ],
        "submissions": [
            {
                "student": {"_id": "s1", "name": "Sam"},
                "answers": [1, [0, 1], 0],
                "score": 2,
                "submittedAt": "2026-02-01T10:00:00Z",
            }
        ],
    }
]


def make_backend(handler, token=None) -> RestCourseBackend:
    return RestCourseBackend(
        base_url="http://api.test/api",
        token=token,
        transport=httpx.MockTransport(handler),
    )


def test_fetch_quizzes_maps_payload_to_domain():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=QUIZ_LIST)

    quizzes = make_backend(handler, token="secret").fetch_quizzes("c1")

    assert seen == {"url": "http://api.test/api/quizzes/course/c1", "auth": "Bearer secret"}
    quiz = quizzes[0]
    assert quiz.id == "q1"
    assert quiz.course_id == "c1"
    assert quiz.lesson_id == "l1"
    assert [q.question_type for q in quiz.questions] == [
        QuestionType.SINGLE,
        QuestionType.MULTIPLE,
        QuestionType.SINGLE,
    ]
    submission = quiz.submissions[0]
    assert submission.student_id == "s1"
    assert submission.score == 2
    assert submission.answers == [1, [0, 1], 0]


def test_fetch_course():
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == "/api/courses/c1"
        return httpx.Response(200, json={"_id": "c1", "title": "Audio Engineering", "price": 10})

    course = make_backend(handler).fetch_course("c1")
    assert (course.id, course.title) == ("c1", "Audio Engineering")


def test_catalog_http_error_raises_catalog_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Course not found"})

    with pytest.raises(CatalogError, match="Course not found"):
        make_backend(handler).fetch_quizzes("c1")


def test_malformed_catalog_raises_catalog_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=[{"title": "no id"}])

    with pytest.raises(CatalogError):
        make_backend(handler).fetch_quizzes("c1")


def test_grade_posts_answers_and_returns_score():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["method"] = request.method
        captured["path"] = request.url.path
        captured["body"] = json.loads(request.content)
        return httpx.Response(200, json={"score": 2, "submittedAt": "2026-02-01T10:00:00Z"})

    result = make_backend(handler).grade("q1", [1, [0, 1]])

    assert captured == {"method": "POST", "path": "/api/quizzes/q1/submit", "body": {"answers": [1, [0, 1]]}}
    assert result.score == 2
    assert result.submitted_at == datetime(2026, 2, 1, 10, 0, tzinfo=timezone.utc)


def test_grade_without_timestamp_uses_current_time():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"score": 1})

    before = datetime.now(timezone.utc)
    result = make_backend(handler).grade("q1", [0])
    assert result.score == 1
    assert result.submitted_at >= before


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ({"message": "Please answer all questions"}, "Please answer all questions"),
        ({"error": "Quiz closed"}, "Quiz closed"),
        ({}, GRADING_FAILED_MESSAGE),
    ],
)
def test_grade_error_messages(body, expected):
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, json=body)

    with pytest.raises(GradingFailed) as excinfo:
        make_backend(handler).grade("q1", [0])
    assert str(excinfo.value) == expected


def test_grade_transport_error_raises_grading_failed():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(GradingFailed, match=GRADING_FAILED_MESSAGE):
        make_backend(handler).grade("q1", [0])


def test_grade_malformed_response_raises_grading_failed():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="not json")

    with pytest.raises(GradingFailed):
        make_backend(handler).grade("q1", [0])
