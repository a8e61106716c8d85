"""httpx implementation of the course platform API."""

from __future__ import annotations

from datetime import datetime, timezone
import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from course_quiz.client.schemas import (
    CoursePayload,
    QuizPayload,
    SubmitRequest,
    SubmitResponse,
)
from course_quiz.constants.network_constants import (
    CATALOG_FAILED_MESSAGE,
    DEFAULT_API_BASE_URL,
    DEFAULT_API_TOKEN,
    GRADING_FAILED_MESSAGE,
    REQUEST_TIMEOUT_SECONDS,
)
from course_quiz.core.course_backend import CourseBackend
from course_quiz.core.errors import CatalogError, GradingFailed
from course_quiz.core.models import CourseInfo, GradeResult, Quiz

logger = logging.getLogger(__name__)

_QUIZ_LIST = TypeAdapter(list[QuizPayload])


def _extract_error_message(response: httpx.Response, default: str) -> str:
    """Pull the human-readable message out of an API error body."""
    try:
        body = response.json()
    except ValueError:
        return default
    if isinstance(body, dict):
        for key in ("message", "error", "detail"):
            value = body.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
    return default


class RestCourseBackend(CourseBackend):
    """Talks to the course platform REST API with a shared ``httpx.Client``."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_BASE_URL,
        token: str | None = DEFAULT_API_TOKEN,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def fetch_course(self, course_id: str) -> CourseInfo:
        body = self._get_catalog_json(f"/courses/{course_id}")
        try:
            return CoursePayload.model_validate(body).to_domain()
        except ValidationError as exc:
            raise CatalogError(f"{CATALOG_FAILED_MESSAGE}: malformed course {course_id!r}") from exc

    def fetch_quizzes(self, course_id: str) -> list[Quiz]:
        body = self._get_catalog_json(f"/quizzes/course/{course_id}")
        try:
            payloads = _QUIZ_LIST.validate_python(body)
        except ValidationError as exc:
            raise CatalogError(f"{CATALOG_FAILED_MESSAGE}: malformed quiz list") from exc
        logger.info("Fetched %d quizzes for course %s", len(payloads), course_id)
        return [payload.to_domain() for payload in payloads]

    def grade(self, quiz_id: str, answers: list[int | list[int]]) -> GradeResult:
        request = SubmitRequest(answers=answers)
        try:
            response = self._client.post(
                f"/quizzes/{quiz_id}/submit",
                json=request.model_dump(mode="json"),
            )
        except httpx.HTTPError as exc:
            logger.warning("Grading request for quiz %s failed: %s", quiz_id, exc)
            raise GradingFailed(GRADING_FAILED_MESSAGE) from exc

        if response.is_error:
            message = _extract_error_message(response, GRADING_FAILED_MESSAGE)
            logger.warning(
                "Grading rejected for quiz %s (%s): %s", quiz_id, response.status_code, message
            )
            raise GradingFailed(message)

        try:
            result = SubmitResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            raise GradingFailed(GRADING_FAILED_MESSAGE) from exc

        submitted_at = result.submitted_at or datetime.now(timezone.utc)
        return GradeResult(score=result.score, submitted_at=submitted_at)

    def _get_catalog_json(self, path: str) -> Any:
        try:
            response = self._client.get(path)
        except httpx.HTTPError as exc:
            logger.warning("Catalog request %s failed: %s", path, exc)
            raise CatalogError(CATALOG_FAILED_MESSAGE) from exc
        if response.is_error:
            message = _extract_error_message(response, "")
            detail = f"{CATALOG_FAILED_MESSAGE}: {message}" if message else CATALOG_FAILED_MESSAGE
            raise CatalogError(detail)
        try:
            return response.json()
        except ValueError as exc:
            raise CatalogError(CATALOG_FAILED_MESSAGE) from exc
