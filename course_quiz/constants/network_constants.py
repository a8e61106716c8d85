"""Network configuration constants for the quiz client."""

import os

DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 8000

DEFAULT_API_BASE_URL: str = os.environ.get("COURSE_QUIZ_API_URL", "http://localhost:5000/api")
DEFAULT_API_TOKEN: str | None = os.environ.get("COURSE_QUIZ_API_TOKEN") or None
REQUEST_TIMEOUT_SECONDS: float = 10.0

GRADING_FAILED_MESSAGE: str = "Failed to submit quiz"
CATALOG_FAILED_MESSAGE: str = "Failed to load quizzes"
