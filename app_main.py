"""Application entry point for the CourseQuiz student client."""

from __future__ import annotations

import socket
import sys

from PySide6.QtWidgets import QApplication

from course_quiz.client.rest_backend import RestCourseBackend
from course_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from course_quiz.core.errors import CatalogError
from course_quiz.core.quiz_manager import QuizManager
from course_quiz.server.api_server import start_api_server
from course_quiz.ui.dialog_helpers import show_error
from course_quiz.ui.student_main_window import StudentMainWindow
from course_quiz.utils.logging_config import configure_logging


def _determine_student_url(port: int) -> str:
    """Best-effort determination of the local IP for the browser URL."""
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(("8.8.8.8", 80))
            ip_address = sock.getsockname()[0]
    except OSError:
        ip_address = "127.0.0.1"
    return f"http://{ip_address}:{port}/"


def main() -> None:
    """Load the course quizzes, start the API server, and launch the Qt UI."""
    logger = configure_logging()
    if len(sys.argv) < 2:
        print("usage: app_main.py <course-id>", file=sys.stderr)
        sys.exit(2)
    course_id = sys.argv[1]
    logger.info("Starting CourseQuiz for course %s", course_id)

    app = QApplication(sys.argv)
    backend = RestCourseBackend()
    quiz_manager = QuizManager(backend)
    try:
        quiz_manager.load_course(course_id)
    except CatalogError as exc:
        logger.error("Could not load course %s: %s", course_id, exc)
        show_error(None, "Failed to load quizzes", str(exc))

    start_api_server(quiz_manager=quiz_manager, host=DEFAULT_HOST, port=DEFAULT_PORT)
    student_url = _determine_student_url(DEFAULT_PORT)
    logger.info("Student page available at %s", student_url)

    window = StudentMainWindow(quiz_manager=quiz_manager, student_url=student_url)
    window.show()
    exit_code = app.exec()
    backend.close()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
