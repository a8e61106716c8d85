"""Qt UI components for the student application."""

from .dialog_helpers import confirm_retake, show_error
from .student_main_window import StudentMainWindow

__all__ = [
    "StudentMainWindow",
    "confirm_retake",
    "show_error",
]
