"""Runs quiz submissions off the Qt event loop."""

from __future__ import annotations

from threading import Thread

from PySide6.QtCore import QObject, Signal

from course_quiz.core.errors import QuizSessionError
from course_quiz.core.quiz_manager import QuizManager


class SubmissionWorker(QObject):
    """Submits a quiz on a background thread and reports back through signals.

    The worker lives in the GUI thread, so signals emitted from the
    background thread are queued onto the event loop.
    """

    succeeded = Signal(str, object)
    failed = Signal(str, str)

    def __init__(self, quiz_manager: QuizManager, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self.quiz_manager = quiz_manager

    def submit(self, quiz_id: str) -> Thread:
        thread = Thread(
            target=self._run,
            args=(quiz_id,),
            name=f"QuizSubmit-{quiz_id}",
            daemon=True,
        )
        thread.start()
        return thread

    def _run(self, quiz_id: str) -> None:
        try:
            result = self.quiz_manager.submit_quiz(quiz_id)
        except QuizSessionError as exc:
            self.failed.emit(quiz_id, str(exc))
            return
        self.succeeded.emit(quiz_id, result)
