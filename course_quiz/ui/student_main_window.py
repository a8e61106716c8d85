"""Qt main window for taking the quizzes of one course."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from course_quiz.constants.ui_constants import (
    COURSE_HEADING_FALLBACK,
    COURSE_HEADING_TEMPLATE,
    NO_QUIZZES_MESSAGE,
    NO_QUIZZES_TITLE,
    SELECT_QUIZ_MESSAGE,
    STUDENT_URL_PLACEHOLDER,
    SUBMIT_SUCCESS_MESSAGE,
    WINDOW_TITLE,
)
from course_quiz.core.errors import QuizSessionError
from course_quiz.core.models import GradeResult
from course_quiz.core.quiz_manager import QuizManager, QuizView
from course_quiz.styling.styles import Styles
from course_quiz.ui.components.quiz_list_panel import QuizListPanel
from course_quiz.ui.components.quiz_panel import QuizPanel
from course_quiz.ui.components.result_panel import ResultPanel
from course_quiz.ui.dialog_helpers import confirm_retake, show_error
from course_quiz.ui.submission_worker import SubmissionWorker

_EMPTY_PAGE = 0
_QUIZ_PAGE = 1
_RESULT_PAGE = 2


class StudentMainWindow(QMainWindow):
    """Quiz list on the left, the selected quiz or its result on the right."""

    def __init__(
        self,
        quiz_manager: QuizManager,
        student_url: str | None = None,
        confirm_before_retake: bool = True,
    ) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)

        self.quiz_manager = quiz_manager
        self.student_url = student_url or STUDENT_URL_PLACEHOLDER
        self._confirm_before_retake = confirm_before_retake

        self.submission_worker = SubmissionWorker(quiz_manager, self)
        self.submission_worker.succeeded.connect(self._handle_submission_succeeded)
        self.submission_worker.failed.connect(self._handle_submission_failed)

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())
        self.refresh()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self.course_label = QLabel(COURSE_HEADING_FALLBACK, self)
        self.course_label.setStyleSheet(Styles.get_large_label_style())
        root_layout.addWidget(self.course_label)

        self.network_label = QLabel(f"Also available in the browser: {self.student_url}", self)
        self.network_label.setStyleSheet(Styles.get_muted_label_style())
        root_layout.addWidget(self.network_label)

        content_row = QHBoxLayout()
        root_layout.addLayout(content_row, stretch=1)

        self.quiz_list_panel = QuizListPanel(on_quiz_selected=self._handle_quiz_selected, parent=self)
        content_row.addWidget(self.quiz_list_panel, stretch=1)

        self.content_stack = QStackedWidget(self)
        self.empty_label = QLabel(SELECT_QUIZ_MESSAGE, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.empty_label.setWordWrap(True)
        self.quiz_panel = QuizPanel(
            on_select_answer=self._handle_select_answer,
            on_submit=self._handle_submit,
            parent=self,
        )
        self.result_panel = ResultPanel(on_retake=self._handle_retake, parent=self)
        self.content_stack.addWidget(self.empty_label)
        self.content_stack.addWidget(self.quiz_panel)
        self.content_stack.addWidget(self.result_panel)
        content_row.addWidget(self.content_stack, stretch=3)

        self.status_label = QLabel(self)
        self.status_label.setStyleSheet(Styles.get_muted_label_style())
        root_layout.addWidget(self.status_label)

    def refresh(self) -> None:
        """Re-read the catalog and show the selected quiz."""
        course = self.quiz_manager.get_course()
        if course is not None and course.title:
            self.course_label.setText(COURSE_HEADING_TEMPLATE.format(title=course.title))
        else:
            self.course_label.setText(COURSE_HEADING_FALLBACK)

        if not self.quiz_manager.has_quizzes():
            self.empty_label.setText(f"{NO_QUIZZES_TITLE}\n\n{NO_QUIZZES_MESSAGE}")
            self.quiz_list_panel.refresh([], None)
            self.content_stack.setCurrentIndex(_EMPTY_PAGE)
            return

        selected = self.quiz_manager.get_selected_quiz_id()
        self.quiz_list_panel.refresh(self.quiz_manager.get_quiz_summaries(), selected)
        if selected is None:
            self.empty_label.setText(SELECT_QUIZ_MESSAGE)
            self.content_stack.setCurrentIndex(_EMPTY_PAGE)
            return
        self._show_view(self.quiz_manager.get_quiz_view(selected))

    def _show_view(self, view: QuizView) -> None:
        if view.submitted:
            self.result_panel.show_result(view)
            self.content_stack.setCurrentIndex(_RESULT_PAGE)
        else:
            self.quiz_panel.show_quiz(view)
            self.content_stack.setCurrentIndex(_QUIZ_PAGE)

    def _refresh_list(self) -> None:
        self.quiz_list_panel.refresh(
            self.quiz_manager.get_quiz_summaries(),
            self.quiz_manager.get_selected_quiz_id(),
        )

    def _handle_quiz_selected(self, quiz_id: str) -> None:
        self.status_label.clear()
        try:
            view = self.quiz_manager.select_quiz(quiz_id)
        except QuizSessionError as exc:
            show_error(self, "Quiz unavailable", str(exc))
            return
        self._show_view(view)

    def _handle_select_answer(self, quiz_id: str, question_index: int, option_index: int) -> None:
        try:
            self.quiz_manager.select_answer(quiz_id, question_index, option_index)
        except QuizSessionError as exc:
            self.status_label.setText(str(exc))
        self._show_view(self.quiz_manager.get_quiz_view(quiz_id))

    def _handle_submit(self, quiz_id: str) -> None:
        if not self.quiz_manager.can_submit(quiz_id):
            return
        self.quiz_panel.set_submitting(True)
        self.status_label.clear()
        self.submission_worker.submit(quiz_id)

    def _handle_submission_succeeded(self, quiz_id: str, result: GradeResult) -> None:
        self.status_label.setText(SUBMIT_SUCCESS_MESSAGE)
        self._finish_submission(quiz_id)

    def _handle_submission_failed(self, quiz_id: str, message: str) -> None:
        self._finish_submission(quiz_id)
        show_error(self, "Submission failed", message)

    def _finish_submission(self, quiz_id: str) -> None:
        if self.quiz_panel.quiz_id == quiz_id:
            self.quiz_panel.set_submitting(False)
        self._refresh_list()
        if self.quiz_manager.get_selected_quiz_id() == quiz_id:
            self._show_view(self.quiz_manager.get_quiz_view(quiz_id))

    def _handle_retake(self, quiz_id: str) -> None:
        view = self.quiz_manager.get_quiz_view(quiz_id)
        if self._confirm_before_retake and not confirm_retake(self, view.title):
            return
        self._show_view(self.quiz_manager.reset_quiz(quiz_id))
        self._refresh_list()
