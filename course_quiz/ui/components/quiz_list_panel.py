"""Sidebar listing the quizzes of the course."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QListWidget, QListWidgetItem, QVBoxLayout, QWidget

from course_quiz.constants.ui_constants import (
    QUIZ_LIST_HEADING,
    QUIZ_LIST_ITEM_TEMPLATE,
    QUIZ_LIST_SUBMITTED_MARK,
)
from course_quiz.core.models import QuizStatus
from course_quiz.core.quiz_manager import QuizSummary
from course_quiz.styling.styles import Styles


class QuizListPanel(QWidget):
    """UI component for choosing the active quiz."""

    def __init__(self, on_quiz_selected: callable, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.on_quiz_selected = on_quiz_selected
        self._snapshot: list[tuple[str, QuizStatus]] = []
        self._updating = False

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        heading = QLabel(QUIZ_LIST_HEADING, self)
        heading.setStyleSheet(Styles.get_muted_label_style())
        layout.addWidget(heading)

        self.quiz_list = QListWidget(self)
        self.quiz_list.currentItemChanged.connect(self._handle_current_changed)
        layout.addWidget(self.quiz_list, stretch=1)

    def refresh(self, summaries: list[QuizSummary], selected_quiz_id: str | None) -> None:
        snapshot = [(summary.quiz_id, summary.status) for summary in summaries]
        self._updating = True
        try:
            if snapshot != self._snapshot:
                self._snapshot = snapshot
                self.quiz_list.clear()
                for summary in summaries:
                    text = QUIZ_LIST_ITEM_TEMPLATE.format(
                        number=summary.number,
                        title=summary.title,
                        count=summary.question_count,
                    )
                    if summary.status is QuizStatus.SUBMITTED:
                        text += QUIZ_LIST_SUBMITTED_MARK
                    item = QListWidgetItem(text, self.quiz_list)
                    item.setData(Qt.UserRole, summary.quiz_id)
            self._select_row(selected_quiz_id)
        finally:
            self._updating = False

    def current_quiz_id(self) -> str | None:
        item = self.quiz_list.currentItem()
        return item.data(Qt.UserRole) if item is not None else None

    def _select_row(self, quiz_id: str | None) -> None:
        for row in range(self.quiz_list.count()):
            if self.quiz_list.item(row).data(Qt.UserRole) == quiz_id:
                self.quiz_list.setCurrentRow(row)
                return

    def _handle_current_changed(self, current: QListWidgetItem | None, _previous) -> None:
        if self._updating or current is None:
            return
        self.on_quiz_selected(current.data(Qt.UserRole))
