"""Component shown once a quiz has been graded."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QPushButton, QVBoxLayout, QWidget

from course_quiz.constants.ui_constants import (
    RESULT_HEADING,
    RESULT_SCORE_TEMPLATE,
    RETAKE_BUTTON,
)
from course_quiz.core.quiz_manager import QuizView
from course_quiz.styling.styles import Styles


class ResultPanel(QWidget):
    """Shows the final score and the retake button."""

    def __init__(self, on_retake: callable, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.on_retake = on_retake
        self._quiz_id: str | None = None

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)
        layout.addStretch(1)

        heading = QLabel(RESULT_HEADING, self)
        heading.setAlignment(Qt.AlignCenter)
        heading.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(heading)

        self.score_badge = QLabel(self)
        self.score_badge.setAlignment(Qt.AlignCenter)
        self.score_badge.setStyleSheet(Styles.get_score_style())
        layout.addWidget(self.score_badge)

        self.score_label = QLabel(self)
        self.score_label.setAlignment(Qt.AlignCenter)
        self.score_label.setWordWrap(True)
        layout.addWidget(self.score_label)

        self.feedback_label = QLabel(self)
        self.feedback_label.setAlignment(Qt.AlignCenter)
        self.feedback_label.setWordWrap(True)
        self.feedback_label.setStyleSheet(Styles.get_muted_label_style())
        layout.addWidget(self.feedback_label)

        self.retake_button = QPushButton(RETAKE_BUTTON, self)
        self.retake_button.clicked.connect(self._handle_retake_click)
        layout.addWidget(self.retake_button, alignment=Qt.AlignCenter)
        layout.addStretch(1)

    def show_result(self, view: QuizView) -> None:
        self._quiz_id = view.quiz_id
        self.score_badge.setText(f"{view.score} / {view.question_count}")
        self.score_label.setText(
            RESULT_SCORE_TEMPLATE.format(
                score=view.score,
                total=view.question_count,
                percent=view.percent,
            )
        )
        self.feedback_label.setText(view.feedback or "")

    def _handle_retake_click(self) -> None:
        if self._quiz_id is not None:
            self.on_retake(self._quiz_id)
