"""Component showing the questions of the active quiz."""

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from course_quiz.constants.ui_constants import (
    MULTIPLE_CHOICE_TAG,
    QUIZ_DESCRIPTION_TEMPLATE,
    SUBMIT_BUTTON,
    SUBMIT_HINT,
    SUBMITTING_BUTTON,
)
from course_quiz.core.markdown_math_renderer import option_letter, renderer
from course_quiz.core.models import QuestionType
from course_quiz.core.quiz_manager import QuizView
from course_quiz.styling.styles import Styles


class QuizPanel(QWidget):
    """UI component for answering one quiz."""

    def __init__(
        self,
        on_select_answer: callable,
        on_submit: callable,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.on_select_answer = on_select_answer
        self.on_submit = on_submit
        self._quiz_id: str | None = None
        self._option_buttons: list[list[QPushButton]] = []
        self._can_submit = False
        self._submitting = False

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel(self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.description_label = QLabel(self)
        self.description_label.setStyleSheet(Styles.get_muted_label_style())
        layout.addWidget(self.description_label)

        self.scroll_area = QScrollArea(self)
        self.scroll_area.setWidgetResizable(True)
        self.questions_container = QWidget(self.scroll_area)
        self.questions_layout = QVBoxLayout()
        self.questions_container.setLayout(self.questions_layout)
        self.scroll_area.setWidget(self.questions_container)
        layout.addWidget(self.scroll_area, stretch=1)

        self.submit_button = QPushButton(SUBMIT_BUTTON, self)
        self.submit_button.setEnabled(False)
        self.submit_button.clicked.connect(self._handle_submit_click)
        layout.addWidget(self.submit_button)

        hint = QLabel(SUBMIT_HINT, self)
        hint.setAlignment(Qt.AlignCenter)
        hint.setStyleSheet(Styles.get_muted_label_style())
        layout.addWidget(hint)

    @property
    def quiz_id(self) -> str | None:
        return self._quiz_id

    def show_quiz(self, view: QuizView) -> None:
        if view.quiz_id != self._quiz_id:
            self._rebuild_questions(view)
        self._quiz_id = view.quiz_id
        self._can_submit = view.can_submit
        self._sync_selection(view)
        self.set_submitting(view.submitting)

    def set_submitting(self, submitting: bool) -> None:
        self._submitting = submitting
        self.submit_button.setText(SUBMITTING_BUTTON if submitting else SUBMIT_BUTTON)
        self._update_enabled_state()

    def _rebuild_questions(self, view: QuizView) -> None:
        while self.questions_layout.count():
            item = self.questions_layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        self._option_buttons = []

        self.title_label.setText(view.title)
        self.description_label.setText(QUIZ_DESCRIPTION_TEMPLATE.format(count=view.question_count))

        for question_index, question in enumerate(view.questions):
            box = QGroupBox(f"{question_index + 1:02d}", self.questions_container)
            box_layout = QVBoxLayout()
            box.setLayout(box_layout)

            header = QHBoxLayout()
            text_label = QLabel(box)
            text_label.setTextFormat(Qt.RichText)
            text_label.setWordWrap(True)
            text_label.setText(renderer.render_fragment(question.question_text))
            header.addWidget(text_label, stretch=1)
            if question.question_type is QuestionType.MULTIPLE:
                tag = QLabel(MULTIPLE_CHOICE_TAG, box)
                tag.setStyleSheet(Styles.get_tag_style())
                header.addWidget(tag)
            box_layout.addLayout(header)

            buttons: list[QPushButton] = []
            for option_index, option in enumerate(question.options):
                button = QPushButton(f"{option_letter(option_index)}.  {option}", box)
                button.setCheckable(True)
                button.clicked.connect(
                    lambda _checked=False, q=question_index, o=option_index: self._handle_option_click(q, o)
                )
                box_layout.addWidget(button)
                buttons.append(button)
            self._option_buttons.append(buttons)
            self.questions_layout.addWidget(box)
        self.questions_layout.addStretch(1)

    def _sync_selection(self, view: QuizView) -> None:
        for buttons, answer in zip(self._option_buttons, view.answers):
            for option_index, button in enumerate(buttons):
                button.setChecked(answer.is_selected(option_index))

    def _update_enabled_state(self) -> None:
        for buttons in self._option_buttons:
            for button in buttons:
                button.setEnabled(not self._submitting)
        self.submit_button.setEnabled(self._can_submit and not self._submitting)

    def _handle_option_click(self, question_index: int, option_index: int) -> None:
        if self._quiz_id is None or self._submitting:
            return
        self.on_select_answer(self._quiz_id, question_index, option_index)

    def _handle_submit_click(self) -> None:
        if self._quiz_id is None or self._submitting or not self._can_submit:
            return
        self.on_submit(self._quiz_id)
