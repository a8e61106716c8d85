"""Markdown + LaTeX rendering of question text for the Qt and web views.

Question and option text arrives from the course API as markdown that may
contain ``$...$`` math. Both views receive HTML from the same MarkdownIt
instance; the browser page typesets math with MathJax, the Qt labels show
the TeX source inline.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from html import escape

from markdown_it import MarkdownIt

from course_quiz.core.models import QuizQuestion


def option_letter(option_index: int) -> str:
    return chr(ord("A") + option_index)


@dataclass(slots=True)
class MarkdownMathRenderer:
    """Converts markdown-with-math into HTML fragments."""

    enable_html: bool = False
    _markdown: MarkdownIt = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._markdown = (
            MarkdownIt("commonmark", {"html": self.enable_html})
            .enable("table")
            .enable("strikethrough")
        )

    def render_fragment(self, markdown_text: str) -> str:
        """Render a markdown string into an HTML fragment."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<p><em>No content provided.</em></p>"
        return self._markdown.render(sanitized)

    def render_inline(self, markdown_text: str) -> str:
        """Render a single line (an option label) without the wrapping paragraph."""

        sanitized = markdown_text.strip()
        if not sanitized:
            return "<em>(empty)</em>"
        return self._markdown.renderInline(sanitized)

    def render_question(self, question: QuizQuestion, number: int) -> dict[str, object]:
        """HTML pieces for one question card: the prompt and each lettered option."""

        return {
            "number": number,
            "question_html": self.render_fragment(question.question_text),
            "options_html": [
                f"<strong>{escape(option_letter(index))}.</strong> {self.render_inline(option)}"
                for index, option in enumerate(question.options)
            ],
        }


renderer = MarkdownMathRenderer()
# Shared instance; MarkdownIt is safe for concurrent read-only renders.
