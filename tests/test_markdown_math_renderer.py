from __future__ import annotations

from course_quiz.core.markdown_math_renderer import MarkdownMathRenderer, option_letter
from course_quiz.core.models import QuestionType, QuizQuestion


def test_fragment_keeps_math_for_mathjax():
    html = MarkdownMathRenderer().render_fragment("What is **$2 + 2$**?")
    assert html.strip() == "<p>What is <strong>$2 + 2$</strong>?</p>"


def test_empty_fragment_gets_placeholder():
    assert MarkdownMathRenderer().render_fragment("   ") == "<p><em>No content provided.</em></p>"


def test_raw_html_is_escaped_by_default():
    html = MarkdownMathRenderer().render_fragment("<script>alert(1)</script>")
    assert "<script>" not in html


def test_render_question_letters_options():
    question = QuizQuestion("Pick *one*", ["`dB`", "Hz", ""], QuestionType.SINGLE)
    rendered = MarkdownMathRenderer().render_question(question, number=3)

    assert rendered["number"] == 3
    assert rendered["question_html"].strip() == "<p>Pick <em>one</em></p>"
    assert rendered["options_html"] == [
        "<strong>A.</strong> <code>dB</code>",
        "<strong>B.</strong> Hz",
        "<strong>C.</strong> <em>(empty)</em>",
    ]


def test_option_letter():
    assert [option_letter(i) for i in range(4)] == ["A", "B", "C", "D"]
