from __future__ import annotations

import pytest

from course_quiz.constants.quiz_constants import UNTITLED_QUIZ_TITLE
from course_quiz.core.errors import CatalogError, InvalidIndex
from course_quiz.core.models import CourseInfo, QuestionType, Quiz, QuizQuestion
from course_quiz.core.services.quiz_catalog import QuizCatalog

COURSE = CourseInfo(id="course-1", title="Audio Engineering")


def quiz(quiz_id="q1", title="Basics", questions=None) -> Quiz:
    return Quiz(
        id=quiz_id,
        title=title,
        questions=questions or [QuizQuestion("  What is gain?  ", [" Level ", "Pan"])],
    )


def test_load_normalizes_text():
    catalog = QuizCatalog()
    loaded = catalog.load(COURSE, [quiz(title="   ")])

    assert loaded[0].title == UNTITLED_QUIZ_TITLE
    assert loaded[0].questions[0].question_text == "What is gain?"
    assert loaded[0].questions[0].options == ["Level", "Pan"]
    assert catalog.get_course() == COURSE


def test_lookup_by_id_and_number():
    catalog = QuizCatalog()
    catalog.load(COURSE, [quiz("q1"), quiz("q2")])

    assert catalog.get_quiz("q2").id == "q2"
    assert catalog.get_quiz_number("q2") == 2
    with pytest.raises(InvalidIndex):
        catalog.get_quiz("q3")


@pytest.mark.parametrize(
    "bad_quiz",
    [
        quiz(quiz_id="  "),
        quiz(questions=[QuizQuestion("   ", ["a"])]),
        quiz(questions=[QuizQuestion("No options", [])]),
        quiz(questions=[QuizQuestion("Blank option", ["a", "  "], QuestionType.MULTIPLE)]),
    ],
)
def test_malformed_quizzes_are_skipped(bad_quiz, caplog):
    catalog = QuizCatalog()
    loaded = catalog.load(COURSE, [bad_quiz, quiz("q2")])

    assert [q.id for q in loaded] == ["q2"]
    assert catalog.get_quiz_number("q2") == 1
    assert "Skipping quiz" in caplog.text


def test_course_with_only_malformed_quizzes_is_empty():
    catalog = QuizCatalog()
    catalog.load(COURSE, [quiz(questions=[QuizQuestion("No options", [])])])
    assert catalog.has_quizzes() is False


def test_duplicate_ids_are_rejected():
    with pytest.raises(CatalogError, match="Duplicate"):
        QuizCatalog().load(COURSE, [quiz("q1"), quiz("q1")])


def test_question_type_parsing_defaults_to_single():
    assert QuestionType.parse("multiple") is QuestionType.MULTIPLE
    assert QuestionType.parse(" Multiple ") is QuestionType.MULTIPLE
    assert QuestionType.parse("single") is QuestionType.SINGLE
    assert QuestionType.parse(None) is QuestionType.SINGLE
    assert QuestionType.parse("essay") is QuestionType.SINGLE
