"""Qt UI constants used across widgets."""

WINDOW_TITLE: str = "CourseQuiz"
STUDENT_URL_PLACEHOLDER: str = "http://<student-ip>:8000/"

QUIZ_LIST_HEADING: str = "Quiz List"
QUIZ_LIST_ITEM_TEMPLATE: str = "{number}. {title}\n{count} Questions"
QUIZ_LIST_SUBMITTED_MARK: str = "  ✓"
COURSE_HEADING_TEMPLATE: str = "{title} - Assessments"
COURSE_HEADING_FALLBACK: str = "Assessments"

QUIZ_DESCRIPTION_TEMPLATE: str = "This quiz contains {count} questions."
MULTIPLE_CHOICE_TAG: str = "Multiple Choice"
SUBMIT_BUTTON: str = "Submit Assessment"
SUBMITTING_BUTTON: str = "Submitting…"
SUBMIT_HINT: str = "Please answer all questions before submitting."
RETAKE_BUTTON: str = "Retake Assessment"
RESULT_HEADING: str = "Quiz Completed!"
RESULT_SCORE_TEMPLATE: str = "You achieved a score of {score} out of {total} ({percent}%)."
SUBMIT_SUCCESS_MESSAGE: str = "Quiz submitted successfully!"

NO_QUIZZES_TITLE: str = "No Quizzes Available"
NO_QUIZZES_MESSAGE: str = (
    "There are currently no assessments published for this course. Please check back later."
)
SELECT_QUIZ_MESSAGE: str = "Click on a quiz from the list to start your knowledge check."
