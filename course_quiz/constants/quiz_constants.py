"""Quiz-related constants shared across UI and core layers."""

UNANSWERED: int = -1
UNTITLED_QUIZ_TITLE: str = "Untitled quiz"

FEEDBACK_PERFECT: str = (
    "Outstanding effort! You've successfully mastered all concepts in this section."
)
FEEDBACK_STRONG: str = (
    "Strong work! You clearly understand the core principles, "
    "though there's still room for minor refinement."
)
FEEDBACK_RETRY: str = (
    "Don't be discouraged. Learning is an iterative process. "
    "We recommend reviewing the lesson material and giving it another shot."
)
