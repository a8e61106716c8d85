"""Static metadata describing CourseQuiz."""

APP_NAME = "CourseQuiz"
APP_VERSION = "0.1.0"
