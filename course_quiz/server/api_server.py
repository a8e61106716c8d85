"""FastAPI server that exposes the student quiz endpoints."""

from __future__ import annotations

from datetime import timezone
from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field
import uvicorn

from course_quiz.constants.about import APP_NAME, APP_VERSION
from course_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from course_quiz.core.errors import (
    AlreadySubmitted,
    GradingFailed,
    InvalidIndex,
    NotSubmitted,
    SubmissionInProgress,
    UnansweredQuestions,
)
from course_quiz.core.markdown_math_renderer import renderer
from course_quiz.core.quiz_manager import QuizManager, QuizView

_STUDENT_PAGE_HTML = """<!doctype html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <title>CourseQuiz</title>
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <style>
      :root { font-family: 'Inter', system-ui, sans-serif; background: #0b1120; color: #f5f7ff; }
      body { margin: 0; padding: 1.5rem; display: grid; grid-template-columns: minmax(200px, 1fr) 3fr; gap: 1.5rem; }
      .card { background: #111a30; border-radius: 0.75rem; padding: 1.5rem; box-shadow: 0 0.5rem 1.5rem rgba(0, 0, 0, 0.4); }
      .hidden { display: none; }
      .quiz-link { display: block; width: 100%; text-align: left; margin-bottom: 0.5rem; border: 2px solid transparent; border-radius: 0.75rem; padding: 0.75rem; background: #16213d; color: #f5f7ff; cursor: pointer; }
      .quiz-link.active { border-color: #1f9aa5; }
      .question { margin-bottom: 1.5rem; }
      .tag { font-size: 0.7rem; text-transform: uppercase; background: rgba(31, 154, 165, 0.25); padding: 0.2rem 0.5rem; border-radius: 0.35rem; }
      .options-grid { display: grid; grid-template-columns: repeat(auto-fit, minmax(180px, 1fr)); gap: 0.75rem; }
      .option-button { border: 2px solid transparent; border-radius: 0.75rem; padding: 1rem; font-size: 1rem; background: #1c2745; color: #fff; cursor: pointer; text-align: left; }
      .option-button.selected { border-color: #1f9aa5; background: #16808a; }
      .option-button:disabled, .primary-button:disabled { opacity: 0.5; cursor: not-allowed; }
      .primary-button { border: none; border-radius: 0.75rem; padding: 0.85rem 1.5rem; font-size: 1rem; background: #1f9aa5; color: #fff; cursor: pointer; }
      #status { min-height: 1.25rem; }
    </style>
    <script>
      window.MathJax = { tex: { inlineMath: [['$','$']], displayMath: [['$$','$$']] }, svg: { fontCache: 'global' } };
    </script>
    <script defer src=\"https://cdn.jsdelivr.net/npm/mathjax@3/es5/tex-mml-chtml.js\"></script>
  </head>
  <body>
    <nav class=\"card\">
      <h2 id=\"course-title\">Assessments</h2>
      <div id=\"quiz-list\"></div>
    </nav>
    <main class=\"card\">
      <section id=\"empty-card\">
        <h2>Select an Assessment</h2>
        <p>Click on a quiz from the list to start your knowledge check.</p>
      </section>
      <section id=\"quiz-card\" class=\"hidden\">
        <h1 id=\"quiz-title\"></h1>
        <div id=\"questions\"></div>
        <button id=\"submit-button\" class=\"primary-button\" disabled>Submit Assessment</button>
        <p>Please answer all questions before submitting.</p>
      </section>
      <section id=\"result-card\" class=\"hidden\">
        <h1>Quiz Completed!</h1>
        <p id=\"result-score\"></p>
        <p id=\"result-feedback\"></p>
        <button id=\"retake-button\" class=\"primary-button\">Retake Assessment</button>
      </section>
      <p id=\"status\"></p>
    </main>
    <script>
      const quizList = document.getElementById('quiz-list');
      const quizCard = document.getElementById('quiz-card');
      const resultCard = document.getElementById('result-card');
      const emptyCard = document.getElementById('empty-card');
      const questionsEl = document.getElementById('questions');
      const submitButton = document.getElementById('submit-button');
      const statusEl = document.getElementById('status');
      let selectedQuizId = null;
      let submitting = false;

      function setVisibility(element, isVisible) {
        element.classList.toggle('hidden', !isVisible);
      }

      async function requestJson(url, options = {}) {
        const response = await fetch(url, {
          headers: { 'Content-Type': 'application/json' },
          ...options,
        });
        const body = await response.json().catch(() => ({}));
        if (!response.ok) {
          throw new Error(body.detail || 'Request failed.');
        }
        return body;
      }

      async function typesetMath() {
        if (window.MathJax && window.MathJax.typesetPromise) {
          try { await window.MathJax.typesetPromise([questionsEl]); } catch (err) { console.warn(err); }
        }
      }

      async function loadQuizList() {
        const payload = await requestJson('/quizzes');
        if (payload.course_title) {
          document.getElementById('course-title').textContent = `${payload.course_title} - Assessments`;
        }
        quizList.innerHTML = '';
        payload.quizzes.forEach(quiz => {
          const button = document.createElement('button');
          button.className = 'quiz-link' + (quiz.quiz_id === selectedQuizId ? ' active' : '');
          const mark = quiz.status === 'submitted' ? ' ✓' : '';
          button.textContent = `${quiz.number}. ${quiz.title} (${quiz.question_count} Questions)${mark}`;
          button.addEventListener('click', () => showQuiz(quiz.quiz_id));
          quizList.appendChild(button);
        });
        if (!selectedQuizId && payload.selected_quiz_id) {
          await showQuiz(payload.selected_quiz_id);
        }
      }

      function renderQuiz(view) {
        setVisibility(emptyCard, false);
        document.getElementById('quiz-title').textContent = view.title;
        if (view.status === 'submitted') {
          setVisibility(quizCard, false);
          setVisibility(resultCard, true);
          document.getElementById('result-score').textContent =
            `You achieved a score of ${view.score} out of ${view.question_count} (${view.percent}%).`;
          document.getElementById('result-feedback').textContent = view.feedback || '';
          return;
        }
        setVisibility(resultCard, false);
        setVisibility(quizCard, true);
        questionsEl.innerHTML = '';
        view.questions.forEach((question, qIndex) => {
          const block = document.createElement('div');
          block.className = 'question';
          const tag = question.question_type === 'multiple' ? '<span class=\"tag\">Multiple Choice</span>' : '';
          block.innerHTML = `<div>${question.number}. ${tag}</div>${question.question_html}`;
          const grid = document.createElement('div');
          grid.className = 'options-grid';
          question.options_html.forEach((optionHtml, oIndex) => {
            const button = document.createElement('button');
            button.className = 'option-button' + (question.selected.includes(oIndex) ? ' selected' : '');
            button.innerHTML = optionHtml;
            button.disabled = submitting || view.status !== 'in_progress';
            button.addEventListener('click', () => selectAnswer(qIndex, oIndex));
            grid.appendChild(button);
          });
          block.appendChild(grid);
          questionsEl.appendChild(block);
        });
        submitButton.disabled = submitting || !view.can_submit;
        typesetMath();
      }

      async function showQuiz(quizId) {
        selectedQuizId = quizId;
        statusEl.textContent = '';
        try {
          renderQuiz(await requestJson(`/quizzes/${quizId}`));
          await loadQuizList();
        } catch (error) {
          statusEl.textContent = error.message;
        }
      }

      async function selectAnswer(questionIndex, optionIndex) {
        try {
          renderQuiz(await requestJson(`/quizzes/${selectedQuizId}/answers`, {
            method: 'POST',
            body: JSON.stringify({ question_index: questionIndex, option_index: optionIndex }),
          }));
        } catch (error) {
          statusEl.textContent = error.message;
        }
      }

      submitButton.addEventListener('click', async () => {
        submitting = true;
        submitButton.disabled = true;
        submitButton.textContent = 'Submitting…';
        questionsEl.querySelectorAll('.option-button').forEach(btn => (btn.disabled = true));
        try {
          const result = await requestJson(`/quizzes/${selectedQuizId}/submit`, { method: 'POST' });
          statusEl.textContent = 'Quiz submitted successfully!';
          submitting = false;
          renderQuiz(result.quiz);
          await loadQuizList();
        } catch (error) {
          submitting = false;
          statusEl.textContent = error.message;
          await showQuiz(selectedQuizId);
        } finally {
          submitButton.textContent = 'Submit Assessment';
        }
      });

      document.getElementById('retake-button').addEventListener('click', async () => {
        try {
          renderQuiz(await requestJson(`/quizzes/${selectedQuizId}/reset`, { method: 'POST' }));
          statusEl.textContent = '';
          await loadQuizList();
        } catch (error) {
          statusEl.textContent = error.message;
        }
      });

      loadQuizList().catch(error => { statusEl.textContent = error.message; });
    </script>
  </body>
</html>
"""


class AnswerPayload(BaseModel):
    """Payload schema for selecting an option."""

    question_index: int = Field(ge=0)
    option_index: int = Field(ge=0)


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def _isoformat(value) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()


def serialize_quiz_view(view: QuizView) -> dict[str, object]:
    questions = []
    for index, (question, answer) in enumerate(zip(view.questions, view.answers)):
        rendered = renderer.render_question(question, number=index + 1)
        rendered["question_type"] = question.question_type.value
        rendered["selected"] = [
            option_index
            for option_index in range(len(question.options))
            if answer.is_selected(option_index)
        ]
        rendered["answered"] = answer.is_answered
        questions.append(rendered)
    return {
        "quiz_id": view.quiz_id,
        "number": view.number,
        "title": view.title,
        "status": view.status.value,
        "question_count": view.question_count,
        "questions": questions,
        "can_submit": view.can_submit,
        "score": view.score,
        "percent": view.percent,
        "feedback": view.feedback,
        "submitted_at": _isoformat(view.submitted_at),
    }


def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, InvalidIndex):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, GradingFailed):
        return HTTPException(status_code=502, detail=str(exc))
    return HTTPException(status_code=409, detail=str(exc))


def create_api_app(quiz_manager: QuizManager) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION)
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)
    handled = (
        InvalidIndex,
        AlreadySubmitted,
        SubmissionInProgress,
        UnansweredQuestions,
        NotSubmitted,
        GradingFailed,
    )

    @app.get("/", response_class=HTMLResponse)
    def serve_student_page() -> str:
        return _STUDENT_PAGE_HTML

    @app.get("/quizzes")
    def list_quizzes(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        course = manager.get_course()
        return {
            "course_id": course.id if course else None,
            "course_title": course.title if course else None,
            "selected_quiz_id": manager.get_selected_quiz_id(),
            "quizzes": [
                {
                    "quiz_id": summary.quiz_id,
                    "number": summary.number,
                    "title": summary.title,
                    "question_count": summary.question_count,
                    "status": summary.status.value,
                }
                for summary in manager.get_quiz_summaries()
            ],
        }

    @app.get("/quizzes/{quiz_id}")
    def get_quiz(quiz_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            view = manager.select_quiz(quiz_id)
        except handled as exc:
            raise _http_error(exc) from exc
        return serialize_quiz_view(view)

    @app.post("/quizzes/{quiz_id}/answers")
    def select_answer(
        quiz_id: str,
        payload: AnswerPayload,
        manager: QuizManager = Depends(quiz_manager_dep),
    ) -> dict[str, object]:
        try:
            manager.select_answer(quiz_id, payload.question_index, payload.option_index)
            view = manager.get_quiz_view(quiz_id)
        except handled as exc:
            raise _http_error(exc) from exc
        return serialize_quiz_view(view)

    @app.post("/quizzes/{quiz_id}/submit", status_code=201)
    def submit_quiz(quiz_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            result = manager.submit_quiz(quiz_id)
            view = manager.get_quiz_view(quiz_id)
        except handled as exc:
            raise _http_error(exc) from exc
        return {
            "score": result.score,
            "percent": view.percent,
            "submitted_at": _isoformat(result.submitted_at),
            "quiz": serialize_quiz_view(view),
        }

    @app.post("/quizzes/{quiz_id}/reset")
    def reset_quiz(quiz_id: str, manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            view = manager.reset_quiz(quiz_id)
        except handled as exc:
            raise _http_error(exc) from exc
        return serialize_quiz_view(view)

    return app


def start_api_server(
    quiz_manager: QuizManager,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> Thread:
    """Start the FastAPI server in a background daemon thread."""
    app = create_api_app(quiz_manager)
    config = uvicorn.Config(app=app, host=host, port=port, log_level="info")
    server = uvicorn.Server(config)

    def run_server() -> None:
        server.run()

    thread = Thread(target=run_server, name="QuizApiServer", daemon=True)
    thread.start()
    return thread
