"""FastAPI server that exposes the quiz engine to a browser client."""

from __future__ import annotations

import logging
from threading import Thread

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel, StrictInt
import uvicorn

from cognition_quiz.constants.about import APP_ABOUT_TEXT, APP_NAME, APP_VERSION
from cognition_quiz.constants.network_constants import DEFAULT_HOST, DEFAULT_PORT
from cognition_quiz.constants.ui_constants import (
    ANSWER_BEFORE_NEXT_MESSAGE,
    NO_ACTIVE_QUIZ_MESSAGE,
    NO_RESULT_MESSAGE,
    NO_TOPICS_MESSAGE,
    NOT_LOGGED_IN_MESSAGE,
    TIME_UP_MESSAGE,
    UNANSWERED_WARNING_TEMPLATE,
    WELCOME_TEMPLATE,
)
from cognition_quiz.core.access_codes import AccessCodeError
from cognition_quiz.core.errors import (
    InsufficientPoolError,
    InvalidChoiceError,
    InvalidStateError,
    NavigationBlockedError,
    NotAuthenticatedError,
    QuizError,
    TopicAccessError,
    UnknownTopicError,
)
from cognition_quiz.core.markdown_math_renderer import renderer
from cognition_quiz.core.models import SessionSnapshot, TopicRef, UserProfile
from cognition_quiz.core.quiz_manager import QuizManager
from cognition_quiz.core.report_schemas import (
    QuizReportModel,
    ScoreResultModel,
    TopicRefModel,
)
from cognition_quiz.ui.timer_display import (
    classify_remaining,
    format_remaining,
    progress_percent,
)

logger = logging.getLogger(__name__)


class LoginPayload(BaseModel):
    """Payload schema for the access-code login."""

    access_code: str


class StartQuizPayload(BaseModel):
    """Payload schema identifying the topic to start."""

    class_level: str
    subject: str
    topic_name: str


class AnswerPayload(BaseModel):
    """Payload schema for a selected choice."""

    choice_index: StrictInt


def _get_quiz_manager_dependency(quiz_manager: QuizManager):
    def dependency() -> QuizManager:
        return quiz_manager

    return dependency


def _to_http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, NotAuthenticatedError):
        return HTTPException(status_code=401, detail=NOT_LOGGED_IN_MESSAGE)
    if isinstance(exc, AccessCodeError):
        return HTTPException(status_code=401, detail=str(exc))
    if isinstance(exc, TopicAccessError):
        return HTTPException(status_code=403, detail=str(exc))
    if isinstance(exc, UnknownTopicError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, InvalidChoiceError):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, NavigationBlockedError):
        return HTTPException(status_code=409, detail=ANSWER_BEFORE_NEXT_MESSAGE)
    if isinstance(exc, (InvalidStateError, InsufficientPoolError)):
        return HTTPException(status_code=409, detail=str(exc))
    return HTTPException(status_code=400, detail=str(exc))


def _serialize_user(profile: UserProfile) -> dict[str, object]:
    return {
        "name": profile.name,
        "class_level": profile.class_level,
        "welcome": WELCOME_TEMPLATE.format(name=profile.name, class_level=profile.class_level),
    }


def _serialize_snapshot(snapshot: SessionSnapshot) -> dict[str, object]:
    question = snapshot.question
    timer_level = classify_remaining(snapshot.remaining_seconds, snapshot.duration_seconds)
    return {
        "topic": TopicRefModel.from_ref(snapshot.topic).model_dump(),
        "phase": snapshot.phase.value,
        "position": snapshot.position,
        "question_count": snapshot.question_count,
        "progress_percent": progress_percent(snapshot.position, snapshot.question_count),
        "question_id": question.id,
        "stem_html": renderer.render_fragment(question.stem),
        "choices_html": [renderer.render_inline(choice) for choice in question.choices],
        "selected_choice": snapshot.selected_choice,
        "answered_count": snapshot.answered_count,
        "unanswered_warning": (
            UNANSWERED_WARNING_TEMPLATE.format(count=snapshot.unanswered_count)
            if snapshot.unanswered_count
            else None
        ),
        "remaining_seconds": snapshot.remaining_seconds,
        "remaining_display": format_remaining(snapshot.remaining_seconds),
        "timer_level": timer_level.value,
        "can_go_previous": not snapshot.is_first,
        "can_go_next": not snapshot.is_last and snapshot.selected_choice is not None,
        "is_last": snapshot.is_last,
    }


def create_api_app(quiz_manager: QuizManager) -> FastAPI:
    """Create a FastAPI application wired to the provided quiz manager."""
    app = FastAPI(title=f"{APP_NAME} API", version=APP_VERSION, description=APP_ABOUT_TEXT)
    quiz_manager_dep = _get_quiz_manager_dependency(quiz_manager)

    @app.post("/login")
    def login(
        payload: LoginPayload, manager: QuizManager = Depends(quiz_manager_dep)
    ) -> dict[str, object]:
        try:
            profile = manager.login(payload.access_code)
        except AccessCodeError as exc:
            logger.warning("Rejected access code: %s", exc)
            raise _to_http_error(exc) from exc
        return _serialize_user(profile)

    @app.post("/logout", status_code=204)
    def logout(manager: QuizManager = Depends(quiz_manager_dep)) -> None:
        manager.logout()

    @app.get("/topics")
    def list_topics(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            topics = manager.get_available_topics()
        except QuizError as exc:
            raise _to_http_error(exc) from exc
        return {
            "message": None if topics else NO_TOPICS_MESSAGE,
            "topics": [
                {
                    **TopicRefModel.from_ref(topic.ref).model_dump(),
                    "question_count": topic.question_count,
                    "startable": manager.is_topic_startable(topic),
                }
                for topic in topics
            ],
        }

    @app.post("/quiz/start", status_code=201)
    def start_quiz(
        payload: StartQuizPayload, manager: QuizManager = Depends(quiz_manager_dep)
    ) -> dict[str, object]:
        ref = TopicRef(payload.class_level, payload.subject, payload.topic_name)
        try:
            snapshot = manager.start_quiz(ref)
        except QuizError as exc:
            raise _to_http_error(exc) from exc
        return _serialize_snapshot(snapshot)

    @app.get("/quiz")
    def get_quiz(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        snapshot = manager.get_snapshot()
        if snapshot is None:
            outcome = manager.get_last_outcome()
            if outcome is not None:
                return {
                    "phase": outcome.phase.value,
                    "message": TIME_UP_MESSAGE if outcome.timed_out else None,
                    "score": ScoreResultModel.from_score(outcome.score).model_dump(),
                }
            raise HTTPException(status_code=404, detail=NO_ACTIVE_QUIZ_MESSAGE)
        return _serialize_snapshot(snapshot)

    @app.post("/quiz/answer")
    def select_answer(
        payload: AnswerPayload, manager: QuizManager = Depends(quiz_manager_dep)
    ) -> dict[str, object]:
        try:
            snapshot = manager.select_answer(payload.choice_index)
        except QuizError as exc:
            raise _to_http_error(exc) from exc
        return _serialize_snapshot(snapshot)

    @app.post("/quiz/next")
    def go_to_next(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            snapshot = manager.go_to_next(require_answer=True)
        except QuizError as exc:
            raise _to_http_error(exc) from exc
        return _serialize_snapshot(snapshot)

    @app.post("/quiz/previous")
    def go_to_previous(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            snapshot = manager.go_to_previous()
        except QuizError as exc:
            raise _to_http_error(exc) from exc
        return _serialize_snapshot(snapshot)

    @app.post("/quiz/submit")
    def submit_quiz(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        try:
            result = manager.submit_quiz()
        except QuizError as exc:
            raise _to_http_error(exc) from exc
        return ScoreResultModel.from_score(result).model_dump()

    @app.get("/quiz/result")
    def get_result(manager: QuizManager = Depends(quiz_manager_dep)) -> dict[str, object]:
        attempt = manager.get_finished_attempt()
        if attempt is None:
            raise HTTPException(status_code=404, detail=NO_RESULT_MESSAGE)
        report = QuizReportModel.build(*attempt)
        payload = report.model_dump()
        for entry in payload["review"]:
            entry["stem_html"] = renderer.render_fragment(entry["stem"])
            if entry["explanation"]:
                entry["explanation_html"] = renderer.render_fragment(entry["explanation"])
        return payload

    @app.delete("/quiz", status_code=204)
    def leave_quiz(manager: QuizManager = Depends(quiz_manager_dep)) -> None:
        manager.leave_quiz()

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
