"""Business logic shared between the tick driver and the HTTP host."""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock
from typing import Callable

from cognition_quiz.constants.quiz_constants import QUIZ_DURATION_SECONDS, SAMPLE_SIZE
from cognition_quiz.core.access_codes import (
    AccessCodeError,
    AccessCodeRegistry,
    decode_access_code,
)
from cognition_quiz.core.errors import (
    InvalidStateError,
    NavigationBlockedError,
    NotAuthenticatedError,
    TopicAccessError,
)
from cognition_quiz.core.models import (
    QuizOutcome,
    ReviewEntry,
    ScoreResult,
    SessionPhase,
    SessionSnapshot,
    Topic,
    TopicRef,
    UserProfile,
)
from cognition_quiz.core.result_exporter import save_results_to_file
from cognition_quiz.core.services.quiz_session import QuizSession
from cognition_quiz.core.services.sampler import QuestionSampler
from cognition_quiz.core.services.topic_catalog import TopicCatalog

logger = logging.getLogger(__name__)

ClockObserver = Callable[[], None]


class QuizManager:
    """Facade owning the logged-in user and their single quiz session.

    All public methods take the same lock: the tick driver runs on the Qt
    thread while API requests arrive on server worker threads.
    """

    def __init__(
        self,
        catalog: TopicCatalog,
        access_registry: AccessCodeRegistry | None = None,
        sampler: QuestionSampler | None = None,
        sample_size: int = SAMPLE_SIZE,
        duration_seconds: int = QUIZ_DURATION_SECONDS,
    ) -> None:
        self._lock = Lock()
        self._catalog = catalog
        self._registry = access_registry
        self._sampler = sampler or QuestionSampler()
        self._sample_size = sample_size
        self._duration_seconds = duration_seconds

        self._user: UserProfile | None = None
        self._session: QuizSession | None = None
        self._last_session: QuizSession | None = None
        self._on_clock_started: ClockObserver | None = None
        self._on_clock_stopped: ClockObserver | None = None

    # --- Authentication ---

    def login(self, access_code: str) -> UserProfile:
        profile = decode_access_code(access_code)
        if self._registry is not None and not self._registry.is_registered(access_code):
            raise AccessCodeError(
                "Access code not found in system. Please contact your instructor."
            )
        return self.login_with_profile(profile)

    def login_with_profile(self, profile: UserProfile) -> UserProfile:
        with self._lock:
            self._discard_sessions()
            self._user = profile
        logger.info("User %s (class %s) logged in", profile.name, profile.class_level)
        return profile

    def logout(self) -> None:
        with self._lock:
            user = self._user
            self._discard_sessions()
            self._user = None
        if user is not None:
            logger.info("User %s logged out", user.name)

    def get_current_user(self) -> UserProfile | None:
        with self._lock:
            return self._user

    # --- Topics ---

    def get_available_topics(self) -> list[Topic]:
        with self._lock:
            return self._catalog.topics_for(self._require_user())

    def is_topic_startable(self, topic: Topic) -> bool:
        return TopicCatalog.is_startable(topic, self._sample_size)

    # --- Quiz lifecycle ---

    def start_quiz(self, ref: TopicRef) -> SessionSnapshot:
        with self._lock:
            user = self._require_user()
            topic = self._catalog.get_topic(ref)
            if not user.allows(topic):
                raise TopicAccessError(
                    f"Topic '{topic.topic_name}' is not assigned to {user.name}."
                )
            session = QuizSession.start(
                topic,
                sampler=self._sampler,
                sample_size=self._sample_size,
                duration_seconds=self._duration_seconds,
                on_finished=self._handle_session_finished,
            )
            self._discard_sessions()
            self._session = session
            clock = session.get_clock()
            clock.add_cancel_listener(self._notify_clock_stopped)
            clock.add_expiry_listener(self._notify_clock_stopped)
            if self._on_clock_started is not None:
                self._on_clock_started()
            logger.info(
                "Started quiz on %s (class %s, %s) with %d questions",
                topic.topic_name,
                topic.class_level,
                topic.subject,
                session.get_question_count(),
            )
            return session.snapshot()

    def select_answer(self, choice_index: int) -> SessionSnapshot:
        with self._lock:
            session = self._require_session()
            session.select_answer(choice_index)
            return session.snapshot()

    def go_to_next(self, require_answer: bool = False) -> SessionSnapshot:
        with self._lock:
            session = self._require_session()
            if (
                require_answer
                and session.is_active()
                and session.get_answer_at(session.get_current_position()) is None
            ):
                raise NavigationBlockedError("Current question has not been answered.")
            session.go_to_next()
            return session.snapshot()

    def go_to_previous(self) -> SessionSnapshot:
        with self._lock:
            session = self._require_session()
            session.go_to_previous()
            return session.snapshot()

    def submit_quiz(self) -> ScoreResult:
        with self._lock:
            return self._require_session().submit()

    def leave_quiz(self) -> None:
        """Abandon the current attempt and return to the topic list."""
        with self._lock:
            self._discard_sessions()

    def tick(self) -> None:
        """Advance the active session's clock by one second."""
        with self._lock:
            if self._session is not None:
                self._session.get_clock().tick()

    # --- Queries ---

    def has_active_quiz(self) -> bool:
        with self._lock:
            return self._session is not None and self._session.is_active()

    def get_snapshot(self) -> SessionSnapshot | None:
        with self._lock:
            if self._session is None:
                return None
            return self._session.snapshot()

    def get_last_outcome(self) -> QuizOutcome | None:
        with self._lock:
            if self._last_session is None:
                return None
            return self._last_session.outcome()

    def get_review(self) -> tuple[ReviewEntry, ...]:
        with self._lock:
            if self._last_session is None:
                raise InvalidStateError("No finished quiz is available for review.")
            return self._last_session.review()

    def get_finished_attempt(self) -> tuple[QuizOutcome, tuple[ReviewEntry, ...]] | None:
        """Outcome and review of the last finished quiz, read together."""
        with self._lock:
            if self._last_session is None:
                return None
            return self._last_session.outcome(), self._last_session.review()

    def export_results(self, file_path: Path) -> None:
        with self._lock:
            if self._last_session is None:
                raise InvalidStateError("No finished quiz is available for export.")
            outcome = self._last_session.outcome()
            review = self._last_session.review()
        save_results_to_file(file_path, outcome, review)
        logger.info("Exported quiz results to %s", file_path)

    # --- Settings ---

    def set_shuffle_seed(self, seed: int | None) -> None:
        with self._lock:
            self._sampler.set_seed(seed)

    def set_clock_observers(
        self,
        on_started: ClockObserver | None,
        on_stopped: ClockObserver | None,
    ) -> None:
        """Register callbacks for when a quiz clock starts and when it stops.

        Observers run with the manager lock held and must not call back in.
        """
        with self._lock:
            self._on_clock_started = on_started
            self._on_clock_stopped = on_stopped

    # --- Internals (callers hold the lock) ---

    def _require_user(self) -> UserProfile:
        if self._user is None:
            raise NotAuthenticatedError("No user is logged in.")
        return self._user

    def _require_session(self) -> QuizSession:
        if self._session is None:
            raise InvalidStateError("No quiz is currently in progress.")
        return self._session

    def _discard_sessions(self) -> None:
        if self._session is not None:
            self._session.close()
        self._session = None
        self._last_session = None

    def _notify_clock_stopped(self) -> None:
        if self._on_clock_stopped is not None:
            self._on_clock_stopped()

    def _handle_session_finished(self, session: QuizSession) -> None:
        # Runs inside submit() or tick(), so the lock is already held.
        if session is not self._session:
            return
        score = session.get_score()
        if session.get_phase() is SessionPhase.TIMED_OUT:
            logger.info("Quiz timed out; auto-submitted with %s%%", score.percentage)
        else:
            logger.info("Quiz submitted with %s%%", score.percentage)
        self._last_session = session
        self._session = None
