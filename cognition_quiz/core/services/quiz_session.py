"""State machine for a single timed quiz attempt."""

from __future__ import annotations

from typing import Callable

from cognition_quiz.constants.quiz_constants import QUIZ_DURATION_SECONDS, SAMPLE_SIZE
from cognition_quiz.core.errors import (
    InsufficientPoolError,
    InvalidChoiceError,
    InvalidStateError,
)
from cognition_quiz.core.models import (
    Question,
    QuizOutcome,
    ReviewEntry,
    ScoreResult,
    SessionPhase,
    SessionSnapshot,
    Topic,
)
from cognition_quiz.core.services.review_builder import build_review
from cognition_quiz.core.services.sampler import QuestionSampler
from cognition_quiz.core.services.scorer import score
from cognition_quiz.core.services.session_clock import SessionClock

FinishedCallback = Callable[["QuizSession"], None]


class QuizSession:
    """Coordinates the sampled questions, recorded answers and the countdown.

    A session is created already active by :meth:`start`. It ends either by
    an explicit :meth:`submit` or by clock expiry; both freeze the answers and
    compute the score once. Mutations outside the active phase raise
    :class:`InvalidStateError` and leave the session untouched.
    """

    def __init__(
        self,
        topic: Topic,
        questions: tuple[Question, ...],
        clock: SessionClock,
        on_finished: FinishedCallback | None = None,
    ) -> None:
        if not questions:
            raise InsufficientPoolError(0, 1)
        self._topic = topic
        self._questions = tuple(questions)
        self._answers: list[int | None] = [None] * len(self._questions)
        self._position: int = 0
        self._phase = SessionPhase.ACTIVE
        self._closed: bool = False
        self._frozen_answers: tuple[int | None, ...] | None = None
        self._score: ScoreResult | None = None
        self._on_finished = on_finished
        self._clock = clock
        self._clock.add_expiry_listener(self._handle_clock_expired)

    @classmethod
    def start(
        cls,
        topic: Topic,
        sampler: QuestionSampler | None = None,
        sample_size: int = SAMPLE_SIZE,
        duration_seconds: int = QUIZ_DURATION_SECONDS,
        on_finished: FinishedCallback | None = None,
    ) -> "QuizSession":
        """Sample a topic and return a running session positioned at question 0."""
        if len(topic.questions) < sample_size:
            raise InsufficientPoolError(len(topic.questions), sample_size)
        sampler = sampler or QuestionSampler()
        questions = sampler.sample(topic.questions, sample_size)
        session = cls(topic, questions, SessionClock(duration_seconds), on_finished)
        session._clock.start()
        return session

    # --- Queries ---

    def get_topic(self) -> Topic:
        return self._topic

    def get_questions(self) -> tuple[Question, ...]:
        return self._questions

    def get_question_count(self) -> int:
        return len(self._questions)

    def get_phase(self) -> SessionPhase:
        return self._phase

    def is_active(self) -> bool:
        return self._phase is SessionPhase.ACTIVE and not self._closed

    def is_finished(self) -> bool:
        return self._phase is not SessionPhase.ACTIVE

    def is_closed(self) -> bool:
        return self._closed

    def get_current_position(self) -> int:
        return self._position

    def get_current_question(self) -> Question:
        return self._questions[self._position]

    def get_answers(self) -> tuple[int | None, ...]:
        if self._frozen_answers is not None:
            return self._frozen_answers
        return tuple(self._answers)

    def get_answer_at(self, position: int) -> int | None:
        return self.get_answers()[position]

    def get_answered_count(self) -> int:
        return sum(1 for answer in self.get_answers() if answer is not None)

    def get_remaining_seconds(self) -> int:
        return self._clock.remaining()

    def get_clock(self) -> SessionClock:
        return self._clock

    def get_score(self) -> ScoreResult | None:
        return self._score

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            topic=self._topic.ref,
            phase=self._phase,
            position=self._position,
            question_count=len(self._questions),
            question=self.get_current_question(),
            selected_choice=self.get_answer_at(self._position),
            answered_count=self.get_answered_count(),
            remaining_seconds=self._clock.remaining(),
            duration_seconds=self._clock.duration,
        )

    # --- Mutations ---

    def select_answer(self, choice_index: int) -> None:
        self._require_active("select an answer")
        question = self.get_current_question()
        if (
            isinstance(choice_index, bool)
            or not isinstance(choice_index, int)
            or not 0 <= choice_index < len(question.choices)
        ):
            raise InvalidChoiceError(
                f"Choice {choice_index!r} is out of range for a question with "
                f"{len(question.choices)} choices."
            )
        self._answers[self._position] = choice_index

    def go_to_next(self) -> Question:
        self._require_active("navigate")
        if self._position < len(self._questions) - 1:
            self._position += 1
        return self.get_current_question()

    def go_to_previous(self) -> Question:
        self._require_active("navigate")
        if self._position > 0:
            self._position -= 1
        return self.get_current_question()

    def submit(self) -> ScoreResult:
        self._require_active("submit")
        self._phase = SessionPhase.SUBMITTED
        return self._finalize()

    def close(self) -> None:
        """Release the clock; the session accepts no further mutations."""
        self._clock.cancel()
        self._closed = True

    # --- Results ---

    def review(self) -> tuple[ReviewEntry, ...]:
        if not self.is_finished():
            raise InvalidStateError("Review is only available after the quiz has finished.")
        return build_review(self._questions, self.get_answers())

    def outcome(self) -> QuizOutcome:
        if self._score is None:
            raise InvalidStateError("Quiz has not finished yet.")
        return QuizOutcome(
            topic=self._topic.ref,
            phase=self._phase,
            answers=self.get_answers(),
            score=self._score,
        )

    # --- Internals ---

    def _require_active(self, action: str) -> None:
        if self._closed:
            raise InvalidStateError(f"Cannot {action}: the session has been closed.")
        if self._phase is not SessionPhase.ACTIVE:
            raise InvalidStateError(
                f"Cannot {action}: the session is {self._phase.value}."
            )

    def _handle_clock_expired(self) -> None:
        if self._phase is not SessionPhase.ACTIVE or self._closed:
            return
        self._phase = SessionPhase.TIMED_OUT
        self._finalize()

    def _finalize(self) -> ScoreResult:
        self._clock.cancel()
        self._frozen_answers = tuple(self._answers)
        self._score = score(self._questions, self._frozen_answers)
        if self._on_finished is not None:
            self._on_finished(self)
        return self._score
