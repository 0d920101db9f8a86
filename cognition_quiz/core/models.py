"""Domain models for the quiz engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SessionPhase(Enum):
    """Lifecycle phase of a quiz session."""

    ACTIVE = "active"
    TIMED_OUT = "timed_out"
    SUBMITTED = "submitted"


class AnswerStatus(Enum):
    """Classification of a single recorded answer."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    UNATTEMPTED = "unattempted"


@dataclass(frozen=True, slots=True)
class Question:
    """Multiple-choice question with a single correct choice."""

    id: str
    stem: str
    choices: tuple[str, ...]
    correct_choice_index: int
    explanation: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "choices", tuple(self.choices))
        if len(self.choices) < 2:
            raise ValueError(f"Question {self.id!r} must have at least two choices.")
        if not 0 <= self.correct_choice_index < len(self.choices):
            raise ValueError(
                f"Question {self.id!r} has correct choice {self.correct_choice_index} "
                f"outside of 0..{len(self.choices) - 1}."
            )


@dataclass(frozen=True, slots=True)
class TopicRef:
    """Identifies a topic by class level, subject and topic name."""

    class_level: str
    subject: str
    topic_name: str


@dataclass(frozen=True, slots=True)
class Topic:
    """A class-level tagged pool of questions for one subject area."""

    class_level: str
    subject: str
    topic_name: str
    questions: tuple[Question, ...]
    source_name: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "questions", tuple(self.questions))

    @property
    def ref(self) -> TopicRef:
        return TopicRef(self.class_level, self.subject, self.topic_name)

    @property
    def question_count(self) -> int:
        return len(self.questions)


@dataclass(frozen=True, slots=True)
class UserProfile:
    """Learner identity produced by the access-code step."""

    name: str
    class_level: str
    allowed_topics: tuple[TopicRef, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed_topics", tuple(self.allowed_topics))

    def allows(self, topic: Topic | TopicRef) -> bool:
        ref = topic.ref if isinstance(topic, Topic) else topic
        return ref in self.allowed_topics


@dataclass(frozen=True, slots=True)
class ScoreResult:
    """Aggregate outcome of a finished quiz."""

    correct_count: int
    incorrect_count: int
    unattempted_count: int
    total_count: int
    percentage: int


@dataclass(frozen=True, slots=True)
class ReviewEntry:
    """Per-question review record shown after a quiz."""

    position: int
    question_id: str
    stem: str
    choices: tuple[str, ...]
    correct_choice_index: int
    user_choice: int | None
    is_correct: bool
    explanation: str | None = None

    @property
    def is_unattempted(self) -> bool:
        return self.user_choice is None

    @property
    def status(self) -> AnswerStatus:
        if self.user_choice is None:
            return AnswerStatus.UNATTEMPTED
        return AnswerStatus.CORRECT if self.is_correct else AnswerStatus.INCORRECT


@dataclass(frozen=True, slots=True)
class QuizOutcome:
    """Frozen record of a finished attempt."""

    topic: TopicRef
    phase: SessionPhase
    answers: tuple[int | None, ...]
    score: ScoreResult

    @property
    def timed_out(self) -> bool:
        return self.phase is SessionPhase.TIMED_OUT


@dataclass(frozen=True, slots=True)
class SessionSnapshot:
    """Read-only view of a session handed to hosts."""

    topic: TopicRef
    phase: SessionPhase
    position: int
    question_count: int
    question: Question
    selected_choice: int | None
    answered_count: int
    remaining_seconds: int
    duration_seconds: int

    @property
    def is_first(self) -> bool:
        return self.position == 0

    @property
    def is_last(self) -> bool:
        return self.position == self.question_count - 1

    @property
    def unanswered_count(self) -> int:
        return self.question_count - self.answered_count
