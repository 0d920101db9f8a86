"""Exceptions raised by the quiz engine and its facade."""

from __future__ import annotations


class QuizError(Exception):
    """Base class for quiz engine errors."""


class InsufficientPoolError(QuizError):
    """Raised when a question pool is smaller than the requested sample."""

    def __init__(self, available: int, required: int) -> None:
        super().__init__(
            f"Topic has {available} question(s); at least {required} are required for a quiz."
        )
        self.available = available
        self.required = required


class InvalidStateError(QuizError):
    """Raised when an operation is invoked outside of its valid phase."""


class InvalidChoiceError(QuizError):
    """Raised when a choice index is outside the current question's range."""


class AlreadyStartedError(QuizError):
    """Raised when a session clock is started twice."""


class EmptyQuizError(QuizError):
    """Raised when scoring a quiz without questions."""


class NotAuthenticatedError(QuizError):
    """Raised when a facade operation needs a logged-in user."""


class UnknownTopicError(QuizError, LookupError):
    """Raised when a topic reference does not exist in the catalog."""


class TopicAccessError(QuizError):
    """Raised when the logged-in user is not allowed to take a topic."""


class NavigationBlockedError(QuizError):
    """Raised when forward navigation requires an answer first."""
