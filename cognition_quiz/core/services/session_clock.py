"""Countdown clock advanced one second at a time by an external driver."""

from __future__ import annotations

from enum import Enum, auto
from typing import Callable

from cognition_quiz.constants.quiz_constants import QUIZ_DURATION_SECONDS
from cognition_quiz.core.errors import AlreadyStartedError

Listener = Callable[[], None]


class ClockState(Enum):
    IDLE = auto()
    RUNNING = auto()
    EXPIRED = auto()
    CANCELLED = auto()


class SessionClock:
    """Counts down from a fixed duration and signals expiry exactly once.

    The clock owns no timer of its own. Whatever drives it (a Qt timer, a
    test loop) calls :meth:`tick` once per elapsed second. Cancel listeners
    let that driver release its scheduling resource when the clock stops.
    """

    def __init__(
        self,
        duration_seconds: int = QUIZ_DURATION_SECONDS,
        on_expired: Listener | None = None,
    ) -> None:
        if not isinstance(duration_seconds, int) or duration_seconds <= 0:
            raise ValueError("Clock duration must be a positive integer number of seconds.")
        self._duration = duration_seconds
        self._remaining = duration_seconds
        self._state = ClockState.IDLE
        self._started = False
        self._expiry_listeners: list[Listener] = []
        self._cancel_listeners: list[Listener] = []
        if on_expired is not None:
            self._expiry_listeners.append(on_expired)

    @property
    def duration(self) -> int:
        return self._duration

    @property
    def state(self) -> ClockState:
        return self._state

    def remaining(self) -> int:
        return self._remaining

    def is_running(self) -> bool:
        return self._state is ClockState.RUNNING

    def is_expired(self) -> bool:
        return self._state is ClockState.EXPIRED

    def add_expiry_listener(self, listener: Listener) -> None:
        self._expiry_listeners.append(listener)

    def add_cancel_listener(self, listener: Listener) -> None:
        self._cancel_listeners.append(listener)

    def start(self) -> None:
        if self._started:
            raise AlreadyStartedError("Session clock has already been started.")
        self._started = True
        self._state = ClockState.RUNNING

    def tick(self) -> None:
        """Advance by one second; ignored unless the clock is running."""
        if self._state is not ClockState.RUNNING:
            return
        self._remaining -= 1
        if self._remaining <= 0:
            self._remaining = 0
            # State flips first so re-entrant ticks from listeners are no-ops.
            self._state = ClockState.EXPIRED
            for listener in list(self._expiry_listeners):
                listener()

    def cancel(self) -> None:
        if self._state in (ClockState.EXPIRED, ClockState.CANCELLED):
            return
        self._state = ClockState.CANCELLED
        for listener in list(self._cancel_listeners):
            listener()
