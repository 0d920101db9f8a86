"""Presentation helpers for the countdown and progress indicators."""

from __future__ import annotations

from enum import Enum

from cognition_quiz.constants.quiz_constants import (
    CRITICAL_THRESHOLD_SECONDS,
    QUIZ_DURATION_SECONDS,
    WARNING_THRESHOLD_SECONDS,
)


class TimerLevel(Enum):
    NORMAL = "normal"
    WARNING = "warning"
    CRITICAL = "critical"


def classify_remaining(remaining: int, total: int = QUIZ_DURATION_SECONDS) -> TimerLevel:
    """Colour band for the remaining time, scaled to the quiz duration."""
    if total <= 0:
        raise ValueError("Total duration must be positive.")
    # Compare remaining/total against threshold/QUIZ_DURATION without floats.
    if remaining * QUIZ_DURATION_SECONDS < CRITICAL_THRESHOLD_SECONDS * total:
        return TimerLevel.CRITICAL
    if remaining * QUIZ_DURATION_SECONDS < WARNING_THRESHOLD_SECONDS * total:
        return TimerLevel.WARNING
    return TimerLevel.NORMAL


def format_remaining(seconds: int) -> str:
    seconds = max(0, seconds)
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"


def progress_percent(position: int, question_count: int) -> float:
    if question_count <= 0:
        return 0.0
    return (position + 1) / question_count * 100
