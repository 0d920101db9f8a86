"""Scoring of recorded answers against a sampled question set."""

from __future__ import annotations

from typing import Sequence

from cognition_quiz.core.errors import EmptyQuizError
from cognition_quiz.core.models import AnswerStatus, Question, ScoreResult


def classify_answer(question: Question, answer: int | None) -> AnswerStatus:
    """Classify one recorded answer; shared by scoring and review."""
    if answer is None:
        return AnswerStatus.UNATTEMPTED
    if answer == question.correct_choice_index:
        return AnswerStatus.CORRECT
    return AnswerStatus.INCORRECT


def score(sampled_set: Sequence[Question], answers: Sequence[int | None]) -> ScoreResult:
    if not sampled_set:
        raise EmptyQuizError("Cannot score a quiz without questions.")
    if len(answers) != len(sampled_set):
        raise ValueError(
            f"Answer record has {len(answers)} slot(s) for {len(sampled_set)} question(s)."
        )

    counts = {status: 0 for status in AnswerStatus}
    for question, answer in zip(sampled_set, answers):
        counts[classify_answer(question, answer)] += 1

    total = len(sampled_set)
    correct = counts[AnswerStatus.CORRECT]
    return ScoreResult(
        correct_count=correct,
        incorrect_count=counts[AnswerStatus.INCORRECT],
        unattempted_count=counts[AnswerStatus.UNATTEMPTED],
        total_count=total,
        percentage=_round_half_up_percentage(correct, total),
    )


def _round_half_up_percentage(part: int, whole: int) -> int:
    # floor(part * 100 / whole + 0.5) in integer arithmetic
    return (part * 200 + whole) // (2 * whole)
