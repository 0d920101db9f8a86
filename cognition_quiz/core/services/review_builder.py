"""Builds the per-question review shown after a quiz."""

from __future__ import annotations

from typing import Sequence

from cognition_quiz.core.models import AnswerStatus, Question, ReviewEntry
from cognition_quiz.core.services.scorer import classify_answer


def build_review(
    sampled_set: Sequence[Question], answers: Sequence[int | None]
) -> tuple[ReviewEntry, ...]:
    """Return one review entry per position, in sampled order."""
    if len(answers) != len(sampled_set):
        raise ValueError(
            f"Answer record has {len(answers)} slot(s) for {len(sampled_set)} question(s)."
        )
    return tuple(
        ReviewEntry(
            position=position,
            question_id=question.id,
            stem=question.stem,
            choices=question.choices,
            correct_choice_index=question.correct_choice_index,
            user_choice=answer,
            is_correct=classify_answer(question, answer) is AnswerStatus.CORRECT,
            explanation=question.explanation,
        )
        for position, (question, answer) in enumerate(zip(sampled_set, answers))
    )
