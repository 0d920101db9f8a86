"""Utilities for exporting a finished quiz to a JSON report."""

from __future__ import annotations

from pathlib import Path

from cognition_quiz.core.models import QuizOutcome, ReviewEntry
from cognition_quiz.core.report_schemas import QuizReportModel


def save_results_to_file(
    file_path: Path, outcome: QuizOutcome, review: tuple[ReviewEntry, ...]
) -> None:
    """Persist the score and review as an indented JSON document."""

    if len(review) != outcome.score.total_count:
        raise ValueError("Review does not match the scored quiz.")

    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    file_path.write_text(render_report(outcome, review), encoding="utf-8")


def render_report(outcome: QuizOutcome, review: tuple[ReviewEntry, ...]) -> str:
    return QuizReportModel.build(outcome, review).model_dump_json(indent=2) + "\n"
