"""Serializable views of quiz results shared by the API and the exporter."""

from __future__ import annotations

from pydantic import BaseModel

from cognition_quiz.core.models import QuizOutcome, ReviewEntry, ScoreResult, TopicRef


class TopicRefModel(BaseModel):
    class_level: str
    subject: str
    topic_name: str

    @classmethod
    def from_ref(cls, ref: TopicRef) -> "TopicRefModel":
        return cls(class_level=ref.class_level, subject=ref.subject, topic_name=ref.topic_name)


class ScoreResultModel(BaseModel):
    correct: int
    incorrect: int
    unattempted: int
    total: int
    percentage: int

    @classmethod
    def from_score(cls, result: ScoreResult) -> "ScoreResultModel":
        return cls(
            correct=result.correct_count,
            incorrect=result.incorrect_count,
            unattempted=result.unattempted_count,
            total=result.total_count,
            percentage=result.percentage,
        )


class ReviewEntryModel(BaseModel):
    position: int
    question_id: str
    stem: str
    choices: list[str]
    correct_choice_index: int
    user_choice: int | None
    status: str
    is_correct: bool
    explanation: str | None = None

    @classmethod
    def from_entry(cls, entry: ReviewEntry) -> "ReviewEntryModel":
        return cls(
            position=entry.position,
            question_id=entry.question_id,
            stem=entry.stem,
            choices=list(entry.choices),
            correct_choice_index=entry.correct_choice_index,
            user_choice=entry.user_choice,
            status=entry.status.value,
            is_correct=entry.is_correct,
            explanation=entry.explanation,
        )


class QuizReportModel(BaseModel):
    topic: TopicRefModel
    phase: str
    timed_out: bool
    score: ScoreResultModel
    review: list[ReviewEntryModel]

    @classmethod
    def build(cls, outcome: QuizOutcome, review: tuple[ReviewEntry, ...]) -> "QuizReportModel":
        return cls(
            topic=TopicRefModel.from_ref(outcome.topic),
            phase=outcome.phase.value,
            timed_out=outcome.timed_out,
            score=ScoreResultModel.from_score(outcome.score),
            review=[ReviewEntryModel.from_entry(entry) for entry in review],
        )
