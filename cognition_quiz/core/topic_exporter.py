"""Utilities for writing topics in the catalog's JSON file format."""

from __future__ import annotations

import json
from pathlib import Path

from cognition_quiz.constants.catalog_constants import PLACEHOLDER_QUESTION_COUNT
from cognition_quiz.core.models import Question, Topic

_PLACEHOLDER_CHOICES = ("Option A", "Option B", "Option C", "Option D")


def save_topic_to_file(file_path: Path, topic: Topic) -> None:
    """Persist a topic so that the catalog loader can read it back."""

    if not topic.questions:
        raise ValueError("Cannot export a topic without questions.")

    file_path = file_path.resolve()
    file_path.parent.mkdir(parents=True, exist_ok=True)
    document = json.dumps(_serialize_topic(topic), indent=2, ensure_ascii=False)
    file_path.write_text(document + "\n", encoding="utf-8")


def topic_filename(class_level: str, subject: str) -> str:
    return f"class{class_level}-{subject.lower()}.json"


def build_placeholder_topic(
    class_level: str,
    subject: str,
    question_count: int = PLACEHOLDER_QUESTION_COUNT,
) -> Topic:
    questions = [
        Question(
            id=f"q{number}",
            stem=(
                f"Placeholder question {number} for Class {class_level} {subject} "
                "based on ISC/CBSE syllabus"
            ),
            choices=_PLACEHOLDER_CHOICES,
            correct_choice_index=0,
            explanation=f"Placeholder explanation for question {number}",
        )
        for number in range(1, question_count + 1)
    ]
    return Topic(
        class_level=class_level,
        subject=subject,
        topic_name=subject,
        questions=tuple(questions),
        source_name=topic_filename(class_level, subject),
    )


def _serialize_topic(topic: Topic) -> dict[str, object]:
    return {
        "class": topic.class_level,
        "chapter": topic.subject,
        "topic": topic.topic_name,
        "questions": [_serialize_question(question) for question in topic.questions],
    }


def _serialize_question(question: Question) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": question.id,
        "stem": question.stem,
        "choices": list(question.choices),
        "answer": question.correct_choice_index,
    }
    if question.explanation is not None:
        payload["explanation"] = question.explanation
    return payload
