"""Loading of topic question banks from the on-disk catalog.

Layout (relative to the data directory):

    config/files.txt        one topic file name per line, '#' starts a comment
    questions/<name>.json   one topic per file

Topic file format:

    {
      "class": "10",
      "chapter": "Mathematics",
      "topic": "Quadratic Equations",
      "questions": [
        {"id": "q1", "stem": "Solve $x^2 = 4$", "choices": ["2", "-2", "±2", "4"],
         "answer": 2, "explanation": "Both roots satisfy the equation."}
      ]
    }

File names follow ``class<N>-<subject>[-<topic-words>].json``. When a file
omits ``class``, ``chapter`` or ``topic`` the values parsed from its name are
used instead.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import re

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from cognition_quiz.constants.catalog_constants import (
    FILES_CONFIG_RELATIVE_PATH,
    QUESTIONS_RELATIVE_DIR,
    SUBJECT_ALIASES,
    TOPIC_FILENAME_PATTERN,
)
from cognition_quiz.core.models import Question, Topic
from cognition_quiz.core.services.topic_catalog import TopicCatalog

logger = logging.getLogger(__name__)

_FILENAME_RE = re.compile(TOPIC_FILENAME_PATTERN)


class CatalogLoadError(Exception):
    """Raised when a topic file cannot be read or parsed."""


@dataclass(frozen=True, slots=True)
class TopicFileInfo:
    """Class, subject and topic derived from a topic file name."""

    class_level: str
    subject: str
    topic_name: str


class QuestionRecord(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str | int
    stem: str
    choices: list[str]
    answer: int
    explanation: str | None = None


class TopicRecord(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    class_level: str | int | None = Field(default=None, alias="class")
    chapter: str | None = None
    topic: str | None = None
    questions: list[QuestionRecord] = Field(default_factory=list)


def parse_topic_filename(filename: str) -> TopicFileInfo:
    match = _FILENAME_RE.match(filename)
    if match is None:
        logger.warning("Could not parse topic file name: %s", filename)
        cleaned = filename.replace(".json", "").replace("-", " ")
        return TopicFileInfo(class_level="N/A", subject="Unknown", topic_name=cleaned)

    class_number, subject_key, topic_key = match.groups()
    subject = SUBJECT_ALIASES.get(subject_key.lower(), _capitalize(subject_key))
    if topic_key:
        topic_name = " ".join(_capitalize(word) for word in topic_key.split("-"))
    else:
        topic_name = subject
    return TopicFileInfo(class_level=class_number, subject=subject, topic_name=topic_name)


def read_file_list(config_path: Path) -> list[str]:
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogLoadError(f"Could not read topic list {config_path}: {exc}") from exc
    return [
        line.strip()
        for line in text.splitlines()
        if line.strip() and not line.strip().startswith("#")
    ]


def load_topic_file(file_path: Path) -> Topic:
    try:
        text = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise CatalogLoadError(f"Could not read topic file {file_path}: {exc}") from exc
    return parse_topic_text(text, file_path.name)


def parse_topic_text(text: str, filename: str) -> Topic:
    try:
        record = TopicRecord.model_validate_json(text)
    except ValidationError as exc:
        raise CatalogLoadError(f"Topic file {filename} is malformed: {exc}") from exc

    info = parse_topic_filename(filename)
    try:
        questions = tuple(_build_question(item) for item in record.questions)
    except ValueError as exc:
        raise CatalogLoadError(f"Topic file {filename}: {exc}") from exc

    class_level = record.class_level if record.class_level is not None else info.class_level
    return Topic(
        class_level=str(class_level),
        subject=record.chapter or info.subject,
        topic_name=record.topic or info.topic_name,
        questions=questions,
        source_name=filename,
    )


def load_catalog(data_dir: Path) -> TopicCatalog:
    """Load every topic listed in ``files.txt``, or every JSON file as a fallback."""
    questions_dir = data_dir / QUESTIONS_RELATIVE_DIR
    config_path = data_dir / FILES_CONFIG_RELATIVE_PATH

    filenames: list[str] = []
    if config_path.exists():
        try:
            filenames = read_file_list(config_path)
        except CatalogLoadError as exc:
            logger.error("Ignoring topic list: %s", exc)
        logger.info("Found %d topic file(s) in %s", len(filenames), config_path)
    if not filenames:
        logger.warning("No topic list at %s; scanning %s instead", config_path, questions_dir)
        filenames = sorted(path.name for path in questions_dir.glob("*.json"))

    topics: list[Topic] = []
    for filename in filenames:
        try:
            topics.append(load_topic_file(questions_dir / filename))
        except CatalogLoadError as exc:
            logger.error("Skipping topic file %s: %s", filename, exc)
    logger.info("Loaded %d topic(s) from %s", len(topics), questions_dir)
    return TopicCatalog(topics)


def _build_question(record: QuestionRecord) -> Question:
    return Question(
        id=str(record.id),
        stem=record.stem,
        choices=tuple(record.choices),
        correct_choice_index=record.answer,
        explanation=record.explanation or None,
    )


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:]
