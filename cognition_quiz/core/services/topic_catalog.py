"""Service holding the loaded topics and filtering them per user."""

from __future__ import annotations

from typing import Iterable, Iterator

from cognition_quiz.constants.quiz_constants import SAMPLE_SIZE
from cognition_quiz.core.errors import UnknownTopicError
from cognition_quiz.core.models import Topic, TopicRef, UserProfile


class TopicCatalog:
    """Immutable lookup of topics keyed by their reference."""

    def __init__(self, topics: Iterable[Topic] = ()) -> None:
        self._topics: dict[TopicRef, Topic] = {}
        for topic in topics:
            # Later files win, matching the order files are listed in.
            self._topics[topic.ref] = topic

    def __len__(self) -> int:
        return len(self._topics)

    def __iter__(self) -> Iterator[Topic]:
        return iter(self._topics.values())

    def __contains__(self, ref: object) -> bool:
        return ref in self._topics

    def get_topics(self) -> list[Topic]:
        return list(self._topics.values())

    def get_topic(self, ref: TopicRef) -> Topic:
        try:
            return self._topics[ref]
        except KeyError as exc:
            raise UnknownTopicError(
                f"No topic '{ref.topic_name}' ({ref.subject}, class {ref.class_level})."
            ) from exc

    def find_by_source(self, source_name: str) -> Topic | None:
        return next(
            (topic for topic in self._topics.values() if topic.source_name == source_name),
            None,
        )

    def topics_for(self, profile: UserProfile) -> list[Topic]:
        """Topics whose class, chapter and name all match the profile's allowed set."""
        return [topic for topic in self._topics.values() if profile.allows(topic)]

    @staticmethod
    def is_startable(topic: Topic, sample_size: int = SAMPLE_SIZE) -> bool:
        return len(topic.questions) >= sample_size
