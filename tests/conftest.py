import random

import pytest

from cognition_quiz.core.models import Question, Topic, TopicRef, UserProfile
from cognition_quiz.core.quiz_manager import QuizManager
from cognition_quiz.core.services.sampler import QuestionSampler
from cognition_quiz.core.services.topic_catalog import TopicCatalog


def make_question(number: int, correct: int = 0, choice_count: int = 4) -> Question:
    return Question(
        id=f"q{number}",
        stem=f"Question **{number}**: what is $x_{{{number}}}$?",
        choices=tuple(f"Choice {chr(65 + i)}" for i in range(choice_count)),
        correct_choice_index=correct,
        explanation=f"Because of rule {number}.",
    )


def make_topic(
    size: int = 25,
    class_level: str = "10",
    subject: str = "Mathematics",
    topic_name: str = "Quadratic",
) -> Topic:
    # Correct answers cycle through the choices so scoring is not trivial.
    questions = tuple(make_question(i, correct=i % 4) for i in range(1, size + 1))
    return Topic(
        class_level=class_level,
        subject=subject,
        topic_name=topic_name,
        questions=questions,
        source_name=f"class{class_level}-{subject.lower()}.json",
    )


@pytest.fixture
def topic() -> Topic:
    return make_topic()


@pytest.fixture
def small_topic() -> Topic:
    return make_topic(size=12, topic_name="Short")


@pytest.fixture
def sampler() -> QuestionSampler:
    return QuestionSampler(random.Random(1234))


@pytest.fixture
def catalog(topic, small_topic) -> TopicCatalog:
    other = make_topic(class_level="11", subject="Physics", topic_name="Mechanics")
    return TopicCatalog([topic, small_topic, other])


@pytest.fixture
def profile(topic, small_topic) -> UserProfile:
    return UserProfile(
        name="Asha",
        class_level="10",
        allowed_topics=(topic.ref, small_topic.ref),
    )


@pytest.fixture
def manager(catalog, sampler) -> QuizManager:
    return QuizManager(catalog=catalog, sampler=sampler)


@pytest.fixture
def forbidden_ref() -> TopicRef:
    return TopicRef("11", "Physics", "Mechanics")
