import json

import pytest

from cognition_quiz.core.access_codes import (
    AccessCodeError,
    AccessCodeRegistry,
    encode_access_code,
)
from cognition_quiz.core.errors import (
    InsufficientPoolError,
    InvalidStateError,
    NavigationBlockedError,
    NotAuthenticatedError,
    TopicAccessError,
    UnknownTopicError,
)
from cognition_quiz.core.models import SessionPhase, TopicRef
from cognition_quiz.core.quiz_manager import QuizManager


def test_operations_require_login(manager, topic):
    with pytest.raises(NotAuthenticatedError):
        manager.get_available_topics()
    with pytest.raises(NotAuthenticatedError):
        manager.start_quiz(topic.ref)


def test_login_with_access_code(manager, profile):
    assert manager.login(encode_access_code(profile)) == profile
    assert manager.get_current_user() == profile


def test_login_checks_registry(catalog, profile):
    code = encode_access_code(profile)
    manager = QuizManager(catalog=catalog, access_registry=AccessCodeRegistry(["OTHER"]))
    with pytest.raises(AccessCodeError):
        manager.login(code)
    assert manager.get_current_user() is None

    manager = QuizManager(catalog=catalog, access_registry=AccessCodeRegistry([code]))
    assert manager.login(code) == profile


def test_available_topics_follow_profile(manager, profile):
    manager.login_with_profile(profile)
    names = [topic.topic_name for topic in manager.get_available_topics()]
    assert names == ["Quadratic", "Short"]


def test_start_quiz_checks_topic(manager, profile, small_topic, forbidden_ref):
    manager.login_with_profile(profile)
    with pytest.raises(TopicAccessError):
        manager.start_quiz(forbidden_ref)
    with pytest.raises(UnknownTopicError):
        manager.start_quiz(TopicRef("10", "Mathematics", "Missing"))
    with pytest.raises(InsufficientPoolError):
        manager.start_quiz(small_topic.ref)
    assert manager.get_snapshot() is None


def test_full_attempt_through_manager(manager, profile, topic, tmp_path):
    manager.login_with_profile(profile)
    snapshot = manager.start_quiz(topic.ref)
    assert snapshot.position == 0
    assert snapshot.question_count == 20

    for _ in range(20):
        snapshot = manager.select_answer(snapshot.question.correct_choice_index)
        snapshot = manager.go_to_next()

    result = manager.submit_quiz()
    assert result.percentage == 100
    assert manager.get_snapshot() is None
    assert not manager.has_active_quiz()
    assert manager.get_last_outcome().phase is SessionPhase.SUBMITTED
    assert all(entry.is_correct for entry in manager.get_review())

    with pytest.raises(InvalidStateError):
        manager.submit_quiz()

    path = tmp_path / "result.json"
    manager.export_results(path)
    assert json.loads(path.read_text())["score"]["percentage"] == 100


def test_next_can_require_an_answer(manager, profile, topic):
    manager.login_with_profile(profile)
    manager.start_quiz(topic.ref)

    with pytest.raises(NavigationBlockedError):
        manager.go_to_next(require_answer=True)
    assert manager.get_snapshot().position == 0

    manager.select_answer(0)
    assert manager.go_to_next(require_answer=True).position == 1
    assert manager.go_to_previous().position == 0
    assert manager.go_to_next().position == 1


def test_tick_times_out_quiz(catalog, sampler, profile, topic):
    manager = QuizManager(catalog=catalog, sampler=sampler, duration_seconds=3)
    manager.login_with_profile(profile)
    manager.start_quiz(topic.ref)
    manager.select_answer(manager.get_snapshot().question.correct_choice_index)

    manager.tick()
    manager.tick()
    assert manager.get_snapshot().remaining_seconds == 1
    manager.tick()

    outcome = manager.get_last_outcome()
    assert outcome.timed_out
    assert outcome.score.correct_count == 1
    assert manager.get_snapshot() is None
    manager.tick()
    with pytest.raises(InvalidStateError):
        manager.submit_quiz()


def test_tick_without_session_is_noop(manager):
    manager.tick()
    assert manager.get_snapshot() is None


def test_starting_new_quiz_discards_previous(manager, profile, topic):
    manager.login_with_profile(profile)
    manager.start_quiz(topic.ref)
    manager.select_answer(1)

    snapshot = manager.start_quiz(topic.ref)
    assert snapshot.answered_count == 0
    assert manager.get_last_outcome() is None


def test_leave_and_logout_stop_the_quiz(manager, profile, topic):
    manager.login_with_profile(profile)
    manager.start_quiz(topic.ref)
    manager.leave_quiz()
    assert manager.get_snapshot() is None
    with pytest.raises(InvalidStateError):
        manager.select_answer(0)

    manager.start_quiz(topic.ref)
    manager.logout()
    assert manager.get_current_user() is None
    assert manager.get_snapshot() is None
    with pytest.raises(InvalidStateError):
        manager.get_review()


def test_shuffle_seed_makes_sampling_reproducible(manager, profile, topic):
    manager.login_with_profile(profile)
    manager.set_shuffle_seed(5)
    first = manager.start_quiz(topic.ref).question
    manager.set_shuffle_seed(5)
    assert manager.start_quiz(topic.ref).question == first


def test_clock_observers_follow_session_lifecycle(catalog, sampler, profile, topic):
    events = []
    manager = QuizManager(catalog=catalog, sampler=sampler, duration_seconds=2)
    manager.set_clock_observers(
        on_started=lambda: events.append("started"),
        on_stopped=lambda: events.append("stopped"),
    )
    manager.login_with_profile(profile)

    manager.start_quiz(topic.ref)
    assert events == ["started"]
    manager.start_quiz(topic.ref)
    assert events == ["started", "stopped", "started"]

    manager.submit_quiz()
    assert events[-1] == "stopped"

    events.clear()
    manager.start_quiz(topic.ref)
    manager.tick()
    manager.tick()
    manager.tick()
    assert events == ["started", "stopped"]

    events.clear()
    manager.start_quiz(topic.ref)
    manager.leave_quiz()
    manager.start_quiz(topic.ref)
    manager.logout()
    assert events == ["started", "stopped", "started", "stopped"]


def test_finished_attempt_returns_outcome_and_review(manager, profile, topic):
    manager.login_with_profile(profile)
    assert manager.get_finished_attempt() is None

    manager.start_quiz(topic.ref)
    manager.select_answer(0)
    manager.submit_quiz()

    outcome, review = manager.get_finished_attempt()
    assert outcome == manager.get_last_outcome()
    assert len(review) == outcome.score.total_count
    assert review[0].user_choice == 0

    manager.start_quiz(topic.ref)
    assert manager.get_finished_attempt() is None
