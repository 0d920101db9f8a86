import pytest

QtCore = pytest.importorskip("PySide6.QtCore")

from cognition_quiz.core.quiz_manager import QuizManager  # noqa: E402
from cognition_quiz.ui.tick_driver import QtTickDriver  # noqa: E402


@pytest.fixture(scope="module")
def qt_app():
    app = QtCore.QCoreApplication.instance() or QtCore.QCoreApplication([])
    yield app


def test_driver_start_and_stop(qt_app):
    driver = QtTickDriver(on_tick=lambda: None, interval_ms=250)
    assert driver.interval_ms() == 250
    assert not driver.is_active()

    driver.start()
    assert driver.is_active()
    driver.stop()
    assert not driver.is_active()


def test_driver_timeout_calls_target(qt_app, manager, profile, topic):
    manager.login_with_profile(profile)
    manager.start_quiz(topic.ref)
    driver = QtTickDriver(on_tick=manager.tick)

    driver._handle_timeout()
    driver._handle_timeout()

    assert manager.get_snapshot().remaining_seconds == 1198


def test_driver_ticks_with_event_loop(qt_app):
    calls = []
    driver = QtTickDriver(on_tick=lambda: calls.append(1), interval_ms=10)
    loop = QtCore.QEventLoop()

    def record():
        if len(calls) >= 3:
            loop.quit()

    driver._timer.timeout.connect(record)
    QtCore.QTimer.singleShot(2000, loop.quit)
    driver.start()
    loop.exec()
    driver.stop()

    assert len(calls) >= 3


def test_driver_runs_only_while_quiz_clock_runs(qt_app, manager, profile, topic):
    driver = QtTickDriver(on_tick=manager.tick)
    manager.set_clock_observers(
        on_started=driver.request_start,
        on_stopped=driver.request_stop,
    )
    manager.login_with_profile(profile)
    assert not driver.is_active()

    manager.start_quiz(topic.ref)
    assert driver.is_active()

    manager.submit_quiz()
    assert not driver.is_active()

    manager.start_quiz(topic.ref)
    manager.leave_quiz()
    assert not driver.is_active()


def test_driver_stops_when_quiz_times_out(qt_app, catalog, sampler, profile, topic):
    manager = QuizManager(catalog=catalog, sampler=sampler, duration_seconds=2)
    driver = QtTickDriver(on_tick=manager.tick)
    manager.set_clock_observers(
        on_started=driver.request_start,
        on_stopped=driver.request_stop,
    )
    manager.login_with_profile(profile)
    manager.start_quiz(topic.ref)

    driver._handle_timeout()
    assert driver.is_active()
    driver._handle_timeout()

    assert not driver.is_active()
    assert manager.get_last_outcome().timed_out
