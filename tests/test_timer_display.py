import pytest

from cognition_quiz.ui.timer_display import (
    TimerLevel,
    classify_remaining,
    format_remaining,
    progress_percent,
)


@pytest.mark.parametrize(
    "remaining, expected",
    [
        (1200, TimerLevel.NORMAL),
        (600, TimerLevel.NORMAL),
        (599, TimerLevel.WARNING),
        (300, TimerLevel.WARNING),
        (299, TimerLevel.CRITICAL),
        (0, TimerLevel.CRITICAL),
    ],
)
def test_classify_full_length_quiz(remaining, expected):
    assert classify_remaining(remaining, 1200) is expected


def test_classify_scales_with_duration():
    assert classify_remaining(60, 120) is TimerLevel.NORMAL
    assert classify_remaining(59, 120) is TimerLevel.WARNING
    assert classify_remaining(29, 120) is TimerLevel.CRITICAL


def test_classify_rejects_bad_total():
    with pytest.raises(ValueError):
        classify_remaining(10, 0)


@pytest.mark.parametrize(
    "seconds, expected",
    [(1200, "20:00"), (605, "10:05"), (59, "0:59"), (0, "0:00"), (-3, "0:00")],
)
def test_format_remaining(seconds, expected):
    assert format_remaining(seconds) == expected


def test_progress_percent():
    assert progress_percent(0, 20) == 5.0
    assert progress_percent(19, 20) == 100.0
    assert progress_percent(0, 0) == 0.0
