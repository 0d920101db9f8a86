"""Qt timer that drives the quiz clock once per second."""

from __future__ import annotations

from typing import Callable

from PySide6.QtCore import QObject, QTimer, Signal

from cognition_quiz.constants.quiz_constants import TICK_INTERVAL_MS


class QtTickDriver(QObject):
    """Calls ``on_tick`` every ``interval_ms`` while started.

    The driver lives on the thread that created it; the quiz manager it ticks
    does its own locking. :meth:`request_start` and :meth:`request_stop` may
    be called from any thread: they emit signals that Qt queues onto the
    driver's thread, where the timer is started or stopped.
    """

    start_requested = Signal()
    stop_requested = Signal()

    def __init__(
        self,
        on_tick: Callable[[], None],
        interval_ms: int = TICK_INTERVAL_MS,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._on_tick = on_tick
        self._timer = QTimer(self)
        self._timer.setInterval(interval_ms)
        self._timer.timeout.connect(self._handle_timeout)
        self.start_requested.connect(self.start)
        self.stop_requested.connect(self.stop)

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    def request_start(self) -> None:
        self.start_requested.emit()

    def request_stop(self) -> None:
        self.stop_requested.emit()

    def is_active(self) -> bool:
        return self._timer.isActive()

    def interval_ms(self) -> int:
        return self._timer.interval()

    def _handle_timeout(self) -> None:
        self._on_tick()
