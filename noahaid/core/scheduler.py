import threading
from typing import Callable, Protocol


class Scheduler(Protocol):
    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        ...


class TimerScheduler:
    """Runs each callback once on its own daemon timer thread."""

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        timer = threading.Timer(max(0, delay_ms) / 1000.0, callback)
        timer.daemon = True
        timer.start()


def get_scheduler() -> Scheduler:
    return TimerScheduler()
