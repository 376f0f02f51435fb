import threading
import time
from typing import Callable


class InactivityTimer:
    """Deadline worker run as a Socket.IO background task.

    The worker sleeps until the deadline, re-checking it after every wake-up
    so that ``touch()`` can move it. ``on_expire`` runs at most once and
    never after ``cancel()``.
    """

    def __init__(self, server, duration_sec: float, on_expire: Callable[[], None]):
        self.server = server
        self.duration_sec = float(duration_sec)
        self.on_expire = on_expire
        self.deadline = 0.0
        self._cancel_event = threading.Event()
        self._lock = threading.Lock()
        self._started = False
        self._expired = False

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    @property
    def expired(self) -> bool:
        return self._expired

    def start(self) -> None:
        with self._lock:
            if self._started:
                return
            self._started = True
            self.deadline = time.monotonic() + self.duration_sec
        self.server.start_background_task(self._worker)

    def touch(self) -> None:
        with self._lock:
            if self._started and not self._expired:
                self.deadline = time.monotonic() + self.duration_sec

    def cancel(self) -> None:
        self._cancel_event.set()

    def _worker(self) -> None:
        while True:
            with self._lock:
                remaining = self.deadline - time.monotonic()
            if remaining <= 0:
                break
            if self._cancel_event.wait(remaining):
                return
        with self._lock:
            if self._cancel_event.is_set() or self._expired:
                return
            self._expired = True
        self.on_expire()
