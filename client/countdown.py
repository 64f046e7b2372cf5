import threading
from typing import Callable, Optional

class Countdown:
    """
    Cancelable countdown on threading.Timer. Calls on_tick(remaining) once per
    interval, then on_fire() exactly once when it reaches zero.
    """

    def __init__(self, seconds: int, on_fire: Callable[[], None],
                 on_tick: Optional[Callable[[int], None]] = None, interval: float = 1.0):
        if seconds < 1:
            raise ValueError("seconds must be >= 1")
        self.remaining = seconds
        self.interval = interval
        self._on_fire = on_fire
        self._on_tick = on_tick
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._started = False
        self._cancelled = False
        self._done = threading.Event()
        self.fired = False

    @property
    def active(self) -> bool:
        return self._started and not self._done.is_set()

    def start(self) -> "Countdown":
        with self._lock:
            if self._started:
                return self
            self._started = True
        if self._on_tick:
            self._on_tick(self.remaining)
        self._schedule()
        return self

    def _schedule(self) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._timer = threading.Timer(self.interval, self._tick)
            self._timer.daemon = True
            self._timer.start()

    def _tick(self) -> None:
        with self._lock:
            if self._cancelled or self.fired:
                return
            self.remaining -= 1
            remaining = self.remaining
            if remaining <= 0:
                self.fired = True
        if remaining > 0:
            if self._on_tick:
                self._on_tick(remaining)
            self._schedule()
            return
        try:
            self._on_fire()
        finally:
            self._done.set()

    def cancel(self) -> None:
        """Safe to call any number of times, from any thread."""
        with self._lock:
            if self._cancelled or self.fired:
                return
            self._cancelled = True
            timer, self._timer = self._timer, None
        if timer is not None:
            timer.cancel()
        self._done.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def wait(self, timeout: Optional[float] = None) -> bool:
        return self._done.wait(timeout)
