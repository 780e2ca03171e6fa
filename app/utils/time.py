"""Time utilities: UTC timestamps for statistics, monotonic stopwatch for run timing."""

import time
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return current UTC datetime. Use for start_time/end_time."""
    return datetime.now(timezone.utc)


class Stopwatch:
    """Monotonic wall-clock timer. elapsed is live until stop() is called."""

    def __init__(self) -> None:
        self._start = time.perf_counter()
        self._stop: float | None = None

    def stop(self) -> float:
        if self._stop is None:
            self._stop = time.perf_counter()
        return self.elapsed

    @property
    def elapsed(self) -> float:
        end = self._stop if self._stop is not None else time.perf_counter()
        return end - self._start
