import time
from collections.abc import Callable


def format_time(ms: float) -> str:
    total_seconds = max(0, int(ms // 1000))
    minutes, seconds = divmod(total_seconds, 60)
    return f"{minutes:02d}:{seconds:02d}"


class Stopwatch:
    """Study timer with explicit start/stop/reset; all state is per instance."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self.running = False
        self._started_at = 0.0
        self._accumulated_ms = 0.0

    def start(self) -> None:
        if self.running:
            return
        self.running = True
        self._started_at = self._clock()

    def stop(self) -> None:
        if not self.running:
            return
        self.running = False
        self._accumulated_ms += (self._clock() - self._started_at) * 1000

    def reset(self) -> None:
        self.running = False
        self._accumulated_ms = 0.0
        self._started_at = 0.0

    def elapsed_ms(self) -> float:
        current = (self._clock() - self._started_at) * 1000 if self.running else 0.0
        return self._accumulated_ms + current

    def render(self) -> str:
        return format_time(self.elapsed_ms())
