import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Clock:
    """Countdown timer that reports each tick and the final expiry.

    When ``spawn`` is given (``socketio.start_background_task`` in the app),
    ``start()`` launches a loop that sleeps one interval between ticks.
    Without it the countdown only moves when ``tick()`` is called.
    """

    def __init__(self, countdown_from: float, interval: float = 0.1,
                 on_tick: Optional[Callable[[float], None]] = None,
                 on_finish: Optional[Callable[[], None]] = None,
                 spawn: Optional[Callable] = None,
                 sleep: Optional[Callable[[float], None]] = None):
        self.interval = interval
        self.on_tick = on_tick
        self.on_finish = on_finish
        self._spawn = spawn
        self._sleep = sleep or time.sleep
        self._current_time = max(0.0, float(countdown_from))
        self._running = False
        # bumped on every start so a stale loop notices and exits
        self._generation = 0

    @property
    def current_time(self) -> float:
        return self._current_time

    @current_time.setter
    def current_time(self, value: float) -> None:
        self._current_time = max(0.0, float(value))

    @property
    def running(self) -> bool:
        return self._running

    def start(self) -> None:
        if self._running or self._current_time <= 0:
            return
        self._running = True
        self._generation += 1
        logger.info(f"[clock-start] remaining={self._current_time:.1f}s")
        if self._spawn is not None:
            self._spawn(self._run, self._generation)

    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        logger.info(f"[clock-stop] remaining={self._current_time:.1f}s")

    def toggle(self) -> None:
        if self._running:
            self.stop()
        else:
            self.start()

    def tick(self) -> float:
        """Advance the countdown by one interval and notify."""
        if self._current_time <= 0:
            return 0.0
        # rounding keeps repeated 0.1 decrements from drifting
        remaining = round(self._current_time - self.interval, 6)
        if remaining <= 0:
            self._current_time = 0.0
            self._running = False
            logger.info("[clock-finish]")
            if self.on_finish:
                self.on_finish()
            return 0.0
        self._current_time = remaining
        if self.on_tick:
            self.on_tick(remaining)
        return remaining

    def _run(self, generation: int) -> None:
        while self._running and self._generation == generation:
            self._sleep(self.interval)
            if not self._running or self._generation != generation:
                return
            self.tick()
