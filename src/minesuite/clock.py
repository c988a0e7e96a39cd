"""
Elapsed game time with pause and resume.

Only measures time; formatting for display is left to the caller.
"""
import time
from typing import Callable, Optional


class GameClock:
    """
    Measures play time in milliseconds, excluding paused intervals.

    Attributes:
        now: Time source returning seconds as a float.
    """

    def __init__(self, now: Callable[[], float] = time.monotonic) -> None:
        self.now = now
        self._start: Optional[float] = None
        self._stopped_at: Optional[float] = None
        self._paused_at: Optional[float] = None
        self._total_paused = 0.0

    def start(self) -> None:
        """Start (or restart) timing from zero."""
        self._start = self.now()
        self._stopped_at = None
        self._paused_at = None
        self._total_paused = 0.0

    def pause(self) -> None:
        """Stop counting time until resume(). Ignored unless running."""
        if self.is_running and self._paused_at is None:
            self._paused_at = self.now()

    def resume(self) -> None:
        """Continue counting after a pause."""
        if self._paused_at is not None:
            self._total_paused += self.now() - self._paused_at
            self._paused_at = None

    def stop(self) -> int:
        """
        Freeze the clock.

        Returns:
            Elapsed milliseconds at the moment of stopping.
        """
        if self.is_running:
            self.resume()
            self._stopped_at = self.now()
        return self.elapsed_ms()

    def reset(self) -> None:
        """Return to the unstarted state."""
        self._start = None
        self._stopped_at = None
        self._paused_at = None
        self._total_paused = 0.0

    @property
    def is_running(self) -> bool:
        return self._start is not None and self._stopped_at is None

    @property
    def is_paused(self) -> bool:
        return self._paused_at is not None

    def elapsed_ms(self) -> int:
        """Milliseconds of unpaused play so far. Zero before start()."""
        if self._start is None:
            return 0
        if self._stopped_at is not None:
            end = self._stopped_at
        elif self._paused_at is not None:
            end = self._paused_at
        else:
            end = self.now()
        return int(round((end - self._start - self._total_paused) * 1000))
