from __future__ import annotations

from typing import Callable, Optional


class DescentTimer:
    """Caller-driven interval timer.

    Nothing runs in the background: the owner reports elapsed time through
    `advance` and the callback fires once per full interval. Stopping or
    restarting the timer from inside the callback discards the remaining
    accumulated time, so a single `advance` never replays ticks that belong
    to a previous run.
    """

    def __init__(self, interval_ms: int, callback: Optional[Callable[[], None]] = None) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        self.interval_ms = int(interval_ms)
        self.callback = callback
        self.running = False
        self._elapsed = 0
        self._generation = 0

    def start(self) -> None:
        self.running = True
        self._elapsed = 0
        self._generation += 1

    def stop(self) -> None:
        self.running = False
        self._elapsed = 0
        self._generation += 1

    def advance(self, elapsed_ms: int) -> int:
        """Add elapsed time and return how many ticks fired."""
        if not self.running or elapsed_ms <= 0:
            return 0
        self._elapsed += int(elapsed_ms)
        fired = 0
        generation = self._generation
        while self.running and self._elapsed >= self.interval_ms:
            self._elapsed -= self.interval_ms
            fired += 1
            if self.callback is not None:
                self.callback()
            if self._generation != generation:
                break
        return fired
