"""Manually advanced clock for deterministic expiry."""

from layercache.domain.models.common import Duration, to_seconds


class ManualClock:
    """Callable time source that only moves when told to.

    Can be passed anywhere a layer accepts a `clock`.
    """

    def __init__(self, start: float = 0.0):
        self._now = float(start)

    def __call__(self) -> float:
        return self._now

    def advance(self, duration: Duration) -> float:
        """Moves the clock forward and returns the new reading."""
        self._now += to_seconds(duration)
        return self._now
