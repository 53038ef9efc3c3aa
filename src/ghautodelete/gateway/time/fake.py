"""Fake Time implementation for testing.

FakeTime keeps a virtual clock that only advances when sleep() is called,
enabling fast and deterministic retry and deadline tests.
"""

from datetime import UTC, datetime, timedelta

from ghautodelete.gateway.time.abc import Time

DEFAULT_CURRENT_TIME = datetime(2024, 1, 15, 10, 30, 0, tzinfo=UTC)


class FakeTime(Time):
    """In-memory fake with a virtual clock.

    This class has NO public setup methods. All state is provided via constructor.
    """

    def __init__(self, current_time: datetime = DEFAULT_CURRENT_TIME) -> None:
        """Create FakeTime starting at the given moment.

        Args:
            current_time: Initial wall-clock value returned by now()
        """
        self._current_time = current_time
        self._elapsed = 0.0
        self._sleep_calls: list[float] = []

    def now(self) -> datetime:
        return self._current_time + timedelta(seconds=self._elapsed)

    def monotonic(self) -> float:
        return self._elapsed

    def sleep(self, seconds: float) -> None:
        """Record the call and advance the virtual clock without waiting."""
        self._sleep_calls.append(seconds)
        self._elapsed += seconds

    @property
    def sleep_calls(self) -> list[float]:
        """Durations passed to sleep(), in call order."""
        return self._sleep_calls
