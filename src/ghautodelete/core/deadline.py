"""Per-invocation deadline threaded through every network operation."""

from dataclasses import dataclass

from ghautodelete.core.errors import cancelled_error
from ghautodelete.gateway.time.abc import Time


@dataclass(frozen=True)
class Deadline:
    """Point on the monotonic clock after which work must stop.

    Attributes:
        time: Clock the deadline is measured against
        expires_at: Monotonic reading at expiry, or None for no limit
    """

    time: Time
    expires_at: float | None

    @staticmethod
    def after(time: Time, seconds: float | None) -> "Deadline":
        """Create a deadline that expires the given number of seconds from now."""
        if seconds is None:
            return Deadline(time=time, expires_at=None)
        return Deadline(time=time, expires_at=time.monotonic() + seconds)

    @staticmethod
    def unbounded(time: Time) -> "Deadline":
        return Deadline(time=time, expires_at=None)

    def remaining(self) -> float | None:
        """Seconds left before expiry (never negative), or None if unbounded."""
        if self.expires_at is None:
            return None
        return max(self.expires_at - self.time.monotonic(), 0.0)

    def is_expired(self) -> bool:
        remaining = self.remaining()
        return remaining is not None and remaining <= 0.0

    def check(self) -> None:
        """Raise a cancellation error if the deadline has passed."""
        if self.is_expired():
            raise cancelled_error("deadline exceeded")

    def cap(self, timeout: float) -> float:
        """Limit a per-request timeout to the time left on the deadline."""
        remaining = self.remaining()
        if remaining is None:
            return timeout
        return min(timeout, remaining)
