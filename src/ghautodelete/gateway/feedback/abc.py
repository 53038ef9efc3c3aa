"""User-facing output abstraction.

The core reports progress and results through this interface with plain
message strings. Implementations own prefixes, colour and stream routing.
"""

from abc import ABC, abstractmethod


class UserFeedback(ABC):
    """Abstract output sink for dependency injection."""

    @abstractmethod
    def success(self, message: str) -> None:
        """Report a completed action."""
        ...

    @abstractmethod
    def error(self, message: str) -> None:
        """Report a failure. Routed to the error stream."""
        ...

    @abstractmethod
    def info(self, message: str) -> None:
        """Report plain informational text."""
        ...

    @abstractmethod
    def verbose(self, message: str) -> None:
        """Report a progress notice. Dropped unless verbose output was requested."""
        ...
