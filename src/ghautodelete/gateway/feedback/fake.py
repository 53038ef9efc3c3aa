"""Fake UserFeedback for testing."""

from ghautodelete.gateway.feedback.abc import UserFeedback


class FakeUserFeedback(UserFeedback):
    """In-memory fake that records every message with its level.

    Verbose messages are recorded regardless of any verbosity setting so tests
    can assert on progress notices.
    """

    def __init__(self) -> None:
        self._messages: list[tuple[str, str]] = []

    def success(self, message: str) -> None:
        self._messages.append(("success", message))

    def error(self, message: str) -> None:
        self._messages.append(("error", message))

    def info(self, message: str) -> None:
        self._messages.append(("info", message))

    def verbose(self, message: str) -> None:
        self._messages.append(("verbose", message))

    @property
    def messages(self) -> list[tuple[str, str]]:
        """(level, message) pairs in emission order."""
        return self._messages

    @property
    def success_messages(self) -> list[str]:
        return self._of_level("success")

    @property
    def error_messages(self) -> list[str]:
        return self._of_level("error")

    @property
    def info_messages(self) -> list[str]:
        return self._of_level("info")

    @property
    def verbose_messages(self) -> list[str]:
        return self._of_level("verbose")

    def _of_level(self, level: str) -> list[str]:
        return [message for kind, message in self._messages if kind == level]
