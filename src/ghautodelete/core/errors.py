"""Application error taxonomy with fixed process exit codes.

Every failure that reaches the user is an AppError of one of six kinds.
The kind's integer value is the exit code the CLI terminates with.
"""

from datetime import UTC, datetime
from enum import IntEnum

# RFC 3339, always rendered in UTC
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class ErrorKind(IntEnum):
    """Closed set of error kinds. Values are process exit codes."""

    GENERAL = 1
    INVALID_ARGUMENTS = 2
    AUTHENTICATION_FAILED = 3
    INSUFFICIENT_PERMISSIONS = 4
    REPOSITORY_NOT_FOUND = 5
    RATE_LIMITED = 6


class AppError(Exception):
    """Error carrying a taxonomy kind, a human-readable message and an optional cause.

    The cause is stored as ``__cause__`` so that the standard exception chain
    is what exit_code_of() and tracebacks walk.
    """

    def __init__(self, kind: ErrorKind, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.__cause__ = cause

    @property
    def cause(self) -> BaseException | None:
        return self.__cause__

    @property
    def exit_code(self) -> int:
        return int(self.kind)

    def __str__(self) -> str:
        if self.__cause__ is not None:
            return f"{self.message}: {self.__cause__}"
        return self.message


def exit_code_of(err: BaseException | None) -> int:
    """Map an error to its process exit code.

    Returns 0 for None. Walks the ``__cause__`` chain looking for an AppError
    and returns its kind's code; anything else is a general error (1).
    """
    if err is None:
        return 0

    seen: set[int] = set()
    current: BaseException | None = err
    while current is not None and id(current) not in seen:
        if isinstance(current, AppError):
            return current.exit_code
        seen.add(id(current))
        current = current.__cause__

    return int(ErrorKind.GENERAL)


def format_timestamp(moment: datetime) -> str:
    """Render a datetime as an RFC 3339 UTC timestamp."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC).strftime(TIMESTAMP_FORMAT)


def validation_error(message: str) -> AppError:
    """Malformed repository identifier or other invalid input (exit code 2)."""
    return AppError(ErrorKind.INVALID_ARGUMENTS, message)


def authentication_error(message: str, cause: BaseException | None = None) -> AppError:
    """Missing, invalid or expired credential (exit code 3)."""
    return AppError(ErrorKind.AUTHENTICATION_FAILED, message, cause)


def authorization_error(message: str) -> AppError:
    """Authenticated but lacking the required access (exit code 4)."""
    return AppError(ErrorKind.INSUFFICIENT_PERMISSIONS, message)


def repository_not_found_error(owner: str, repo: str) -> AppError:
    """Repository absent or invisible to the credential (exit code 5).

    The message names the repository and suggests checking access.
    """
    repo_path = f"{owner}/{repo}" if owner else repo
    message = (
        f"Repository not found: {repo_path}. "
        "Ensure the repository exists and you have access to it"
    )
    return AppError(ErrorKind.REPOSITORY_NOT_FOUND, message)


def rate_limit_error(reset_time: datetime) -> AppError:
    """API quota exhausted (exit code 6). The message states the reset time."""
    message = f"API rate limit exceeded. Rate limit resets at: {format_timestamp(reset_time)}"
    return AppError(ErrorKind.RATE_LIMITED, message)


def network_error(cause: BaseException) -> AppError:
    """Connection-level failure: DNS, refused connection, timeout (exit code 1)."""
    return AppError(ErrorKind.GENERAL, "Network error: check your internet connection", cause)


def api_error(message: str, cause: BaseException | None = None) -> AppError:
    """Unexpected API or server response, or an undecodable body (exit code 1)."""
    return AppError(ErrorKind.GENERAL, message, cause)


def cancelled_error(reason: str) -> AppError:
    """The invocation was cancelled or ran past its deadline (exit code 1)."""
    return AppError(ErrorKind.GENERAL, f"Operation cancelled: {reason}")
