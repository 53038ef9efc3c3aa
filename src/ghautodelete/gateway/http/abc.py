"""Abstract HTTP transport used by the GitHub API client."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field


class HttpTransportError(Exception):
    """No HTTP response was received (DNS failure, refused connection, timeout)."""


@dataclass(frozen=True)
class HttpRequest:
    """A single outgoing request, as recorded by fakes."""

    method: str
    url: str
    headers: Mapping[str, str]
    body: bytes | None
    timeout: float


@dataclass(frozen=True)
class HttpResponse:
    """Status, headers and raw body of a completed HTTP exchange.

    Header names are stored lower-cased; use header() for lookups.
    """

    status_code: int
    body: bytes = b""
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        normalized = {name.lower(): value for name, value in self.headers.items()}
        object.__setattr__(self, "headers", normalized)

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class HttpClient(ABC):
    """Abstract interface for issuing HTTP requests.

    All implementations (real and fake) must implement this interface.
    Any status code, including 4xx and 5xx, is returned as an HttpResponse.
    """

    @abstractmethod
    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes | None,
        timeout: float,
    ) -> HttpResponse:
        """Send a request and return the response.

        Args:
            method: HTTP verb (GET, PATCH, ...)
            url: Absolute URL
            headers: Request headers
            body: Encoded request body, or None
            timeout: Seconds to wait for the exchange

        Returns:
            HttpResponse for any status code

        Raises:
            HttpTransportError: If no response was received
        """
        ...
