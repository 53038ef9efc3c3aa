"""Fake HttpClient for testing."""

from collections.abc import Mapping, Sequence

from ghautodelete.gateway.http.abc import (
    HttpClient,
    HttpRequest,
    HttpResponse,
    HttpTransportError,
)


class FakeHttpClient(HttpClient):
    """In-memory fake that replays a scripted sequence of outcomes.

    This class has NO public setup methods. All state is provided via constructor.
    Each call consumes the next outcome; once exhausted, the last outcome repeats.
    """

    def __init__(
        self,
        *,
        responses: Sequence[HttpResponse | HttpTransportError] = (),
    ) -> None:
        """Create FakeHttpClient with scripted outcomes.

        Args:
            responses: Responses to return (or transport errors to raise), in order.
                Defaults to a single empty 200 response.
        """
        self._responses = list(responses) if responses else [HttpResponse(status_code=200)]
        self._requests: list[HttpRequest] = []

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes | None,
        timeout: float,
    ) -> HttpResponse:
        self._requests.append(
            HttpRequest(method=method, url=url, headers=dict(headers), body=body, timeout=timeout)
        )

        index = min(len(self._requests), len(self._responses)) - 1
        outcome = self._responses[index]
        if isinstance(outcome, HttpTransportError):
            raise outcome
        return outcome

    @property
    def requests(self) -> list[HttpRequest]:
        """Requests received so far, in call order."""
        return self._requests
