"""Production HttpClient backed by urllib."""

import http.client
import urllib.error
import urllib.request
from collections.abc import Mapping

from ghautodelete.gateway.http.abc import HttpClient, HttpResponse, HttpTransportError


class RealHttpClient(HttpClient):
    """Production implementation using urllib.request.

    Error statuses surface as HttpResponse rather than exceptions so the
    caller owns status classification.
    """

    def request(
        self,
        method: str,
        url: str,
        *,
        headers: Mapping[str, str],
        body: bytes | None,
        timeout: float,
    ) -> HttpResponse:
        request = urllib.request.Request(url, data=body, headers=dict(headers), method=method)

        try:
            with urllib.request.urlopen(request, timeout=timeout) as response:
                return HttpResponse(
                    status_code=response.status,
                    body=response.read(),
                    headers=dict(response.headers.items()),
                )
        except urllib.error.HTTPError as e:
            error_body = e.read() if e.fp else b""
            return HttpResponse(
                status_code=e.code,
                body=error_body,
                headers=dict(e.headers.items()) if e.headers is not None else {},
            )
        except (
            urllib.error.URLError,
            http.client.HTTPException,
            TimeoutError,
            OSError,
            ValueError,
        ) as e:
            raise HttpTransportError(str(e)) from e
