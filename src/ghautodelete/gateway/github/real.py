"""Production implementation of GitHub repository settings operations."""

import json
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any
from urllib.parse import urlparse

from ghautodelete.core.deadline import Deadline
from ghautodelete.core.errors import (
    AppError,
    api_error,
    authentication_error,
    authorization_error,
    network_error,
    rate_limit_error,
    repository_not_found_error,
)
from ghautodelete.core.types import (
    RepositoryRef,
    RepositorySettingsPatch,
    RepositoryState,
    TokenMetadata,
)
from ghautodelete.gateway.github.abc import GitHubClient
from ghautodelete.gateway.github.retry import ShouldRetry, with_github_retry
from ghautodelete.gateway.http.abc import HttpClient, HttpResponse, HttpTransportError
from ghautodelete.gateway.time.abc import Time

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_REQUEST_TIMEOUT = 30.0
USER_AGENT = "ghautodelete"

RETRYABLE_STATUS_CODES = frozenset({500, 502, 503, 504})
RATE_LIMIT_FALLBACK = timedelta(hours=1)

ResponseHook = Callable[[HttpResponse], None]


class RealGitHubClient(GitHubClient):
    """Production implementation talking to the GitHub REST v3 API.

    Transport failures and 500/502/503/504 responses are retried with
    linear backoff. Every other failure is mapped to an AppError and
    raised on first occurrence.
    """

    def __init__(
        self,
        *,
        http_client: HttpClient,
        time: Time,
        token: str,
        base_url: str = DEFAULT_API_URL,
        request_timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ) -> None:
        self._http_client = http_client
        self._time = time
        self._token = token
        self._base_url = base_url.rstrip("/")
        self._request_timeout = request_timeout

    def get_repository(self, ref: RepositoryRef, *, deadline: Deadline) -> RepositoryState:
        url = self._repo_url(ref)
        response = self._request(
            "GET", url, payload=None, deadline=deadline, operation=f"get {ref.full_name}"
        )
        data = _decode_json(response)
        try:
            owner = data["owner"]["login"]
            name = data["name"]
            default_branch = data["default_branch"]
            enabled = data["delete_branch_on_merge"]
        except (KeyError, TypeError) as e:
            raise api_error("failed to decode response", e) from e

        # null or a string here is a malformed body, not a setting
        if not isinstance(enabled, bool):
            raise api_error("failed to decode response")

        return RepositoryState(
            owner=owner,
            name=name,
            default_branch=default_branch,
            delete_branch_on_merge=enabled,
        )

    def update_repository(
        self,
        ref: RepositoryRef,
        patch: RepositorySettingsPatch,
        *,
        deadline: Deadline,
    ) -> None:
        url = self._repo_url(ref)
        self._request(
            "PATCH",
            url,
            payload=patch.to_payload(),
            deadline=deadline,
            operation=f"update {ref.full_name}",
        )

    def validate_token(self, *, deadline: Deadline) -> TokenMetadata:
        scopes: list[str] = []

        def collect_scopes(response: HttpResponse) -> None:
            # Scopes arrive out-of-band in a header, not in the JSON body
            header = response.header("X-OAuth-Scopes")
            scopes.clear()
            if header:
                scopes.extend(scope.strip() for scope in header.split(",") if scope.strip())

        response = self._request(
            "GET",
            f"{self._base_url}/user",
            payload=None,
            deadline=deadline,
            operation="validate token",
            response_hook=collect_scopes,
        )
        data = _decode_json(response)
        try:
            username = data["login"]
        except (KeyError, TypeError) as e:
            raise api_error("failed to decode response", e) from e
        return TokenMetadata(username=username, scopes=tuple(scopes))

    def _repo_url(self, ref: RepositoryRef) -> str:
        return f"{self._base_url}/repos/{ref.owner}/{ref.name}"

    def _request(
        self,
        method: str,
        url: str,
        *,
        payload: dict[str, Any] | None,
        deadline: Deadline,
        operation: str,
        response_hook: ResponseHook | None = None,
    ) -> HttpResponse:
        """Send a request with retry and return a 2xx response.

        Raises:
            AppError: Mapped from the final non-2xx status or transport failure
        """
        body = json.dumps(payload).encode("utf-8") if payload is not None else None

        def attempt() -> HttpResponse:
            try:
                response = self._send(method, url, body=body, deadline=deadline)
            except AppError as e:
                raise ShouldRetry(str(e)) from e

            if response_hook is not None:
                response_hook(response)

            if response.status_code in RETRYABLE_STATUS_CODES:
                error = self._status_error(response, url)
                raise ShouldRetry(str(error)) from error
            return response

        try:
            response = with_github_retry(deadline, operation, attempt)
        except ShouldRetry as exhausted:
            last_error = exhausted.__cause__
            if isinstance(last_error, AppError):
                raise last_error from last_error.__cause__
            raise

        if not 200 <= response.status_code < 300:
            raise self._status_error(response, url)
        return response

    def _send(
        self, method: str, url: str, *, body: bytes | None, deadline: Deadline
    ) -> HttpResponse:
        headers = {
            "Authorization": f"Bearer {self._token}",
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": USER_AGENT,
        }
        if body is not None:
            headers["Content-Type"] = "application/json"

        try:
            response = self._http_client.request(
                method,
                url,
                headers=headers,
                body=body,
                timeout=deadline.cap(self._request_timeout),
            )
        except HttpTransportError as e:
            logger.debug("%s %s failed: %s", method, url, e)
            raise network_error(e) from e

        logger.debug("%s %s -> %d", method, url, response.status_code)
        return response

    def _status_error(self, response: HttpResponse, url: str) -> AppError:
        status = response.status_code

        if status == 401:
            return authentication_error(
                "authentication failed. Check that your token is valid or generate a new one"
            )

        if status == 403:
            if _is_rate_limited(response):
                return rate_limit_error(self._parse_reset_time(response))
            return authorization_error(
                "insufficient permissions. Admin access to the repository is required"
            )

        if status == 404:
            owner, repo = _repo_from_url(url)
            return repository_not_found_error(owner, repo)

        if status in RETRYABLE_STATUS_CODES:
            return api_error(f"GitHub API server error: {status} {response.text}")

        return api_error(f"GitHub API error: {status} {response.text}")

    def _parse_reset_time(self, response: HttpResponse) -> datetime:
        """Reset time from X-RateLimit-Reset: Unix seconds, then RFC 3339, then now + 1h."""
        header = response.header("X-RateLimit-Reset")
        if header:
            value = header.strip()
            parsed = _parse_epoch(value)
            if parsed is None:
                parsed = _parse_rfc3339(value)
            if parsed is not None:
                return parsed
        return self._time.now() + RATE_LIMIT_FALLBACK


def _is_rate_limited(response: HttpResponse) -> bool:
    remaining = response.header("X-RateLimit-Remaining")
    if remaining is None:
        return False
    try:
        return int(remaining.strip()) == 0
    except ValueError:
        return False


def _parse_epoch(value: str) -> datetime | None:
    """Parse ASCII Unix seconds; None if malformed or outside the platform range."""
    if not (value.isascii() and value.isdigit()):
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=UTC)
    except (OverflowError, OSError, ValueError):
        return None


def _parse_rfc3339(value: str) -> datetime | None:
    """Parse a full RFC 3339 timestamp; date-only or offset-less values give None."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return None
    return parsed


def _repo_from_url(url: str) -> tuple[str, str]:
    """Extract owner and repo from a /repos/{owner}/{repo} URL path."""
    parts = urlparse(url).path.split("/")
    for i, part in enumerate(parts):
        if part == "repos" and i + 2 < len(parts):
            return parts[i + 1], parts[i + 2]
    return "", ""


def _decode_json(response: HttpResponse) -> Any:
    try:
        return json.loads(response.body)
    except ValueError as e:
        raise api_error("failed to decode response", e) from e
