"""Tests for FakeGitHubClient and FakeHttpClient behavior."""

import pytest

from ghautodelete.core.deadline import Deadline
from ghautodelete.core.errors import AppError, ErrorKind, api_error
from ghautodelete.core.types import RepositoryRef, RepositorySettingsPatch, TokenMetadata
from ghautodelete.gateway.github.fake import FakeGitHubClient
from ghautodelete.gateway.http.abc import HttpResponse, HttpTransportError
from ghautodelete.gateway.http.fake import FakeHttpClient
from ghautodelete.gateway.time.fake import FakeTime
from tests.fakes.context import repo_state

REF = RepositoryRef(owner="octocat", name="hello-world")
ENABLE = RepositorySettingsPatch(delete_branch_on_merge=True)


def _deadline() -> Deadline:
    return Deadline.unbounded(FakeTime())


def test_update_changes_subsequent_reads() -> None:
    github = FakeGitHubClient(repositories={"octocat/hello-world": repo_state(enabled=False)})

    github.update_repository(REF, ENABLE, deadline=_deadline())

    assert github.get_repository(REF, deadline=_deadline()).delete_branch_on_merge is True
    assert github.update_calls == [(REF, ENABLE)]


def test_ignore_updates_keeps_state() -> None:
    github = FakeGitHubClient(
        repositories={"octocat/hello-world": repo_state(enabled=False)}, ignore_updates=True
    )

    github.update_repository(REF, ENABLE, deadline=_deadline())

    assert github.get_repository(REF, deadline=_deadline()).delete_branch_on_merge is False


def test_unknown_repository_is_not_found() -> None:
    github = FakeGitHubClient()

    with pytest.raises(AppError) as exc_info:
        github.get_repository(REF, deadline=_deadline())

    assert exc_info.value.kind == ErrorKind.REPOSITORY_NOT_FOUND
    assert github.get_calls == [REF]


def test_verify_error_only_after_update() -> None:
    error = api_error("boom")
    github = FakeGitHubClient(
        repositories={"octocat/hello-world": repo_state(enabled=False)}, verify_error=error
    )

    github.get_repository(REF, deadline=_deadline())
    github.update_repository(REF, ENABLE, deadline=_deadline())

    with pytest.raises(AppError) as exc_info:
        github.get_repository(REF, deadline=_deadline())
    assert exc_info.value is error


def test_validate_token_defaults() -> None:
    github = FakeGitHubClient()

    assert github.validate_token(deadline=_deadline()) == TokenMetadata(
        username="test-user", scopes=("repo",)
    )
    assert len(github.validate_token_calls) == 1


def test_fake_http_replays_then_repeats_last() -> None:
    http = FakeHttpClient(
        responses=[HttpTransportError("refused"), HttpResponse(status_code=204)]
    )

    with pytest.raises(HttpTransportError):
        http.request("GET", "https://example.com", headers={}, body=None, timeout=1.0)
    first = http.request("GET", "https://example.com", headers={}, body=None, timeout=1.0)
    second = http.request("GET", "https://example.com", headers={}, body=None, timeout=1.0)

    assert first.status_code == 204
    assert second.status_code == 204
    assert len(http.requests) == 3


def test_response_headers_are_case_insensitive() -> None:
    response = HttpResponse(status_code=200, headers={"X-RateLimit-Remaining": "0"})

    assert response.header("x-ratelimit-remaining") == "0"
    assert response.header("X-RATELIMIT-REMAINING") == "0"
    assert response.header("Missing") is None
