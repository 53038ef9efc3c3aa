"""Tests for the ghautodelete command."""

from pathlib import Path

import pytest
from click.testing import CliRunner

from ghautodelete.cli.cli import cli
from ghautodelete.core.errors import AppError, api_error, authorization_error, rate_limit_error
from ghautodelete.gateway.feedback.fake import FakeUserFeedback
from ghautodelete.gateway.github.fake import FakeGitHubClient
from ghautodelete.gateway.time.fake import FakeTime
from tests.fakes.context import create_test_context, repo_state


def _invoke(args: list[str], github: FakeGitHubClient) -> tuple[int, FakeUserFeedback]:
    feedback = FakeUserFeedback()
    ctx = create_test_context(github=github, feedback=feedback)
    result = CliRunner().invoke(cli, args, obj=ctx)
    return result.exit_code, feedback


def test_apply_enables_repository() -> None:
    github = FakeGitHubClient(repositories={"octocat/hello-world": repo_state(enabled=False)})

    exit_code, feedback = _invoke(["octocat/hello-world"], github)

    assert exit_code == 0
    assert feedback.success_messages == [
        "Successfully enabled auto-delete branches for octocat/hello-world"
    ]
    assert len(github.update_calls) == 1


def test_check_flag_reports_without_writing() -> None:
    github = FakeGitHubClient(repositories={"octocat/hello-world": repo_state(enabled=False)})

    exit_code, feedback = _invoke(["--check", "octocat/hello-world"], github)

    assert exit_code == 0
    assert "Auto-delete branches: disabled" in feedback.info_messages
    assert github.update_calls == []


@pytest.mark.parametrize("flag", ["--dry-run", "-d"])
def test_dry_run_flag(flag: str) -> None:
    github = FakeGitHubClient(repositories={"octocat/hello-world": repo_state(enabled=False)})

    exit_code, feedback = _invoke([flag, "https://github.com/octocat/hello-world"], github)

    assert exit_code == 0
    assert feedback.info_messages == [
        "[DRY-RUN] Would enable auto-delete branches for octocat/hello-world",
        "No changes made",
    ]
    assert github.update_calls == []


def test_short_check_flag_wins_over_dry_run() -> None:
    github = FakeGitHubClient(repositories={"octocat/hello-world": repo_state(enabled=True)})

    exit_code, feedback = _invoke(["-c", "-d", "octocat/hello-world"], github)

    assert exit_code == 0
    assert "Auto-delete branches: enabled" in feedback.info_messages


def test_verbose_reports_api_url() -> None:
    github = FakeGitHubClient(repositories={"octocat/hello-world": repo_state(enabled=True)})

    _, feedback = _invoke(["-v", "octocat/hello-world"], github)

    assert feedback.verbose_messages[0] == "Using GitHub API at https://api.github.com"


def test_invalid_repository_exits_2() -> None:
    github = FakeGitHubClient()

    exit_code, feedback = _invoke(["not-a-repo"], github)

    assert exit_code == 2
    assert feedback.error_messages == ["Expected format: owner/repo"]
    assert github.get_calls == []


def test_empty_repository_exits_2() -> None:
    exit_code, feedback = _invoke([""], FakeGitHubClient())

    assert exit_code == 2
    assert feedback.error_messages == ["Repository identifier is required"]


def test_missing_argument_is_usage_error() -> None:
    result = CliRunner().invoke(cli, [], obj=create_test_context())

    assert result.exit_code == 2
    assert "Missing argument" in result.output


def test_not_found_exits_5() -> None:
    exit_code, feedback = _invoke(["octocat/ghost"], FakeGitHubClient())

    assert exit_code == 5
    assert len(feedback.error_messages) == 1
    assert "Repository not found: octocat/ghost" in feedback.error_messages[0]


@pytest.mark.parametrize(
    ("error", "expected_code"),
    [
        (api_error("GitHub API server error: 500 "), 1),
        (authorization_error("insufficient permissions"), 4),
        (rate_limit_error(FakeTime().now()), 6),
    ],
)
def test_gateway_errors_map_to_exit_codes(error: AppError, expected_code: int) -> None:
    github = FakeGitHubClient(get_error=error)

    exit_code, feedback = _invoke(["octocat/hello-world"], github)

    assert exit_code == expected_code
    assert feedback.error_messages == [str(error)]


def test_unexpected_state_exits_1() -> None:
    github = FakeGitHubClient(
        repositories={"octocat/hello-world": repo_state(enabled=False)}, ignore_updates=True
    )

    exit_code, feedback = _invoke(["octocat/hello-world"], github)

    assert exit_code == 1
    assert feedback.error_messages == ["Unexpected state: auto-delete branches was not enabled"]


def test_help_lists_exit_codes() -> None:
    result = CliRunner().invoke(cli, ["-h"])

    assert result.exit_code == 0
    assert "--dry-run" in result.output
    assert "repository not found" in result.output


def test_missing_token_exits_3(tmp_path: Path) -> None:
    """Without an injected context the command resolves credentials itself."""
    env = {"HOME": str(tmp_path), "GITHUB_TOKEN": None, "XDG_CONFIG_HOME": None}

    result = CliRunner(env=env).invoke(cli, ["octocat/hello-world"])

    assert result.exit_code == 3
    assert "Error: No GitHub token found" in result.output


def test_malformed_config_exits_2(tmp_path: Path) -> None:
    config_dir = tmp_path / "xdg" / "ghautodelete"
    config_dir.mkdir(parents=True)
    (config_dir / "config.toml").write_text("deadline = -5\n", encoding="utf-8")
    env = {
        "HOME": str(tmp_path),
        "XDG_CONFIG_HOME": str(tmp_path / "xdg"),
        "GITHUB_TOKEN": "ghp_test",
    }

    result = CliRunner(env=env).invoke(cli, ["octocat/hello-world"])

    assert result.exit_code == 2
    assert "deadline must be a positive number" in result.output
