"""Per-invocation dependency bundle and its production factory."""

from dataclasses import dataclass

from ghautodelete.core.config import GlobalConfig
from ghautodelete.core.config_service import ConfigService
from ghautodelete.gateway.feedback.abc import UserFeedback
from ghautodelete.gateway.feedback.real import ConsoleFeedback
from ghautodelete.gateway.github.abc import GitHubClient
from ghautodelete.gateway.github.real import RealGitHubClient
from ghautodelete.gateway.http.real import RealHttpClient
from ghautodelete.gateway.time.abc import Time
from ghautodelete.gateway.time.real import RealTime


@dataclass(frozen=True)
class AppContext:
    """Immutable context holding all dependencies for one invocation.

    Created at the CLI entry point and passed through Click's context
    object. Tests construct it directly with fakes.
    """

    github: GitHubClient
    feedback: UserFeedback
    time: Time
    config: GlobalConfig

    def config_service(self) -> ConfigService:
        return ConfigService(github=self.github, feedback=self.feedback)


def create_context(*, token: str, verbose: bool, config: GlobalConfig) -> AppContext:
    """Build a production context with real gateways."""
    time = RealTime()
    github = RealGitHubClient(
        http_client=RealHttpClient(),
        time=time,
        token=token,
        base_url=config.api_url,
        request_timeout=config.request_timeout,
    )
    return AppContext(
        github=github,
        feedback=ConsoleFeedback(verbose=verbose),
        time=time,
        config=config,
    )
