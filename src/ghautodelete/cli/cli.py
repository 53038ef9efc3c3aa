import logging
import os
from pathlib import Path

import click

from ghautodelete.core.app import App
from ghautodelete.core.config import default_config_dir, load_config
from ghautodelete.core.context import AppContext, create_context
from ghautodelete.core.deadline import Deadline
from ghautodelete.core.errors import AppError, cancelled_error, exit_code_of
from ghautodelete.core.token_provider import resolve_token
from ghautodelete.gateway.feedback.abc import UserFeedback
from ghautodelete.gateway.feedback.real import ConsoleFeedback

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])  # terse help flags

logger = logging.getLogger(__name__)


def _create_default_context(*, token: str | None, verbose: bool) -> AppContext:
    environ = os.environ
    home = Path.home()
    config = load_config(default_config_dir(environ, home), environ=environ)
    resolved = resolve_token(explicit=token, environ=environ, home=home)
    return create_context(token=resolved, verbose=verbose, config=config)


def _fail(feedback: UserFeedback, err: AppError) -> None:
    feedback.error(str(err))
    raise SystemExit(exit_code_of(err)) from err


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(package_name="ghautodelete")
@click.argument("repository")
@click.option(
    "--check",
    "-c",
    "check_only",
    is_flag=True,
    help="Only report the current setting; never modify the repository",
)
@click.option(
    "--dry-run",
    "-d",
    is_flag=True,
    help="Show what would change without modifying the repository",
)
@click.option("--verbose", "-v", is_flag=True, help="Show progress for each API call")
@click.option(
    "--token",
    "-t",
    default=None,
    help="GitHub token (defaults to GITHUB_TOKEN, then the gh CLI config)",
)
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    repository: str,
    check_only: bool,
    dry_run: bool,
    verbose: bool,
    token: str | None,
    debug: bool,
) -> None:
    """Enable "automatically delete head branches" on a GitHub repository.

    REPOSITORY may be given as owner/repo, https://github.com/owner/repo
    or git@github.com:owner/repo.git.

    \b
    Exit codes:
      0  success
      1  general error (network, API server)
      2  invalid arguments
      3  authentication failed
      4  insufficient permissions
      5  repository not found
      6  API rate limit exceeded
    """
    if debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    # Tests provide a prepared context through obj
    app_ctx: AppContext | None = ctx.obj
    feedback: UserFeedback
    if app_ctx is not None:
        feedback = app_ctx.feedback
    else:
        feedback = ConsoleFeedback(verbose=verbose)

    try:
        if app_ctx is None:
            app_ctx = _create_default_context(token=token, verbose=verbose)

        deadline = Deadline.after(app_ctx.time, app_ctx.config.deadline)
        feedback.verbose(f"Using GitHub API at {app_ctx.config.api_url}")

        app = App(config_service=app_ctx.config_service(), feedback=feedback)
        app.run(repository, check_only=check_only, dry_run=dry_run, deadline=deadline)
    except AppError as e:
        logger.debug("Command failed", exc_info=True)
        _fail(feedback, e)
    except KeyboardInterrupt:
        _fail(feedback, cancelled_error("interrupted"))
