"""Console output sink rendering with click."""

import click

from ghautodelete.gateway.feedback.abc import UserFeedback


class ConsoleFeedback(UserFeedback):
    """Production implementation writing to stdout and stderr.

    Informational text goes to stdout and errors go to stderr. click.echo
    strips styling when the stream is not a terminal.
    """

    def __init__(self, *, verbose: bool) -> None:
        self._verbose = verbose

    def success(self, message: str) -> None:
        click.echo(click.style("✓", fg="green") + f" {message}")

    def error(self, message: str) -> None:
        click.echo(click.style("Error: ", fg="red") + message, err=True)

    def info(self, message: str) -> None:
        click.echo(message)

    def verbose(self, message: str) -> None:
        if self._verbose:
            click.echo(click.style("[verbose] ", dim=True) + message)
