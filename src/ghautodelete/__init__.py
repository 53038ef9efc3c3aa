"""ghautodelete CLI entry point.

This package provides a Click-based CLI that enables GitHub's
"automatically delete head branches" setting on a repository. See
`ghautodelete --help` for details.
"""

from ghautodelete.cli.cli import cli


def main() -> None:
    """CLI entry point used by the `ghautodelete` console script."""
    cli()
