"""GitHub token resolution for API access."""

import logging
from collections.abc import Mapping
from pathlib import Path

import yaml

from ghautodelete.core.errors import authentication_error

logger = logging.getLogger(__name__)

GITHUB_HOST = "github.com"


def resolve_token(*, explicit: str | None, environ: Mapping[str, str], home: Path) -> str:
    """Resolve the GitHub token from CLI args, environment, or gh CLI config.

    Priority order:
    1. Explicit --token flag (if non-empty after trimming)
    2. GITHUB_TOKEN environment variable
    3. oauth_token for github.com in ~/.config/gh/hosts.yml

    Args:
        explicit: Value of the --token option, if given
        environ: Environment variables
        home: User home directory

    Returns:
        The token, trimmed of whitespace

    Raises:
        AppError: AUTHENTICATION_FAILED kind if no source yields a token
    """
    if explicit is not None and explicit.strip():
        return explicit.strip()

    env_token = environ.get("GITHUB_TOKEN", "").strip()
    if env_token:
        return env_token

    gh_token = _read_gh_hosts_token(gh_hosts_path(home))
    if gh_token:
        return gh_token

    raise authentication_error(
        "No GitHub token found. Set GITHUB_TOKEN environment variable or use --token flag"
    )


def gh_hosts_path(home: Path) -> Path:
    return home / ".config" / "gh" / "hosts.yml"


def _read_gh_hosts_token(path: Path) -> str | None:
    """Read the github.com oauth_token from a gh CLI hosts.yml file.

    Returns:
        The token, or None if the file is missing, unreadable or has no token.
    """
    if not path.exists():
        return None

    try:
        hosts = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.debug("Ignoring unreadable gh config %s: %s", path, e)
        return None

    if not isinstance(hosts, dict):
        return None

    host = hosts.get(GITHUB_HOST)
    if not isinstance(host, dict):
        return None

    token = host.get("oauth_token")
    if not isinstance(token, str):
        return None
    return token.strip() or None
