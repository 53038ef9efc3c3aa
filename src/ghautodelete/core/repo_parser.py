"""Parsing of user-supplied repository identifiers.

Accepted forms:
- owner/repo
- https://github.com/owner/repo[.git][/]  (scheme and host are case-insensitive)
- git@github.com:owner/repo[.git]
"""

import re

from ghautodelete.core.errors import validation_error
from ghautodelete.core.types import RepositoryRef

HTTPS_PREFIX = "https://"
HTTP_PREFIX = "http://"
GITHUB_HOST_PREFIX = "github.com/"
SSH_PREFIX = "git@"
GITHUB_SSH_PREFIX = "git@github.com:"

# GitHub allows alphanumerics, hyphens, underscores and dots
VALID_NAME_PATTERN = re.compile(r"[A-Za-z0-9._-]+")

MSG_REQUIRED = "Repository identifier is required"
MSG_EXPECTED_FORMAT = "Expected format: owner/repo"
MSG_INVALID_CHARACTERS = "Invalid repository name characters"
MSG_INVALID_URL = "Invalid GitHub URL format"


def parse_repository(value: str) -> RepositoryRef:
    """Parse a repository identifier into owner and name.

    Case is preserved for display even though GitHub compares names
    case-insensitively.

    Args:
        value: Raw identifier as typed by the user

    Returns:
        RepositoryRef with owner and name

    Raises:
        AppError: INVALID_ARGUMENTS kind when the identifier is empty,
            malformed, not on github.com or contains invalid characters
    """
    text = value.strip()
    if not text:
        raise validation_error(MSG_REQUIRED)

    lowered = text.lower()
    if lowered.startswith(HTTPS_PREFIX):
        return _parse_https_url(text)

    if lowered.startswith(HTTP_PREFIX):
        raise validation_error(MSG_EXPECTED_FORMAT)

    if text.startswith(SSH_PREFIX):
        return _parse_ssh_url(text)

    # Other user@host: shapes
    if "@" in text and ":" in text:
        raise validation_error(MSG_EXPECTED_FORMAT)

    return _parse_slug(text)


def _parse_slug(text: str) -> RepositoryRef:
    parts = text.split("/")

    # Empty segments cover leading, trailing and doubled slashes
    if any(part == "" for part in parts):
        raise validation_error(MSG_INVALID_CHARACTERS)

    if len(parts) != 2:
        raise validation_error(MSG_EXPECTED_FORMAT)

    return _validated(parts[0], parts[1])


def _parse_https_url(text: str) -> RepositoryRef:
    after_scheme = text[len(HTTPS_PREFIX) :]
    if not after_scheme.lower().startswith(GITHUB_HOST_PREFIX):
        raise validation_error(MSG_EXPECTED_FORMAT)

    path = after_scheme[len(GITHUB_HOST_PREFIX) :]
    path = path.removesuffix("/")
    path = path.removesuffix(".git")

    parts = path.split("/")
    if len(parts) != 2 or "" in parts:
        raise validation_error(MSG_INVALID_URL)

    return _validated(parts[0], parts[1])


def _parse_ssh_url(text: str) -> RepositoryRef:
    if not text.startswith(GITHUB_SSH_PREFIX):
        raise validation_error(MSG_EXPECTED_FORMAT)

    path = text[len(GITHUB_SSH_PREFIX) :].removesuffix(".git")

    parts = path.split("/")
    if len(parts) != 2:
        raise validation_error(MSG_INVALID_URL)

    return _validated(parts[0], parts[1])


def _validated(owner: str, name: str) -> RepositoryRef:
    for segment in (owner, name):
        if not VALID_NAME_PATTERN.fullmatch(segment):
            raise validation_error(MSG_INVALID_CHARACTERS)
    return RepositoryRef(owner=owner, name=name)
