"""Fake GitHub client for testing."""

from dataclasses import replace

from ghautodelete.core.deadline import Deadline
from ghautodelete.core.errors import AppError, repository_not_found_error
from ghautodelete.core.types import (
    RepositoryRef,
    RepositorySettingsPatch,
    RepositoryState,
    TokenMetadata,
)
from ghautodelete.gateway.github.abc import GitHubClient


class FakeGitHubClient(GitHubClient):
    """In-memory fake implementation of GitHub repository settings operations.

    This class has NO public setup methods. All state is provided via constructor
    using keyword arguments with sensible defaults.

    Repositories are keyed by "owner/name". Unknown repositories raise the
    same not-found error the real client produces for a 404.
    """

    def __init__(
        self,
        *,
        repositories: dict[str, RepositoryState] | None = None,
        get_error: AppError | None = None,
        update_error: AppError | None = None,
        verify_error: AppError | None = None,
        ignore_updates: bool = False,
        token_metadata: TokenMetadata | None = None,
        validate_token_error: AppError | None = None,
    ) -> None:
        """Create FakeGitHubClient with pre-configured state.

        Args:
            repositories: Initial repository states keyed by "owner/name"
            get_error: Raised by every get_repository() call
            update_error: Raised by every update_repository() call
            verify_error: Raised by get_repository() calls made after an update
            ignore_updates: Accept updates without changing stored state
            token_metadata: Returned by validate_token()
            validate_token_error: Raised by validate_token()
        """
        self._repositories = dict(repositories) if repositories is not None else {}
        self._get_error = get_error
        self._update_error = update_error
        self._verify_error = verify_error
        self._ignore_updates = ignore_updates
        self._token_metadata = (
            token_metadata
            if token_metadata is not None
            else TokenMetadata(username="test-user", scopes=("repo",))
        )
        self._validate_token_error = validate_token_error
        self._get_calls: list[RepositoryRef] = []
        self._update_calls: list[tuple[RepositoryRef, RepositorySettingsPatch]] = []
        self._validate_token_calls: list[None] = []

    def get_repository(self, ref: RepositoryRef, *, deadline: Deadline) -> RepositoryState:
        self._get_calls.append(ref)

        if self._get_error is not None:
            raise self._get_error
        if self._verify_error is not None and self._update_calls:
            raise self._verify_error

        state = self._repositories.get(ref.full_name)
        if state is None:
            raise repository_not_found_error(ref.owner, ref.name)
        return state

    def update_repository(
        self,
        ref: RepositoryRef,
        patch: RepositorySettingsPatch,
        *,
        deadline: Deadline,
    ) -> None:
        self._update_calls.append((ref, patch))

        if self._update_error is not None:
            raise self._update_error

        state = self._repositories.get(ref.full_name)
        if state is None:
            raise repository_not_found_error(ref.owner, ref.name)

        if not self._ignore_updates:
            self._repositories[ref.full_name] = replace(
                state, delete_branch_on_merge=patch.delete_branch_on_merge
            )

    def validate_token(self, *, deadline: Deadline) -> TokenMetadata:
        self._validate_token_calls.append(None)

        if self._validate_token_error is not None:
            raise self._validate_token_error
        return self._token_metadata

    @property
    def get_calls(self) -> list[RepositoryRef]:
        """Refs passed to get_repository(), in call order."""
        return self._get_calls

    @property
    def update_calls(self) -> list[tuple[RepositoryRef, RepositorySettingsPatch]]:
        """(ref, patch) pairs passed to update_repository(), in call order."""
        return self._update_calls

    @property
    def validate_token_calls(self) -> list[None]:
        """One None per validate_token() call."""
        return self._validate_token_calls
