"""Abstract base class for GitHub repository settings operations."""

from abc import ABC, abstractmethod

from ghautodelete.core.deadline import Deadline
from ghautodelete.core.types import (
    RepositoryRef,
    RepositorySettingsPatch,
    RepositoryState,
    TokenMetadata,
)


class GitHubClient(ABC):
    """Abstract interface for the GitHub REST operations this tool needs.

    All implementations (real and fake) must implement this interface.
    Every operation raises AppError on failure.
    """

    @abstractmethod
    def get_repository(self, ref: RepositoryRef, *, deadline: Deadline) -> RepositoryState:
        """Fetch the current state of a repository.

        Args:
            ref: Repository to fetch
            deadline: Bounds the request and any retries

        Returns:
            Fresh RepositoryState snapshot

        Raises:
            AppError: Any taxonomy kind, depending on the API response
        """
        ...

    @abstractmethod
    def update_repository(
        self,
        ref: RepositoryRef,
        patch: RepositorySettingsPatch,
        *,
        deadline: Deadline,
    ) -> None:
        """Apply a settings patch to a repository.

        The response body is not interpreted; callers must re-fetch to
        observe the resulting state.

        Raises:
            AppError: Any taxonomy kind, depending on the API response
        """
        ...

    @abstractmethod
    def validate_token(self, *, deadline: Deadline) -> TokenMetadata:
        """Look up the identity and OAuth scopes of the configured token.

        Raises:
            AppError: AUTHENTICATION_FAILED if the token is rejected
        """
        ...
