"""Orchestration of the delete-branch-on-merge check and configure workflows."""

from ghautodelete.core.deadline import Deadline
from ghautodelete.core.types import OperationResult, RepositoryRef, RepositorySettingsPatch
from ghautodelete.gateway.feedback.abc import UserFeedback
from ghautodelete.gateway.github.abc import GitHubClient


class ConfigService:
    """Sequences GitHub client calls to check or enable auto-delete branches.

    Errors from the client propagate unchanged. Progress notices go to the
    feedback sink's verbose channel and never affect the result.
    """

    def __init__(self, *, github: GitHubClient, feedback: UserFeedback) -> None:
        self._github = github
        self._feedback = feedback

    def configure(
        self, ref: RepositoryRef, *, dry_run: bool, deadline: Deadline
    ) -> OperationResult:
        """Enable delete-branch-on-merge unless it is already on.

        Workflow:
        1. Fetch current state
        2. Already enabled: report it, no write
        3. Dry run: report the pending change, no write
        4. Otherwise write, then re-fetch and report the observed state

        Args:
            ref: Repository to configure
            dry_run: Stop before writing
            deadline: Bounds every network call

        Returns:
            OperationResult describing before/after state

        Raises:
            AppError: First failure from any fetch or write
        """
        self._feedback.verbose("Fetching repository information")
        repo = self._github.get_repository(ref, deadline=deadline)

        if repo.delete_branch_on_merge:
            return OperationResult(
                was_already_enabled=True,
                is_now_enabled=True,
                default_branch=repo.default_branch,
                repository_full_name=repo.full_name,
            )

        if dry_run:
            return OperationResult(
                was_already_enabled=False,
                is_now_enabled=False,
                default_branch=repo.default_branch,
                repository_full_name=repo.full_name,
            )

        self._feedback.verbose("Updating repository settings")
        self._github.update_repository(
            ref, RepositorySettingsPatch(delete_branch_on_merge=True), deadline=deadline
        )

        self._feedback.verbose("Verifying settings applied")
        verified = self._github.get_repository(ref, deadline=deadline)

        return OperationResult(
            was_already_enabled=False,
            is_now_enabled=verified.delete_branch_on_merge,
            default_branch=verified.default_branch,
            repository_full_name=verified.full_name,
        )

    def check_status(self, ref: RepositoryRef, *, deadline: Deadline) -> OperationResult:
        """Report the current setting without modifying anything.

        Both result flags mirror the single observed state.
        """
        self._feedback.verbose("Fetching repository information")
        repo = self._github.get_repository(ref, deadline=deadline)

        return OperationResult(
            was_already_enabled=repo.delete_branch_on_merge,
            is_now_enabled=repo.delete_branch_on_merge,
            default_branch=repo.default_branch,
            repository_full_name=repo.full_name,
        )
