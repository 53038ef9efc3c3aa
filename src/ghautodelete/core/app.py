"""Application controller: mode selection and result rendering."""

from ghautodelete.core.config_service import ConfigService
from ghautodelete.core.deadline import Deadline
from ghautodelete.core.errors import api_error
from ghautodelete.core.repo_parser import parse_repository
from ghautodelete.core.types import RepositoryRef
from ghautodelete.gateway.feedback.abc import UserFeedback


class App:
    """Runs one of three modes against a single repository.

    Modes, in priority order:
    - check: report current status, never write
    - dry-run: report what would change, never write
    - apply: enable auto-delete branches
    """

    def __init__(self, *, config_service: ConfigService, feedback: UserFeedback) -> None:
        self._config_service = config_service
        self._feedback = feedback

    def run(self, repository: str, *, check_only: bool, dry_run: bool, deadline: Deadline) -> None:
        """Parse the identifier and execute the selected mode.

        check_only takes precedence over dry_run.

        Raises:
            AppError: Parse or orchestration failure, unmodified
        """
        ref = parse_repository(repository)

        if check_only:
            self._handle_check(ref, deadline)
        elif dry_run:
            self._handle_dry_run(ref, deadline)
        else:
            self._handle_apply(ref, deadline)

    def _handle_check(self, ref: RepositoryRef, deadline: Deadline) -> None:
        result = self._config_service.check_status(ref, deadline=deadline)

        self._feedback.info(f"Repository: {result.repository_full_name}")
        self._feedback.info(f"Default branch: {result.default_branch}")

        if result.is_now_enabled:
            self._feedback.info("Auto-delete branches: enabled")
        else:
            self._feedback.info("Auto-delete branches: disabled")
            self._feedback.info("To enable, run without --check flag")

    def _handle_dry_run(self, ref: RepositoryRef, deadline: Deadline) -> None:
        result = self._config_service.configure(ref, dry_run=True, deadline=deadline)

        if result.was_already_enabled:
            self._feedback.info(
                f"Auto-delete branches already enabled for {result.repository_full_name}"
            )
            self._feedback.info("No changes needed")
            return

        self._feedback.info(
            f"[DRY-RUN] Would enable auto-delete branches for {result.repository_full_name}"
        )
        self._feedback.info("No changes made")

    def _handle_apply(self, ref: RepositoryRef, deadline: Deadline) -> None:
        result = self._config_service.configure(ref, dry_run=False, deadline=deadline)

        if result.was_already_enabled:
            self._feedback.success(
                f"Auto-delete branches already enabled for {result.repository_full_name}"
            )
            return

        if result.is_now_enabled:
            self._feedback.success(
                f"Successfully enabled auto-delete branches for {result.repository_full_name}"
            )
            return

        # Write succeeded but the verification fetch still reports disabled
        raise api_error("Unexpected state: auto-delete branches was not enabled")
