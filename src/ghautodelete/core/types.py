"""Value types shared by the parser, the GitHub gateway and the orchestrator."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RepositoryRef:
    """Owner and name identifying a repository, independent of input format."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class RepositoryState:
    """Point-in-time snapshot of a repository as reported by the GitHub API.

    A fresh fetch always produces a new instance.
    """

    owner: str
    name: str
    default_branch: str
    delete_branch_on_merge: bool

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class RepositorySettingsPatch:
    """Write intent for the repository update endpoint."""

    delete_branch_on_merge: bool

    def to_payload(self) -> dict[str, bool]:
        return {"delete_branch_on_merge": self.delete_branch_on_merge}


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a check or configure call.

    Attributes:
        was_already_enabled: Setting was on before this invocation
        is_now_enabled: Setting as last observed by this invocation
        default_branch: Repository default branch
        repository_full_name: "owner/name" as reported by GitHub
    """

    was_already_enabled: bool
    is_now_enabled: bool
    default_branch: str
    repository_full_name: str

    def __post_init__(self) -> None:
        if self.was_already_enabled and not self.is_now_enabled:
            msg = "An already-enabled repository cannot be reported as disabled"
            raise ValueError(msg)


@dataclass(frozen=True)
class TokenMetadata:
    """Identity and OAuth scopes of the configured token."""

    username: str
    scopes: tuple[str, ...]

    def has_scope(self, scope: str) -> bool:
        """Exact, case-sensitive scope membership."""
        return scope in self.scopes
