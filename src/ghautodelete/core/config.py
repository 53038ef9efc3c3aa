"""Global configuration loaded from an optional TOML file."""

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ghautodelete.core.errors import validation_error

CONFIG_FILE_NAME = "config.toml"
DEFAULT_API_URL = "https://api.github.com"
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_DEADLINE = 120.0


@dataclass(frozen=True)
class GlobalConfig:
    """In-memory representation of `config.toml`.

    Example config.toml:
      # GitHub Enterprise API root
      api_url = "https://github.example.com/api/v3"

      # Seconds per HTTP request
      request_timeout = 15

      # Seconds for the whole invocation, retries included
      deadline = 60
    """

    api_url: str
    request_timeout: float
    deadline: float

    @staticmethod
    def defaults() -> "GlobalConfig":
        return GlobalConfig(
            api_url=DEFAULT_API_URL,
            request_timeout=DEFAULT_REQUEST_TIMEOUT,
            deadline=DEFAULT_DEADLINE,
        )


def default_config_dir(environ: Mapping[str, str], home: Path) -> Path:
    """Resolve $XDG_CONFIG_HOME/ghautodelete, falling back to ~/.config/ghautodelete."""
    xdg = environ.get("XDG_CONFIG_HOME")
    base = Path(xdg) if xdg else home / ".config"
    return base / "ghautodelete"


def load_config(config_dir: Path, *, environ: Mapping[str, str]) -> GlobalConfig:
    """Load config.toml from the given directory if present; otherwise return defaults.

    GITHUB_API_URL in the environment overrides the file's api_url.

    Raises:
        AppError: INVALID_ARGUMENTS kind if the file is malformed or a value
            has the wrong type
    """
    defaults = GlobalConfig.defaults()
    cfg_path = config_dir / CONFIG_FILE_NAME

    data: dict[str, object] = {}
    if cfg_path.exists():
        try:
            data = tomllib.loads(cfg_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as e:
            raise validation_error(f"Invalid config file {cfg_path}: {e}") from e

    api_url = data.get("api_url", defaults.api_url)
    if not isinstance(api_url, str) or not api_url:
        raise validation_error(
            f"Invalid config file {cfg_path}: api_url must be a non-empty string"
        )

    env_api_url = environ.get("GITHUB_API_URL")
    if env_api_url:
        api_url = env_api_url

    return GlobalConfig(
        api_url=api_url,
        request_timeout=_positive_seconds(
            data, "request_timeout", defaults.request_timeout, cfg_path
        ),
        deadline=_positive_seconds(data, "deadline", defaults.deadline, cfg_path),
    )


def _positive_seconds(data: dict[str, object], key: str, default: float, path: Path) -> float:
    value = data.get(key, default)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int | float) or value <= 0:
        raise validation_error(f"Invalid config file {path}: {key} must be a positive number")
    return float(value)
