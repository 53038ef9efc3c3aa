"""Tests for config.toml loading."""

from pathlib import Path

import pytest

from ghautodelete.core.config import (
    DEFAULT_API_URL,
    GlobalConfig,
    default_config_dir,
    load_config,
)
from ghautodelete.core.errors import AppError, ErrorKind


def _write_config(config_dir: Path, content: str) -> None:
    config_dir.mkdir(parents=True, exist_ok=True)
    (config_dir / "config.toml").write_text(content, encoding="utf-8")


def test_missing_file_returns_defaults(tmp_path: Path) -> None:
    assert load_config(tmp_path / "absent", environ={}) == GlobalConfig.defaults()


def test_values_are_read_from_file(tmp_path: Path) -> None:
    _write_config(
        tmp_path,
        'api_url = "https://github.example.com/api/v3"\nrequest_timeout = 15\ndeadline = 60.5\n',
    )

    config = load_config(tmp_path, environ={})

    assert config == GlobalConfig(
        api_url="https://github.example.com/api/v3",
        request_timeout=15.0,
        deadline=60.5,
    )


def test_partial_file_keeps_remaining_defaults(tmp_path: Path) -> None:
    _write_config(tmp_path, "request_timeout = 5\n")

    config = load_config(tmp_path, environ={})

    assert config.api_url == DEFAULT_API_URL
    assert config.request_timeout == 5.0
    assert config.deadline == GlobalConfig.defaults().deadline


def test_environment_overrides_api_url(tmp_path: Path) -> None:
    _write_config(tmp_path, 'api_url = "https://from-file.example.com"\n')

    config = load_config(tmp_path, environ={"GITHUB_API_URL": "https://from-env.example.com"})

    assert config.api_url == "https://from-env.example.com"


def test_empty_environment_value_is_ignored(tmp_path: Path) -> None:
    config = load_config(tmp_path, environ={"GITHUB_API_URL": ""})
    assert config.api_url == DEFAULT_API_URL


def test_malformed_toml_is_invalid_arguments(tmp_path: Path) -> None:
    _write_config(tmp_path, "api_url = \n")

    with pytest.raises(AppError) as exc_info:
        load_config(tmp_path, environ={})

    assert exc_info.value.kind == ErrorKind.INVALID_ARGUMENTS
    assert "Invalid config file" in exc_info.value.message


@pytest.mark.parametrize(
    "content",
    [
        "request_timeout = 0\n",
        "request_timeout = -1\n",
        'deadline = "soon"\n',
        "deadline = true\n",
    ],
)
def test_non_positive_or_non_numeric_seconds_rejected(tmp_path: Path, content: str) -> None:
    _write_config(tmp_path, content)

    with pytest.raises(AppError) as exc_info:
        load_config(tmp_path, environ={})

    assert exc_info.value.kind == ErrorKind.INVALID_ARGUMENTS
    assert "must be a positive number" in exc_info.value.message


@pytest.mark.parametrize("content", ['api_url = ""\n', "api_url = 42\n"])
def test_invalid_api_url_rejected(tmp_path: Path, content: str) -> None:
    _write_config(tmp_path, content)

    with pytest.raises(AppError) as exc_info:
        load_config(tmp_path, environ={})

    assert "api_url must be a non-empty string" in exc_info.value.message


def test_default_config_dir_uses_xdg(tmp_path: Path) -> None:
    xdg = tmp_path / "xdg"
    assert default_config_dir({"XDG_CONFIG_HOME": str(xdg)}, tmp_path) == xdg / "ghautodelete"


def test_default_config_dir_falls_back_to_home(tmp_path: Path) -> None:
    assert default_config_dir({}, tmp_path) == tmp_path / ".config" / "ghautodelete"
