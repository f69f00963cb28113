"""Tests for configuration loading and validation."""

from pathlib import Path

import pytest

from stickies_sync.config import Config, get_config, load_config, set_config
from stickies_sync.domain.entities.note import DEFAULT_COLOR, PALETTE
from stickies_sync.error_codes import ErrorCode
from stickies_sync.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run each test in an empty directory without STICKIES_* variables."""
    monkeypatch.chdir(tmp_path)
    for key in [
        "STICKIES_CONFIG",
        "STICKIES_API_BASE_URL",
        "STICKIES_DEBOUNCE_SECONDS",
        "STICKIES_PALETTE",
        "STICKIES_LOG_LEVEL",
    ]:
        monkeypatch.delenv(key, raising=False)
    return tmp_path


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults() -> None:
    config = load_config()

    assert config.api_base_url == "http://127.0.0.1:3000"
    assert config.api_url == "http://127.0.0.1:3000/api/"
    assert config.debounce_seconds == 1.0
    assert config.default_color == DEFAULT_COLOR
    assert config.palette == list(PALETTE)


def test_yaml_file_is_loaded(isolated_env) -> None:
    _write(
        isolated_env / "config.yaml",
        "api_base_url: https://notes.example.com/\ndebounce_seconds: 0.5\n",
    )

    config = load_config()

    assert config.api_base_url == "https://notes.example.com"
    assert config.debounce_seconds == 0.5


def test_explicit_path_and_env_precedence(isolated_env, monkeypatch) -> None:
    path = _write(isolated_env / "custom.yaml", "debounce_seconds: 2\nlog_level: debug\n")
    monkeypatch.setenv("STICKIES_DEBOUNCE_SECONDS", "3")

    config = load_config(path)

    assert config.debounce_seconds == 3.0
    assert config.log_level == "DEBUG"


def test_dotenv_beats_yaml(isolated_env) -> None:
    _write(isolated_env / "config.yaml", "debounce_seconds: 2\nrequest_timeout: 7\n")
    _write(isolated_env / ".env", "STICKIES_DEBOUNCE_SECONDS=4\n")

    config = load_config()

    assert config.debounce_seconds == 4.0
    assert config.request_timeout == 7.0


def test_overrides_win(isolated_env) -> None:
    _write(isolated_env / "config.yaml", "api_base_url: http://from-yaml\n")

    config = load_config(api_base_url="http://override:8080")

    assert config.api_base_url == "http://override:8080"


def test_palette_from_env_string(monkeypatch) -> None:
    monkeypatch.setenv("STICKIES_PALETTE", "#FCFA5D, #000000")

    config = load_config()

    assert config.palette == ["#fcfa5d", "#000000"]


def test_default_colour_joins_palette() -> None:
    config = Config(palette=["#000000"])

    assert config.palette == [DEFAULT_COLOR, "#000000"]


def test_document_url() -> None:
    config = Config(api_base_url="http://host:3000/")

    assert config.document_url("a" * 24) == f"http://host:3000/{'a' * 24}"
    assert config.document_url(None) == "http://host:3000/"


def test_missing_explicit_file(isolated_env) -> None:
    with pytest.raises(ConfigurationError):
        load_config(isolated_env / "nope.yaml")


def test_invalid_yaml(isolated_env) -> None:
    _write(isolated_env / "config.yaml", "api_base_url: [unclosed\n")

    with pytest.raises(ConfigurationError) as exc_info:
        load_config()

    assert exc_info.value.error_code == ErrorCode.CFG_PARSE_FAILED.value


def test_yaml_must_be_mapping(isolated_env) -> None:
    _write(isolated_env / "config.yaml", "- just\n- a list\n")

    with pytest.raises(ConfigurationError):
        load_config()


@pytest.mark.parametrize(
    "yaml_text",
    [
        "debounce_seconds: 0\n",
        "api_base_url: ftp://example.com\n",
        "palette: ['#zzzzzz']\n",
        "log_level: chatty\n",
        "default_color: yellow\n",
    ],
)
def test_invalid_values(isolated_env, yaml_text) -> None:
    _write(isolated_env / "config.yaml", yaml_text)

    with pytest.raises(ConfigurationError) as exc_info:
        load_config()

    assert exc_info.value.error_code == ErrorCode.CFG_INVALID.value


def test_duplicate_palette_entries_rejected(isolated_env) -> None:
    _write(isolated_env / "config.yaml", "palette: ['#fcfa5d', '#fcfa5d']\n")

    with pytest.raises(ConfigurationError):
        load_config()


def test_singleton_accessors() -> None:
    config = Config(debounce_seconds=0.25)
    set_config(config)

    assert get_config() is config
