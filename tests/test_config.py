"""Tests for intime.config."""

import stat
from pathlib import Path

import pytest

from intime.config import (
    DEFAULT_OCR_TIMEOUT,
    create_default_config,
    get_config_path,
    get_ocr_api_key,
    get_ocr_timeout,
    get_user_settings,
    load_config,
    set_ocr_api_key,
)


class TestConfigFile:
    """Tests for creating, loading and saving the config file."""

    def test_config_path_follows_xdg(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should place the config under XDG_CONFIG_HOME."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

        assert get_config_path() == tmp_path / "intime" / "config.toml"

    def test_default_config(self, tmp_path: Path) -> None:
        """Should write the user and OCR defaults."""
        path = tmp_path / "intime" / "config.toml"

        create_default_config(path, uid="abc", email="a@example.com")

        config = load_config(path)
        assert config["user"] == {"uid": "abc", "email": "a@example.com"}
        assert config["ocr"]["timeout"] == DEFAULT_OCR_TIMEOUT

    def test_config_is_private(self, tmp_path: Path) -> None:
        """Should only be readable by its owner."""
        path = tmp_path / "config.toml"

        create_default_config(path)

        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_missing_config(self, tmp_path: Path) -> None:
        """Should raise FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.toml")

    def test_set_ocr_api_key(self, tmp_path: Path) -> None:
        """Should store the key without touching other settings."""
        path = tmp_path / "config.toml"
        create_default_config(path, uid="abc")

        set_ocr_api_key("secret", path)

        config = load_config(path)
        assert config["ocr"]["api_key"] == "secret"
        assert config["user"]["uid"] == "abc"


class TestGetUserSettings:
    """Tests for get_user_settings."""

    def test_uid_and_email(self) -> None:
        """Should return the configured uid and email."""
        assert get_user_settings({"user": {"uid": "abc", "email": "a@example.com"}}) == ("abc", "a@example.com")

    def test_default_email(self) -> None:
        """Should derive an email from the uid when none is set."""
        assert get_user_settings({"user": {"uid": "abc", "email": ""}}) == ("abc", "abc@localhost")

    def test_missing_user(self) -> None:
        """Should raise ValueError without a uid."""
        with pytest.raises(ValueError, match="intime init"):
            get_user_settings({})


class TestOcrSettings:
    """Tests for OCR settings."""

    def test_env_overrides_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should prefer the OCR_API_KEY environment variable."""
        monkeypatch.setenv("OCR_API_KEY", "from-env")

        assert get_ocr_api_key({"ocr": {"api_key": "from-config"}}) == "from-env"

    def test_key_from_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should fall back to the config value."""
        monkeypatch.delenv("OCR_API_KEY", raising=False)

        assert get_ocr_api_key({"ocr": {"api_key": "from-config"}}) == "from-config"

    def test_no_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should return None when no key is set."""
        monkeypatch.delenv("OCR_API_KEY", raising=False)

        assert get_ocr_api_key({}) is None
        assert get_ocr_api_key({"ocr": {"api_key": ""}}) is None

    def test_timeout(self) -> None:
        """Should read the timeout with a default."""
        assert get_ocr_timeout({"ocr": {"timeout": 10}}) == 10
        assert get_ocr_timeout({}) == DEFAULT_OCR_TIMEOUT
