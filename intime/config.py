"""Configuration file management for intime."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_OCR_TIMEOUT = 30


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "intime" / "config.toml"


def create_default_config(config_path: Path | None = None, uid: str = "local", email: str = "") -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
        uid: Identifier of the local user profile.
        email: Email stored on the local user profile.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config: dict[str, Any] = {
        "user": {"uid": uid, "email": email},
        "ocr": {"timeout": DEFAULT_OCR_TIMEOUT},
    }

    save_config(default_config, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def get_user_settings(config: dict[str, Any]) -> tuple[str, str]:
    """Get the local user's uid and email.

    Args:
        config: Configuration dictionary.

    Returns:
        Tuple of (uid, email). Email defaults to "<uid>@localhost".

    Raises:
        ValueError: If no user uid is configured.
    """
    user = config.get("user", {})
    uid = user.get("uid")
    if not uid:
        raise ValueError("No user configured. Run 'intime init' first.")
    return uid, user.get("email") or f"{uid}@localhost"


def get_ocr_api_key(config: dict[str, Any]) -> str | None:
    """Get the OCR API key: OCR_API_KEY environment variable, then config.

    Args:
        config: Configuration dictionary.

    Returns:
        API key or None if not set anywhere.
    """
    env_key = os.environ.get("OCR_API_KEY")
    if env_key:
        return env_key
    return config.get("ocr", {}).get("api_key") or None


def get_ocr_timeout(config: dict[str, Any]) -> int:
    """Get the OCR request timeout in seconds."""
    return int(config.get("ocr", {}).get("timeout", DEFAULT_OCR_TIMEOUT))


def set_ocr_api_key(api_key: str, config_path: Path | None = None) -> None:
    """Store the OCR API key in the config file.

    Args:
        api_key: OCR.space API key.
        config_path: Path to config file. If None, uses default location.
    """
    config = load_config(config_path)
    config.setdefault("ocr", {})["api_key"] = api_key
    save_config(config, config_path)
