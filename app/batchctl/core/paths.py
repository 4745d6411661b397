"""XDG-compliant path management for batchctl.

This module provides standardized paths following the XDG Base Directory
Specification for configuration storage.

XDG defaults:
- Config: ~/.config/batchctl/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "batchctl"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/batchctl/ (or XDG_CONFIG_HOME/batchctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_config_path() -> Path:
    """Get the default configuration file path.

    Returns:
        Path to ~/.config/batchctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/batchctl/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_home_hint() -> Path | None:
    """Get the user's home directory hint from the environment.

    ``USERPROFILE`` is consulted first (Windows), then ``HOME``. Unlike
    ``Path.home()`` this never falls back to the password database, so an
    environment without either variable yields None.

    Returns:
        Home directory path, or None if no hint is present.
    """
    for var in ("USERPROFILE", "HOME"):
        value = os.environ.get(var)
        if value:
            return Path(value)
    return None
