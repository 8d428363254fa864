"""XDG-compliant path management for dirpurge.

XDG defaults:
- Config: ~/.config/dirpurge/
- Trash: ~/.local/share/Trash/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "dirpurge"


def _get_xdg_base(env_var: str, default_subdir: str) -> Path:
    """Get an XDG base directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the base directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base)
    return Path.home() / default_subdir


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/dirpurge/ (or XDG_CONFIG_HOME/dirpurge/).
    """
    return _get_xdg_base("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_settings_path() -> Path:
    """Get the default settings file path.

    Returns:
        Path to ~/.config/dirpurge/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_theme_path() -> Path:
    """Get the user theme override path.

    Returns:
        Path to ~/.config/dirpurge/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def get_trash_dir() -> Path:
    """Get the user trash directory.

    Returns:
        Path to ~/.local/share/Trash (or XDG_DATA_HOME/Trash).
    """
    return _get_xdg_base("XDG_DATA_HOME", ".local/share") / "Trash"


def ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def is_writable_dir(path: Path) -> bool:
    """Check if a directory exists (or can be created) and is writable.

    Args:
        path: Directory to check.

    Returns:
        True if files can be created in the directory.
    """
    try:
        ensure_dir(path, "output")
    except RuntimeError:
        return False
    return os.access(path, os.W_OK | os.X_OK)
