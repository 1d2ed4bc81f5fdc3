"""Path utilities for resource and per-user config access."""

import os
import sys
from pathlib import Path

from classcal.config.constants import APP_NAME


def get_resource_path(relative_path: str) -> str:
    """Get absolute path to a bundled resource, works for dev and PyInstaller.

    Args:
        relative_path: Path relative to the classcal package directory.

    Returns:
        Absolute path to the resource.
    """
    if getattr(sys, 'frozen', False):
        # Running in a PyInstaller bundle
        base_path = Path(sys._MEIPASS) / "classcal"
    else:
        base_path = get_package_dir()

    return str(base_path / relative_path)


def get_package_dir() -> Path:
    """Get the classcal package directory.

    Returns:
        Path to the classcal package.
    """
    return Path(__file__).parent.parent


def get_user_config_dir() -> Path:
    """Return a per-user config directory that works across platforms.

    Returns:
        Path to the user's config directory for this application.
    """
    if sys.platform.startswith("win"):
        base_str = os.environ.get("APPDATA") or os.environ.get("LOCALAPPDATA")
        base = Path(base_str) if base_str else (Path.home() / "AppData" / "Roaming")
        return base / APP_NAME

    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME

    # Linux and other Unix-like systems
    base_str = os.environ.get("XDG_CONFIG_HOME")
    base = Path(base_str) if base_str else (Path.home() / ".config")
    return base / APP_NAME
