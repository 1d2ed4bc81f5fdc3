"""Locating and loading the period configuration resource."""

import json
import logging
import os
from pathlib import Path
from typing import List, Optional, Union

from classcal.config.constants import (
    BUNDLED_PERIODS_RESOURCE,
    PERIODS_FILE_ENV_VAR,
    PERIODS_FILENAME,
)
from classcal.core.registry import PeriodRegistry
from classcal.exceptions.errors import ConfigLoadError
from classcal.utils.paths import get_resource_path, get_user_config_dir

logger = logging.getLogger(__name__)


def get_user_periods_path() -> Path:
    """Get the periods.json path under the user config directory."""
    return get_user_config_dir() / PERIODS_FILENAME


def get_bundled_periods_path() -> Path:
    """Get the sample configuration shipped with the package."""
    return Path(get_resource_path(BUNDLED_PERIODS_RESOURCE))


def candidate_paths(explicit: Optional[Union[str, Path]] = None) -> List[Path]:
    """List configuration locations in priority order.

    Priority:
        1. Explicit path (command line or caller)
        2. CLASSCAL_PERIODS_FILE environment variable
        3. periods.json in the user config directory
        4. Bundled sample configuration

    An explicit path or environment variable is authoritative: when given,
    the lower-priority locations are not consulted.
    """
    if explicit:
        return [Path(explicit).expanduser()]

    env_path = os.environ.get(PERIODS_FILE_ENV_VAR)
    if env_path and env_path.strip():
        return [Path(env_path.strip()).expanduser()]

    return [get_user_periods_path(), get_bundled_periods_path()]


def find_periods_file(explicit: Optional[Union[str, Path]] = None) -> Path:
    """Resolve the configuration file to load.

    Raises:
        ConfigLoadError: If none of the candidate locations exists.
    """
    candidates = candidate_paths(explicit)
    for path in candidates:
        if path.is_file():
            return path

    searched = ", ".join(str(p) for p in candidates)
    raise ConfigLoadError(searched, "configuration file not found")


def load_registry(path: Union[str, Path]) -> PeriodRegistry:
    """Load and validate a period registry from a JSON file.

    Args:
        path: Path to the JSON configuration.

    Returns:
        The immutable PeriodRegistry.

    Raises:
        ConfigLoadError: If the file is missing, not JSON, or malformed.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigLoadError(str(path), "configuration file not found") from e
    except json.JSONDecodeError as e:
        raise ConfigLoadError(str(path), f"invalid JSON ({e})") from e
    except OSError as e:
        raise ConfigLoadError(str(path), str(e)) from e

    try:
        registry = PeriodRegistry.from_dict(data)
    except ValueError as e:
        raise ConfigLoadError(str(path), str(e)) from e

    logger.info("Loaded period configuration from %s", path)
    return registry


def load_default_registry(explicit: Optional[Union[str, Path]] = None) -> PeriodRegistry:
    """Find and load the period configuration in one step."""
    return load_registry(find_periods_file(explicit))
