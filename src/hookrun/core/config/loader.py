"""
Configuration loading with multi-layer merging.

Implements the configuration precedence chain:
    defaults < user config < project config < env vars
"""

import json
import logging
import os
from pathlib import Path
from typing import Any

from .models import DEFAULT_HOOK_CLASSES, HookRunConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "HOOKRUN_"

# Global cache to avoid reloading config multiple times per process
_config_cache: HookRunConfig | None = None


def get_xdg_config_home() -> Path:
    """
    Get XDG config home directory.

    Returns:
        Path to config directory (defaults to ~/.config)
    """
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """
    Get path to user configuration file.

    Returns:
        Path to ~/.config/hookrun/config.json (or XDG equivalent)
    """
    return get_xdg_config_home() / "hookrun" / "config.json"


def get_project_config_path(cwd: Path | None = None) -> Path:
    """
    Get path to project configuration file.

    Args:
        cwd: Working directory to search from (defaults to current directory)

    Returns:
        Path to .hookrun.json in the given directory
    """
    if cwd is None:
        cwd = Path.cwd()
    return cwd / ".hookrun.json"


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Deep merge two dictionaries.

    Values in `override` take precedence over values in `base`.
    Nested dicts are merged, not replaced.

    Example:
        >>> base = {"hooks": {"prolog": {"pattern": "a/*", "max_wait_seconds": 5}}}
        >>> override = {"hooks": {"prolog": {"max_wait_seconds": 30}}}
        >>> deep_merge(base, override)
        {"hooks": {"prolog": {"pattern": "a/*", "max_wait_seconds": 30}}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Load a JSON file, returning None if it doesn't exist or is invalid.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON as dict, or None if file doesn't exist or can't be parsed
    """
    if not path.exists():
        return None

    try:
        with path.open() as f:
            data = json.load(f)
            if isinstance(data, dict):
                return data
            logger.warning(f"Ignoring config at {path}: top level is not an object")
            return None
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Failed to parse config at {path}: {e}")
        return None


def _env_name(hook_name: str) -> str:
    return hook_name.upper().replace("-", "_")


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Env vars have the highest precedence and override all config files.

    Supported env vars (for every configured hook class NAME):
        HOOKRUN_<NAME>_PATTERN - overrides hooks.<name>.pattern
        HOOKRUN_<NAME>_MAX_WAIT - overrides hooks.<name>.max_wait_seconds
        HOOKRUN_INHERIT_ENV - overrides environment.inherit

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()
    hooks: dict[str, Any] = dict(result.get("hooks") or {})

    for hook_name in hooks:
        prefix = f"{ENV_PREFIX}{_env_name(hook_name)}"
        hook = dict(hooks[hook_name] or {})

        if (pattern := os.environ.get(f"{prefix}_PATTERN")) is not None:
            hook["pattern"] = pattern or None

        if wait_str := os.environ.get(f"{prefix}_MAX_WAIT"):
            try:
                max_wait = int(wait_str)
            except ValueError:
                logger.warning(f"Invalid {prefix}_MAX_WAIT value '{wait_str}', ignoring")
            else:
                if max_wait < -1:
                    logger.warning(f"{prefix}_MAX_WAIT must be >= -1, got {max_wait}, ignoring")
                else:
                    hook["max_wait_seconds"] = max_wait

        hooks[hook_name] = hook

    result["hooks"] = hooks

    if inherit_str := os.environ.get(f"{ENV_PREFIX}INHERIT_ENV"):
        environment = dict(result.get("environment") or {})
        environment["inherit"] = inherit_str.lower() not in ("false", "0", "")
        result["environment"] = environment

    return result


def get_default_config() -> dict[str, Any]:
    """
    Get hardcoded default configuration.

    Returns:
        Dictionary with default configuration values
    """
    return {
        "hooks": {name: {"pattern": None, "max_wait_seconds": -1} for name in DEFAULT_HOOK_CLASSES},
        "environment": {"inherit": False, "env_files": [], "variables": {}},
    }


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> HookRunConfig:
    """
    Load configuration with multi-layer merging.

    Configuration precedence (highest to lowest):
        1. Environment variables (HOOKRUN_*)
        2. Project config (.hookrun.json)
        3. User config (~/.config/hookrun/config.json)
        4. Hardcoded defaults

    Args:
        project_dir: Directory to load .hookrun.json from (defaults to cwd)
        use_cache: If True, return cached config from previous load

    Returns:
        Validated HookRunConfig instance

    Raises:
        ValidationError: If the merged config fails Pydantic validation
    """
    global _config_cache

    if use_cache and _config_cache is not None:
        return _config_cache

    merged = get_default_config()

    if user_config := load_json_file(get_user_config_path()):
        merged = deep_merge(merged, user_config)

    if project_config := load_json_file(get_project_config_path(project_dir)):
        merged = deep_merge(merged, project_config)

    merged = apply_env_overrides(merged)

    config = HookRunConfig(**merged)
    _config_cache = config

    return config


def clear_cache() -> None:
    """
    Clear the cached configuration.

    Useful for testing or when config files change during execution.
    """
    global _config_cache
    _config_cache = None
