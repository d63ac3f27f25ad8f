"""
Configuration models and loading.

This module provides Pydantic models for hookrun configuration
with multi-layer merging: defaults < user < project < env vars.
"""

from .env import build_environment, parse_assignments, read_env_file
from .loader import (
    clear_cache,
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import EnvironmentConfig, HookClassConfig, HookRunConfig

__all__ = [
    # Models
    "EnvironmentConfig",
    "HookClassConfig",
    "HookRunConfig",
    # Loader functions
    "clear_cache",
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
    # Environment helpers
    "build_environment",
    "parse_assignments",
    "read_env_file",
]
