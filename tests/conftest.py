"""
Pytest configuration and shared fixtures.

Provides helpers for writing hook scripts into temporary directories, a
minimal script environment, and isolation of hookrun configuration.
"""

import stat
from pathlib import Path

import pytest

from hookrun.core.config import clear_cache

BASE_ENV = ["PATH=/usr/bin:/bin"]


def write_script(directory: Path, name: str, body: str, executable: bool = True) -> Path:
    """
    Create a /bin/sh hook script.

    Args:
        directory: Directory to create the script in (created if missing)
        name: Script filename (e.g., "01-setup.sh")
        body: Shell code placed after the shebang line
        executable: Whether to set the execute bits

    Returns:
        Path to the created script
    """
    directory.mkdir(parents=True, exist_ok=True)
    script_path = directory / name
    script_path.write_text(f"#!/bin/sh\n{body}\n")
    mode = stat.S_IRUSR | stat.S_IWUSR | stat.S_IRGRP | stat.S_IROTH
    if executable:
        mode |= stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH
    script_path.chmod(mode)
    return script_path


# ==============================================================================
# Fixtures
# ==============================================================================


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point XDG_CONFIG_HOME at a temp dir and reset the config cache."""
    config_home = tmp_path / "xdg"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    clear_cache()
    yield config_home
    clear_cache()


@pytest.fixture
def hook_dir(tmp_path):
    """Provide an empty hook script directory."""
    directory = tmp_path / "hooks"
    directory.mkdir()
    return directory


@pytest.fixture
def base_env():
    """Minimal environment for hook scripts."""
    return list(BASE_ENV)


@pytest.fixture
def make_script():
    """Provide the write_script helper."""
    return write_script
