"""
Tests for configuration loading.

Covers the precedence chain defaults < user < project < env vars, invalid
input handling and caching.
"""

import json

import pytest
from pydantic import ValidationError

from hookrun.core.config import (
    HookClassConfig,
    HookRunConfig,
    clear_cache,
    get_project_config_path,
    get_user_config_path,
    load_config,
)
from hookrun.core.config.loader import apply_env_overrides, deep_merge


@pytest.fixture
def project(tmp_path):
    project_dir = tmp_path / "project"
    project_dir.mkdir()
    return project_dir


def write_json(path, data):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))


class TestPaths:
    def test_user_config_path_uses_xdg(self, isolated_config):
        assert get_user_config_path() == isolated_config / "hookrun" / "config.json"

    def test_project_config_path(self, project):
        assert get_project_config_path(project) == project / ".hookrun.json"


class TestDeepMerge:
    def test_nested_merge(self):
        base = {"hooks": {"prolog": {"pattern": "a/*", "max_wait_seconds": 5}}}
        override = {"hooks": {"prolog": {"max_wait_seconds": 30}, "epilog": {"pattern": "b/*"}}}

        assert deep_merge(base, override) == {
            "hooks": {
                "prolog": {"pattern": "a/*", "max_wait_seconds": 30},
                "epilog": {"pattern": "b/*"},
            }
        }


class TestLoadConfig:
    """Test multi-layer configuration loading."""

    def test_defaults(self, project):
        config = load_config(project, use_cache=False)

        assert set(config.hooks) == {"prolog", "epilog"}
        assert config.get_hook("prolog").pattern is None
        assert config.get_hook("prolog").max_wait_seconds == -1
        assert config.environment.inherit is False

    def test_project_overrides_user(self, project):
        write_json(
            get_user_config_path(),
            {"hooks": {"prolog": {"pattern": "/user/*", "max_wait_seconds": 10}}},
        )
        write_json(
            get_project_config_path(project),
            {"hooks": {"prolog": {"pattern": "/project/*"}}},
        )

        config = load_config(project, use_cache=False)

        assert config.get_hook("prolog").pattern == "/project/*"
        assert config.get_hook("prolog").max_wait_seconds == 10

    def test_env_overrides_files(self, project, monkeypatch):
        write_json(
            get_project_config_path(project),
            {"hooks": {"epilog": {"pattern": "/project/*", "max_wait_seconds": 10}}},
        )
        monkeypatch.setenv("HOOKRUN_EPILOG_PATTERN", "/env/*")
        monkeypatch.setenv("HOOKRUN_EPILOG_MAX_WAIT", "3")
        monkeypatch.setenv("HOOKRUN_INHERIT_ENV", "true")

        config = load_config(project, use_cache=False)

        assert config.get_hook("epilog").pattern == "/env/*"
        assert config.get_hook("epilog").max_wait_seconds == 3
        assert config.environment.inherit is True

    def test_custom_hook_class_from_env(self, project, monkeypatch):
        write_json(get_project_config_path(project), {"hooks": {"node-health": {}}})
        monkeypatch.setenv("HOOKRUN_NODE_HEALTH_PATTERN", "/health/*")

        config = load_config(project, use_cache=False)

        assert config.get_hook("node-health").pattern == "/health/*"

    def test_invalid_env_values_ignored(self, project, monkeypatch):
        monkeypatch.setenv("HOOKRUN_PROLOG_MAX_WAIT", "soon")
        monkeypatch.setenv("HOOKRUN_EPILOG_MAX_WAIT", "-5")

        config = load_config(project, use_cache=False)

        assert config.get_hook("prolog").max_wait_seconds == -1
        assert config.get_hook("epilog").max_wait_seconds == -1

    def test_invalid_json_ignored(self, project):
        get_project_config_path(project).write_text("{not json")

        config = load_config(project, use_cache=False)

        assert config.get_hook("prolog").pattern is None

    def test_invalid_values_raise(self, project):
        write_json(
            get_project_config_path(project),
            {"hooks": {"prolog": {"max_wait_seconds": -7}}},
        )

        with pytest.raises(ValidationError):
            load_config(project, use_cache=False)

    def test_cache(self, project):
        first = load_config(project)
        write_json(get_project_config_path(project), {"hooks": {"prolog": {"pattern": "/x/*"}}})

        assert load_config(project) is first

        clear_cache()
        assert load_config(project).get_hook("prolog").pattern == "/x/*"


class TestModels:
    def test_unknown_hook_is_unconfigured(self):
        assert HookRunConfig().get_hook("missing") == HookClassConfig()

    def test_apply_env_overrides_empty_pattern_clears(self, monkeypatch):
        monkeypatch.setenv("HOOKRUN_PROLOG_PATTERN", "")

        result = apply_env_overrides({"hooks": {"prolog": {"pattern": "/a/*"}}})

        assert result["hooks"]["prolog"]["pattern"] is None
