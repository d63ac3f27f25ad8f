"""Tests for hook script environment building."""

import pytest

from hookrun.core.config import build_environment, parse_assignments, read_env_file


class TestReadEnvFile:
    def test_reads_dotenv(self, tmp_path):
        env_file = tmp_path / "hook.env"
        env_file.write_text("# comment\nA=1\nexport B='two words'\nEMPTY\n")

        assert read_env_file(env_file) == {"A": "1", "B": "two words"}

    def test_missing_file(self, tmp_path):
        assert read_env_file(tmp_path / "missing.env") == {}


class TestParseAssignments:
    def test_parses(self):
        assert parse_assignments(["A=1", "B=x=y", "C="]) == {"A": "1", "B": "x=y", "C": ""}

    @pytest.mark.parametrize("bad", ["NOEQUALS", "=value"])
    def test_rejects_malformed(self, bad):
        with pytest.raises(ValueError, match="Expected NAME=VALUE"):
            parse_assignments([bad])


class TestBuildEnvironment:
    """Test layering of environment sources."""

    def test_nothing_inherited_by_default(self, monkeypatch):
        monkeypatch.setenv("HOOKRUN_TEST_PARENT", "1")

        env = build_environment(overrides={"A": "1"})

        assert env == ["A=1"]

    def test_inherit(self, monkeypatch):
        monkeypatch.setenv("HOOKRUN_TEST_PARENT", "1")

        env = build_environment(inherit=True)

        assert "HOOKRUN_TEST_PARENT=1" in env

    def test_precedence(self, tmp_path, monkeypatch):
        monkeypatch.setenv("LAYER", "os")
        first = tmp_path / "first.env"
        first.write_text("LAYER=first\nFROM_FIRST=1\n")
        second = tmp_path / "second.env"
        second.write_text("LAYER=second\n")

        env = build_environment(inherit=True, env_files=[first, second])
        assert "LAYER=second" in env
        assert "FROM_FIRST=1" in env

        env = build_environment(
            env_files=[first, second],
            variables={"LAYER": "config"},
        )
        assert "LAYER=config" in env

        env = build_environment(
            env_files=[first],
            variables={"LAYER": "config"},
            overrides={"LAYER": "cli"},
        )
        assert "LAYER=cli" in env
        assert not any(item.startswith("LAYER=") and item != "LAYER=cli" for item in env)
