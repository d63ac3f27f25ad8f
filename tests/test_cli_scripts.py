"""
Tests for the hookrun CLI commands.

Tests `hookrun run`, `hookrun hook` and `hookrun resolve` end to end with
real scripts.
"""

import json

from typer.testing import CliRunner

from hookrun import __version__
from hookrun.cli import app

runner = CliRunner()


class TestRunCommand:
    """Tests for `hookrun run`."""

    def test_success(self, hook_dir, make_script, tmp_path):
        out = tmp_path / "out.txt"
        make_script(hook_dir, "01.sh", 'echo "$GREETING" > "$OUT"')

        result = runner.invoke(
            app,
            [
                "run",
                "prolog",
                str(hook_dir / "*.sh"),
                "--env",
                f"OUT={out}",
                "-e",
                "GREETING=hello",
            ],
        )

        assert result.exit_code == 0
        assert out.read_text().strip() == "hello"

    def test_exit_code_propagates(self, hook_dir, make_script):
        make_script(hook_dir, "01.sh", "exit 3")

        result = runner.invoke(app, ["run", "epilog", str(hook_dir / "*.sh")])

        assert result.exit_code == 3

    def test_permission_denied_exits_1(self, hook_dir, make_script):
        make_script(hook_dir, "01.sh", "exit 0", executable=False)

        result = runner.invoke(app, ["run", "epilog", str(hook_dir / "*.sh")])

        assert result.exit_code == 1

    def test_no_match(self, hook_dir):
        result = runner.invoke(app, ["run", "prolog", str(hook_dir / "*.sh")])

        assert result.exit_code == 0
        assert "No prolog scripts to run" in result.output

    def test_env_file(self, hook_dir, make_script, tmp_path):
        out = tmp_path / "out.txt"
        env_file = tmp_path / "hook.env"
        env_file.write_text(f"OUT={out}\nVALUE=from-file\n")
        make_script(hook_dir, "01.sh", 'echo "$VALUE" > "$OUT"')

        result = runner.invoke(
            app, ["run", "prolog", str(hook_dir / "*.sh"), "--env-file", str(env_file)]
        )

        assert result.exit_code == 0
        assert out.read_text().strip() == "from-file"

    def test_invalid_env(self, hook_dir):
        result = runner.invoke(app, ["run", "prolog", str(hook_dir / "*"), "--env", "BROKEN"])

        assert result.exit_code == 2


class TestHookCommand:
    """Tests for `hookrun hook`."""

    def test_runs_configured_pattern(self, hook_dir, make_script, tmp_path):
        out = tmp_path / "out.txt"
        project = tmp_path / "project"
        project.mkdir()
        (project / ".hookrun.json").write_text(
            json.dumps(
                {
                    "hooks": {"prolog": {"pattern": str(hook_dir / "*.sh"), "max_wait_seconds": 5}},
                    "environment": {"variables": {"OUT": str(out)}},
                }
            )
        )
        make_script(hook_dir, "01.sh", 'echo "job=$JOB" > "$OUT"')

        result = runner.invoke(
            app, ["hook", "prolog", "--project", str(project), "-j", "7", "-e", "JOB=7"]
        )

        assert result.exit_code == 0
        assert out.read_text().strip() == "job=7"

    def test_invalid_config_exits_2(self, tmp_path):
        """A config that fails validation is reported, not raised."""
        (tmp_path / ".hookrun.json").write_text(
            json.dumps({"hooks": {"prolog": {"max_wait_seconds": -5}}})
        )

        result = runner.invoke(app, ["hook", "prolog", "--project", str(tmp_path)])

        assert result.exit_code == 2
        assert isinstance(result.exception, SystemExit)

    def test_unconfigured_hook_is_noop(self, tmp_path):
        result = runner.invoke(app, ["hook", "prolog", "--project", str(tmp_path)])

        assert result.exit_code == 0


class TestResolveCommand:
    """Tests for `hookrun resolve`."""

    def test_lists_in_order(self, hook_dir, make_script):
        make_script(hook_dir, "20-b.sh", "exit 0")
        make_script(hook_dir, "10-a.sh", "exit 0")

        result = runner.invoke(app, ["resolve", str(hook_dir / "*.sh")])

        assert result.exit_code == 0
        assert result.output.index("10-a.sh") < result.output.index("20-b.sh")

    def test_no_match(self, hook_dir):
        result = runner.invoke(app, ["resolve", str(hook_dir / "*.sh")])

        assert result.exit_code == 0
        assert "No scripts match" in result.output


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output
