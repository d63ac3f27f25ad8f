"""
Hook script commands.

Lets administrators run hook classes by hand, the same way a daemon would:

    hookrun run prolog '/etc/hookrun/prolog.d/*' --job-id 42 --max-wait 30
    hookrun hook epilog --job-id 42
    hookrun resolve '/etc/hookrun/prolog.d/*'

The process exit code mirrors the hook result: 0 on success, the failing
script's exit code, 128 + signal for scripts killed by a signal, and 1 when a
script could not be started or the pattern could not be expanded.
"""

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from hookrun.cli.errors import ExitCode, print_error, print_invalid_env_error
from hookrun.core.config import build_environment, load_config, parse_assignments
from hookrun.core.scripts import (
    ResolutionError,
    RunReport,
    ScriptResolver,
    ScriptRunner,
    exit_code_for_status,
)

console = Console()


def _render_report(report: RunReport) -> None:
    if report.resolution_error is not None:
        print_error(
            escape(f"Unable to run {report.name} [{report.pattern}]"),
            reason=f"Pattern could not be expanded: {report.resolution_error.value}",
            solution="check that every directory in the pattern is readable",
        )
        return

    if not report.outcomes:
        console.print(f"[dim]No {report.name} scripts to run[/dim]")
        return

    table = Table(title=f"{report.name} hooks", show_header=True, header_style="bold")
    table.add_column("Script", style="white")
    table.add_column("Result")
    table.add_column("Duration", style="dim", justify="right")

    for outcome in report.outcomes:
        style = "green" if outcome.success else "red"
        table.add_row(
            escape(outcome.path),
            f"[{style}]{outcome.describe()}[/{style}]",
            f"{outcome.duration_seconds:.2f}s",
        )

    console.print(table)


def _run_and_exit(
    name: str,
    pattern: str | None,
    job_id: int,
    max_wait: int,
    environment: list[str],
) -> None:
    report = ScriptRunner().run_report(name, pattern, job_id, max_wait, environment)
    _render_report(report)

    if report.success:
        raise typer.Exit(ExitCode.SUCCESS)
    raise typer.Exit(exit_code_for_status(report.status))


def run(
    name: str = typer.Argument(..., help="Hook class label (prolog, epilog, ...)"),
    pattern: str = typer.Argument(..., help="Glob pattern matching the hook scripts"),
    job_id: int = typer.Option(
        0,
        "--job-id",
        "-j",
        min=0,
        help="Job the hooks run for (0 for none)",
    ),
    max_wait: int = typer.Option(
        -1,
        "--max-wait",
        "-t",
        min=-1,
        help="Per-script timeout in seconds (-1 for no limit)",
    ),
    env: list[str] | None = typer.Option(
        None,
        "--env",
        "-e",
        help="NAME=VALUE passed to the scripts (repeatable)",
    ),
    env_file: list[Path] | None = typer.Option(
        None,
        "--env-file",
        help="dotenv file merged into the script environment (repeatable)",
    ),
    inherit_env: bool = typer.Option(
        False,
        "--inherit-env",
        help="Pass this process's environment to the scripts",
    ),
) -> None:
    """
    Run every script matching PATTERN, in sorted order.

    Scripts run one at a time and the first failure stops the run.
    Scripts only see the variables given with --env, --env-file and
    --inherit-env.

    Examples:
        hookrun run prolog '/etc/hookrun/prolog.d/*'
        hookrun run epilog './epilog.d/*' -j 42 -t 30 -e JOB_ID=42
    """
    try:
        overrides = parse_assignments(env or [])
    except ValueError as e:
        print_invalid_env_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)

    environment = build_environment(
        inherit=inherit_env,
        env_files=env_file or [],
        overrides=overrides,
    )
    _run_and_exit(name, pattern, job_id, max_wait, environment)


def hook(
    name: str = typer.Argument(..., help="Configured hook class (prolog, epilog, ...)"),
    job_id: int = typer.Option(
        0,
        "--job-id",
        "-j",
        min=0,
        help="Job the hooks run for (0 for none)",
    ),
    project_dir: str = typer.Option(
        ".",
        "--project",
        "-p",
        help="Directory holding .hookrun.json (default: current directory)",
    ),
    env: list[str] | None = typer.Option(
        None,
        "--env",
        "-e",
        help="Extra NAME=VALUE passed to the scripts (repeatable)",
    ),
) -> None:
    """
    Run a configured hook class.

    Pattern, timeout and environment come from configuration
    (defaults < ~/.config/hookrun/config.json < .hookrun.json < HOOKRUN_* env).

    Examples:
        hookrun hook prolog --job-id 42
        HOOKRUN_EPILOG_MAX_WAIT=10 hookrun hook epilog
    """
    try:
        config = load_config(Path(project_dir).resolve(), use_cache=False)
    except ValidationError as e:
        print_error(
            "Invalid hookrun configuration",
            reason=escape(str(e)),
            solution="fix .hookrun.json or ~/.config/hookrun/config.json",
        )
        raise typer.Exit(ExitCode.USER_ERROR)

    hook_config = config.get_hook(name)

    try:
        overrides = parse_assignments(env or [])
    except ValueError as e:
        print_invalid_env_error(str(e))
        raise typer.Exit(ExitCode.USER_ERROR)

    environment = build_environment(
        inherit=config.environment.inherit,
        env_files=config.environment.env_files,
        variables=config.environment.variables,
        overrides=overrides,
    )
    _run_and_exit(name, hook_config.pattern, job_id, hook_config.max_wait_seconds, environment)


def resolve(
    pattern: str = typer.Argument(..., help="Glob pattern to expand"),
) -> None:
    """
    Show the scripts a pattern resolves to, in execution order.

    Examples:
        hookrun resolve '/etc/hookrun/prolog.d/*'
    """
    try:
        script_set = ScriptResolver().resolve(pattern)
    except ResolutionError as e:
        print_error(f"Cannot expand {escape(pattern)}", reason=escape(str(e)))
        raise typer.Exit(ExitCode.GENERAL_ERROR)

    if not script_set:
        console.print(f"[dim]No scripts match {escape(pattern)}[/dim]", soft_wrap=True)
        raise typer.Exit(ExitCode.SUCCESS)

    for index, path in enumerate(script_set, start=1):
        console.print(f"{index:3d}  {path}", markup=False, highlight=False, soft_wrap=True)
