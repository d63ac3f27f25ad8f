"""
Hook script resolution and execution.

Runs administrator-supplied hook scripts (prolog, epilog, ...) matched by a
glob pattern, one at a time in sorted order, each in its own process group
and bounded by an optional timeout.

Key Functions:
    run_script: Resolve a pattern and run every match, stopping at the
        first failure

Key Classes:
    ScriptRunner: Sequential driver for one hook class
    ScriptResolver: Glob pattern to ordered ScriptSet
    ScriptExecutor: Runs a single script with the timeout/kill policy

Usage:
    from hookrun.core.scripts import run_script

    status = run_script("prolog", "/etc/hookrun/prolog.d/*", job_id=7,
                        max_wait_seconds=30, environment=["JOB_ID=7"])
"""

from hookrun.core.scripts.errors import HookRunError, ResolutionError
from hookrun.core.scripts.executor import ScriptExecutor, environment_to_mapping
from hookrun.core.scripts.models import (
    EXEC_FAILURE_EXIT_CODE,
    FAILURE_STATUS,
    NO_TIMEOUT,
    ExecutionOutcome,
    GlobFailure,
    RunReport,
    ScriptErrorKind,
    ScriptSet,
    ScriptSpec,
    describe_status,
    exit_code_for_status,
)
from hookrun.core.scripts.resolver import ScriptResolver
from hookrun.core.scripts.runner import ScriptRunner, run_script

__all__ = [
    # Entry points
    "run_script",
    "ScriptRunner",
    "ScriptResolver",
    "ScriptExecutor",
    "environment_to_mapping",
    # Models
    "ScriptSpec",
    "ScriptSet",
    "ExecutionOutcome",
    "RunReport",
    "ScriptErrorKind",
    "GlobFailure",
    "describe_status",
    "exit_code_for_status",
    # Constants
    "NO_TIMEOUT",
    "FAILURE_STATUS",
    "EXEC_FAILURE_EXIT_CODE",
    # Errors
    "HookRunError",
    "ResolutionError",
]
