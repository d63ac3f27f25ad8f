"""
Sequential runner for a class of hook scripts.

Resolves a glob pattern and executes every match in sorted order, one at a
time, stopping at the first script that fails. Later scripts never run once
one has failed, since hooks commonly depend on earlier ones (numbered
prefixes such as ``01-mount.sh``, ``02-setup.sh``).

Return values follow the raw-status convention of the executor:
- 0: every matched script succeeded, or nothing matched
- positive: raw wait status of the first failing script
- FAILURE_STATUS (-1): the pattern could not be resolved, or the failing
  script could not be started

Usage:
    from hookrun.core.scripts.runner import run_script

    status = run_script(
        "epilog",
        "/etc/hookrun/epilog.d/*",
        job_id=42,
        max_wait_seconds=60,
        environment=["PATH=/usr/bin:/bin", "JOB_ID=42"],
    )
    if status != 0:
        print("epilog failed")
"""

import logging
from collections.abc import Sequence

from hookrun.core.scripts.errors import ResolutionError
from hookrun.core.scripts.executor import ScriptExecutor
from hookrun.core.scripts.models import (
    FAILURE_STATUS,
    NO_TIMEOUT,
    RunReport,
    ScriptSpec,
)
from hookrun.core.scripts.resolver import ScriptResolver

logger = logging.getLogger(__name__)


class ScriptRunner:
    """
    Orchestrates one named hook class.

    Attributes:
        resolver: Expands patterns into ScriptSets
        executor: Runs individual scripts

    Example:
        >>> runner = ScriptRunner()
        >>> runner.run("prolog", "/etc/hookrun/prolog.d/*", environment=[])
        0
    """

    def __init__(
        self,
        resolver: ScriptResolver | None = None,
        executor: ScriptExecutor | None = None,
    ):
        self.resolver = resolver or ScriptResolver()
        self.executor = executor or ScriptExecutor()

    def run(
        self,
        name: str,
        pattern: str | None,
        job_id: int = 0,
        max_wait_seconds: int = NO_TIMEOUT,
        environment: Sequence[str] | None = None,
    ) -> int:
        """
        Run every script matching pattern, stopping at the first failure.

        Args:
            name: Hook class label used in diagnostics
            pattern: Glob pattern; empty or None means nothing to run
            job_id: Job context, 0 for none
            max_wait_seconds: Per-script timeout, negative for no limit
            environment: NAME=VALUE strings given verbatim to every script

        Returns:
            0 on success, otherwise the first failing status

        Raises:
            ValueError: If environment is None
        """
        return self.run_report(name, pattern, job_id, max_wait_seconds, environment).status

    def run_report(
        self,
        name: str,
        pattern: str | None,
        job_id: int = 0,
        max_wait_seconds: int = NO_TIMEOUT,
        environment: Sequence[str] | None = None,
    ) -> RunReport:
        """
        Same as run(), but returns the per-script outcomes as well.

        Returns:
            RunReport whose status is the value run() returns
        """
        if environment is None:
            raise ValueError("environment is required and cannot be None")

        report = RunReport(name=name, pattern=pattern or "", job_id=job_id)
        if not pattern:
            return report

        try:
            script_set = self.resolver.resolve(pattern)
        except ResolutionError as e:
            logger.error(f"Unable to run {name} [{pattern}]: {e}")
            report.resolution_error = e.kind
            report.status = FAILURE_STATUS
            return report

        if script_set is None:
            logger.error(f"Unable to run {name} [{pattern}]")
            report.status = FAILURE_STATUS
            return report

        if not script_set:
            logger.debug(f"No {name} scripts match {pattern}")
            return report

        env = list(environment)
        for path in script_set:
            spec = ScriptSpec(
                name=name,
                path=path,
                job_id=job_id,
                max_wait_seconds=max_wait_seconds,
                environment=env,
            )
            outcome = self.executor.execute(spec)
            report.outcomes.append(outcome)

            if outcome.failed:
                status = outcome.to_status()
                if outcome.error is not None:
                    logger.error(f"{path}: {outcome.describe()}")
                else:
                    logger.error(f"{path}: exited with status 0x{status:04x}")
                report.status = status
                break

        return report


def run_script(
    name: str,
    pattern: str | None,
    job_id: int = 0,
    max_wait_seconds: int = NO_TIMEOUT,
    environment: Sequence[str] | None = None,
) -> int:
    """
    Run a class of hook scripts with a default runner.

    See ScriptRunner.run for argument and return value details.
    """
    return ScriptRunner().run(name, pattern, job_id, max_wait_seconds, environment)
