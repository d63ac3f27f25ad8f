"""
Single-script executor with timeout enforcement.

Runs one hook script to completion or forced termination:

- The script runs in a fresh process group, so a kill reaches the script and
  everything it spawned without touching the caller
- The script gets ``argv == [path]`` and exactly the environment it is given;
  nothing is inherited from the calling process
- Signals Python ignores at startup (SIGPIPE, SIGXFSZ) are back to their
  defaults in the script
- With a timeout, the child is polled once per second and the whole process
  group receives SIGKILL once the countdown runs out
- After the child is reaped, the group is signalled once more so background
  descendants do not outlive their script

The executor is synchronous: ``execute`` only returns once the child has
been reaped (or could not be started).

Usage:
    from hookrun.core.scripts.executor import ScriptExecutor
    from hookrun.core.scripts.models import ScriptSpec

    spec = ScriptSpec(
        name="prolog",
        path="/etc/hookrun/prolog.d/01-setup.sh",
        job_id=42,
        max_wait_seconds=30,
        environment=["PATH=/usr/bin:/bin", "JOB_ID=42"],
    )
    outcome = ScriptExecutor().execute(spec)
    if outcome.failed:
        print(outcome.describe())
"""

import logging
import os
import signal
import time
from collections.abc import Sequence

from hookrun.core.scripts.models import (
    EXEC_FAILURE_EXIT_CODE,
    ExecutionOutcome,
    ScriptErrorKind,
    ScriptSpec,
)

logger = logging.getLogger(__name__)

POLL_INTERVAL_SECONDS = 1.0

# Signals the Python runtime ignores at startup; ignored dispositions survive exec
RESTORED_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGPIPE", "SIGXFZ", "SIGXFSZ") if hasattr(signal, name)
)


def environment_to_mapping(environment: Sequence[str]) -> dict[str, str]:
    """
    Convert NAME=VALUE strings into the mapping os.execve expects.

    Entries without a name are dropped. When a name repeats, the first entry
    wins, matching what getenv(3) would see in a raw environment block.

    Args:
        environment: Ordered NAME=VALUE strings

    Returns:
        Mapping preserving first-seen order
    """
    mapping: dict[str, str] = {}
    for entry in environment:
        name, sep, value = entry.partition("=")
        if not sep or not name:
            logger.debug(f"Ignoring malformed environment entry {entry!r}")
            continue
        mapping.setdefault(name, value)
    return mapping


class ScriptExecutor:
    """
    Runs exactly one script, enforcing the timeout and kill policy.

    With a timeout, the child is polled once per second and each poll
    consumes one second of the countdown.
    """

    def execute(self, spec: ScriptSpec) -> ExecutionOutcome:
        """
        Execute one script.

        Args:
            spec: Script path, hook name, job context, timeout and environment

        Returns:
            ExecutionOutcome with the raw wait status, or an error kind if the
            script could not be started
        """
        if not spec.path:
            return ExecutionOutcome(path="")

        logger.debug(f"{spec.label}: attempting to run")

        if not os.access(spec.path, os.R_OK | os.X_OK):
            logger.error(f"Can not run {spec.label}: not readable and executable")
            return ExecutionOutcome(path=spec.path, error=ScriptErrorKind.PERMISSION_DENIED)

        env = environment_to_mapping(spec.environment)
        started = time.monotonic()

        try:
            pid = os.fork()
        except OSError as e:
            logger.error(f"executing {spec.name}: fork: {e.strerror}")
            return ExecutionOutcome(path=spec.path, error=ScriptErrorKind.SPAWN_FAILURE)

        if pid == 0:
            self._exec_child(spec.path, env)

        # Both sides set the group; whichever runs first wins
        try:
            os.setpgid(pid, pid)
        except OSError as e:
            logger.debug(f"setpgid({pid}) from parent: {e.strerror}")

        status, timed_out = self._wait(pid, spec)

        return ExecutionOutcome(
            path=spec.path,
            status=status,
            timed_out=timed_out,
            duration_seconds=time.monotonic() - started,
        )

    def _exec_child(self, path: str, env: dict[str, str]) -> None:
        """Replace the forked child with the script. Never returns."""
        try:
            os.setpgid(0, 0)
            for signum in RESTORED_SIGNALS:
                signal.signal(signum, signal.SIG_DFL)
            os.execve(path, [path], env)
        except OSError as e:
            logger.error(f"execve(): {path}: {e.strerror}")
        finally:
            os._exit(EXEC_FAILURE_EXIT_CODE)

    def _wait(self, pid: int, spec: ScriptSpec) -> tuple[int, bool]:
        """
        Wait for the child, killing its process group on timeout.

        Args:
            pid: Child pid, which is also its process group id
            spec: Spec the child was started from

        Returns:
            Tuple of (raw wait status, whether the timeout fired)
        """
        options = os.WNOHANG if spec.has_timeout else 0
        remaining = spec.max_wait_seconds
        timed_out = False

        while True:
            try:
                reaped, status = os.waitpid(pid, options)
            except InterruptedError:
                continue
            except OSError as e:
                # Wait failures are reported as success; callers rely on it
                logger.error(f"waitpid({pid}) for {spec.label}: {e.strerror}")
                return 0, timed_out

            if reaped == 0:
                if remaining <= 0:
                    logger.debug(
                        f"{spec.label}: still running after {spec.max_wait_seconds}s, "
                        f"killing process group {pid}"
                    )
                    self._kill_group(pid)
                    options = 0
                    timed_out = True
                    continue
                time.sleep(POLL_INTERVAL_SECONDS)
                remaining -= 1
                continue

            # Reap anything the script left behind in its group
            self._kill_group(pid)
            return status, timed_out

    def _kill_group(self, pgid: int) -> None:
        try:
            os.killpg(pgid, signal.SIGKILL)
            logger.debug(f"Killed process group {pgid}")
        except ProcessLookupError:
            logger.debug(f"Process group {pgid} already empty")
        except OSError as e:
            logger.debug(f"Process group kill failed for {pgid}: {e.strerror}")
