"""
Data models for hook script execution.

Defines the input to a single script execution, the ordered set of scripts a
pattern resolves to, and the outcome records produced by the executor and
runner.

Statuses are raw POSIX wait statuses (the value ``os.waitpid`` returns), so
they encode either an exit code or a terminating signal. Failures that happen
before a process exists (permission checks, fork errors, glob errors) are
reported with the ``FAILURE_STATUS`` sentinel instead.
"""

import os
import signal
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, Field

NO_TIMEOUT = -1
"""max_wait_seconds value meaning "wait forever"."""

FAILURE_STATUS = -1
"""Status returned for failures that never produced a wait status."""

EXEC_FAILURE_EXIT_CODE = 127
"""Exit code of a child whose execve() failed."""

MAX_JOB_ID = 0xFFFFFFFF


class ScriptErrorKind(str, Enum):
    """Failures detected by the executor before a wait status exists."""

    PERMISSION_DENIED = "permission_denied"
    SPAWN_FAILURE = "spawn_failure"


class GlobFailure(str, Enum):
    """Reasons a pattern could not be expanded."""

    OUT_OF_MEMORY = "out_of_memory"
    DIRECTORY_UNREADABLE = "directory_unreadable"
    OTHER = "other"


def job_prefix(job_id: int) -> str:
    """Diagnostic prefix for a job context ("" when there is no job)."""
    return f"[job {job_id}] " if job_id else ""


def exit_code_for_status(status: int) -> int:
    """
    Map a raw status to a shell-style process exit code.

    Normal exits keep their code, signal deaths become 128 + signal number,
    and sentinel failures become 1.

    Args:
        status: Raw wait status or FAILURE_STATUS

    Returns:
        Exit code in the range 0-255
    """
    if status < 0:
        return 1
    if os.WIFEXITED(status):
        return os.WEXITSTATUS(status)
    if os.WIFSIGNALED(status):
        return 128 + os.WTERMSIG(status)
    return 1


def describe_status(status: int) -> str:
    """Human readable form of a raw status."""
    if status < 0:
        return "failed to run"
    if os.WIFEXITED(status):
        return f"exited with code {os.WEXITSTATUS(status)}"
    if os.WIFSIGNALED(status):
        signum = os.WTERMSIG(status)
        try:
            signame = signal.Signals(signum).name
        except ValueError:
            signame = f"signal {signum}"
        return f"killed by {signame}"
    return f"status 0x{status:04x}"


class ScriptSpec(BaseModel):
    """
    Input to a single script execution.

    The environment is mandatory: it becomes the child's entire environment,
    so omitting it is a caller bug rather than something to default.
    """

    name: str = Field(description="Hook class label (prolog, epilog, ...)")
    path: str = Field(default="", description="Script path; empty means nothing to run")
    job_id: int = Field(default=0, ge=0, le=MAX_JOB_ID, description="Job context, 0 for none")
    max_wait_seconds: int = Field(
        default=NO_TIMEOUT, description="Timeout in seconds, negative for no limit"
    )
    environment: list[str] = Field(description="NAME=VALUE strings passed verbatim")

    @property
    def has_timeout(self) -> bool:
        """Check if the execution is bounded by a timeout."""
        return self.max_wait_seconds >= 0

    @property
    def label(self) -> str:
        """Diagnostic label, e.g. "[job 12] prolog [/etc/prolog.d/01.sh]"."""
        return f"{job_prefix(self.job_id)}{self.name} [{self.path}]"


@dataclass(frozen=True)
class ScriptSet:
    """Ordered, resolved script paths for one pattern."""

    pattern: str
    paths: tuple[str, ...] = ()

    def __iter__(self) -> Iterator[str]:
        return iter(self.paths)

    def __len__(self) -> int:
        return len(self.paths)


class ExecutionOutcome(BaseModel):
    """
    Result of one ScriptExecutor invocation.

    Either ``error`` is set (no process ran to completion) or ``status``
    carries the raw wait status of the reaped child.
    """

    path: str = Field(description="Script that was executed")
    status: int = Field(default=0, description="Raw wait status")
    error: ScriptErrorKind | None = Field(default=None, description="Pre-wait failure, if any")
    timed_out: bool = Field(default=False, description="Whether the group was killed on timeout")
    duration_seconds: float = Field(default=0.0, description="Wall-clock execution time")

    @property
    def success(self) -> bool:
        return self.to_status() == 0

    @property
    def failed(self) -> bool:
        return not self.success

    @property
    def exit_code(self) -> int | None:
        """Exit code for a normal exit, None otherwise."""
        if self.error is not None or not os.WIFEXITED(self.status):
            return None
        return os.WEXITSTATUS(self.status)

    @property
    def term_signal(self) -> int | None:
        """Terminating signal number, None if the script was not killed."""
        if self.error is not None or not os.WIFSIGNALED(self.status):
            return None
        return os.WTERMSIG(self.status)

    def to_status(self) -> int:
        """Status as returned to run_script callers."""
        if self.error is not None:
            return FAILURE_STATUS
        return self.status

    def describe(self) -> str:
        if self.error is ScriptErrorKind.PERMISSION_DENIED:
            return "permission denied"
        if self.error is ScriptErrorKind.SPAWN_FAILURE:
            return "could not spawn process"
        text = describe_status(self.status)
        if self.timed_out:
            text += " (timed out)"
        return text


class RunReport(BaseModel):
    """
    Result of running every script matched by one pattern.

    ``status`` is the value ScriptRunner.run returns: 0 when everything
    succeeded or nothing matched, otherwise the first failure.
    """

    name: str = Field(description="Hook class label")
    pattern: str = Field(default="", description="Pattern that was resolved")
    job_id: int = Field(default=0, description="Job context, 0 for none")
    outcomes: list[ExecutionOutcome] = Field(
        default_factory=list, description="Outcomes in execution order"
    )
    resolution_error: GlobFailure | None = Field(
        default=None, description="Why the pattern could not be expanded"
    )
    status: int = Field(default=0, description="Aggregate status")

    @property
    def success(self) -> bool:
        return self.status == 0

    @property
    def failed_outcome(self) -> ExecutionOutcome | None:
        """The outcome that stopped the run, if any."""
        for outcome in self.outcomes:
            if outcome.failed:
                return outcome
        return None
