"""
Standardized error handling and exit codes for the hookrun CLI.

This module provides consistent error messaging with actionable guidance
and standardized exit codes across all CLI commands.
"""

from enum import IntEnum

from rich.console import Console

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for hookrun CLI operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """A hook could not be run (resolution, permission or spawn failure)."""

    USER_ERROR = 2
    """User configuration or input error (actionable by user)."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it

    Example:
        >>> print_error(
        ...     "Cannot read hook directory",
        ...     reason="Pattern /etc/hookrun/prolog.d/* could not be expanded",
        ...     solution="chmod o+rx /etc/hookrun/prolog.d",
        ... )
    """
    console.print(f"[red]Error:[/red] {problem}")

    if reason:
        console.print(f"[dim]{reason}[/dim]")

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {solution}")


def print_invalid_env_error(detail: str) -> None:
    """Print error when an --env value is malformed."""
    print_error(
        "Invalid environment assignment",
        reason=detail,
        solution="hookrun run NAME PATTERN --env NAME=VALUE",
    )
