"""Exceptions raised while preparing hook scripts."""

from hookrun.core.scripts.models import GlobFailure


class HookRunError(Exception):
    """Base class for hookrun errors."""


class ResolutionError(HookRunError):
    """
    A glob pattern could not be expanded.

    Attributes:
        kind: Which class of glob failure occurred
        pattern: The pattern being expanded
        detail: Underlying error text (errno message or exception repr)
    """

    def __init__(self, kind: GlobFailure, pattern: str, detail: str | None = None):
        self.kind = kind
        self.pattern = pattern
        self.detail = detail
        message = f"Cannot expand {pattern!r}: {kind.value}"
        if detail:
            message += f" ({detail})"
        super().__init__(message)
