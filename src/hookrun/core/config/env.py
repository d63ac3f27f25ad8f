"""Environment building helpers for hook scripts.

Hook scripts receive exactly the environment they are given, as a list of
NAME=VALUE strings. This module assembles that list from layered sources:

  inherited os.environ (only if requested) < env files < configured
  variables < explicit overrides

Env files use dotenv syntax and are read without touching os.environ.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, Mapping

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


def read_env_file(path: Path) -> dict[str, str]:
    if not path.exists():
        logger.warning(f"Environment file {path} does not exist, skipping")
        return {}
    values = dotenv_values(path)
    out: dict[str, str] = {}
    for k, v in values.items():
        if k is None or v is None:
            continue
        out[str(k)] = str(v)
    return out


def parse_assignments(assignments: Iterable[str]) -> dict[str, str]:
    """Parse NAME=VALUE strings (e.g. from --env options).

    Raises:
        ValueError: If an entry has no '=' or an empty name
    """
    out: dict[str, str] = {}
    for item in assignments:
        name, sep, value = item.partition("=")
        if not sep or not name:
            raise ValueError(f"Expected NAME=VALUE, got {item!r}")
        out[name] = value
    return out


def build_environment(
    *,
    inherit: bool = False,
    env_files: Iterable[Path | str] = (),
    variables: Mapping[str, str] | None = None,
    overrides: Mapping[str, str] | None = None,
) -> list[str]:
    """Build the NAME=VALUE list handed to hook scripts.

    Args:
        inherit: start from the current process environment
        env_files: dotenv files, later files override earlier ones
        variables: configured variables
        overrides: explicit values (highest precedence)

    Returns:
        Ordered NAME=VALUE strings
    """
    merged: dict[str, str] = dict(os.environ) if inherit else {}
    for p in env_files:
        merged.update(read_env_file(Path(p)))
    merged.update(variables or {})
    merged.update(overrides or {})
    return [f"{k}={v}" for k, v in merged.items()]
