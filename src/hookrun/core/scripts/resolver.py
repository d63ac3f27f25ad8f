"""
Glob resolution for hook scripts.

Turns a shell-style pattern such as ``/etc/hookrun/prolog.d/*`` into the
ordered list of paths it matches. Expansion follows glob(3) conventions:

- Wildcards (``*``, ``?``, ``[...]``) apply per path component
- A leading ``.`` in a name is only matched by a pattern that starts with ``.``
- A pattern without wildcards matches itself if the path exists
- Results are sorted, so numbered prefixes control execution order

Unlike ``glob.glob``, a directory that has to be scanned but cannot be read
is an error rather than an empty match. Missing directories and path
components that are not directories simply match nothing.

Usage:
    from hookrun.core.scripts.resolver import ScriptResolver

    script_set = ScriptResolver().resolve("/etc/hookrun/prolog.d/*")
    for path in script_set:
        print(path)
"""

import fnmatch
import logging
import os
import re

from hookrun.core.scripts.errors import ResolutionError
from hookrun.core.scripts.models import GlobFailure, ScriptSet

logger = logging.getLogger(__name__)

_MAGIC_CHECK = re.compile(r"[*?[]")


def has_magic(pattern: str) -> bool:
    """Check if a pattern contains glob wildcards."""
    return _MAGIC_CHECK.search(pattern) is not None


class ScriptResolver:
    """
    Expands glob patterns into ScriptSets.

    The resolver holds no state between calls; resolving the same pattern
    against an unchanged filesystem always yields the same ordered paths.
    """

    def resolve(self, pattern: str | None) -> ScriptSet | None:
        """
        Expand a pattern into an ordered ScriptSet.

        Args:
            pattern: Glob pattern, relative to the working directory unless
                absolute

        Returns:
            ScriptSet with matches in sorted order (empty when nothing
            matches), or None when pattern is empty

        Raises:
            ResolutionError: If a directory could not be read, memory ran
                out, or expansion failed for any other reason
        """
        if not pattern:
            return None

        try:
            matches = self._expand(pattern)
        except MemoryError:
            logger.error("glob: Out of memory")
            raise ResolutionError(GlobFailure.OUT_OF_MEMORY, pattern) from None
        except (OSError, ValueError) as e:
            logger.error(f"Unknown glob failure for {pattern}: {e!r}")
            raise ResolutionError(GlobFailure.OTHER, pattern, repr(e)) from e

        return ScriptSet(pattern=pattern, paths=tuple(sorted(matches)))

    def _expand(self, pattern: str) -> list[str]:
        if not has_magic(pattern):
            return [pattern] if os.path.lexists(pattern) else []

        dirname, basename = os.path.split(pattern)
        if not dirname:
            return self._match_in_directory("", basename, pattern)

        if dirname != pattern and has_magic(dirname):
            directories = self._expand(dirname)
        else:
            directories = [dirname]

        results: list[str] = []
        for directory in directories:
            if not basename:
                # Trailing slash: only directories match
                if os.path.isdir(directory):
                    results.append(os.path.join(directory, ""))
            elif has_magic(basename):
                results.extend(
                    os.path.join(directory, name)
                    for name in self._match_in_directory(directory, basename, pattern)
                )
            elif os.path.lexists(os.path.join(directory, basename)):
                results.append(os.path.join(directory, basename))
        return results

    def _match_in_directory(self, directory: str, name_pattern: str, pattern: str) -> list[str]:
        """
        Match one path component against the entries of a directory.

        Args:
            directory: Directory to scan ("" for the working directory)
            name_pattern: Wildcard pattern for a single component
            pattern: Full pattern, for diagnostics

        Returns:
            Matching entry names (unsorted)

        Raises:
            ResolutionError: If the directory exists but cannot be read
        """
        try:
            with os.scandir(directory or os.curdir) as entries:
                names = [entry.name for entry in entries]
        except (FileNotFoundError, NotADirectoryError):
            return []
        except OSError as e:
            logger.error(f"Cannot read dir {directory or os.curdir} for {pattern}: {e.strerror}")
            raise ResolutionError(
                GlobFailure.DIRECTORY_UNREADABLE, pattern, e.strerror or str(e)
            ) from e

        match_hidden = name_pattern.startswith(".")
        return [
            name
            for name in names
            if (match_hidden or not name.startswith("."))
            and fnmatch.fnmatchcase(name, name_pattern)
        ]
