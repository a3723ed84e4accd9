"""Glob pattern matching for source paths."""

import fnmatch
from collections.abc import Iterable


def matches_patterns(path: str, patterns: Iterable[str]) -> bool:
    """Check if a path matches any of the glob patterns.

    ``**`` matches across directories. A pattern starting with ``**/`` also
    matches paths with no leading directory.

    Args:
        path: File path, relative or absolute.
        patterns: Glob patterns to check.

    Returns:
        True if the path matches at least one pattern.
    """
    path = path.replace("\\", "/")

    for pattern in patterns:
        if "**" not in pattern:
            if fnmatch.fnmatch(path, pattern):
                return True
            continue

        # fnmatch's * already crosses "/"
        if fnmatch.fnmatch(path, pattern.replace("**", "*")):
            return True

        if pattern.startswith("**/"):
            suffix_pattern = pattern[3:]
            if fnmatch.fnmatch(path, suffix_pattern):
                return True
            if fnmatch.fnmatch(path.rsplit("/", 1)[-1], suffix_pattern):
                return True

    return False
