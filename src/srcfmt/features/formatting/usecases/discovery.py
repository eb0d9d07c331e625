"""Summary: Collect candidate source files from directories and glob patterns.
Why: Feed the orchestrator a de-duplicated, sorted list of paths."""

from __future__ import annotations

import os
import re
from collections.abc import Iterable, Sequence
from functools import lru_cache
from pathlib import Path
from typing import Final

from srcfmt.platform.logging import logger

DEFAULT_INCLUDES: Final[tuple[str, ...]] = ("**/*.java", "**/*.js")
DEFAULT_EXCLUDES: Final[tuple[str, ...]] = (
    "**/.git/**",
    "**/.hg/**",
    "**/.svn/**",
    "**/CVS/**",
    "**/.bzr/**",
    "**/*~",
    "**/#*#",
    "**/.#*",
    "**/.DS_Store",
)


@lru_cache(maxsize=256)
def _compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate an Ant-style glob (``**``, ``*``, ``?``) to a regex.

    Matching is case-insensitive and applies to ``/``-separated relative paths.
    """

    normalized = pattern.replace("\\", "/").lstrip("/")
    if normalized.endswith("/"):
        normalized += "**"

    regex: list[str] = []
    index = 0
    while index < len(normalized):
        if normalized.startswith("**/", index):
            regex.append("(?:.*/)?")
            index += 3
        elif normalized.startswith("**", index):
            regex.append(".*")
            index += 2
        elif normalized[index] == "*":
            regex.append("[^/]*")
            index += 1
        elif normalized[index] == "?":
            regex.append("[^/]")
            index += 1
        else:
            regex.append(re.escape(normalized[index]))
            index += 1
    return re.compile("^" + "".join(regex) + "$", re.IGNORECASE)


def matches_any(relative_path: str, patterns: Iterable[str]) -> bool:
    """Return whether ``relative_path`` matches one of ``patterns``."""

    return any(_compile_glob(pattern).match(relative_path) for pattern in patterns)


def scan_directory(
    directory: Path,
    includes: Sequence[str] = DEFAULT_INCLUDES,
    excludes: Sequence[str] = (),
) -> list[Path]:
    """Return files under ``directory`` matching ``includes`` and no exclude.

    Symbolic links are not followed. Default VCS excludes always apply.
    """

    include_patterns = tuple(includes) or DEFAULT_INCLUDES
    exclude_patterns = (*excludes, *DEFAULT_EXCLUDES)

    found: list[Path] = []
    for root, dirnames, filenames in os.walk(directory, followlinks=False):
        dirnames.sort()
        root_path = Path(root)
        for filename in sorted(filenames):
            candidate = root_path / filename
            if candidate.is_symlink():
                continue
            relative = candidate.relative_to(directory).as_posix()
            if not matches_any(relative, include_patterns):
                continue
            if matches_any(relative, exclude_patterns):
                continue
            found.append(candidate)
    return found


def collect_candidate_files(
    directories: Sequence[Path],
    includes: Sequence[str] = DEFAULT_INCLUDES,
    excludes: Sequence[str] = (),
) -> list[Path]:
    """Scan every existing directory and return unique, sorted file paths.

    Explicit file paths are accepted as-is when they exist.
    """

    collected: dict[Path, Path] = {}
    for directory in directories:
        if directory.is_file():
            collected.setdefault(directory.resolve(), directory)
            continue
        if not directory.is_dir():
            logger.debug("Skipping missing source directory %s", directory)
            continue
        for path in scan_directory(directory, includes, excludes):
            collected.setdefault(path.resolve(), path)
    return [collected[key] for key in sorted(collected)]


__all__ = [
    "DEFAULT_INCLUDES",
    "DEFAULT_EXCLUDES",
    "collect_candidate_files",
    "matches_any",
    "scan_directory",
]
