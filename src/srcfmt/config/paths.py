"""Shared path utilities for configuration, cache and log locations.

Policy (project-local by default):
- Config: ``<base_dir>/srcfmt.toml``, falling back to ``[tool.srcfmt]`` in
  ``<base_dir>/pyproject.toml``.
- Cache store: ``<target_directory>/srcfmt-cache.properties``.
- Log file: ``<target_directory>/srcfmt.log`` unless overridden by
  ``SRCFMT_LOG_FILE``.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Callable, Final

CONFIG_FILE_NAME: Final[str] = "srcfmt.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
CACHE_FILE_NAME: Final[str] = "srcfmt-cache.properties"
LOG_FILE_NAME: Final[str] = "srcfmt.log"

_ENV_LOG_FILE: Final[str] = "SRCFMT_LOG_FILE"


def resolve_overridable_path(
    *,
    explicit_path: Path | str | None,
    env: Mapping[str, str] | None,
    env_var: str | None,
    default_factory: Callable[[], Path],
) -> Path:
    """Resolve a path honoring explicit and environment overrides."""

    if explicit_path is not None:
        return Path(explicit_path).expanduser().resolve()

    mapping = env if env is not None else os.environ
    if env_var:
        candidate = mapping.get(env_var) or ""
        candidate = candidate.strip()
        if candidate:
            return Path(candidate).expanduser().resolve()

    default_path = default_factory()
    return default_path.expanduser().resolve()


def resolve_against(base_dir: Path, path: Path | str) -> Path:
    """Return ``path`` resolved relative to ``base_dir`` when not absolute."""

    candidate = Path(path).expanduser()
    if not candidate.is_absolute():
        candidate = base_dir / candidate
    return candidate.resolve()


def detect_project_root(start: Path | None = None) -> Path:
    """Detect the project root by walking up parents.

    Looks for markers like ``srcfmt.toml``, ``pyproject.toml``, ``pom.xml``
    or ``.git``.

    Args:
        start: Starting directory. Defaults to the current working directory.

    Returns:
        Path: Detected project root, or ``start`` itself if no marker is found.
    """
    here = (start or Path.cwd()).resolve()
    for p in [here, *here.parents]:
        for marker in (CONFIG_FILE_NAME, PYPROJECT_FILE_NAME, "pom.xml", ".git"):
            if (p / marker).exists():
                return p
    return here


def default_config_path(base_dir: Path) -> Path:
    """Get the default path to the TOML config file for ``base_dir``."""

    return (base_dir / CONFIG_FILE_NAME).resolve()


def cache_store_path(target_directory: Path) -> Path:
    """Get the hash cache store location inside ``target_directory``."""

    return (target_directory / CACHE_FILE_NAME).resolve()


def log_file_override(env: Mapping[str, str] | None = None) -> Path | None:
    """Return the ``SRCFMT_LOG_FILE`` path when the variable is set."""

    mapping = env if env is not None else os.environ
    candidate = (mapping.get(_ENV_LOG_FILE) or "").strip()
    return Path(candidate).expanduser().resolve() if candidate else None


def default_log_file(target_directory: Path, env: Mapping[str, str] | None = None) -> Path:
    """Get the log file path, honoring ``SRCFMT_LOG_FILE``."""

    return resolve_overridable_path(
        explicit_path=None,
        env=env,
        env_var=_ENV_LOG_FILE,
        default_factory=lambda: target_directory / LOG_FILE_NAME,
    )


__all__ = [
    "CONFIG_FILE_NAME",
    "PYPROJECT_FILE_NAME",
    "CACHE_FILE_NAME",
    "LOG_FILE_NAME",
    "cache_store_path",
    "default_config_path",
    "default_log_file",
    "detect_project_root",
    "log_file_override",
    "resolve_against",
    "resolve_overridable_path",
]
