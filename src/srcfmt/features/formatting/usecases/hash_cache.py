"""Summary: Persisted path-to-digest cache used to skip already formatted files.
Why: Unchanged files must not reach a formatter on subsequent runs."""

from __future__ import annotations

import hashlib
import logging
import re
import threading
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Final

from srcfmt.platform.filesystem import atomic_write_text, ensure_directory
from srcfmt.platform.logging import logger

from ..domain.errors import CachePersistError
from ..domain.processing_types import ProcessingEvent

DIGEST_PATTERN: Final[re.Pattern[str]] = re.compile(r"^[0-9a-f]{128}$")
STORE_HEADER: Final[str] = "# srcfmt file hash cache: <project-relative path>=<sha512 hex>"


def compute_digest(text: str, encoding: str) -> str:
    """Return the SHA-512 hex digest of ``text`` encoded with ``encoding``."""

    return hashlib.sha512(text.encode(encoding)).hexdigest()


def cache_key(path: Path, base_dir: Path) -> str:
    """Return the project-relative POSIX key for ``path``.

    Paths outside ``base_dir`` fall back to their absolute POSIX form.
    """

    canonical = path.resolve()
    try:
        return canonical.relative_to(base_dir.resolve()).as_posix()
    except ValueError:
        return canonical.as_posix()


class CorruptCacheError(ValueError):
    """The cache store exists but its content is not a valid digest mapping."""


def parse_store(content: str) -> dict[str, str]:
    """Parse ``key=value`` lines into a mapping.

    Raises:
        CorruptCacheError: If a line is malformed or a value is not a digest.
    """

    entries: dict[str, str] = {}
    for number, raw_line in enumerate(content.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith(("#", "!")):
            continue
        key, separator, value = line.rpartition("=")
        if not separator or not key:
            raise CorruptCacheError(f"line {number} is not a key=value pair")
        if not DIGEST_PATTERN.match(value):
            raise CorruptCacheError(f"line {number} does not hold a SHA-512 digest")
        entries[key] = value
    return entries


class HashCache:
    """In-memory view of the cache store for one run.

    Loaded once before the run, mutated once per processed file and written
    back wholesale at the end. A run owns the store exclusively.
    """

    def __init__(self, entries: Mapping[str, str] | None = None) -> None:
        self._entries: dict[str, str] = dict(entries or {})
        self._lock: threading.Lock = threading.Lock()

    @classmethod
    def load(cls, store_path: Path, *, create_directory: bool = True) -> HashCache:
        """Load the store at ``store_path``; never raises.

        A missing store yields an empty cache. A missing target directory is
        created only when ``create_directory`` is set. An unusable target
        directory, an unreadable store or a corrupt store also yields an empty
        cache and logs a warning.
        """

        target_directory = store_path.parent
        if not target_directory.exists():
            if not create_directory:
                return cls()
            try:
                target_directory.mkdir(parents=True, exist_ok=True)
            except OSError as exc:
                logger.warning("Cannot create cache directory %s: %s", target_directory, exc)
            return cls()
        if not target_directory.is_dir():
            logger.warning(
                "Something strange here as the '%s' supposedly target directory is not a directory.",
                target_directory,
            )
            return cls()

        if not store_path.exists():
            return cls()

        try:
            content = store_path.read_text(encoding="utf-8")
            entries = parse_store(content)
        except (OSError, UnicodeDecodeError, CorruptCacheError) as exc:
            logger.warning("Cannot load file hash cache %s, starting empty: %s", store_path, exc)
            return cls()

        logger.log(
            logging.DEBUG,
            "Loaded %d cached digests from %s",
            len(entries),
            store_path,
            extra={
                "processing_event": ProcessingEvent.CACHE_LOAD.value,
                "source_path": str(store_path),
                "entries": len(entries),
            },
        )
        return cls(entries)

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, digest: str) -> None:
        """Record ``digest`` for ``key``, replacing any previous entry."""

        with self._lock:
            self._entries[key] = digest

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def entries(self) -> Mapping[str, str]:
        """Return a read-only snapshot of the current mapping."""

        with self._lock:
            return MappingProxyType(dict(self._entries))

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def render(self) -> str:
        """Serialize the mapping as sorted ``key=value`` lines."""

        with self._lock:
            lines = [STORE_HEADER]
            lines.extend(f"{key}={value}" for key, value in sorted(self._entries.items()))
        return "\n".join(lines) + "\n"

    def persist(self, store_path: Path) -> None:
        """Atomically write the whole mapping to ``store_path``.

        Raises:
            CachePersistError: If the store cannot be written.
        """

        content = self.render()
        try:
            _ = ensure_directory(store_path.parent)
            atomic_write_text(store_path, content, "utf-8")
        except OSError as exc:
            raise CachePersistError(store_path, exc) from exc


__all__ = [
    "HashCache",
    "CorruptCacheError",
    "cache_key",
    "compute_digest",
    "parse_store",
]
