"""Summary: Resolve the ordered import group prefixes used by the Java formatter.
Why: Import ordering is configured once per run and shared read-only."""

from __future__ import annotations

from pathlib import Path

from srcfmt.config.paths import resolve_against
from srcfmt.features.formatting.domain.errors import ConfigError, ImportOrderReadError
from srcfmt.features.formatting.engines.java import DEFAULT_IMPORT_ORDER
from srcfmt.platform.logging import logger


def parse_import_order(content: str, source: str = "<import order>") -> tuple[str, ...]:
    """Parse ``index=prefix`` lines into prefixes ordered by index.

    Blank lines and ``#`` comments are ignored. The prefix may be empty. A
    repeated index keeps its last prefix.

    Raises:
        ConfigError: If a line has no integer index.
    """

    by_index: dict[int, str] = {}
    for number, raw_line in enumerate(content.splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        raw_index, _, prefix = line.partition("=")
        try:
            index = int(raw_index.strip())
        except ValueError as exc:
            raise ConfigError(
                f"Invalid import order entry in {source} at line {number}: '{raw_line}'"
            ) from exc
        by_index[index] = prefix.strip()
    return tuple(by_index[index] for index in sorted(by_index))


def resolve_import_order(import_order_file: Path | str | None, base_dir: Path) -> tuple[str, ...]:
    """Return the configured import order, or the default groups.

    Raises:
        ConfigError: If the configured file cannot be found or parsed.
        ImportOrderReadError: If the file exists but cannot be read.
    """

    if import_order_file is None or str(import_order_file).strip() == "":
        return DEFAULT_IMPORT_ORDER

    path = resolve_against(base_dir, import_order_file)
    logger.debug("Using import order file %s", path)
    if not path.is_file():
        raise ConfigError(f"Cannot find import order file [{path}]")

    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ImportOrderReadError(f"Cannot read import order file [{path}]: {exc}") from exc

    return parse_import_order(content, str(path))


__all__ = ["parse_import_order", "resolve_import_order"]
