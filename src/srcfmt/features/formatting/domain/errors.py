"""Summary: Error taxonomy for formatting runs.
Why: Separate run-fatal configuration problems from per-file failures."""

from __future__ import annotations

from pathlib import Path


class SrcfmtError(Exception):
    """Base class for every error raised by srcfmt."""


class ConfigError(SrcfmtError):
    """Required configuration is missing, unreadable or invalid.

    Aborts a run before any file is touched.
    """


class FormatterNotInitializedError(ConfigError):
    """Raised when formatting is requested from an uninitialized formatter."""

    def __init__(self, formatter_name: str) -> None:
        super().__init__(f"Formatter '{formatter_name}' has not been initialized")
        self.formatter_name: str = formatter_name


class FormatError(SrcfmtError):
    """The formatting engine could not compute an edit for one source text."""

    def __init__(self, message: str, *, line: int | None = None) -> None:
        if line is not None:
            message = f"{message} (line {line})"
        super().__init__(message)
        self.line: int | None = line


class CachePersistError(SrcfmtError):
    """The hash cache store could not be written at the end of a run."""

    def __init__(self, store_path: Path, cause: OSError) -> None:
        super().__init__(f"Cannot store file hash cache at {store_path}: {cause}")
        self.store_path: Path = store_path
        self.cause: OSError = cause


class ImportOrderReadError(OSError):
    """The configured import order file exists but could not be read."""


__all__ = [
    "SrcfmtError",
    "ConfigError",
    "FormatterNotInitializedError",
    "FormatError",
    "CachePersistError",
    "ImportOrderReadError",
]
