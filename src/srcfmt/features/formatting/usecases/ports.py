"""Summary: Ports defining formatting use case dependencies.
Why: Decouple use cases from concrete engines so tests and swaps stay simple."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable

from ..domain.line_ending import LineEnding
from ..engines.base import FormatterSettings


@runtime_checkable
class Formatter(Protocol):
    """Port for a per-language formatting engine."""

    name: str

    def initialize(self, options: Mapping[str, str] | None, settings: FormatterSettings) -> None:
        """Build the engine; afterwards ``is_initialized`` reports True."""
        ...

    def is_initialized(self) -> bool:
        """Return True once the formatter may be asked to format."""
        ...

    def supports(self, path: Path) -> bool:
        """Return True if the formatter handles files like ``path``."""
        ...

    def format(self, source: str, line_ending: LineEnding) -> str | None:
        """Return formatted text, ``None`` when unchanged, or raise FormatError."""
        ...


@runtime_checkable
class DigestCachePort(Protocol):
    """Port for the per-run path-to-digest cache."""

    def get(self, key: str) -> str | None:
        """Return the digest recorded for ``key``, if any."""
        ...

    def put(self, key: str, digest: str) -> None:
        """Record ``digest`` for ``key``."""
        ...


__all__ = ["Formatter", "DigestCachePort"]
