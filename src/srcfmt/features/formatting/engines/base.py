"""Summary: Shared contract and lifecycle for per-language formatters.
Why: Let the pipeline dispatch to any engine without knowing its internals."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, Final

from srcfmt.platform.logging import logger

from ..domain.errors import ConfigError, FormatterNotInitializedError
from ..domain.line_ending import LineEnding

COMPILER_SOURCE: Final[str] = "org.eclipse.jdt.core.compiler.source"
COMPILER_COMPLIANCE: Final[str] = "org.eclipse.jdt.core.compiler.compliance"
COMPILER_CODEGEN_TARGET_PLATFORM: Final[str] = "org.eclipse.jdt.core.compiler.codegen.targetPlatform"


@dataclass(frozen=True, slots=True)
class FormatterSettings:
    """Run-wide settings every formatter may consult during initialization."""

    compiler_source: str = "1.8"
    compiler_compliance: str = "1.8"
    compiler_target_platform: str = "1.8"

    def compiler_options(self) -> dict[str, str]:
        return {
            COMPILER_SOURCE: self.compiler_source,
            COMPILER_COMPLIANCE: self.compiler_compliance,
            COMPILER_CODEGEN_TARGET_PLATFORM: self.compiler_target_platform,
        }


def parse_source_level(raw: str) -> tuple[int, int]:
    """Parse ``1.8``/``8``/``17`` style levels into ``(1, minor)`` tuples.

    Raises:
        ConfigError: If the value is not a recognised version string.
    """

    parts = raw.strip().split(".")
    try:
        numbers = [int(part) for part in parts]
    except ValueError as exc:
        raise ConfigError(f"Invalid compiler level '{raw}'") from exc
    if len(numbers) == 1:
        return (1, numbers[0])
    if numbers[0] == 1 and len(numbers) == 2:
        return (1, numbers[1])
    raise ConfigError(f"Invalid compiler level '{raw}'")


class BaseFormatter(ABC):
    """Formatter lifecycle: initialize once, then format many texts.

    Subclasses build their engine in ``_create_engine`` and implement
    ``_do_format``. ``format`` resolves the line ending, delegates, and maps
    an unchanged result to ``None``.
    """

    name: ClassVar[str]
    extensions: ClassVar[frozenset[str]]
    option_prefix: ClassVar[str]

    def __init__(self) -> None:
        self._initialized: bool = False
        self._options: dict[str, str] = {}

    def initialize(self, options: Mapping[str, str] | None, settings: FormatterSettings) -> None:
        """Build the engine from ``options`` layered over compiler defaults.

        Raises:
            ConfigError: If an option value is invalid.
        """

        merged = settings.compiler_options()
        if options:
            merged.update(options)
        self._create_engine(merged, settings)
        self._options = merged
        self._initialized = True
        logger.debug("Initialized %s formatter with %d options", self.name, len(merged))

    def is_initialized(self) -> bool:
        return self._initialized

    def supports(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    @property
    def options(self) -> Mapping[str, str]:
        return dict(self._options)

    def format(self, source: str, line_ending: LineEnding) -> str | None:
        """Format ``source``.

        Returns:
            The formatted text, or ``None`` when it equals ``source``.

        Raises:
            FormatError: If the engine cannot produce an edit for ``source``.
            FormatterNotInitializedError: If ``initialize`` was never called.
        """

        if not self._initialized:
            raise FormatterNotInitializedError(self.name)
        formatted = self._do_format(source, line_ending.chars_for(source))
        if formatted == source:
            return None
        return formatted

    @abstractmethod
    def _create_engine(self, options: Mapping[str, str], settings: FormatterSettings) -> None:
        ...

    @abstractmethod
    def _do_format(self, source: str, newline: str) -> str:
        ...


__all__ = [
    "BaseFormatter",
    "FormatterSettings",
    "COMPILER_SOURCE",
    "COMPILER_COMPLIANCE",
    "COMPILER_CODEGEN_TARGET_PLATFORM",
    "parse_source_level",
]
