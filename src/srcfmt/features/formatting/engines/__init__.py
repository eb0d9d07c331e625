"""
Summary: Expose the formatter implementations and their shared engine.
Why: Keep callers stable while engines evolve independently.
"""

from .base import (
    COMPILER_CODEGEN_TARGET_PLATFORM,
    COMPILER_COMPLIANCE,
    COMPILER_SOURCE,
    BaseFormatter,
    FormatterSettings,
    parse_source_level,
)
from .brace_indenter import BraceIndenter, IndentStyle
from .import_sorter import ImportSorter, UnmatchedImports, matches_prefix
from .java import DEFAULT_IMPORT_ORDER, JavaFormatter
from .javascript import JavascriptFormatter

__all__ = [
    "BaseFormatter",
    "FormatterSettings",
    "COMPILER_SOURCE",
    "COMPILER_COMPLIANCE",
    "COMPILER_CODEGEN_TARGET_PLATFORM",
    "parse_source_level",
    "BraceIndenter",
    "IndentStyle",
    "ImportSorter",
    "UnmatchedImports",
    "matches_prefix",
    "DEFAULT_IMPORT_ORDER",
    "JavaFormatter",
    "JavascriptFormatter",
]
