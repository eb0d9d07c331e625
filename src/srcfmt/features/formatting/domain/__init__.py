# Where: srcfmt.features.formatting.domain
# What: Value types, outcomes and errors shared across the formatting feature.
# Why: Give use cases and engines one import surface for domain vocabulary.

from .errors import (
    CachePersistError,
    ConfigError,
    FormatError,
    FormatterNotInitializedError,
    ImportOrderReadError,
    SrcfmtError,
)
from .line_ending import LineEnding, detect_line_ending
from .processing_types import FileResult, FormatOutcome, ProcessingEvent, RunStatistics

__all__ = [
    "SrcfmtError",
    "ConfigError",
    "FormatterNotInitializedError",
    "FormatError",
    "CachePersistError",
    "ImportOrderReadError",
    "LineEnding",
    "detect_line_ending",
    "FileResult",
    "FormatOutcome",
    "ProcessingEvent",
    "RunStatistics",
]
