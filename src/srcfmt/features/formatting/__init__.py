# Where: srcfmt.features.formatting.__init__
# What: Expose formatting services, engines and shared dataclasses.
# Why: Provide a cohesive import surface for UI and application layers.

from .domain import (
    CachePersistError,
    ConfigError,
    FileResult,
    FormatError,
    FormatOutcome,
    LineEnding,
    ProcessingEvent,
    RunStatistics,
)
from .engines import FormatterSettings, JavaFormatter, JavascriptFormatter, UnmatchedImports
from .usecases import (
    FileProcessor,
    Formatter,
    HashCache,
    RunOrchestrator,
    collect_candidate_files,
    compute_digest,
)

__all__ = [
    "CachePersistError",
    "ConfigError",
    "FileResult",
    "FormatError",
    "FormatOutcome",
    "LineEnding",
    "ProcessingEvent",
    "RunStatistics",
    "FormatterSettings",
    "JavaFormatter",
    "JavascriptFormatter",
    "UnmatchedImports",
    "FileProcessor",
    "Formatter",
    "HashCache",
    "RunOrchestrator",
    "collect_candidate_files",
    "compute_digest",
]
