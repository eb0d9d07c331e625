"""
Summary: Expose formatting use cases from a single package.
Why: Keep callers stable while helpers move between submodules.
"""

from .discovery import DEFAULT_EXCLUDES, DEFAULT_INCLUDES, collect_candidate_files
from .file_processor import FileProcessor, FormatRequest
from .hash_cache import HashCache, cache_key, compute_digest
from .ports import DigestCachePort, Formatter
from .run_orchestrator import ProgressCallback, RunOrchestrator, deduplicate

__all__ = [
    "DEFAULT_INCLUDES",
    "DEFAULT_EXCLUDES",
    "collect_candidate_files",
    "FileProcessor",
    "FormatRequest",
    "HashCache",
    "cache_key",
    "compute_digest",
    "DigestCachePort",
    "Formatter",
    "ProgressCallback",
    "RunOrchestrator",
    "deduplicate",
]
