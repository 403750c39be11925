"""Domain models for the household directory.

This package contains the record, countdown, search and configuration models
shared by the reader, normalizer, search index and CLI.
"""

from .config_models import DirectoryConfig, HighlightConfig
from .countdown import NO_COUNTDOWN, TODAY, Countdown, CountdownKind
from .directory_record import DirectoryRecord, RawRow, build_search_key
from .ingest_result import IngestResult
from .search_result import SearchHit, SearchResult, Span

__all__ = [
    # Configuration models
    "DirectoryConfig",
    "HighlightConfig",
    # Record models
    "RawRow",
    "DirectoryRecord",
    "build_search_key",
    "Countdown",
    "CountdownKind",
    "NO_COUNTDOWN",
    "TODAY",
    # Result models
    "IngestResult",
    "SearchHit",
    "SearchResult",
    "Span",
]
