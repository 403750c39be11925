from __future__ import annotations

from dataclasses import dataclass

"""Config dataclasses for the household directory.

These are the typed form of config/directory.yml; the YAML loading and
schema validation live in household_directory.config.loader.
"""


@dataclass(frozen=True)
class HighlightConfig:
    """Markers wrapped around query matches in CLI output."""
    open: str = "["
    close: str = "]"


@dataclass(frozen=True)
class DirectoryConfig:
    """Root configuration object.

    ``store_path`` may be overridden by the HOUSEHOLD_DIRECTORY_STORE
    environment variable (see loader).
    """
    store_path: str  # JSON row store location
    timezone: str = "UTC"  # zone used to decide what "today" is
    sheet: str | None = None  # workbook sheet; None = first sheet
    highlight: HighlightConfig = HighlightConfig()
