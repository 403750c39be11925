from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .directory_record import DirectoryRecord

"""Ingestion result model.

Aggregates what one ingestion event (upload or restore) produced, for the
SUMMARY output line and for callers that need the fresh record sequence.
"""


@dataclass(frozen=True)
class IngestResult:
    """Records and metrics for a single ingestion event."""
    source: str  # file name, or "store" for a restore
    records: list[DirectoryRecord]
    start_time: datetime  # UTC
    end_time: datetime  # UTC
    elapsed_seconds: float

    @property
    def total_rows(self) -> int:
        return len(self.records)

    @property
    def households(self) -> int:
        """Distinct non-empty house names, in any order."""
        return len({r.family_name for r in self.records if r.family_name})

    @property
    def events_today(self) -> int:
        """Birthdays plus anniversaries falling on the reference date."""
        return sum(
            int(r.dob_countdown.is_today) + int(r.anniversary_countdown.is_today)
            for r in self.records
        )
