from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime
from pathlib import Path

from ..excel.reader import read_rows
from ..models.directory_record import DirectoryRecord, RawRow
from ..models.ingest_result import IngestResult
from ..models.search_result import SearchResult
from .normalizer import current_date, normalize
from .progress import RowProgress
from .search import SearchIndex
from .store import RestoreError, RowStore

"""Session orchestration for the household directory.

A DirectorySession ties the row store, the normalizer and the search index
together and sequences every ingestion as: decode -> persist rows -> normalize
-> replace index. The index is swapped only once the new record sequence is
complete, so a query never sees a half-built directory.
"""

__all__ = [
    "DirectorySession",
    "SessionError",
]

logger = logging.getLogger(__name__)


class SessionError(Exception):
    """Base exception for session-level failures."""
    pass


class DirectorySession:
    """One in-memory directory backed by an injected RowStore.

    Args:
        store: Where the raw row sequence is persisted between sessions
        today: Callable returning the reference date for countdowns; called
            on every ingestion so restored sessions get fresh countdowns
        sheet: Workbook sheet to read on upload (None = first sheet)
    """

    def __init__(
        self,
        store: RowStore,
        today: Callable[[], date] = current_date,
        sheet: str | None = None,
    ) -> None:
        self.store = store
        self._today = today
        self.sheet = sheet
        self.index = SearchIndex()

    @property
    def records(self) -> list[DirectoryRecord]:
        return self.index.records

    @property
    def has_data(self) -> bool:
        return len(self.index) > 0

    def _build(self, rows: list[RawRow], source: str) -> IngestResult:
        start_time = datetime.now(UTC)
        with RowProgress(len(rows)) as progress:
            records = normalize(progress.track(rows), today=self._today())
        self.index.replace(records)
        end_time = datetime.now(UTC)
        return IngestResult(
            source=source,
            records=records,
            start_time=start_time,
            end_time=end_time,
            elapsed_seconds=(end_time - start_time).total_seconds(),
        )

    def load_rows(self, rows: list[RawRow], source: str = "rows") -> IngestResult:
        """Persist an already-decoded row sequence and rebuild the directory from it."""
        self.store.save(rows)
        return self._build(rows, source)

    def ingest(self, path: Path) -> IngestResult:
        """Decode a spreadsheet, persist its rows and rebuild the directory.

        Raises:
            DecodeError: the file could not be read; the current directory and
                the persisted rows are left untouched
        """
        rows = read_rows(path, sheet=self.sheet)
        logger.info(f"Read {len(rows)} rows from {path.name}")
        return self.load_rows(rows, source=path.name)

    def restore(self) -> IngestResult | None:
        """Rebuild the directory from the persisted rows.

        Returns None (and leaves an empty directory) when nothing was saved, or
        when the saved state is corrupted, in which case it is discarded.
        """
        try:
            rows = self.store.load()
        except RestoreError as e:
            logger.warning(f"persisted directory is corrupted, discarding it: {e}")
            try:
                self.store.clear()
            except OSError as clear_err:
                logger.warning(f"could not discard persisted directory: {clear_err}")
            self.index.replace([])
            return None
        if rows is None:
            self.index.replace([])
            return None
        return self._build(rows, source="store")

    def require_data(self) -> None:
        if not self.has_data:
            raise SessionError("no directory loaded; run 'import' with a spreadsheet first")

    def query(self, text: str) -> SearchResult:
        return self.index.query(text)
