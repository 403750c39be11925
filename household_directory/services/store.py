from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Protocol

from ..models.directory_record import RawRow

"""Persisted row store.

The unit of persistence is the key-normalized RawRow sequence, stored as a JSON
array of flat string-to-string objects. Derived DirectoryRecords are never
stored; they are rebuilt on every load so countdowns stay current.
"""

__all__ = [
    "RestoreError",
    "RowStore",
    "JsonRowStore",
    "MemoryRowStore",
    "validate_rows",
]

logger = logging.getLogger(__name__)


class RestoreError(Exception):
    """Raised when persisted state cannot be parsed back into a RawRow sequence."""


class RowStore(Protocol):
    def load(self) -> list[RawRow] | None: ...

    def save(self, rows: list[RawRow]) -> None: ...

    def clear(self) -> None: ...


def validate_rows(data: Any) -> list[RawRow]:
    """Check that decoded JSON is a list of flat str->str objects."""
    if not isinstance(data, list):
        raise RestoreError(f"expected a list of rows, got {type(data).__name__}")
    rows: list[RawRow] = []
    for i, item in enumerate(data):
        if not isinstance(item, dict):
            raise RestoreError(f"row {i}: expected an object, got {type(item).__name__}")
        for k, v in item.items():
            if not isinstance(v, str):
                raise RestoreError(f"row {i}: value for '{k}' is {type(v).__name__}, expected str")
        rows.append(dict(item))
    return rows


class JsonRowStore:
    """RowStore backed by a single JSON file.

    ``load()`` returns None when nothing has been saved yet and raises
    RestoreError when the file exists but is unusable.
    """

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def load(self) -> list[RawRow] | None:
        if not self.path.exists():
            return None
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise RestoreError(f"cannot read {self.path}: {e}") from e
        return validate_rows(data)

    def save(self, rows: list[RawRow]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = json.dumps([dict(r) for r in rows], ensure_ascii=False)
        # 書き込み途中で落ちても既存ファイルを壊さないよう一時ファイル経由で置換
        fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=self.path.name, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            os.replace(tmp, self.path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.debug(f"saved {len(rows)} rows to {self.path}")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)


class MemoryRowStore:
    """In-process RowStore; holds the serialized form so restores exercise decoding."""

    def __init__(self, blob: str | None = None) -> None:
        self.blob = blob

    def load(self) -> list[RawRow] | None:
        if self.blob is None:
            return None
        try:
            data = json.loads(self.blob)
        except json.JSONDecodeError as e:
            raise RestoreError(f"corrupted row blob: {e}") from e
        return validate_rows(data)

    def save(self, rows: list[RawRow]) -> None:
        self.blob = json.dumps([dict(r) for r in rows], ensure_ascii=False)

    def clear(self) -> None:
        self.blob = None
