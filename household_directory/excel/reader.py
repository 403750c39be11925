from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime
from pathlib import Path
from typing import Any

import pandas as pd

from household_directory.models.directory_record import RawRow

"""Spreadsheet reader: workbook / CSV bytes -> ordered RawRow sequence.

- The first row of the sheet is the header row; every following row is data.
- Header keys are normalized to lowercase alphanumerics ("Family Name / House
  Name" -> "familynamehousename").
- Every cell becomes text. Blank cells become "". The literal text "NA" is kept
  (pandas would otherwise turn it into NaN), since it is meaningful to the
  date fields.
- Fully blank rows are skipped.
"""

__all__ = [
    "DecodeError",
    "SUPPORTED_SUFFIXES",
    "normalize_key",
    "cell_to_text",
    "frame_to_rows",
    "read_rows",
]

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = {".xlsx", ".xlsm", ".xls", ".csv"}

_NON_ALNUM = re.compile(r"[^a-z0-9]")


class DecodeError(Exception):
    """Raised when a file cannot be turned into a row sequence."""


def normalize_key(key: Any) -> str:
    return _NON_ALNUM.sub("", str(key).lower())


def cell_to_text(value: Any) -> str:
    """Render one cell as the text the normalizer expects."""
    if value is None or value is pd.NaT:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        # 電話番号などは float で読まれるため整数表記に戻す
        if value.is_integer():
            return str(int(value))
        return str(value)
    if isinstance(value, (datetime, date)):
        return f"{value.day}/{value.month}/{value.year}"
    return str(value)


def frame_to_rows(df: pd.DataFrame) -> list[RawRow]:
    """Convert a header-applied DataFrame to RawRows (blank rows skipped)."""
    keys = [normalize_key(c) for c in df.columns]
    rows: list[RawRow] = []
    for raw in df.itertuples(index=False, name=None):
        row = {k: cell_to_text(v) for k, v in zip(keys, raw, strict=False)}
        if all(v.strip() == "" for v in row.values()):
            continue
        rows.append(row)
    return rows


def _read_frame(path: Path, sheet: str | None) -> pd.DataFrame:
    if path.suffix.lower() == ".csv":
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    xls = pd.ExcelFile(path)
    if sheet is None:
        if not xls.sheet_names:
            raise DecodeError(f"workbook has no sheets: {path.name}")
        sheet_name: str | int = xls.sheet_names[0]
    elif sheet in xls.sheet_names:
        sheet_name = sheet
    else:
        raise DecodeError(f"sheet '{sheet}' not found in {path.name} (available: {xls.sheet_names})")
    # keep_default_na=False: "NA" / "N/A" をテキストのまま保持
    return xls.parse(sheet_name, header=0, dtype=object, keep_default_na=False)


def read_rows(path: Path, sheet: str | None = None) -> list[RawRow]:
    """Read a workbook (first or named sheet) or CSV file into RawRows.

    Raises:
        DecodeError: unsupported suffix, missing file, unreadable content or
            missing sheet
    """
    if not path.exists():
        raise DecodeError(f"file not found: {path}")
    if path.suffix.lower() not in SUPPORTED_SUFFIXES:
        raise DecodeError(f"unsupported file type: {path.suffix or '(none)'}")
    try:
        df = _read_frame(path, sheet)
    except DecodeError:
        raise
    except Exception as e:  # pandas/openpyxl/xlrd raise a wide range of types
        raise DecodeError(f"cannot read {path.name}: {e}") from e
    rows = frame_to_rows(df)
    logger.debug(f"read {len(rows)} rows from {path.name} columns={[normalize_key(c) for c in df.columns]}")
    return rows
