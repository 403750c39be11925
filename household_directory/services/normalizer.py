from __future__ import annotations

import calendar
import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from functools import reduce
from zoneinfo import ZoneInfo

from ..models.countdown import NO_COUNTDOWN, TODAY, Countdown
from ..models.directory_record import DirectoryRecord, RawRow

"""Row normalization: RawRow sequence -> DirectoryRecord sequence.

Each row is turned into a DirectoryRecord independently except for the house
name, which is filled down: a row with a blank house name inherits the most
recent non-blank one seen earlier in the same call. The carry lives in a fold
accumulator, never in module state.

Per-field problems (blank cells, unparseable dates, no map link) degrade to
documented defaults; normalize() itself never raises for cell content.
"""

__all__ = [
    "normalize",
    "compute_countdown",
    "parse_location",
    "current_date",
    "HOUSE_NAME_KEYS",
    "NOT_AVAILABLE",
]

logger = logging.getLogger(__name__)

# Checked in order; first non-empty wins
HOUSE_NAME_KEYS = ("familynamehousename", "familyname")
NOT_AVAILABLE = "Not Available"
UNKNOWN_NAME = "Unknown"
MISSING = "-"

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def current_date(timezone: str = "UTC") -> date:
    """Today's calendar date in the given IANA timezone."""
    return datetime.now(ZoneInfo(timezone)).date()


def _leading_int(text: str) -> int | None:
    m = _LEADING_INT.match(text)
    if not m:
        return None
    try:
        return int(m.group(1))
    except ValueError:  # digit count over sys.get_int_max_str_digits()
        return None


def _next_valid(day: int, month: int, year: int) -> date | None:
    """First date with this day/month in ``year`` or later (29/02 waits for a leap year)."""
    # 2000 is a leap year, so this bounds 29/02 as valid
    if not 1 <= month <= 12 or not 1 <= day <= calendar.monthrange(2000, month)[1]:
        return None
    for y in range(year, year + 8):
        if day <= calendar.monthrange(y, month)[1]:
            return date(y, month, day)
    return None  # pragma: no cover - every 8-year window has a leap year


def _is_placeholder(text: str) -> bool:
    stripped = text.strip()
    return not stripped or stripped == MISSING or stripped.lower() == "na"


def compute_countdown(text: str, today: date) -> Countdown:
    """Countdown from ``today`` to the next occurrence of a ``day/month`` date.

    Any year component after the month is ignored. The event is projected onto
    today's year; if that lands strictly before today it moves to the next
    year, so an event falling on today yields TODAY rather than a full year.
    """
    if _is_placeholder(text):
        return NO_COUNTDOWN
    parts = text.strip().split("/")
    if len(parts) < 2:
        return NO_COUNTDOWN
    day = _leading_int(parts[0])
    month = _leading_int(parts[1])
    if day is None or month is None:
        return NO_COUNTDOWN

    target = _next_valid(day, month, today.year)
    if target is None:
        return NO_COUNTDOWN
    if target < today:
        target = _next_valid(day, month, today.year + 1)
        if target is None:  # pragma: no cover - _next_valid already succeeded for an earlier year
            return NO_COUNTDOWN

    days = (target - today).days
    if days == 0:
        return TODAY
    return Countdown.in_days(days)


def parse_location(map_text: str) -> tuple[str, str]:
    """Split a free-text map cell into (address, map_link).

    The cell is split at the first "http"; the text before it is the address
    (trimmed, one trailing "/" removed) and "http" + the next segment is the
    link.
    """
    if not map_text or map_text == MISSING:
        return NOT_AVAILABLE, ""
    parts = map_text.split("http")
    address = parts[0].strip()
    if address.endswith("/"):
        address = address[:-1].strip()
    link = "http" + parts[1] if len(parts) > 1 else ""
    return address, link


@dataclass
class _FoldState:
    """Accumulator threaded through the row fold."""
    today: date
    carry: str = ""  # last non-empty house name
    records: list[DirectoryRecord] = field(default_factory=list)


def _field(row: RawRow, key: str, default: str = "") -> str:
    value = row.get(key)
    return value if value else default


def _house_name(row: RawRow) -> str:
    for key in HOUSE_NAME_KEYS:
        value = row.get(key)
        if value:
            return value
    return ""


def _step(state: _FoldState, row: RawRow) -> _FoldState:
    raw_house = _house_name(row)
    if raw_house != "":
        state.carry = raw_house

    dob = _field(row, "dob", MISSING)
    anniversary = _field(row, "anniversary", MISSING)
    address, map_link = parse_location(_field(row, "map", MISSING))

    record = DirectoryRecord(
        family_name=state.carry,
        name=_field(row, "name", UNKNOWN_NAME),
        family_members_raw=_field(row, "othermembersinfamily"),
        relations_raw=_field(row, "relation"),
        dob=dob,
        dob_countdown=compute_countdown(dob, state.today),
        anniversary=anniversary,
        anniversary_countdown=compute_countdown(anniversary, state.today),
        contact=_field(row, "contactnumber", MISSING),
        address=address,
        map_link=map_link,
    )
    for label, text, countdown in (
        ("dob", record.dob, record.dob_countdown),
        ("anniversary", record.anniversary, record.anniversary_countdown),
    ):
        if countdown.is_none and not _is_placeholder(text):
            logger.debug(f"row {len(state.records) + 1}: unparseable {label} {text!r}")
    state.records.append(record)
    return state


def normalize(rows: Iterable[RawRow], today: date | None = None) -> list[DirectoryRecord]:
    """Normalize rows into DirectoryRecords, preserving input order.

    Args:
        rows: RawRows with keys already normalized to lowercase alphanumerics
        today: Reference date for countdowns (default: today in UTC)

    Returns:
        One DirectoryRecord per input row, in the same order
    """
    start = _FoldState(today=today if today is not None else current_date())
    return reduce(_step, rows, start).records
