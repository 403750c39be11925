from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

from .countdown import NO_COUNTDOWN, Countdown

"""DirectoryRecord model for the household directory.

A DirectoryRecord is one household member after normalization. Records are
immutable; a changed record is a new record (``dataclasses.replace``), which
recomputes ``search_key`` in ``__post_init__``.
"""

__all__ = [
    "RawRow",
    "DirectoryRecord",
    "build_search_key",
]

# Normalized field key (lowercase alnum) -> cell text
RawRow = Mapping[str, str]


def build_search_key(name: str, family_members_raw: str, family_name: str) -> str:
    return f"{name} {family_members_raw} {family_name}".lower()


@dataclass(frozen=True)
class DirectoryRecord:
    """One normalized row of the directory (one household member).

    ``family_name`` is the filled-down house name; ``family_members_raw`` and
    ``relations_raw`` are comma-separated lists aligned by position.
    """
    family_name: str
    name: str
    family_members_raw: str = ""
    relations_raw: str = ""
    dob: str = "-"
    dob_countdown: Countdown = NO_COUNTDOWN
    anniversary: str = "-"
    anniversary_countdown: Countdown = NO_COUNTDOWN
    contact: str = "-"
    address: str = "Not Available"
    map_link: str = ""
    search_key: str = field(init=False, repr=False)

    def __post_init__(self) -> None:
        # frozen: bypass __setattr__ for the derived field
        object.__setattr__(
            self, "search_key", build_search_key(self.name, self.family_members_raw, self.family_name)
        )
