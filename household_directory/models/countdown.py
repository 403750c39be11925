from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Countdown model for recurring day/month events (birthdays, anniversaries).

A Countdown is one of three states:
- NONE: the source text held no usable day/month
- TODAY: the event falls on the reference date
- IN_DAYS: the next occurrence is ``days`` whole days away (always > 0)
"""

__all__ = [
    "Countdown",
    "CountdownKind",
    "NO_COUNTDOWN",
    "TODAY",
]


class CountdownKind(Enum):
    """Discriminator for Countdown values."""
    NONE = "none"
    TODAY = "today"
    IN_DAYS = "in_days"


@dataclass(frozen=True)
class Countdown:
    """Result of projecting a day/month onto the calendar relative to today."""
    kind: CountdownKind
    days: int | None = None  # set only for IN_DAYS

    def __post_init__(self) -> None:
        if self.kind is CountdownKind.IN_DAYS:
            if self.days is None or self.days <= 0:
                raise ValueError(f"IN_DAYS countdown requires a positive day count, got {self.days!r}")
        elif self.days is not None:
            raise ValueError(f"{self.kind.name} countdown carries no day count")

    @staticmethod
    def in_days(days: int) -> Countdown:
        return Countdown(CountdownKind.IN_DAYS, days)

    @property
    def is_none(self) -> bool:
        return self.kind is CountdownKind.NONE

    @property
    def is_today(self) -> bool:
        return self.kind is CountdownKind.TODAY

    @property
    def label(self) -> str:
        """Display text shown next to the raw date ("" when there is nothing to show)."""
        if self.kind is CountdownKind.TODAY:
            return "Today! 🎂"
        if self.kind is CountdownKind.IN_DAYS:
            return f"in {self.days} days"
        return ""


NO_COUNTDOWN = Countdown(CountdownKind.NONE)
TODAY = Countdown(CountdownKind.TODAY)
