from __future__ import annotations

from dataclasses import dataclass, field

from .directory_record import DirectoryRecord

"""Search result models.

SearchResult keeps "no query" and "query with zero matches" apart:
a blank query yields ``is_blank_query=True`` with no hits, while a real query
that matches nothing yields ``is_blank_query=False`` with no hits.
"""

__all__ = [
    "Span",
    "SearchHit",
    "SearchResult",
]

# Half-open [start, end) character range into a display string
Span = tuple[int, int]


@dataclass(frozen=True)
class SearchHit:
    """A matched record plus the highlight spans of the query in its display fields."""
    record: DirectoryRecord
    name_spans: list[Span] = field(default_factory=list)
    family_name_spans: list[Span] = field(default_factory=list)
    family_members_spans: list[Span] = field(default_factory=list)


@dataclass(frozen=True)
class SearchResult:
    query: str  # trimmed + lowercased query text
    hits: list[SearchHit] = field(default_factory=list)

    @property
    def is_blank_query(self) -> bool:
        return self.query == ""

    @property
    def records(self) -> list[DirectoryRecord]:
        return [h.record for h in self.hits]

    @property
    def has_matches(self) -> bool:
        return bool(self.hits)

    def __len__(self) -> int:
        return len(self.hits)
