from __future__ import annotations

import html
import re
from collections.abc import Iterable

from ..models.directory_record import DirectoryRecord
from ..models.search_result import SearchHit, SearchResult, Span

"""In-memory search over a directory record sequence.

Matching is literal, case-insensitive substring containment against each
record's ``search_key``; results keep record order (no ranking). Every query is
a linear scan, which suits household-sized directories.
"""

__all__ = [
    "SearchIndex",
    "prepare_query",
    "find_spans",
    "highlight",
    "DEFAULT_OPEN_TAG",
    "DEFAULT_CLOSE_TAG",
]

DEFAULT_OPEN_TAG = '<span class="highlight">'
DEFAULT_CLOSE_TAG = "</span>"


def prepare_query(text: str) -> str:
    return text.strip().lower()


def find_spans(text: str, query: str) -> list[Span]:
    """Non-overlapping [start, end) ranges of ``query`` in ``text``, ignoring case.

    The query is matched literally; characters such as "(" or "*" have no
    pattern meaning.
    """
    query = query.strip()
    if not query or not text:
        return []
    pattern = re.compile(re.escape(query), re.IGNORECASE)
    return [m.span() for m in pattern.finditer(text)]


def _wrap(text: str, spans: list[Span], open_tag: str, close_tag: str, escape: bool) -> str:
    quote = html.escape if escape else (lambda s: s)
    out: list[str] = []
    pos = 0
    for start, end in spans:
        out.append(quote(text[pos:start]))
        out.append(open_tag + quote(text[start:end]) + close_tag)
        pos = end
    out.append(quote(text[pos:]))
    return "".join(out)


def highlight(
    text: str,
    query: str,
    open_tag: str = DEFAULT_OPEN_TAG,
    close_tag: str = DEFAULT_CLOSE_TAG,
    *,
    escape: bool = True,
) -> str:
    """Wrap every case-insensitive occurrence of ``query`` in ``text`` with tags.

    The matched text keeps its original casing. With ``escape=True`` (default)
    the text is HTML-escaped so the result is markup-ready; pass ``escape=False``
    for plain-text markers such as the CLI's "[" / "]".
    """
    return _wrap(text, find_spans(text, query), open_tag, close_tag, escape)


class SearchIndex:
    """Holds exactly one record sequence and answers substring queries."""

    def __init__(self, records: Iterable[DirectoryRecord] = ()) -> None:
        self._records: list[DirectoryRecord] = list(records)

    def replace(self, records: Iterable[DirectoryRecord]) -> None:
        """Swap in a new record sequence (built fully before the swap)."""
        self._records = list(records)

    @property
    def records(self) -> list[DirectoryRecord]:
        return list(self._records)

    def __len__(self) -> int:
        return len(self._records)

    def query(self, text: str) -> SearchResult:
        """Matching records in original order, with highlight spans per display field.

        A blank query returns an empty result whose ``is_blank_query`` is True.
        """
        q = prepare_query(text)
        if not q:
            return SearchResult(query="")
        hits = [
            SearchHit(
                record=r,
                name_spans=find_spans(r.name, q),
                family_name_spans=find_spans(r.family_name, q),
                family_members_spans=find_spans(r.family_members_raw, q),
            )
            for r in self._records
            if q in r.search_key
        ]
        return SearchResult(query=q, hits=hits)

    def search(self, text: str) -> list[DirectoryRecord]:
        return self.query(text).records
