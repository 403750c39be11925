from __future__ import annotations

from datetime import date

import pytest

from household_directory.models.directory_record import DirectoryRecord
from household_directory.services.normalizer import normalize
from household_directory.services.search import SearchIndex


@pytest.fixture()
def index(sample_rows) -> SearchIndex:
    return SearchIndex(normalize(sample_rows, today=date(2023, 1, 1)))


def test_blank_query_returns_nothing(index):
    for q in ["", "   ", "\t\n"]:
        result = index.query(q)
        assert result.is_blank_query
        assert result.hits == []
        assert index.search(q) == []


def test_zero_matches_is_distinct_from_blank_query(index):
    result = index.query("zzz-no-such-person")
    assert not result.is_blank_query
    assert not result.has_matches
    assert len(result) == 0


def test_match_by_name_case_insensitive(index):
    assert [r.name for r in index.search("JOSEPH mathew")] == ["Joseph Mathew", "Mary Joseph"]


def test_match_by_house_name_includes_filled_down_rows(index):
    assert [r.name for r in index.search("puthen")] == ["Joseph Mathew", "Mary Joseph"]


def test_match_by_family_member(index):
    assert [r.name for r in index.search("anna")] == ["Joseph Mathew"]


def test_query_is_trimmed_and_lowercased(index):
    result = index.query("  KIZHAKKE  ")
    assert result.query == "kizhakke"
    assert [r.name for r in result.records] == ["Thomas Varghese", "Unknown"]


def test_results_keep_record_order(index):
    # "a" appears in every search key
    assert [r.name for r in index.search("a")] == [r.name for r in index.records]


def test_contact_and_address_are_not_searched(index):
    assert index.search("9876543210") == []
    assert index.search("kottayam") == []


def test_every_name_substring_matches():
    records = [DirectoryRecord(family_name="Vadakkel", name="Elizabeth", family_members_raw="Rosa")]
    idx = SearchIndex(records)
    for field in ("Elizabeth", "Rosa", "Vadakkel"):
        for i in range(len(field)):
            for j in range(i + 1, len(field) + 1):
                assert idx.search(field[i:j].upper()) == records


def test_hit_spans(index):
    result = index.query("joseph")
    first, second = result.hits
    assert first.name_spans == [(0, 6)]
    assert first.family_members_spans == [(5, 11), (18, 24)]
    assert first.family_name_spans == []
    assert second.name_spans == [(5, 11)]


def test_regex_metacharacters_are_literal():
    records = [
        DirectoryRecord(family_name="House (East)", name="A.B. Cherian"),
        DirectoryRecord(family_name="House East", name="AxB Cherian"),
    ]
    idx = SearchIndex(records)
    assert idx.search("(east") == [records[0]]
    assert idx.search("a.b") == [records[0]]
    assert idx.search("[") == []
    assert idx.query("(east").hits[0].family_name_spans == [(6, 11)]


def test_replace_swaps_whole_sequence(index):
    assert len(index) == 4
    index.replace([DirectoryRecord(family_name="", name="Solo")])
    assert len(index) == 1
    assert index.search("joseph") == []
    assert [r.name for r in index.search("solo")] == ["Solo"]


def test_records_returns_copy(index):
    index.records.clear()
    assert len(index) == 4


def test_empty_index():
    idx = SearchIndex()
    assert len(idx) == 0
    result = idx.query("anything")
    assert not result.is_blank_query and not result.has_matches
