"""
Module: test_sort_engine.py

Date: 2026-10-19

Tests for SortEngine ordering rules and the header sort state machine.
"""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from smarttable.core.sorting import SortEngine, SortMode
from smarttable.core.sorting.sort_engine import to_number, to_timestamp
from smarttable.models.sort_spec import SortDirection, SortSpec

ASC = SortDirection.ASC
DESC = SortDirection.DESC


@pytest.fixture
def engine():
    return SortEngine()


def _ids(rows):
    return [row["id"] for row in rows]


class TestBasicOrdering:
    def test_text_ascending(self, engine):
        records = [{"id": 1, "name": "B"}, {"id": 2, "name": "A"}]
        assert _ids(engine.sort(records, SortSpec("name", ASC))) == [2, 1]

    def test_text_is_case_insensitive(self, engine):
        records = [{"id": 1, "name": "beta"}, {"id": 2, "name": "Alpha"}, {"id": 3, "name": "CHARLIE"}]
        assert _ids(engine.sort(records, SortSpec("name", ASC))) == [2, 1, 3]

    def test_numeric_strings_compare_numerically(self, engine):
        records = [{"id": 1, "amount": "10"}, {"id": 2, "amount": "9"}]
        assert _ids(engine.sort(records, SortSpec("amount", ASC))) == [2, 1]

    def test_auto_numeric_without_hint(self, engine):
        records = [{"id": 1, "score": "10"}, {"id": 2, "score": "9"}, {"id": 3, "score": 9.5}]
        assert engine.detect_mode("score", ["10", "9", 9.5]) is SortMode.NUMERIC
        assert _ids(engine.sort(records, SortSpec("score", ASC))) == [2, 3, 1]

    def test_decimal_values(self, engine):
        records = [{"id": 1, "fee": Decimal("2.50")}, {"id": 2, "fee": Decimal("2.05")}]
        assert _ids(engine.sort(records, SortSpec("fee", ASC))) == [2, 1]

    def test_booleans_sort_false_first(self, engine):
        records = [{"id": 1, "active": True}, {"id": 2, "active": False}]
        assert _ids(engine.sort(records, SortSpec("active", ASC))) == [2, 1]

    def test_iso_dates_compare_as_instants(self, engine):
        records = [
            {"id": 1, "created_at": "2024-03-01T00:30:00+02:00"},  # 2024-02-29 22:30 UTC
            {"id": 2, "created_at": "2024-02-29T23:00:00Z"},
            {"id": 3, "created_at": "2024-02-29"},
        ]
        assert engine.detect_mode("created_at", [r["created_at"] for r in records]) is SortMode.DATE
        assert _ids(engine.sort(records, SortSpec("created_at", ASC))) == [3, 1, 2]

    def test_date_objects(self, engine):
        records = [
            {"id": 1, "hired": datetime(2023, 5, 1, tzinfo=timezone.utc)},
            {"id": 2, "hired": date(2023, 1, 1)},
        ]
        assert _ids(engine.sort(records, SortSpec("hired", ASC))) == [2, 1]


class TestNulls:
    @pytest.mark.parametrize("direction", [ASC, DESC])
    def test_nulls_last_in_both_directions(self, engine, direction):
        records = [
            {"id": 1, "age": None},
            {"id": 2, "age": "30"},
            {"id": 3},
            {"id": 4, "age": "25"},
        ]
        ordered = _ids(engine.sort(records, SortSpec("age", direction)))
        assert ordered[-2:] == [1, 3]

    def test_non_mapping_rows_sort_as_null(self, engine):
        records = [None, {"id": 1, "name": "x"}]
        ordered = engine.sort(records, SortSpec("name", ASC))
        assert ordered == [{"id": 1, "name": "x"}, None]


class TestDirection:
    def test_descending_is_reverse_of_ascending(self, engine, sample_records):
        for field in ("full_name", "age", "status", "id"):
            asc = engine.sort(sample_records, SortSpec(field, ASC))
            desc = engine.sort(sample_records, SortSpec(field, DESC))
            present_asc = [r for r in asc if r.get(field) is not None]
            present_desc = [r for r in desc if r.get(field) is not None]
            assert present_desc == list(reversed(present_asc))

    def test_numeric_descending(self, engine):
        records = [{"id": 1, "age": "9"}, {"id": 2, "age": "31"}, {"id": 3, "age": "27"}]
        assert _ids(engine.sort(records, SortSpec("age", DESC))) == [2, 3, 1]


class TestRobustness:
    def test_mixed_types_never_raise(self, engine):
        records = [
            {"id": 1, "misc": "text"},
            {"id": 2, "misc": 5},
            {"id": 3, "misc": {"a": 1}},
            {"id": 4, "misc": [1, 2]},
            {"id": 5, "misc": True},
        ]
        ordered = engine.sort(records, SortSpec("misc", ASC))
        assert sorted(_ids(ordered)) == [1, 2, 3, 4, 5]

    def test_unparseable_values_in_numeric_field_rank_after_numbers(self, engine):
        records = [{"id": 1, "amount": "n/a"}, {"id": 2, "amount": "100"}, {"id": 3, "amount": 7}]
        assert _ids(engine.sort(records, SortSpec("amount", ASC))) == [3, 2, 1]
        assert _ids(engine.sort(records, SortSpec("amount", DESC))) == [1, 2, 3]

    def test_nan_and_inf_are_not_numbers(self):
        assert to_number("nan") is None
        assert to_number(float("inf")) is None
        assert to_number(" 12 ") == 12.0
        assert to_number("") is None
        assert to_number([1]) is None

    def test_to_timestamp_rejects_non_dates(self):
        assert to_timestamp("hello world") is None
        assert to_timestamp("2024") is None
        assert to_timestamp(20240101) is None
        assert to_timestamp("2024-13-45") is None


class TestInputHandling:
    def test_returns_new_list_and_does_not_mutate(self, engine, sample_records):
        original = list(sample_records)
        ordered = engine.sort(sample_records, SortSpec("full_name", ASC))
        assert ordered is not sample_records
        assert sample_records == original

    def test_no_spec_keeps_input_order(self, engine, sample_records):
        ordered = engine.sort(sample_records, None)
        assert ordered == sample_records
        assert ordered is not sample_records

    def test_empty_input(self, engine):
        assert engine.sort([], SortSpec("x", ASC)) == []
        assert engine.sort(None, SortSpec("x", ASC)) == []

    def test_stable_for_ties(self, engine):
        records = [{"id": 1, "status": "a"}, {"id": 2, "status": "A"}, {"id": 3, "status": "a"}]
        assert _ids(engine.sort(records, SortSpec("status", ASC))) == [1, 2, 3]

    def test_custom_field_hints(self):
        engine = SortEngine(numeric_fields=(), date_fields=("due",))
        assert engine.detect_mode("amount", ["10", "9"]) is SortMode.NUMERIC
        assert engine.detect_mode("due", ["x"]) is SortMode.DATE


class TestSortStateMachine:
    def test_new_field_starts_ascending(self):
        assert SortEngine.next_spec(None, "name") == SortSpec("name", ASC)
        assert SortEngine.next_spec(SortSpec("age", DESC), "name") == SortSpec("name", ASC)

    def test_same_field_toggles(self):
        spec = SortEngine.next_spec(None, "name")
        spec = SortEngine.next_spec(spec, "name")
        assert spec == SortSpec("name", DESC)
        assert SortEngine.next_spec(spec, "name") == SortSpec("name", ASC)

    def test_parse_direction_names(self):
        assert SortSpec.parse("age", "DESC").direction is SortDirection.DESC
        assert SortSpec.parse("age").direction is ASC
        with pytest.raises(ValueError):
            SortSpec.parse("age", "sideways")
