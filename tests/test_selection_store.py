"""
Module: test_selection_store.py

Date: 2026-10-19

Tests for SelectionStore: toggle, all-or-nothing toggle_all, column
independence and change notifications.
"""

import threading

import pytest

from smarttable.app.state import SelectionState, SelectionStore, valid_urls

A = "https://x/a.jpg"
B = "https://x/b.jpg"
C = "https://x/c.jpg"


@pytest.fixture
def store():
    return SelectionStore()


class TestToggle:
    def test_toggle_adds_then_removes(self, store):
        assert store.toggle("photo", A) is True
        assert store.is_selected("photo", A)
        assert store.toggle("photo", A) is False
        assert not store.is_selected("photo", A)
        assert store.selected_count("photo") == 0

    @pytest.mark.parametrize("bad", [None, "", "   ", 42, ["x"]])
    def test_non_file_values_are_ignored(self, store, bad):
        assert store.toggle("photo", bad) is False
        assert store.selected_count("photo") == 0
        assert not store.is_selected("photo", bad)

    def test_selected_urls_returns_copy(self, store):
        store.toggle("photo", A)
        urls = store.selected_urls("photo")
        urls.add(B)
        assert store.selected_urls("photo") == {A}


class TestToggleAll:
    def test_single_selected_url_then_toggle_all_clears(self, store):
        store.toggle("photo", A)
        result = store.toggle_all("photo", [A])
        assert result == set()
        assert store.selected_count("photo") == 0

    def test_partial_selection_selects_everything(self, store):
        store.toggle("photo", A)
        result = store.toggle_all("photo", [A, B, C])
        assert result == {A, B, C}

    def test_cycle_select_all_then_clear(self, store):
        assert store.toggle_all("photo", [A, B]) == {A, B}
        assert store.toggle_all("photo", [A, B]) == set()
        assert store.toggle_all("photo", [A, B]) == {A, B}

    def test_invalid_values_are_excluded_from_full_set(self, store):
        result = store.toggle_all("photo", [A, None, "", 7, B])
        assert result == {A, B}
        # Selection equals the valid set, so the next call clears
        assert store.toggle_all("photo", [A, None, "", 7, B]) == set()

    def test_column_with_no_files(self, store):
        assert store.toggle_all("photo", [None, ""]) == set()


class TestStateAndIndependence:
    def test_selection_states(self, store):
        urls = [A, B]
        assert store.selection_state("photo", urls) is SelectionState.IDLE
        store.toggle("photo", A)
        assert store.selection_state("photo", urls) is SelectionState.PARTIAL
        store.toggle("photo", B)
        assert store.selection_state("photo", urls) is SelectionState.FULL
        store.clear("photo")
        assert store.selection_state("photo", urls) is SelectionState.IDLE

    def test_columns_are_independent(self, store):
        store.toggle("photo", A)
        store.toggle_all("cv", [B, C])
        store.clear("photo")

        assert store.selected_urls("photo") == set()
        assert store.selected_urls("cv") == {B, C}
        assert store.selected_columns() == ["cv"]

    def test_clear_all(self, store):
        store.toggle("photo", A)
        store.toggle("cv", B)
        store.clear_all()
        assert store.selected_columns() == []

    def test_retain_drops_vanished_urls(self, store):
        store.toggle_all("photo", [A, B])
        store.retain("photo", [B, C])
        assert store.selected_urls("photo") == {B}


class TestNotifications:
    def test_selection_changed_emitted_with_sorted_urls(self, store):
        events = []
        store.selection_changed.connect(lambda key, urls: events.append((key, urls)))

        store.toggle("photo", B)
        store.toggle("photo", A)
        store.clear("photo")
        store.clear("photo")  # already empty: no event

        assert events == [("photo", [B]), ("photo", [A, B]), ("photo", [])]

    def test_concurrent_clear_and_toggle(self, store):
        urls = [f"https://x/{i}.jpg" for i in range(200)]

        def toggle_many():
            for url in urls:
                store.toggle("photo", url)

        threads = [threading.Thread(target=toggle_many), threading.Thread(target=store.clear, args=("photo",))]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert store.selected_count("photo") <= len(urls)


def test_valid_urls_ordered_and_deduplicated(sample_records):
    records = sample_records + [{"photo_url": "https://cdn.example.com/photos/maria.jpg"}, "junk"]
    assert valid_urls(records, "photo_url") == [
        "https://cdn.example.com/photos/maria.jpg",
        "/storage/photos/joy.png",
    ]
    assert valid_urls([], "photo_url") == []
