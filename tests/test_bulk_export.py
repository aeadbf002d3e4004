"""
Module: test_bulk_export.py

Date: 2026-10-19

Tests for DownloadService, BulkExportOrchestrator and the export workers.
"""

import threading
import time

import pytest

from smarttable.app.state import SelectionStore
from smarttable.core.export import BulkExportOrchestrator, DownloadService
from smarttable.core.export.bulk_export import submission_order
from smarttable.core.export.export_worker import BulkExportWorker, DownloadWorker
from smarttable.models.download_result import DownloadOutcome
from tests.mocks import FakeFetcher, FakeSaver, FakeViewer

URLS = [f"https://cdn.example.com/docs/{name}.pdf" for name in ("a", "b", "c", "d", "e")]


@pytest.fixture
def store():
    store = SelectionStore()
    store.toggle_all("cv", URLS)
    return store


def _orchestrator(store, failing=(), viewer=None, max_workers=4):
    service = DownloadService(FakeFetcher(failing=failing), FakeSaver(), viewer or FakeViewer())
    return BulkExportOrchestrator(service, store, max_workers=max_workers)


class TestDownloadService:
    def test_success_saves_under_url_file_name(self, fake_fetcher, fake_saver, fake_viewer):
        service = DownloadService(fake_fetcher, fake_saver, fake_viewer)
        result = service.download("https://x/docs/cv.pdf")

        assert result.succeeded
        assert result.outcome is DownloadOutcome.SUCCESS
        assert fake_saver.saved == [("cv.pdf", b"content")]
        assert str(result.saved_path).endswith("cv.pdf")
        assert fake_viewer.opened == []

    def test_explicit_file_name(self, fake_fetcher, fake_saver):
        service = DownloadService(fake_fetcher, fake_saver)
        service.download("https://x/docs/cv.pdf", file_name="maria.pdf")
        assert fake_saver.saved[0][0] == "maria.pdf"

    def test_failure_opens_externally(self, fake_saver, fake_viewer):
        url = "https://x/broken.pdf"
        service = DownloadService(FakeFetcher(failing=[url]), fake_saver, fake_viewer)
        result = service.download(url)

        assert not result.succeeded
        assert "boom" in result.error
        assert result.fallback_opened is True
        assert fake_viewer.opened == [url]
        assert fake_saver.saved == []

    def test_failure_without_viewer(self, fake_saver):
        url = "https://x/broken.pdf"
        result = DownloadService(FakeFetcher(failing=[url]), fake_saver).download(url)
        assert not result.succeeded
        assert result.fallback_opened is False

    def test_viewer_error_is_contained(self, fake_saver):
        class ExplodingViewer:
            def open(self, url):
                raise OSError("no browser")

        url = "https://x/broken.pdf"
        result = DownloadService(FakeFetcher(failing=[url]), fake_saver, ExplodingViewer()).download(url)
        assert result.fallback_opened is False

    @pytest.mark.parametrize("bad", [None, "", "  ", 12])
    def test_invalid_url_fails_without_fallback(self, fake_fetcher, fake_saver, fake_viewer, bad):
        result = DownloadService(fake_fetcher, fake_saver, fake_viewer).download(bad)
        assert not result.succeeded
        assert result.error == "Invalid URL"
        assert fake_fetcher.calls == []
        assert fake_viewer.opened == []


class TestBulkExport:
    def test_one_result_per_url_with_failures(self, store):
        failing = URLS[1:3]
        viewer = FakeViewer()
        orchestrator = _orchestrator(store, failing=failing, viewer=viewer)

        results = orchestrator.export_selected("cv")

        assert len(results) == len(URLS)
        assert sum(1 for r in results if not r.succeeded) == 2
        assert {r.url for r in results if not r.succeeded} == set(failing)
        assert sorted(viewer.opened) == sorted(failing)
        assert all(r.fallback_opened for r in results if not r.succeeded)

    def test_selection_cleared_after_export(self, store):
        orchestrator = _orchestrator(store, failing=URLS)
        orchestrator.export_selected("cv")
        assert store.selected_count("cv") == 0

    def test_selection_cleared_even_if_pool_crashes(self, store, monkeypatch):
        orchestrator = _orchestrator(store)

        def crash(_urls):
            raise RuntimeError("pool died")

        monkeypatch.setattr(orchestrator, "_run_all", crash)
        with pytest.raises(RuntimeError):
            orchestrator.export_selected("cv")
        assert store.selected_count("cv") == 0

    def test_results_in_submission_order(self, store):
        orchestrator = _orchestrator(store)
        ordered = list(reversed(URLS))
        results = orchestrator.export_selected("cv", ordered)
        assert [r.url for r in results] == ordered

    def test_set_selection_is_sorted(self, store):
        results = _orchestrator(store).export_selected("cv")
        assert [r.url for r in results] == sorted(URLS)

    def test_unexpected_service_exception_becomes_failure(self, store):
        orchestrator = _orchestrator(store)
        original = orchestrator.download_service.download

        def explode(url, file_name=None):
            if url == URLS[0]:
                raise ValueError("unexpected")
            return original(url, file_name)

        orchestrator.download_service.download = explode
        results = orchestrator.export_selected("cv")

        assert len(results) == len(URLS)
        assert results[0].error == "unexpected"
        assert all(r.succeeded for r in results[1:])

    def test_empty_selection(self, store):
        orchestrator = _orchestrator(store)
        assert orchestrator.export_selected("photo") == []

    def test_concurrency_is_bounded(self, store):
        active = 0
        peak = 0
        lock = threading.Lock()

        class SlowFetcher:
            def fetch_blob(self, url):
                nonlocal active, peak
                with lock:
                    active += 1
                    peak = max(peak, active)
                time.sleep(0.02)
                with lock:
                    active -= 1
                return b"x"

        service = DownloadService(SlowFetcher(), FakeSaver())
        orchestrator = BulkExportOrchestrator(service, store, max_workers=2)
        results = orchestrator.export_selected("cv")

        assert len(results) == len(URLS)
        assert peak <= 2

    def test_max_workers_must_be_positive(self, store):
        with pytest.raises(ValueError):
            _orchestrator(store, max_workers=0)

    def test_signals_and_stats(self, store):
        orchestrator = _orchestrator(store, failing=URLS[:1])
        started, finished, items = [], [], []
        orchestrator.export_started.connect(lambda key, count: started.append((key, count)))
        orchestrator.export_finished.connect(lambda key, results: finished.append((key, len(results))))
        orchestrator.item_finished.connect(items.append)

        orchestrator.export_selected("cv")

        assert started == [("cv", 5)]
        assert finished == [("cv", 5)]
        assert len(items) == 5
        assert orchestrator.stats["exports"] == 1
        assert orchestrator.stats["succeeded"] == 4
        assert orchestrator.stats["failed"] == 1

    def test_submission_order_helper(self):
        assert submission_order({"b", "a"}) == ["a", "b"]
        assert submission_order(["b", "a"]) == ["b", "a"]


class TestBulkExportWorker:
    def test_worker_reports_progress_and_results(self, store):
        orchestrator = _orchestrator(store, failing=URLS[:1])
        worker = BulkExportWorker(orchestrator, "cv", store.selected_urls("cv"))

        progress = []
        done = []
        worker.progress_updated.connect(lambda current, total, url: progress.append((current, total)))
        worker.finished_processing.connect(done.append)

        worker.start()
        assert worker.wait(5.0)

        assert done == [True]
        assert len(worker.results) == 5
        assert sorted(progress) == [(i, 5) for i in range(1, 6)]
        assert store.selected_count("cv") == 0
        # Worker detached itself from the orchestrator
        assert orchestrator.item_finished.receiver_count() == 0

    def test_worker_reports_crash(self, store, monkeypatch):
        orchestrator = _orchestrator(store)
        monkeypatch.setattr(orchestrator, "_run_all", lambda urls: 1 / 0)
        worker = BulkExportWorker(orchestrator, "cv")

        done = []
        worker.finished_processing.connect(done.append)
        worker.start()
        worker.wait(5.0)

        assert done == [False]
        assert worker.results == []

    def test_worker_thread_is_named_after_column(self, store):
        worker = BulkExportWorker(_orchestrator(store), "cv")
        assert worker.name == "bulk-export-cv"


class TestDownloadWorker:
    def test_download_runs_off_the_calling_thread(self):
        seen = []

        class ThreadRecordingFetcher(FakeFetcher):
            def fetch_blob(self, url):
                seen.append(threading.current_thread().name)
                return super().fetch_blob(url)

        service = DownloadService(ThreadRecordingFetcher(), FakeSaver(), FakeViewer())
        worker = DownloadWorker(service, URLS[0])
        finished, done = [], []
        worker.download_finished.connect(finished.append)
        worker.finished_processing.connect(done.append)

        worker.start()
        assert worker.wait(5.0)

        assert seen == ["download"]
        assert worker.result.succeeded
        assert finished == [worker.result]
        assert done == [True]

    def test_service_crash_becomes_failure(self, monkeypatch):
        service = DownloadService(FakeFetcher(), FakeSaver(), FakeViewer())
        monkeypatch.setattr(service, "download", lambda url, file_name=None: 1 / 0)
        worker = DownloadWorker(service, URLS[0])
        done = []
        worker.finished_processing.connect(done.append)

        worker.start()
        assert worker.wait(5.0)

        assert not worker.result.succeeded
        assert worker.result.error == "division by zero"
        assert done == [False]
