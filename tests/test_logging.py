"""
Module: test_logging.py

Date: 2026-10-19

Tests the logging setup:
- activity log receives info and above, error log only errors
- a name-filtered file handler only keeps its own logger's records
- dev-only records are hidden from the console filter
- cached loggers are reused
"""

import logging

import pytest

from smarttable.utils.logging.init_logging import init_logging
from smarttable.utils.logging.logger_factory import LoggerFactory, get_cached_logger
from smarttable.utils.logging.logger_file_helper import NameFilter, add_file_handler
from smarttable.utils.logging.logger_helper import DevOnlyFilter, get_logger, safe_text
from smarttable.utils.logging.logger_setup import ConfigureLogger


@pytest.fixture
def detach_handlers():
    """Remove and close handlers attached during a test."""
    attached = []
    yield attached
    for logger, handler in attached:
        logger.removeHandler(handler)
        handler.close()


def _record(message, **extra):
    record = logging.LogRecord("smarttable.test", logging.DEBUG, __file__, 1, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_cached_logger_is_reused():
    first = get_cached_logger("smarttable.tests.cache")
    second = get_cached_logger("smarttable.tests.cache")

    assert first is second
    assert "smarttable.tests.cache" in LoggerFactory.get_cached_names()


def test_logger_without_name_uses_caller_module():
    assert get_cached_logger().name == __name__


def test_get_logger_propagates_to_root():
    logger = get_logger("smarttable.tests.propagate")
    assert logger.propagate
    assert getattr(logger, "_patched_for_safe_log", False)


def test_dev_only_filter():
    log_filter = DevOnlyFilter()
    assert log_filter.filter(_record("visible"))
    assert not log_filter.filter(_record("hidden", dev_only=True))


def test_safe_text_replaces_symbols():
    assert safe_text("a → b … c • d") == "a -> b ... c * d"
    assert safe_text("plain") == "plain"


def test_name_filter():
    name_filter = NameFilter("smarttable.test")
    assert name_filter.filter(_record("x"))
    other = _record("x")
    other.name = "other"
    assert not name_filter.filter(other)


def test_init_logging_splits_activity_and_errors(tmp_path, detach_handlers):
    logger = init_logging("smarttable_test", str(tmp_path))
    logger.setLevel(logging.DEBUG)
    detach_handlers.extend((logger, handler) for handler in list(logger.handlers))

    logger.debug("debug line")
    logger.info("info line")
    logger.error("error line")
    for _, handler in detach_handlers:
        handler.flush()

    activity = (tmp_path / "smarttable_test_activity.log").read_text(encoding="utf-8")
    errors = (tmp_path / "smarttable_test_errors.log").read_text(encoding="utf-8")

    assert "info line" in activity
    assert "error line" in activity
    assert "debug line" not in activity
    assert "error line" in errors
    assert "info line" not in errors


def test_filtered_file_handler(tmp_path, detach_handlers):
    downloads = logging.getLogger("smarttable.tests.downloads")
    downloads.setLevel(logging.INFO)
    log_path = tmp_path / "nested" / "downloads.log"
    handler = add_file_handler(
        downloads, str(log_path), level=logging.INFO, filter_by_name="smarttable.tests.downloads"
    )
    detach_handlers.append((downloads, handler))

    child = logging.getLogger("smarttable.tests.downloads.child")
    downloads.info("saved cv.pdf")
    child.info("from child")
    handler.flush()

    content = log_path.read_text(encoding="utf-8")
    assert "saved cv.pdf" in content
    assert "from child" not in content


def test_configure_logger_installs_handlers_once(tmp_path, monkeypatch):
    root = logging.getLogger()
    monkeypatch.setattr(root, "handlers", [])
    previous_level = root.level
    try:
        ConfigureLogger(log_name="session", log_dir=str(tmp_path), file_enabled=True)
        installed = list(root.handlers)
        ConfigureLogger(log_name="session", log_dir=str(tmp_path), file_enabled=True)

        assert root.handlers == installed
        assert len(installed) == 2
        assert list(tmp_path.glob("session_*.log"))
        console = installed[0]
        assert any(isinstance(f, DevOnlyFilter) for f in console.filters)
    finally:
        for handler in root.handlers:
            handler.close()
        root.setLevel(previous_level)
