"""Open resources in an external browsing context.

Date: 2026-10-19

Used for media previews and as the fallback when a download fails.
Uses QDesktopServices when a QApplication is running and the webbrowser
module otherwise (tests, headless use).

Download fallbacks call open_external from worker threads. QDesktopServices
must only be used on the GUI thread, so those calls are queued to it through
a QObject relay that lives on the application's thread.
"""

import threading
import webbrowser

from smarttable.utils.logging.logger_factory import get_cached_logger

logger = get_cached_logger(__name__)

_relay = None
_relay_lock = threading.Lock()


def _desktop_open(url: str) -> bool:
    from smarttable.core.pyqt_imports import QDesktopServices, QUrl

    return bool(QDesktopServices.openUrl(QUrl.fromUserInput(url)))


def _gui_relay(app):
    """Relay whose open_requested(str) is handled on app's thread (created once)."""
    global _relay
    from smarttable.core.pyqt_imports import QObject, pyqtSignal, pyqtSlot

    with _relay_lock:
        if _relay is None:

            class GuiOpenRelay(QObject):
                open_requested = pyqtSignal(str)

                @pyqtSlot(str)
                def open_url(self, url: str) -> None:
                    try:
                        opened = _desktop_open(url)
                    except Exception:
                        logger.exception("[ExternalViewer] Failed to open %s", url)
                        return
                    if not opened:
                        logger.warning("[ExternalViewer] Platform refused to open %s", url)

            relay = GuiOpenRelay()
            relay.moveToThread(app.thread())
            relay.open_requested.connect(relay.open_url)
            _relay = relay
        return _relay


def _open_with_qt(url: str) -> bool | None:
    """Open through Qt. Returns None when no QApplication is running.

    Off the GUI thread the request is queued and True is returned.
    """
    from smarttable.core.pyqt_imports import QApplication

    app = QApplication.instance()
    if app is None:
        return None

    if threading.current_thread() is threading.main_thread():
        return _desktop_open(url)

    logger.debug(
        "[ExternalViewer] Queuing %s to the GUI thread", url, extra={"dev_only": True}
    )
    _gui_relay(app).open_requested.emit(url)
    return True


def open_external(url: str) -> bool:
    """Open url in a new external context (browser tab, default viewer).

    Args:
        url: Resource URL or local path

    Returns:
        True if the platform accepted (or, from a worker thread, was sent)
        the request, False otherwise

    """
    if not isinstance(url, str) or not url.strip():
        logger.warning("[ExternalViewer] Refusing to open empty url: %r", url)
        return False

    try:
        opened = _open_with_qt(url)
        if opened is None:
            opened = webbrowser.open_new_tab(url)
    except Exception:
        logger.exception("[ExternalViewer] Failed to open %s", url)
        return False

    logger.debug("[ExternalViewer] open %s -> %s", url, opened, extra={"dev_only": True})
    return bool(opened)


class ExternalViewer:
    """Default ExternalViewer implementation backed by open_external."""

    def open(self, url: str) -> bool:
        return open_external(url)
