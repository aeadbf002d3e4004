"""Module: main.py

Date: 2026-10-19

Entry point for the smarttable viewer.

    smarttable records.json [--download-dir DIR] [--base-url URL] [--sort FIELD[:desc]]

Sets up logging, loads the records, and shows them in a SmartTableWidget
inside a main window.

Functions:
    main: Parses arguments and runs the Qt event loop.
"""

import argparse
import os
import sys
import time

from smarttable.config import APP_NAME, APP_VERSION, DEFAULT_DOWNLOAD_DIR, DEFAULT_WINDOW_SIZE, WINDOW_TITLE
from smarttable.utils.logging.init_logging import init_logging
from smarttable.utils.logging.logger_factory import get_cached_logger
from smarttable.utils.logging.logger_setup import ConfigureLogger

logger = get_cached_logger(__name__)


def get_user_config_dir(app_name: str = APP_NAME) -> str:
    """Get user configuration directory based on OS."""
    if os.name == "nt":
        base_dir = os.environ.get("APPDATA", os.path.expanduser("~"))
    else:
        base_dir = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return os.path.join(base_dir, app_name)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=APP_NAME, description="Browse query results with file columns.")
    parser.add_argument("path", nargs="?", help="JSON or CSV file with records")
    parser.add_argument("--title", default=WINDOW_TITLE, help="Table title")
    parser.add_argument("--download-dir", default=DEFAULT_DOWNLOAD_DIR, help="Where downloads are saved")
    parser.add_argument("--base-url", default=None, help="Base URL for root-relative file references")
    parser.add_argument("--sort", default=None, help="Initial sort as FIELD or FIELD:desc")
    parser.add_argument("--debug", action="store_true", help="Also write a DEBUG log file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser


def parse_sort(value):
    """'amount:desc' -> SortSpec('amount', DESC); None stays None."""
    from smarttable.models.sort_spec import SortSpec

    if not value:
        return None
    field, _, direction = value.partition(":")
    return SortSpec.parse(field, direction or "asc")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logs_dir = os.path.join(get_user_config_dir(), "logs")
    ConfigureLogger(log_name=APP_NAME, log_dir=logs_dir, file_enabled=False, debug_enabled=args.debug)
    init_logging(APP_NAME, logs_dir)

    now = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
    logger.info("Application started at %s", now)

    from smarttable.controllers.table_renderer import TableRenderer
    from smarttable.core.export import DirectoryFileSaver, DownloadService, RequestsFileFetcher
    from smarttable.core.pyqt_imports import QApplication, QMainWindow
    from smarttable.ui.widgets.smart_table_widget import SmartTableWidget
    from smarttable.utils.external_viewer import ExternalViewer
    from smarttable.utils.record_loader import RecordLoadError, load_records

    try:
        sort_spec = parse_sort(args.sort)
    except ValueError as e:
        logger.error("Invalid --sort value %r: %s", args.sort, e)
        return 2

    records = []
    if args.path:
        try:
            records = load_records(args.path)
        except RecordLoadError as e:
            logger.error("Could not load %s: %s", args.path, e)
            return 1

    app = QApplication(sys.argv[:1])
    app.setApplicationName(APP_NAME)

    viewer = ExternalViewer()
    service = DownloadService(
        RequestsFileFetcher(base_url=args.base_url),
        DirectoryFileSaver(args.download_dir),
        viewer,
    )
    renderer = TableRenderer(download_service=service, viewer=viewer)

    window = QMainWindow()
    window.setWindowTitle(f"{args.title} - {APP_NAME}")
    window.resize(*DEFAULT_WINDOW_SIZE)

    widget = SmartTableWidget(renderer, title=args.title)
    window.setCentralWidget(widget)

    def reload() -> None:
        if not args.path:
            return
        widget.set_loading(True)
        try:
            widget.set_records(load_records(args.path))
        except RecordLoadError as e:
            logger.error("Reload of %s failed: %s", args.path, e)
            widget.set_loading(False)

    widget.refresh_requested.connect(reload)
    widget.row_clicked.connect(lambda record: logger.info("Row clicked: %s", record))

    widget.set_records(records)
    if sort_spec is not None:
        renderer.set_sort(sort_spec)

    window.show()
    exit_code = app.exec_()
    service.fetcher.close()
    logger.info("Application exited with code %d", exit_code)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
