"""Download pipeline: fetching, saving, single and bulk downloads."""

from smarttable.core.export.bulk_export import BulkExportOrchestrator
from smarttable.core.export.download_service import DownloadService
from smarttable.core.export.file_fetcher import FetchError, RequestsFileFetcher
from smarttable.core.export.file_saver import DirectoryFileSaver
from smarttable.core.export.protocols import ExternalViewer, FileFetcher, FileSaver

__all__ = [
    "BulkExportOrchestrator",
    "DirectoryFileSaver",
    "DownloadService",
    "ExternalViewer",
    "FetchError",
    "FileFetcher",
    "FileSaver",
    "RequestsFileFetcher",
]
