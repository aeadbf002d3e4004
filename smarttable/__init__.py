"""smarttable - column-introspecting table for query results.

Classifies columns (detecting file/media columns), sorts with nulls last,
tracks per-column file selection and downloads files singly or in bulk.
The core is Qt-free; the PyQt5 presentation lives in smarttable.ui.
"""

from smarttable.config import APP_VERSION

__version__ = APP_VERSION
