"""Module: smarttable.config.features

Date: 2026-10-19

Download behaviour and worker limits.
"""

import os

# =====================================
# DOWNLOADS
# =====================================

# Upper bound on concurrent fetches during a bulk export
DOWNLOAD_MAX_WORKERS = 4

# Socket timeout (seconds) for a single HTTP fetch
DOWNLOAD_TIMEOUT = 30

DOWNLOAD_CHUNK_SIZE = 64 * 1024

DOWNLOAD_USER_AGENT = "smarttable/1.0"

DEFAULT_DOWNLOAD_DIR = os.path.join(os.path.expanduser("~"), "Downloads")
