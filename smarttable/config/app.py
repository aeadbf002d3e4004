"""Module: smarttable.config.app

Date: 2026-10-19

Application-level configuration: app info, logging settings.
"""

# =====================================
# APPLICATION INFORMATION
# =====================================

APP_NAME = "smarttable"
APP_VERSION = "1.0"

# Window
WINDOW_TITLE = "Query Results"
DEFAULT_WINDOW_SIZE = (1200, 760)

# =====================================
# LOGGING CONFIGURATION
# =====================================

# Console logging
LOG_TO_CONSOLE = True
LOG_CONSOLE_LEVEL = "INFO"

# File logging
LOG_TO_FILE = True
LOG_FILE_LEVEL = "INFO"
LOG_FILE_MAX_BYTES = 10_000_000  # 10MB per file
LOG_FILE_BACKUP_COUNT = 5

# Debug file logging
LOG_DEBUG_FILE_ENABLED = False
LOG_DEBUG_FILE_LEVEL = "DEBUG"
LOG_DEBUG_FILE_MAX_BYTES = 20_000_000  # 20MB per debug file
LOG_DEBUG_FILE_BACKUP_COUNT = 3

# Development logging settings
SHOW_DEV_ONLY_IN_CONSOLE = False
