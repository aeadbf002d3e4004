"""Module: smarttable.config

Date: 2026-10-19

Configuration package for smarttable.

This package organizes configuration into logical modules:
- app: Application info, debug flags, logging
- columns: Column classification vocabulary, formatting constants
- features: Download behaviour, worker limits, timeouts

All settings are re-exported from this module:
    from smarttable.config import APP_NAME, MEDIA_NAME_VOCABULARY
"""

from smarttable.config.app import *  # noqa: F401, F403
from smarttable.config.columns import *  # noqa: F401, F403
from smarttable.config.features import *  # noqa: F401, F403
