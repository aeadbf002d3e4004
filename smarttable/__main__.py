"""Module: smarttable.__main__

This module allows the smarttable package to be executed as a module using:
    python -m smarttable records.json
"""

import sys

from smarttable.main import main

if __name__ == "__main__":
    sys.exit(main())
