"""
Entry point for module execution (``python -m go_autoimports``).

This module delegates execution to the CLI handler in ``go_autoimports.cli.__main__``.
"""

import sys
from go_autoimports.cli.__main__ import main

if __name__ == "__main__":
  sys.exit(main())
