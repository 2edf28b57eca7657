"""
Discovery Subpackage.

Builds the list of entry files to check:

- ``inventory``: queries ``go list`` and parses its output into records.
- ``canonical``: keeps one record per package directory.
- ``detector``: finds which required imports each record lacks.
"""

from go_autoimports.discovery.canonical import canonicalize, filter_canonical
from go_autoimports.discovery.detector import find_missing_imports
from go_autoimports.discovery.inventory import SourceFileRecord, list_source_files

__all__ = [
  "SourceFileRecord",
  "canonicalize",
  "filter_canonical",
  "find_missing_imports",
  "list_source_files",
]
