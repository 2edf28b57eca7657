"""
go-autoimports Package.

Ensures that the entry file of every Go package of a given name blank-imports
a set of side-effect packages (by default ``go.uber.org/automaxprocs`` and
``github.com/KimMachineGun/automemlimit``), and inserts the imports where they
are missing.

Usage
-----

.. code-block:: python

    from go_autoimports import rewrite_source

    res = rewrite_source('package main\\n\\nimport "fmt"\\n', "go.uber.org/automaxprocs")
    print(res.code)
    # package main
    #
    # import (
    #     _ "go.uber.org/automaxprocs"
    #     "fmt"
    # )
"""

__version__ = "0.1.0"

from go_autoimports.config import RuntimeConfig
from go_autoimports.core.inserter import insert_import, rewrite_source
from go_autoimports.discovery.canonical import filter_canonical
from go_autoimports.discovery.detector import find_missing_imports
from go_autoimports.discovery.inventory import SourceFileRecord, list_source_files

__all__ = [
  "RuntimeConfig",
  "SourceFileRecord",
  "__version__",
  "filter_canonical",
  "find_missing_imports",
  "insert_import",
  "list_source_files",
  "rewrite_source",
]
