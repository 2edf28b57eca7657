"""
Core Subpackage.

Holds the import-section grammar and the insertion engine that edits Go files.
"""

from go_autoimports.core.inserter import insert_import, rewrite_source
from go_autoimports.core.insertion_result import InsertionResult

__all__ = ["InsertionResult", "insert_import", "rewrite_source"]
