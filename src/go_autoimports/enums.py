"""
Enumerations for go-autoimports.

This module defines the enumerations shared by the insertion engine and the
package inventory.
"""

from enum import Enum


class ImportShape(str, Enum):
  """
  Syntactic form of a Go file's import section at the point of insertion.

  Determines which rewrite the insertion engine applies.
  """

  NONE = "none"  # no import declaration, insert after `package x`
  SINGLE = "single"  # import "path"
  BLOCK = "block"  # import ( ... )


class ImportScope(str, Enum):
  """
  Source of the import list attached to each inventory record.
  """

  FILE = "file"  # imports declared in that file
  PACKAGE = "package"  # imports of the whole package, as reported by `go list`
