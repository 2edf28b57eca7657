"""
Exception hierarchy for go-autoimports.

- ``ToolingError`` is fatal: the package inventory could not be built.
- ``InsertionError`` is per file: the driver reports it and moves on.
"""

from pathlib import Path
from typing import Union


class GoAutoImportsError(Exception):
  """Base class for all errors raised by go-autoimports."""


class ToolingError(GoAutoImportsError):
  """
  Raised when the Go toolchain query fails.

  Covers a missing ``go`` binary, a non-zero exit status, and output that
  cannot be parsed into inventory records.
  """


class InsertionError(GoAutoImportsError):
  """
  Raised when a blank import cannot be written into a source file.

  Attributes:
      file_path (str): The file being edited.
      import_path (str): The import that was being added.
  """

  def __init__(self, file_path: Union[str, Path], import_path: str, reason: str):
    self.file_path = str(file_path)
    self.import_path = import_path
    super().__init__(f"cannot add '{import_path}' to {self.file_path}: {reason}")
