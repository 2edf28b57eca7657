"""
Import Insertion Engine.

Adds a blank (side-effect) import to a Go source file with exactly one
line-level edit:

1.  **Single**: ``import "fmt"`` becomes a parenthesized block holding the
    blank import followed by the original literal.
2.  **Block**: the blank import is added right after ``import (``.
3.  **None**: ``import _ "<path>"`` is added right after the package clause.

Every other line, including its own line terminator, is kept verbatim. The
engine does not check whether the import already exists; that is the
detector's job.
"""

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import List, Union

from go_autoimports.core.grammar import locate_import_section, split_line_ending, split_lines
from go_autoimports.core.insertion_result import InsertionResult
from go_autoimports.enums import ImportShape
from go_autoimports.errors import InsertionError

logger = logging.getLogger(__name__)


def rewrite_source(source: str, import_path: str) -> InsertionResult:
  """
  Inserts ``_ "<import_path>"`` into Go source text.

  Args:
      source (str): Full text of the file.
      import_path (str): The import path to add, without quotes.

  Returns:
      InsertionResult: The new text and the shape that was used. When no
      shape is recognized the text is returned unchanged with ``shape=None``.
  """
  raw_lines = split_lines(source)
  split = [split_line_ending(line) for line in raw_lines]
  shape, idx = locate_import_section([content for content, _ in split])

  if shape is None:
    return InsertionResult(code=source)

  content, eol = split[idx]
  # Added lines reuse the trigger line's terminator.
  nl = eol or "\n"
  blank = f'_ "{import_path}"'

  if shape is ImportShape.SINGLE:
    literal = content[len("import") :].strip()
    replacement = f"import ({nl}\t{blank}{nl}\t{literal}{nl}){eol}"
  elif shape is ImportShape.BLOCK:
    replacement = f"{content}{nl}\t{blank}{eol}"
  else:
    replacement = f"{content}{nl}import {blank}{eol}"

  new_lines: List[str] = raw_lines[:idx] + [replacement] + raw_lines[idx + 1 :]
  return InsertionResult(code="".join(new_lines), shape=shape, line=idx + 1)


def insert_import(file_path: Union[str, Path], import_path: str) -> InsertionResult:
  """
  Adds a blank import to a file on disk.

  The file is read as UTF-8 without newline translation. If an edit applies,
  the new text replaces the file atomically; otherwise the file is left alone.

  Args:
      file_path: Go source file to edit.
      import_path: The import path to add.

  Returns:
      InsertionResult: Outcome of the rewrite.

  Raises:
      InsertionError: If the file cannot be read or written.
  """
  path = Path(file_path)
  try:
    with open(path, "rt", encoding="utf-8", newline="") as f:
      source = f.read()
  except (OSError, UnicodeDecodeError) as e:
    raise InsertionError(path, import_path, f"read failed: {e}") from e

  result = rewrite_source(source, import_path)
  if not result.changed:
    logger.debug(f"No import section recognized in {path}")
    return result

  try:
    _write_atomic(path, result.code)
  except OSError as e:
    raise InsertionError(path, import_path, f"write failed: {e}") from e

  logger.debug(f"Inserted {import_path} into {path} ({result.shape.value} shape, line {result.line})")
  return result


def _write_atomic(path: Path, text: str) -> None:
  """
  Replaces `path` with `text` via a sibling temporary file and ``os.replace``.

  Symlinks are followed so the link target is rewritten, not the link. The
  original permission bits are carried over. The temporary file is removed if
  anything fails before the rename.
  """
  path = path.resolve()
  fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
  try:
    with os.fdopen(fd, "wt", encoding="utf-8", newline="") as f:
      f.write(text)
    shutil.copymode(path, tmp_name)
    os.replace(tmp_name, path)
  except BaseException:
    Path(tmp_name).unlink(missing_ok=True)
    raise
