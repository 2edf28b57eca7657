"""
Go Import-Section Grammar.

Line-level recognition of the Go constructs the engine cares about: the
package clause, one-line import declarations and parenthesized import blocks.

Patterns are matched against a single line with its terminator removed.
Nothing beyond the import section is parsed.
"""

import re
from typing import List, Optional, Sequence, Tuple

from go_autoimports.enums import ImportShape

PACKAGE_PATTERN = re.compile(r"^package\s+(\w+)$", re.ASCII)
IMPORT_BLOCK_PATTERN = re.compile(r"^import\s*\(\s*$", re.ASCII)
IMPORT_SINGLE_PATTERN = re.compile(r'^import\s+".+"$', re.ASCII)

# An import spec: optional name (`_`, `.` or identifier) followed by a quoted path.
_IMPORT_SPEC = re.compile(r'^(?:[\w.]+\s+)?(?:"([^"]+)"|`([^`]+)`)', re.ASCII)
_IMPORT_KEYWORD = re.compile(r"^import\b\s*(.*)$", re.ASCII)
_TOP_LEVEL_DECL = re.compile(r"^(?:func|type|var|const)\b", re.ASCII)
_LINE = re.compile(r"[^\n]*\n|[^\n]+\Z")


def split_lines(source: str) -> List[str]:
  """
  Splits Go source into lines, keeping terminators.

  Only ``\\n`` ends a line in Go; ``\\r`` stays attached to the content and is
  peeled off by :func:`split_line_ending`.

  Args:
      source (str): Full text of the file.

  Returns:
      List[str]: Lines whose concatenation is exactly `source`.
  """
  return _LINE.findall(source)


def split_line_ending(line: str) -> Tuple[str, str]:
  """
  Splits a line into its content and its terminator.

  Args:
      line (str): A line as produced by :func:`split_lines`.

  Returns:
      Tuple[str, str]: ``(content, terminator)``; the terminator may be empty.
  """
  if line.endswith("\r\n"):
    return line[:-2], "\r\n"
  if line.endswith("\n"):
    return line[:-1], "\n"
  return line, ""


def locate_import_section(lines: Sequence[str]) -> Tuple[Optional[ImportShape], Optional[int]]:
  """
  Finds the single line where a blank import should be inserted.

  The first pass looks for a one-line import or a block opener. Only when it
  finds neither does the second pass look for the package clause. In both
  passes the first match from the top wins.

  Args:
      lines: File lines without their terminators.

  Returns:
      Tuple[Optional[ImportShape], Optional[int]]: The detected shape and the
      0-based index of the trigger line, or ``(None, None)``.
  """
  for idx, line in enumerate(lines):
    if IMPORT_SINGLE_PATTERN.match(line):
      return ImportShape.SINGLE, idx
    if IMPORT_BLOCK_PATTERN.match(line):
      return ImportShape.BLOCK, idx

  for idx, line in enumerate(lines):
    if PACKAGE_PATTERN.match(line):
      return ImportShape.NONE, idx

  return None, None


def _strip_comments(line: str, in_comment: bool) -> Tuple[str, bool]:
  """
  Removes ``//`` and ``/* ... */`` comments from one line.

  Block comments may span lines, so the open/closed state is threaded through
  successive calls. A removed block comment leaves a single space behind.

  Returns:
      Tuple[str, bool]: The remaining text and whether a block comment is still open.
  """
  out: List[str] = []
  quote = None
  i = 0
  while i < len(line):
    if in_comment:
      end = line.find("*/", i)
      if end < 0:
        return "".join(out), True
      out.append(" ")
      i = end + 2
      in_comment = False
      continue
    ch = line[i]
    if quote:
      if ch == quote:
        quote = None
    elif ch in ('"', "`"):
      quote = ch
    elif line.startswith("//", i):
      break
    elif line.startswith("/*", i):
      in_comment = True
      i += 2
      continue
    out.append(ch)
    i += 1
  return "".join(out), in_comment


def _spec_path(spec: str) -> Optional[str]:
  m = _IMPORT_SPEC.match(spec.strip())
  if not m:
    return None
  return m.group(1) or m.group(2)


def declared_import_paths(source: str) -> List[str]:
  """
  Lists the import paths declared in a Go source file, in order.

  Understands ``import "p"``, ``import name "p"``, parenthesized blocks (one
  spec per line, or ``;``-separated on a single line), ``//`` and ``/* */``
  comments and back-quoted paths. Scanning stops at the first top-level
  ``func``, ``type``, ``var`` or ``const`` declaration since imports cannot
  follow them.

  Args:
      source (str): Full text of the file.

  Returns:
      List[str]: Import paths without quotes or names
      (``_ "go.uber.org/automaxprocs"`` yields ``go.uber.org/automaxprocs``).
  """
  paths: List[str] = []
  in_block = False
  in_comment = False

  for raw in source.splitlines():
    opened_in_comment = in_comment
    stripped, in_comment = _strip_comments(raw, in_comment)
    line = stripped.strip()
    if not line:
      continue

    if in_block:
      closed = line.endswith(")")
      body = line[:-1] if closed else line
      for spec in body.split(";"):
        path = _spec_path(spec)
        if path:
          paths.append(path)
      in_block = not closed
      continue

    if not opened_in_comment and _TOP_LEVEL_DECL.match(stripped):
      break

    m = _IMPORT_KEYWORD.match(line)
    if not m:
      continue

    rest = m.group(1)
    if not rest.startswith("("):
      path = _spec_path(rest)
      if path:
        paths.append(path)
      continue

    inner = rest[1:]
    closed = inner.rstrip().endswith(")")
    if closed:
      inner = inner.rstrip()[:-1]
    for spec in inner.split(";"):
      path = _spec_path(spec)
      if path:
        paths.append(path)
    in_block = not closed

  return paths
