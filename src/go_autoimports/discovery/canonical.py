"""
Canonicalization Filter.

A package directory usually holds several files, but only one of them should
be checked and edited. This module keeps one record per directory, preferring
the file named ``<entry_name>.go``.
"""

from typing import Dict, Iterable, List

from go_autoimports.discovery.inventory import SourceFileRecord


def canonicalize(entry_name: str, records: Iterable[SourceFileRecord]) -> Dict[str, SourceFileRecord]:
  """
  Folds inventory records into at most one record per directory.

  The first record seen for a directory is kept until a record named
  ``<entry_name>.go`` arrives for that directory. A canonically named record is
  never replaced by a non-canonical one.

  Args:
      entry_name (str): Entry name without extension (e.g. "main").
      records: Records in toolchain order.

  Returns:
      Dict[str, SourceFileRecord]: Directory -> retained record.
  """
  canonical_name = f"{entry_name}.go"
  visit: Dict[str, SourceFileRecord] = {}

  for record in records:
    directory = record.directory
    if record.name == canonical_name or directory not in visit:
      visit[directory] = record

  return visit


def filter_canonical(entry_name: str, records: Iterable[SourceFileRecord]) -> List[SourceFileRecord]:
  """
  List form of :func:`canonicalize`. Callers must not rely on the order.
  """
  return list(canonicalize(entry_name, records).values())
