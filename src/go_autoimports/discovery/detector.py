"""
Missing-Import Detector.

Membership is an exact string match against each record's import list. An
aliased or otherwise equivalent spelling counts as absent.
"""

from typing import Dict, Iterable, List

from go_autoimports.discovery.inventory import SourceFileRecord


def find_missing_imports(files: Iterable[SourceFileRecord], required: Iterable[str]) -> Dict[str, List[str]]:
  """
  Maps each required import to the files that do not declare it.

  Args:
      files: Canonical records to check.
      required: Import paths every file must declare.

  Returns:
      Dict[str, List[str]]: Import path -> file paths lacking it. Imports
      present everywhere have no key.
  """
  required = list(required)
  missing: Dict[str, List[str]] = {}

  for record in files:
    declared = set(record.imports)
    for pkg in required:
      if pkg not in declared:
        missing.setdefault(pkg, []).append(record.path)

  return missing
