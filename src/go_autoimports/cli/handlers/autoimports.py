"""
Auto-Imports Command Handler.

Orchestrates a remediation run:
1. Inventory listing via ``go list`` (fatal on failure).
2. Canonicalization to one entry file per package directory.
3. Detection of missing blank imports.
4. Insertion, one file at a time, unless running dry.
5. Reporting and the closing ``go mod tidy`` reminder.
"""

from typing import Dict, List

from rich.markup import escape
from rich.table import Table

from go_autoimports.config import RuntimeConfig
from go_autoimports.core.inserter import insert_import
from go_autoimports.discovery.canonical import filter_canonical
from go_autoimports.discovery.detector import find_missing_imports
from go_autoimports.discovery.inventory import SourceFileRecord, list_source_files
from go_autoimports.errors import InsertionError, ToolingError
from go_autoimports.utils.console import (
  console,
  log_error,
  log_info,
  log_success,
  log_warning,
)

STATUS_ADDED = "added"
STATUS_UNCHANGED = "unchanged"
STATUS_FAILED = "failed"


def handle_autoimports(config: RuntimeConfig) -> int:
  """
  Runs the full missing-import remediation.

  Args:
      config: Resolved run configuration.

  Returns:
      int: Exit code (1 if the inventory could not be built, otherwise 0).
  """
  try:
    records = list_source_files(config)
  except ToolingError as e:
    log_error(f"Failed to list Go files: {escape(str(e))}")
    return 1

  if config.verbose:
    _print_inventory(f"module '{config.entry_name}' has {len(records)} go files", records)

  records = filter_canonical(config.entry_name, records)

  if config.verbose:
    _print_inventory(f"module '{config.entry_name}' has {len(records)} go files after filtering", records)

  missing = find_missing_imports(records, config.packages)
  outcomes: Dict[str, Dict[str, str]] = {}

  if not missing:
    log_success(f"All {len(records)} entry files already import the required packages.")

  for pkg in config.packages:
    files = missing.get(pkg)
    if not files:
      continue

    console.print(f"package [pkg]{escape(pkg)}[/pkg] is missing in the following files:")
    for file in files:
      console.print(f" - [path]{escape(file)}[/path]")

    if config.dry_run:
      continue

    for file in files:
      outcomes.setdefault(file, {})[pkg] = _add_import(file, pkg)

  if outcomes:
    _print_batch_summary(outcomes)

  log_info("goautoimports completed, please run [bold]go mod tidy[/bold] to clean up the imports.")
  return 0


def _add_import(file: str, pkg: str) -> str:
  """
  Inserts one import and reports the outcome. Never raises InsertionError.

  Returns:
      str: One of the ``STATUS_*`` constants.
  """
  try:
    result = insert_import(file, pkg)
  except InsertionError as e:
    log_error(f"failed to add {escape(pkg)} to {escape(file)}: {escape(str(e.__cause__ or e))}")
    return STATUS_FAILED

  if not result.changed:
    log_warning(f"no import section recognized in {escape(file)}; {escape(pkg)} not added, file left unchanged")
    return STATUS_UNCHANGED

  log_success(f"added {escape(pkg)} to {escape(file)}")
  return STATUS_ADDED


def _print_inventory(title: str, records: List[SourceFileRecord]) -> None:
  """
  Renders inventory records as a table.

  Args:
      title: Table caption.
      records: Records to list.
  """
  table = Table(title=title)
  table.add_column("Path", style="cyan")
  table.add_column("Imports")

  for record in records:
    table.add_row(escape(record.path), escape("\n".join(record.imports)) or "-")

  console.print(table)


def _print_batch_summary(outcomes: Dict[str, Dict[str, str]]) -> None:
  """
  Summarizes insertion outcomes; prints a table only if something went wrong.

  Args:
      outcomes: File path -> {import path -> status}.
  """
  statuses = [status for per_file in outcomes.values() for status in per_file.values()]
  added = statuses.count(STATUS_ADDED)
  problems = len(statuses) - added

  if problems == 0:
    log_success(f"Batch Complete: {added} imports added to {len(outcomes)} files.")
    return

  table = Table(title="Insertion Report")
  table.add_column("File", style="cyan")
  table.add_column("Import")
  table.add_column("Status", justify="center")

  for file, per_file in outcomes.items():
    for pkg, status in per_file.items():
      if status == STATUS_ADDED:
        continue
      label = "❌ Failed" if status == STATUS_FAILED else "⚠️ Unchanged"
      table.add_row(escape(file), escape(pkg), label)

  console.print(table)
  console.print(f"\n[bold]Summary:[/bold] {added} added, {problems} with issues.")
