"""
Main Entry Point for the goautoimports CLI.

Parses arguments, resolves the ``RuntimeConfig`` and hands over to
:func:`go_autoimports.cli.handlers.autoimports.handle_autoimports`.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError
from rich.markup import escape

from go_autoimports import __version__
from go_autoimports.cli.handlers import autoimports
from go_autoimports.config import DEFAULT_ENTRY_NAME, DEFAULT_PACKAGES, RuntimeConfig
from go_autoimports.enums import ImportScope
from go_autoimports.utils.console import log_error, set_verbose


def build_parser() -> argparse.ArgumentParser:
  """
  Defines the command line surface. There are no subcommands.

  Returns:
      argparse.ArgumentParser: The configured parser.
  """
  parser = argparse.ArgumentParser(
    prog="goautoimports",
    description="goautoimports: automatically add blank imports to Go entry files",
  )
  parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
  parser.add_argument(
    "-m",
    "--module",
    default=None,
    help=f"Package name / entry file base name (default: {DEFAULT_ENTRY_NAME})",
  )
  parser.add_argument(
    "-p",
    "--pkg",
    default=None,
    help=f"Comma-separated import paths to require (default: {','.join(DEFAULT_PACKAGES)})",
  )
  parser.add_argument("--dryrun", action="store_true", help="Report missing imports without editing files")
  parser.add_argument("--verbose", action="store_true", help="Dump the inventory before and after filtering")
  parser.add_argument("--root", type=Path, default=None, help="Go module directory (default: current directory)")
  parser.add_argument("--go", dest="go_binary", default=None, help="Go toolchain executable (default: go)")
  parser.add_argument(
    "--scope",
    choices=[s.value for s in ImportScope],
    default=None,
    help="Compare against imports declared per file (default) or per package",
  )
  return parser


def main(argv: Optional[List[str]] = None) -> int:
  """
  Main CLI entry point.

  Args:
      argv: Optional list of command line arguments (defaults to sys.argv).

  Returns:
      int: Exit code (0 for success, non-zero for failure).
  """
  args = build_parser().parse_args(argv)
  set_verbose(args.verbose)

  try:
    config = RuntimeConfig.load(
      entry_name=args.module,
      packages=args.pkg,
      dry_run=args.dryrun,
      verbose=args.verbose,
      root=args.root,
      go_binary=args.go_binary,
      import_scope=args.scope,
    )
  except ValidationError as e:
    log_error(f"Invalid configuration: {escape(str(e))}")
    return 1

  return autoimports.handle_autoimports(config)


if __name__ == "__main__":
  sys.exit(main())
