"""
Runtime Configuration Store.

A single immutable ``RuntimeConfig`` is built per run (defaults, then the
nearest ``.go-autoimports.toml``, then CLI overrides) and passed explicitly to
every component.
"""

import re
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from rich.markup import escape

from go_autoimports.enums import ImportScope
from go_autoimports.utils.console import log_warning

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

DEFAULT_ENTRY_NAME = "main"
DEFAULT_PACKAGES = [
  "go.uber.org/automaxprocs",
  "github.com/KimMachineGun/automemlimit",
]
CONFIG_FILE_NAME = ".go-autoimports.toml"

_IDENTIFIER = re.compile(r"^\w+$", re.ASCII)


def parse_package_list(value: Union[str, List[str], None]) -> List[str]:
  """
  Normalizes a package list given as a comma-separated string or a list.

  Whitespace is trimmed, empty entries are dropped and duplicates are removed
  while keeping the first occurrence.

  Args:
      value: Raw value, e.g. ``"a/b, c/d"`` or ``["a/b", "c/d"]``.

  Returns:
      List[str]: The cleaned, ordered list of import paths.
  """
  if value is None:
    return []
  items = value.split(",") if isinstance(value, str) else list(value)

  result: List[str] = []
  for item in items:
    clean = str(item).strip()
    if clean and clean not in result:
      result.append(clean)
  return result


class RuntimeConfig(BaseModel):
  """
  Configuration container for a single remediation run.
  """

  model_config = ConfigDict(frozen=True)

  entry_name: str = Field(DEFAULT_ENTRY_NAME, description="Package name / entry file base name (e.g. 'main').")
  packages: List[str] = Field(
    default_factory=lambda: list(DEFAULT_PACKAGES),
    description="Import paths every entry file must blank-import.",
  )
  dry_run: bool = Field(False, description="If True, report missing imports without editing files.")
  verbose: bool = Field(False, description="If True, dump the inventory before and after filtering.")
  root: Path = Field(default_factory=Path.cwd, description="Directory `go list ./...` runs in.")
  go_binary: str = Field("go", description="Go toolchain executable.")
  import_scope: ImportScope = Field(ImportScope.FILE, description="Where record imports come from.")

  @field_validator("entry_name")
  @classmethod
  def validate_entry_name(cls, v: str) -> str:
    """
    Ensures the entry name is a plain Go identifier.

    The value is embedded in the `go list` template, so anything else is rejected.

    Raises:
        ValueError: If the name contains non-identifier characters.
    """
    v_clean = v.strip()
    if not _IDENTIFIER.match(v_clean):
      raise ValueError(f"Invalid module name: '{v}'. Expected a Go identifier such as 'main'.")
    return v_clean

  @field_validator("packages", mode="before")
  @classmethod
  def validate_packages(cls, v: Any) -> List[str]:
    """
    Accepts comma-separated strings and lists; rejects an empty result.

    Raises:
        ValueError: If no import path remains after normalization.
    """
    cleaned = parse_package_list(v)
    if not cleaned:
      raise ValueError("At least one import path is required.")
    return cleaned

  @property
  def entry_file_name(self) -> str:
    """
    The canonical file name of a package, e.g. ``main.go``.

    Returns:
        str: Entry name with the Go extension.
    """
    return f"{self.entry_name}.go"

  @classmethod
  def load(
    cls,
    entry_name: Optional[str] = None,
    packages: Union[str, List[str], None] = None,
    dry_run: bool = False,
    verbose: bool = False,
    root: Optional[Path] = None,
    go_binary: Optional[str] = None,
    import_scope: Optional[str] = None,
  ) -> "RuntimeConfig":
    """
    Loads configuration from `.go-autoimports.toml` and overrides with CLI arguments.

    Args:
        entry_name: Override for the entry name.
        packages: Override for the required imports.
        dry_run: Report only.
        verbose: Dump inventory tables.
        root: Directory of the Go module (also where the TOML search starts).
        go_binary: Override for the Go executable.
        import_scope: Override for the import scope ('file' or 'package').

    Returns:
        RuntimeConfig: The fully resolved configuration object.

    Raises:
        pydantic.ValidationError: If a resolved value is invalid.
    """
    final_root = (root or Path.cwd()).resolve()
    toml_config, _ = _load_toml_settings(final_root)

    return cls(
      entry_name=entry_name if entry_name is not None else toml_config.get("module", DEFAULT_ENTRY_NAME),
      packages=packages if packages is not None else toml_config.get("packages", DEFAULT_PACKAGES),
      dry_run=dry_run,
      verbose=verbose,
      root=final_root,
      go_binary=go_binary if go_binary is not None else toml_config.get("go", "go"),
      import_scope=import_scope if import_scope is not None else toml_config.get("scope", ImportScope.FILE),
    )


def _load_toml_settings(start_path: Path) -> Tuple[Dict[str, Any], Optional[Path]]:
  """
  Searches `start_path` and its parents for `.go-autoimports.toml`.

  Args:
      start_path (Path): Directory to start the search from.

  Returns:
      Tuple[Dict, Optional[Path]]: The settings and the directory they were found in.
  """
  for parent in [start_path, *start_path.parents]:
    toml_path = parent / CONFIG_FILE_NAME
    if toml_path.is_file():
      try:
        with open(toml_path, "rb") as f:
          return tomllib.load(f), parent
      except (OSError, tomllib.TOMLDecodeError) as e:
        log_warning(f"Ignoring unreadable config [path]{escape(str(toml_path))}[/path]: {escape(str(e))}")
        return {}, None

  return {}, None
