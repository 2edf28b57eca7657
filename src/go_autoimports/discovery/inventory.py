"""
Package Inventory Source.

Lists the Go files of every package named after the entry name by running
``go list`` with a template that renders a YAML document:

.. code-block:: yaml

    - path: "/repo/cmd/api/main.go"
      imports:
        - "fmt"
        - "net/http"

The document is parsed with PyYAML and validated into ``SourceFileRecord``
models. ``go list`` only knows package-level imports, so with
``ImportScope.FILE`` each record's imports are re-read from the file itself.
"""

import logging
import subprocess
from pathlib import Path
from typing import Any, List, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from go_autoimports.config import RuntimeConfig
from go_autoimports.core.grammar import declared_import_paths
from go_autoimports.enums import ImportScope
from go_autoimports.errors import ToolingError

logger = logging.getLogger(__name__)


class SourceFileRecord(BaseModel):
  """
  One Go file and the import paths it declares.
  """

  path: str = Field(..., description="File path as reported by the toolchain.")
  imports: List[str] = Field(default_factory=list, description="Import paths, in declaration order.")

  @field_validator("imports", mode="before")
  @classmethod
  def default_imports(cls, v: Any) -> Any:
    """A file without imports renders as an empty ``imports:`` key (YAML null)."""
    return [] if v is None else v

  @property
  def directory(self) -> str:
    return str(Path(self.path).parent)

  @property
  def name(self) -> str:
    return Path(self.path).name


def build_list_template(entry_name: str) -> str:
  """
  Builds the ``go list -f`` template for packages named `entry_name`.

  Paths and imports are emitted with ``%q`` so they are valid YAML
  double-quoted scalars on every platform.

  Args:
      entry_name (str): Package name to select (a Go identifier).

  Returns:
      str: The text/template source.
  """
  return "".join(
    [
      "{{ range .GoFiles }}",
      f'{{{{ if eq $.Name "{entry_name}" }}}}',
      '{{ printf "- path: %q\\n" (printf "%s/%s" $.Dir .) }}',
      '{{ printf "  imports:\\n" }}',
      "{{ range $.Imports }}",
      '{{ printf "    - %q\\n" . }}',
      "{{ end }}",
      "{{ end }}",
      "{{ end }}",
    ]
  )


def parse_inventory(document: str) -> List[SourceFileRecord]:
  """
  Parses the YAML rendered by the ``go list`` template.

  Args:
      document (str): Raw standard output of ``go list``.

  Returns:
      List[SourceFileRecord]: One record per file; empty for empty output.

  Raises:
      ToolingError: If the output is not a YAML list of ``{path, imports}`` mappings.
  """
  try:
    data = yaml.safe_load(document)
  except yaml.YAMLError as e:
    raise ToolingError(f"Unparsable go list output: {e}") from e

  if data is None:
    return []
  if not isinstance(data, list):
    raise ToolingError(f"Unexpected go list output: expected a list, got {type(data).__name__}")

  try:
    return [SourceFileRecord.model_validate(item) for item in data]
  except ValidationError as e:
    raise ToolingError(f"Malformed go list record: {e}") from e


def run_go_list(config: RuntimeConfig) -> str:
  """
  Executes ``go list -f <template> ./...`` in the configured root.

  Args:
      config (RuntimeConfig): Run configuration (root, go binary, entry name).

  Returns:
      str: Standard output of the command.

  Raises:
      ToolingError: If the binary is missing or exits with a non-zero status.
  """
  cmd = [config.go_binary, "list", "-f", build_list_template(config.entry_name), "./..."]
  logger.debug(f"Running {' '.join(cmd[:2])} in {config.root}")
  try:
    proc = subprocess.run(cmd, cwd=str(config.root), capture_output=True, text=True, check=False)
  except FileNotFoundError as e:
    raise ToolingError(f"Go toolchain not found: '{config.go_binary}'") from e
  except OSError as e:
    raise ToolingError(f"Failed to run '{config.go_binary}': {e}") from e

  if proc.returncode != 0:
    detail = proc.stderr.strip() or f"exit status {proc.returncode}"
    raise ToolingError(f"go list failed: {detail}")
  return proc.stdout


def _read_declared_imports(path: str) -> List[str]:
  try:
    with open(path, "rt", encoding="utf-8") as f:
      return declared_import_paths(f.read())
  except (OSError, UnicodeDecodeError) as e:
    raise ToolingError(f"Cannot read imports of {path}: {e}") from e


def list_source_files(config: RuntimeConfig, document: Optional[str] = None) -> List[SourceFileRecord]:
  """
  Returns one record per Go file of every package named ``config.entry_name``.

  Args:
      config (RuntimeConfig): Run configuration.
      document (Optional[str]): Pre-rendered ``go list`` output. When omitted
          the toolchain is invoked.

  Returns:
      List[SourceFileRecord]: Records in toolchain order.

  Raises:
      ToolingError: On any toolchain, parse or read failure. Never retried.
  """
  if document is None:
    document = run_go_list(config)
  records = parse_inventory(document)

  if config.import_scope is ImportScope.FILE:
    records = [SourceFileRecord(path=r.path, imports=_read_declared_imports(r.path)) for r in records]

  logger.debug(f"Inventory for '{config.entry_name}' holds {len(records)} files")
  return records
