"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- A console capture fixture so report output can be asserted on.
- Helpers to lay out a fake Go module on disk.
"""

import io
import sys
from pathlib import Path
from typing import Callable, Dict, List

import pytest

# Add src to path so we can import 'go_autoimports' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from go_autoimports.utils.console import make_console, reset_console, set_console  # noqa: E402


@pytest.fixture
def captured_console():
  """
  Redirects console and logging output to an in-memory buffer.

  Yields:
      io.StringIO: The buffer; read it with ``getvalue()``.
  """
  buffer = io.StringIO()
  set_console(make_console(file=buffer, width=400, color_system=None, emoji=False))
  yield buffer
  reset_console()


@pytest.fixture
def go_tree(tmp_path) -> Callable[[Dict[str, str]], List[Path]]:
  """
  Factory writing Go files under ``tmp_path``.

  Usage: ``go_tree({"cmd/api/main.go": "package main\\n"})``.
  """

  def _build(files: Dict[str, str]) -> List[Path]:
    written = []
    for rel, content in files.items():
      path = tmp_path / rel
      path.parent.mkdir(parents=True, exist_ok=True)
      path.write_bytes(content.encode("utf-8"))
      written.append(path)
    return written

  return _build


@pytest.fixture
def inventory_doc() -> Callable[[List[Dict]], str]:
  """
  Factory rendering records the way the ``go list`` template does.

  Usage: ``inventory_doc([{"path": "/m/main.go", "imports": ["fmt"]}])``.
  """

  def _render(entries: List[Dict]) -> str:
    out = []
    for entry in entries:
      out.append(f"- path: {_quote(str(entry['path']))}\n")
      out.append("  imports:\n")
      for imp in entry.get("imports", []):
        out.append(f"    - {_quote(imp)}\n")
    return "".join(out)

  return _render


def _quote(value: str) -> str:
  # Same escaping Go's %q applies to the characters that matter here.
  return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
