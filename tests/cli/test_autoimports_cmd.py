"""
Tests for the goautoimports command.

The `go list` call is stubbed with a document rendered from real files under
``tmp_path``; everything else (filtering, detection, insertion, reporting)
runs for real.

Verifies that:
1.  Dry runs report but never write.
2.  Missing imports are added to canonical entry files only.
3.  A second run is a no-op (pipeline idempotence).
4.  Inventory failures abort with exit code 1; per-file failures do not.
5.  CLI flags map onto RuntimeConfig.
"""

from unittest.mock import patch

import pytest

from go_autoimports.cli.__main__ import main
from go_autoimports.cli.handlers.autoimports import handle_autoimports
from go_autoimports.config import RuntimeConfig
from go_autoimports.enums import ImportScope
from go_autoimports.errors import ToolingError

AMP = "go.uber.org/automaxprocs"
AML = "github.com/KimMachineGun/automemlimit"

SOURCES = {
  "cmd/api/main.go": 'package main\n\nimport "fmt"\n\nfunc main() { fmt.Println("api") }\n',
  "cmd/api/flags.go": 'package main\n\nimport "flag"\n\nvar port = flag.Int("port", 80, "")\n',
  "cmd/worker/main.go": f'package main\n\nimport (\n\t_ "{AMP}"\n\t"os"\n)\n\nfunc main() {{ os.Exit(0) }}\n',
  "cmd/bare/main.go": "// Command bare.\npackage main\n\nfunc main() {}\n",
}


@pytest.fixture
def module(tmp_path, go_tree, inventory_doc):
  """
  Writes a small Go module and stubs `go list` to report it.

  Yields:
      Path: The module root.
  """
  paths = go_tree(SOURCES)
  # go list reports the non-canonical file first for cmd/api.
  order = [paths[1], paths[0], paths[2], paths[3]]
  doc = inventory_doc([{"path": p, "imports": []} for p in order])

  with patch("go_autoimports.discovery.inventory.run_go_list", return_value=doc):
    yield tmp_path


def _snapshot(root):
  return {p.relative_to(root).as_posix(): p.read_bytes() for p in root.rglob("*.go")}


def test_dry_run_never_writes(module, captured_console):
  before = _snapshot(module)

  ret = handle_autoimports(RuntimeConfig(root=module, dry_run=True))

  assert ret == 0
  assert _snapshot(module) == before
  out = captured_console.getvalue()
  assert f"package {AMP} is missing in the following files:" in out
  assert f"package {AML} is missing in the following files:" in out
  assert "cmd/bare/main.go" in out
  assert "added" not in out
  assert "go mod tidy" in out


def test_adds_imports_to_canonical_files(module, captured_console):
  ret = handle_autoimports(RuntimeConfig(root=module))

  assert ret == 0
  api = (module / "cmd/api/main.go").read_text(encoding="utf-8")
  assert api == (
    "package main\n\nimport (\n"
    f'\t_ "{AML}"\n'
    f'\t_ "{AMP}"\n'
    '\t"fmt"\n)\n\nfunc main() { fmt.Println("api") }\n'
  )

  worker = (module / "cmd/worker/main.go").read_text(encoding="utf-8")
  assert worker.count(AMP) == 1
  assert f'import (\n\t_ "{AML}"\n\t_ "{AMP}"\n\t"os"\n)' in worker

  bare = (module / "cmd/bare/main.go").read_text(encoding="utf-8")
  # Each insertion lands right after the package clause, so the later one comes first.
  assert bare == f'// Command bare.\npackage main\nimport _ "{AML}"\nimport _ "{AMP}"\n\nfunc main() {{}}\n'

  # Non-canonical file is never edited
  assert (module / "cmd/api/flags.go").read_text(encoding="utf-8") == SOURCES["cmd/api/flags.go"]

  out = captured_console.getvalue()
  assert f"added {AMP} to" in out
  assert "go mod tidy" in out


def test_second_run_is_noop(module, captured_console):
  handle_autoimports(RuntimeConfig(root=module))
  after_first = _snapshot(module)

  handle_autoimports(RuntimeConfig(root=module))

  assert _snapshot(module) == after_first
  assert "already import the required packages" in captured_console.getvalue()


def test_tooling_error_aborts(tmp_path, captured_console):
  with patch(
    "go_autoimports.discovery.inventory.run_go_list",
    side_effect=ToolingError("go list failed: no Go files"),
  ):
    ret = handle_autoimports(RuntimeConfig(root=tmp_path))

  assert ret == 1
  assert "no Go files" in captured_console.getvalue()


def test_insertion_failure_does_not_stop_the_run(tmp_path, go_tree, inventory_doc, captured_console):
  """
  Scenario: One listed file vanished before insertion (package scope skips reading it).
  Expectation: Failure reported, the other file still edited, exit code 0.
  """
  (good,) = go_tree({"cmd/ok/main.go": "package main\n"})
  gone = tmp_path / "cmd" / "gone" / "main.go"
  doc = inventory_doc([{"path": gone, "imports": []}, {"path": good, "imports": []}])
  config = RuntimeConfig(root=tmp_path, packages=[AMP], import_scope=ImportScope.PACKAGE)

  with patch("go_autoimports.discovery.inventory.run_go_list", return_value=doc):
    ret = handle_autoimports(config)

  assert ret == 0
  assert good.read_text(encoding="utf-8") == f'package main\nimport _ "{AMP}"\n'
  out = captured_console.getvalue()
  assert f"failed to add {AMP} to {gone}" in out
  assert "Insertion Report" in out


def test_unrecognized_file_is_not_reported_as_added(tmp_path, go_tree, inventory_doc, captured_console):
  (odd,) = go_tree({"cmd/odd/main.go": "  package main\n"})
  doc = inventory_doc([{"path": odd, "imports": []}])

  with patch("go_autoimports.discovery.inventory.run_go_list", return_value=doc):
    ret = handle_autoimports(RuntimeConfig(root=tmp_path, packages=[AMP]))

  assert ret == 0
  assert odd.read_text(encoding="utf-8") == "  package main\n"
  out = captured_console.getvalue()
  assert "no import section recognized" in out
  assert f"added {AMP}" not in out


def test_verbose_dumps_inventory(module, captured_console):
  handle_autoimports(RuntimeConfig(root=module, dry_run=True, verbose=True))

  out = captured_console.getvalue()
  assert "module 'main' has 4 go files" in out
  assert "module 'main' has 3 go files after filtering" in out


@patch("go_autoimports.cli.handlers.autoimports.handle_autoimports", return_value=0)
def test_main_maps_flags(mock_handle, tmp_path):
  ret = main(["-m", "worker", "-p", "a/b, c/d,a/b", "--dryrun", "--root", str(tmp_path), "--scope", "package"])

  assert ret == 0
  config = mock_handle.call_args[0][0]
  assert config.entry_name == "worker"
  assert config.packages == ["a/b", "c/d"]
  assert config.dry_run is True
  assert config.verbose is False
  assert config.import_scope is ImportScope.PACKAGE


@patch("go_autoimports.cli.handlers.autoimports.handle_autoimports", return_value=0)
def test_main_defaults(mock_handle, tmp_path):
  main(["--root", str(tmp_path)])

  config = mock_handle.call_args[0][0]
  assert config.entry_name == "main"
  assert config.packages == [AMP, AML]
  assert config.dry_run is False


@patch("go_autoimports.cli.handlers.autoimports.handle_autoimports")
def test_main_rejects_bad_module(mock_handle, tmp_path, captured_console):
  ret = main(["--module", "not-a-name", "--root", str(tmp_path)])

  assert ret == 1
  mock_handle.assert_not_called()
  assert "Invalid configuration" in captured_console.getvalue()


def test_main_propagates_tooling_failure(tmp_path, captured_console):
  with patch("go_autoimports.discovery.inventory.subprocess.run", side_effect=FileNotFoundError("go")):
    ret = main(["--root", str(tmp_path), "--go", "missing-go"])

  assert ret == 1
  assert "Go toolchain not found" in captured_console.getvalue()


@pytest.mark.parametrize("flags", [["-p", ""], ["-m", ""], ["--pkg", " , "]])
@patch("go_autoimports.cli.handlers.autoimports.handle_autoimports")
def test_main_rejects_empty_values(mock_handle, flags, tmp_path, captured_console):
  """
  Scenario: An empty -p or -m is passed explicitly.
  Expectation: Configuration error, exit 1, no run with the defaults.
  """
  ret = main([*flags, "--root", str(tmp_path)])

  assert ret == 1
  mock_handle.assert_not_called()
  assert "Invalid configuration" in captured_console.getvalue()
