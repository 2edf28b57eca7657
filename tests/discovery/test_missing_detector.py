"""
Tests for the Missing-Import Detector.

A file is listed under an import iff the exact string is absent from its imports.
"""

from go_autoimports.discovery.detector import find_missing_imports
from go_autoimports.discovery.inventory import SourceFileRecord

AMP = "go.uber.org/automaxprocs"
AML = "github.com/KimMachineGun/automemlimit"


def test_membership_is_exact():
  files = [
    SourceFileRecord(path="/m/a/main.go", imports=[AMP, AML]),
    SourceFileRecord(path="/m/b/main.go", imports=[AMP]),
    SourceFileRecord(path="/m/c/main.go", imports=[]),
  ]
  missing = find_missing_imports(files, [AMP, AML])

  assert missing == {
    AML: ["/m/b/main.go", "/m/c/main.go"],
    AMP: ["/m/c/main.go"],
  }


def test_property_iff_absent():
  """
  Exhaustive check of the membership property on a small grid.
  """
  required = ["a", "b", "c"]
  files = [
    SourceFileRecord(path=f"/m/{i}/main.go", imports=[r for j, r in enumerate(required) if (i >> j) & 1])
    for i in range(8)
  ]
  missing = find_missing_imports(files, required)

  for f in files:
    for r in required:
      assert (f.path in missing.get(r, [])) == (r not in f.imports)


def test_no_normalization():
  files = [SourceFileRecord(path="/m/main.go", imports=[AMP + "/", "Go.uber.org/automaxprocs"])]
  assert find_missing_imports(files, [AMP]) == {AMP: ["/m/main.go"]}


def test_nothing_missing_yields_empty_index():
  files = [SourceFileRecord(path="/m/main.go", imports=[AMP])]
  assert find_missing_imports(files, [AMP]) == {}
  assert find_missing_imports([], [AMP]) == {}
