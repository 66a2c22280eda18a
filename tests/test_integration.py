"""End-to-end run against the real gh CLI.

Downloads the pinned CodeQL CLI and query pack on first use, so this is
slow and needs network access. Deselected by default; run with
`pytest -m integration`.
"""

import json

import pytest

from codeqlkit import CodeQL

pytestmark = pytest.mark.integration


@pytest.fixture
def js_project(tmp_path):
    """A tiny JavaScript project with one source file and one test file."""
    project = tmp_path / "project"
    (project / "src").mkdir(parents=True)
    (project / "test").mkdir()
    (project / "src" / "index.js").write_text(
        "function add(a, b) {\n  return a + b;\n}\nmodule.exports = { add };\n"
    )
    (project / "test" / "index.test.js").write_text(
        "const { add } = require('../src/index');\n"
        "describe('add', () => {\n  it('adds', () => { if (add(1, 2) !== 3) throw new Error(); });\n});\n"
    )
    return project


def test_create_analyze_classify(real_gh, js_project, tmp_path):
    codeql = CodeQL.make("2.20.0", {"codeql/javascript-queries": "1.2.5"}, timeout=30 * 60)
    assert isinstance(codeql, CodeQL)
    assert codeql.cli_version == "2.20.0"

    database = tmp_path / "db"
    codeql.create_database("javascript", js_project, database)

    results_path = tmp_path / "results.sarif"
    with codeql.make_suite("javascript", "js/xss", "js/path-injection") as suite:
        codeql.analyze_database(database, results_path, suite.name)

    sarif = json.loads(results_path.read_text(encoding="utf-8"))
    assert sarif["runs"][0]["results"] == []

    classification = codeql.classify_files(database, "javascript")
    assert classification[str(js_project / "test" / "index.test.js")] == "test"
