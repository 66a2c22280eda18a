"""Tests for the codeqlkit command line, with the gh launcher faked out."""

import json

import pytest
from click.testing import CliRunner

from codeqlkit import __version__
from codeqlkit.cli import cli
from codeqlkit.codeql import CodeQL
from codeqlkit.commands import _common

from conftest import CODEQL_VERSION, JS_PACK_VERSION, FakeGh, fake_resolver, option_value

PINNED = [
    "--codeql-version", CODEQL_VERSION,
    "--pack", f"codeql/javascript-queries={JS_PACK_VERSION}",
]


@pytest.fixture
def runner():
    """Create CLI test runner."""
    return CliRunner()


@pytest.fixture
def fake_gh(monkeypatch):
    """Route every wrapper the commands build through one FakeGh."""
    gh = FakeGh()
    monkeypatch.setattr(_common, "CodeQL", lambda config: CodeQL(config, launcher=gh))
    return gh


@pytest.fixture
def root(tmp_path):
    """An empty --root so no .codeqlkit.json from the working directory leaks in."""
    path = tmp_path / "root"
    path.mkdir()
    return str(path)


class TestHelp:
    def test_root_help_lists_commands(self, runner):
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        for command in ["languages", "ensure-version", "create-db", "analyze", "suite", "resolve", "classify"]:
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    @pytest.mark.parametrize("command", ["create-db", "analyze", "suite", "resolve", "classify"])
    def test_command_help_is_ascii(self, runner, command):
        result = runner.invoke(cli, [command, "--help"])
        assert result.exit_code == 0
        assert "--codeql-version" in result.output
        result.output.encode("ascii")

    def test_command_help_is_rich_rendered(self, runner):
        result = runner.invoke(cli, ["create-db", "--help"])

        assert result.exit_code == 0
        assert "Usage: cli create-db [OPTIONS] LANGUAGE SOURCE_ROOT DATABASE" in result.output
        assert "Extract SOURCE_ROOT into a new CodeQL DATABASE." in result.output
        assert "codeqlkit create-db javascript ./src /tmp/js-db" in result.output
        assert "\b" not in result.output
        assert "Options:" in result.output
        assert "--pack NAME=VERSION" in result.output


class TestLanguages:
    def test_json(self, runner):
        result = runner.invoke(cli, ["languages", "--json"])
        assert result.exit_code == 0
        mapping = json.loads(result.output)
        assert mapping["javascript"] == "js"
        assert mapping["csharp"] == "cs"
        assert len(mapping) == 9

    def test_table(self, runner):
        result = runner.invoke(cli, ["languages"])
        assert result.exit_code == 0
        assert "swift" in result.output


class TestSuite:
    def test_prints_suite(self, runner, root):
        result = runner.invoke(cli, ["suite", "javascript", "js/xss", "--root", root, *PINNED])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == [
            {"queries": ".", "from": "codeql/javascript-queries", "version": JS_PACK_VERSION},
            {"include": {"id": ["js/xss"]}},
        ]

    def test_writes_suite(self, runner, root, tmp_path):
        output = tmp_path / "xss.qls"
        result = runner.invoke(
            cli, ["suite", "javascript", "js/xss", "js/zipslip", "-o", str(output), "--root", root, *PINNED]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text())[1]["include"]["id"] == ["js/xss", "js/zipslip"]

    def test_versions_from_config_file(self, runner, root):
        with open(f"{root}/.codeqlkit.json", "w") as f:
            json.dump({
                "codeql": {"version": CODEQL_VERSION},
                "packs": {"codeql/go-queries": "1.1.0"},
            }, f)

        result = runner.invoke(cli, ["suite", "go", "go/sql-injection", "--root", root])

        assert result.exit_code == 0, result.output
        assert json.loads(result.output)[0]["version"] == "1.1.0"

    def test_missing_pack_version(self, runner, root):
        result = runner.invoke(cli, ["suite", "python", "py/xss", "--root", root, *PINNED])

        assert result.exit_code == 1
        assert "MissingPackVersionError" in result.output
        assert "codeql/python-queries" in result.output

    def test_missing_cli_version(self, runner, root):
        result = runner.invoke(cli, ["suite", "javascript", "js/xss", "--root", root])

        assert result.exit_code == 1
        assert "ConfigError" in result.output

    def test_unknown_language_is_usage_error(self, runner, root):
        result = runner.invoke(cli, ["suite", "kotlin", "kt/xss", "--root", root, *PINNED])
        assert result.exit_code == 2

    def test_timeout_below_sentinel_is_usage_error(self, runner, root):
        result = runner.invoke(
            cli, ["suite", "javascript", "js/xss", "--timeout", "-2", "--root", root, *PINNED]
        )
        assert result.exit_code == 2


class TestCodeQLCommands:
    def test_ensure_version(self, runner, root, fake_gh):
        result = runner.invoke(cli, ["ensure-version", "--root", root, *PINNED])

        assert result.exit_code == 0, result.output
        assert CODEQL_VERSION in result.output
        assert fake_gh.commands("codeql", "set-version") == []

    def test_create_db(self, runner, root, fake_gh, tmp_path):
        source = tmp_path / "src"
        source.mkdir()
        database = tmp_path / "db"

        result = runner.invoke(
            cli, ["create-db", "java", str(source), str(database), "--root", root, *PINNED]
        )

        assert result.exit_code == 0, result.output
        [create] = fake_gh.commands("codeql", "database", "create")
        assert option_value(create, "--language") == "java"
        assert create[-1] == str(database.resolve())

    def test_analyze_failure_is_reported(self, runner, root, fake_gh, tmp_path):
        fake_gh.on("codeql", "database", "analyze", result=(32, "", "No queries found"))

        result = runner.invoke(
            cli, ["analyze", str(tmp_path), str(tmp_path / "out.sarif"), "codeql/javascript-queries",
                  "--root", root, *PINNED]
        )

        assert result.exit_code == 1
        assert "CommandExecutionError" in result.output
        assert "No queries found" in result.output

    def test_resolve_json(self, runner, root, fake_gh):
        fake_gh.on("codeql", "resolve", "queries", handler=fake_resolver([]))

        result = runner.invoke(
            cli, ["resolve", "javascript", "js/xss", "js/zipslip", "--json", "--root", root, *PINNED]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {
            "js/xss": "/packs/js/xss.ql",
            "js/zipslip": "/packs/js/zipslip.ql",
        }

    def test_resolve_reports_unresolved(self, runner, root, fake_gh):
        fake_gh.on("codeql", "resolve", "queries", result=(0, "[]", ""))

        result = runner.invoke(cli, ["resolve", "javascript", "js/nope", "--root", root, *PINNED])

        assert result.exit_code == 0, result.output
        assert "js/nope could not be resolved" in result.output

    def test_classify_json(self, runner, root, fake_gh, tmp_path):
        fake_gh.on("codeql", "resolve", "queries", handler=fake_resolver([]))

        def decode(args):
            with open(option_value(args, "--output"), "w") as f:
                json.dump({"#select": {"tuples": [[{"label": "/a/test.js"}, "test"]]}}, f)
            return 0, "", ""

        fake_gh.on("codeql", "bqrs", "decode", handler=decode)

        result = runner.invoke(
            cli, ["classify", str(tmp_path), "javascript", "--json", "--root", root, *PINNED]
        )

        assert result.exit_code == 0, result.output
        assert json.loads(result.output) == {"/a/test.js": "test"}


class TestRelativePaths:
    """Commands run with cwd set to the source root or database, so paths must arrive absolute."""

    @pytest.fixture
    def workspace(self, tmp_path, monkeypatch):
        work = tmp_path.resolve() / "work"
        (work / "src").mkdir(parents=True)
        (work / "db").mkdir()
        (work / "xss.qls").write_text("[]")
        monkeypatch.chdir(work)
        return work

    def test_create_db(self, runner, root, fake_gh, workspace):
        result = runner.invoke(cli, ["create-db", "javascript", "src", "newdb", "--root", root, *PINNED])

        assert result.exit_code == 0, result.output
        [call] = fake_gh.calls[-1:]
        assert option_value(call["args"], "--source-root") == str(workspace / "src")
        assert call["args"][-1] == str(workspace / "newdb")
        assert str(call["cwd"]) == str(workspace / "src")

    def test_analyze(self, runner, root, fake_gh, workspace):
        result = runner.invoke(
            cli, ["analyze", "db", "out.sarif", "xss.qls", "codeql/javascript-queries", "--root", root, *PINNED]
        )

        assert result.exit_code == 0, result.output
        [args] = fake_gh.commands("codeql", "database", "analyze")
        assert args[3] == str(workspace / "db")
        assert option_value(args, "--output") == str(workspace / "out.sarif")
        assert args[-2:] == [str(workspace / "xss.qls"), "codeql/javascript-queries"]

    def test_classify(self, runner, root, fake_gh, workspace):
        fake_gh.on("codeql", "resolve", "queries", handler=fake_resolver([]))

        def decode(args):
            with open(option_value(args, "--output"), "w") as f:
                json.dump({"#select": {"tuples": []}}, f)
            return 0, "", ""

        fake_gh.on("codeql", "bqrs", "decode", handler=decode)

        result = runner.invoke(cli, ["classify", "db", "javascript", "--json", "--root", root, *PINNED])

        assert result.exit_code == 0, result.output
        [run] = fake_gh.commands("codeql", "query", "run")
        assert option_value(run, "--database") == str(workspace / "db")
