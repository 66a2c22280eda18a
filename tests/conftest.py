"""Pytest configuration and fixtures."""
import json
import shutil
from pathlib import Path

import pytest

from codeqlkit.codeql import CodeQL
from codeqlkit.config import CodeQLConfig
from codeqlkit.errors import CommandExecutionError

CODEQL_VERSION = "2.20.0"
JS_PACK_VERSION = "1.2.5"


class FakeGh:
    """Stand-in for GhLauncher that records calls and answers from handlers.

    Handlers are keyed by an argument prefix; the longest matching prefix
    wins. Without a handler, `gh --version`, `gh extensions list` and
    `gh codeql version` answer like a healthy installation and everything
    else succeeds with empty output.
    """

    executable = "gh"

    def __init__(self, version: str = CODEQL_VERSION):
        self.version = version
        self.calls: list[dict] = []
        self.handlers: dict[tuple[str, ...], object] = {}

    def on(self, *prefix: str, result=None, handler=None):
        if handler is None:
            handler = lambda args: result  # noqa: E731
        self.handlers[prefix] = handler

    def commands(self, *prefix: str) -> list[list[str]]:
        """Recorded argument vectors starting with `prefix`."""
        return [c["args"] for c in self.calls if tuple(c["args"][: len(prefix)]) == prefix]

    def run(self, args, cwd=None, env=None):
        args = list(args)
        self.calls.append({"args": args, "cwd": cwd, "env": env})

        for prefix in sorted(self.handlers, key=len, reverse=True):
            if tuple(args[: len(prefix)]) == prefix:
                return self.handlers[prefix](args)

        if args == ["--version"]:
            return 0, "gh version 2.63.0 (2024-12-05)\n", ""
        if args == ["extensions", "list"]:
            return 0, "gh codeql\tgithub/gh-codeql\tv1.1.8\n", ""
        if args[:2] == ["codeql", "version"]:
            return 0, f"{self.version}\n", ""
        return 0, "", ""

    def check(self, args, cwd=None):
        exit_code, stdout, stderr = self.run(args, cwd=cwd)
        if exit_code != 0:
            raise CommandExecutionError([self.executable, *args], exit_code, stderr)
        return stdout


def option_value(args: list[str], option: str) -> str:
    """Value following `option` in an argument vector."""
    return args[args.index(option) + 1]


def fake_resolver(resolved_batches: list[list[str]]):
    """Handler for `codeql resolve queries` that echoes suite IDs as paths.

    Each call appends the IDs found in the suite file to `resolved_batches`.
    """

    def handler(args):
        suite = json.loads(Path(args[-1]).read_text(encoding="utf-8"))
        ids = suite[1]["include"]["id"]
        resolved_batches.append(ids)
        return 0, json.dumps([f"/packs/{query_id}.ql" for query_id in ids]), ""

    return handler


@pytest.fixture
def fake_gh():
    return FakeGh()


@pytest.fixture
def codeql_config(tmp_path):
    """Config with the JavaScript pack pinned and temp files under tmp_path."""
    temp_dir = tmp_path / "tmp"
    temp_dir.mkdir()
    return CodeQLConfig(
        codeql_version=CODEQL_VERSION,
        pack_versions={"codeql/javascript-queries": JS_PACK_VERSION},
        temp_dir=str(temp_dir),
    )


@pytest.fixture
def codeql(codeql_config, fake_gh):
    """A ready wrapper talking to FakeGh."""
    wrapper = CodeQL(codeql_config, launcher=fake_gh)
    wrapper.ensure_ready()
    fake_gh.calls.clear()
    return wrapper


@pytest.fixture
def real_gh():
    """Skip unless the real gh CLI is available."""
    if shutil.which("gh") is None:
        pytest.skip("gh CLI not installed")
