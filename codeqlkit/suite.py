"""Query suite (`.qls`) files referencing queries by ID.

A suite selects every query from a language's default pack at a pinned
version, then filters that selection down to the requested IDs:

    [
      {"queries": ".", "from": "codeql/javascript-queries", "version": "1.2.5"},
      {"include": {"id": ["js/xss", "js/path-injection"]}}
    ]

JSON is valid YAML, so the CLI reads this as an ordinary suite definition.
"""

import json
import os
from pathlib import Path

from codeqlkit.utils.temp_manager import TempManager


def default_query_pack_name(language: str) -> str:
    """Gets the name of the default query pack for the given language."""
    return f"codeql/{language}-queries"


def build_suite(pack_name: str, pack_version: str, query_ids: list[str]) -> list[dict]:
    """Build the suite definition selecting `query_ids` from one pack."""
    return [
        {
            "queries": ".",
            "from": pack_name,
            "version": pack_version,
        },
        {
            "include": {
                "id": list(query_ids),
            },
        },
    ]


class QuerySuite:
    """A temporary `.qls` file. Remove it with remove() or use it as a context manager."""

    def __init__(self, path: Path):
        self.path = path

    @property
    def name(self) -> str:
        return str(self.path)

    @classmethod
    def write(
        cls, definition: list[dict], temp_dir: str | Path | None = None
    ) -> "QuerySuite":
        path, fd = TempManager.create_temp_file(suffix=".qls", prefix="suite", temp_dir=temp_dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(definition, f)
        except Exception:
            TempManager.remove(path)
            raise
        return cls(path)

    def read(self) -> list[dict]:
        with open(self.path, encoding="utf-8") as f:
            return json.load(f)

    def remove(self) -> None:
        TempManager.remove(self.path)

    def __enter__(self) -> "QuerySuite":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.remove()

    def __repr__(self) -> str:
        return f"QuerySuite({self.name!r})"
