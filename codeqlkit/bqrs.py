"""Parsing of decoded BQRS result sets (`codeql bqrs decode --format json`).

Decoded output has one entry per result set; queries with a `select` clause
produce `#select`:

    {"#select": {"columns": [{"name": ..., "kind": ...}, ...],
                 "tuples": [[{"label": "/abs/path/test.js"}, "test"], ...]}}
"""

import json
from pathlib import Path
from typing import Any

SELECT_RESULT_SET = "#select"


def load_decoded_results(path: str | Path) -> dict[str, Any]:
    """Load a decoded result file written by `bqrs decode --format json`."""
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def select_tuples(results: dict[str, Any]) -> list[list[Any]]:
    """Return the tuple list of the `#select` result set (empty when absent)."""
    result_set = results.get(SELECT_RESULT_SET) or {}
    return result_set.get("tuples") or []


def parse_file_classification(results: dict[str, Any]) -> dict[str, str]:
    """Map each file path to its classification from file-classifier results.

    The first column is a file entity whose `label` is the absolute path,
    the second column is the classification string (e.g. "test", "generated").
    """
    return {row[0]["label"]: row[1] for row in select_tuples(results)}
