"""Options and helpers shared by the commands that talk to the CodeQL CLI."""

import click

from codeqlkit.codeql import CodeQL
from codeqlkit.config import config_from_runtime, load_runtime_config, parse_pack_specs
from codeqlkit.languages import SUPPORTED_LANGUAGES

LANGUAGE = click.Choice(list(SUPPORTED_LANGUAGES))

_CODEQL_OPTIONS = [
    click.option("--root", default=".", help="Directory holding .codeqlkit.json"),
    click.option("--codeql-version", default=None, help="CodeQL CLI version to pin (e.g. 2.20.0)"),
    click.option(
        "--pack",
        "packs",
        multiple=True,
        metavar="NAME=VERSION",
        help="Query pack version, e.g. codeql/javascript-queries=1.2.5 (repeatable)",
    ),
    click.option(
        "--timeout",
        default=None,
        type=click.IntRange(min=-1),
        help="Per-command timeout in seconds (-1 = none)",
    ),
]


def codeql_options(func):
    """Add --root/--codeql-version/--pack/--timeout to a command."""
    for option in reversed(_CODEQL_OPTIONS):
        func = option(func)
    return func


def build_codeql(root, codeql_version, packs, timeout, ensure_ready: bool = True) -> CodeQL:
    """Build a wrapper from config file, environment and CLI options."""
    cfg = load_runtime_config(root)
    config = config_from_runtime(
        cfg,
        codeql_version=codeql_version,
        packs=parse_pack_specs(packs),
        timeout=timeout,
    )
    codeql = CodeQL(config)
    if ensure_ready:
        codeql.ensure_ready()
    return codeql
