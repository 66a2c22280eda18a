"""Ensure the pinned CodeQL CLI version is installed."""

import click

from codeqlkit.cli import RichCommand
from codeqlkit.commands._common import build_codeql, codeql_options
from codeqlkit.ui import print_success
from codeqlkit.utils.error_handler import handle_exceptions


@click.command("ensure-version", cls=RichCommand)
@handle_exceptions
@codeql_options
def ensure_version(root, codeql_version, packs, timeout):
    """Install the gh-codeql extension and switch to the pinned CLI version.

    Runs `gh codeql set-channel release` and `gh codeql set-version` only
    when the installed version differs.

    \b
    EXAMPLES:
      codeqlkit ensure-version --codeql-version 2.20.0
    """
    codeql = build_codeql(root, codeql_version, packs, timeout)
    print_success(f"CodeQL CLI {codeql.cli_version}")
