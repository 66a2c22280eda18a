"""List the languages CodeQL supports."""

import json

import click
from rich.table import Table

from codeqlkit.cli import RichCommand
from codeqlkit.languages import LANGUAGE_TO_LANGUAGE_ID, SUPPORTED_LANGUAGES
from codeqlkit.suite import default_query_pack_name
from codeqlkit.ui import console


@click.command("languages", cls=RichCommand)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def languages(as_json: bool) -> None:
    """Show supported languages with their query ID prefixes.

    The ID is the prefix of query IDs (js/xss -> javascript). The default
    pack is the one a suite selects from for that language.
    """
    if as_json:
        click.echo(json.dumps(dict(LANGUAGE_TO_LANGUAGE_ID), indent=2))
        return

    table = Table(title="CodeQL languages")
    table.add_column("Language", style="bold")
    table.add_column("ID", style="cyan")
    table.add_column("Default pack", style="dim")
    for language in SUPPORTED_LANGUAGES:
        table.add_row(language, LANGUAGE_TO_LANGUAGE_ID[language], default_query_pack_name(language))
    console.print(table)
