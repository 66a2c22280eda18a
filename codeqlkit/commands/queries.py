"""Query suites, query resolution and file classification."""

import json
from pathlib import Path

import click
from rich.table import Table

from codeqlkit.cli import RichCommand
from codeqlkit.commands._common import LANGUAGE, build_codeql, codeql_options
from codeqlkit.ui import console, print_success, print_warning
from codeqlkit.utils.error_handler import handle_exceptions


@click.command("suite", cls=RichCommand)
@handle_exceptions
@codeql_options
@click.option("--output", "-o", type=click.Path(dir_okay=False), default=None, help="Write the suite to this file")
@click.argument("language", type=LANGUAGE)
@click.argument("query_ids", nargs=-1, required=True)
def suite(root, codeql_version, packs, timeout, output, language, query_ids):
    """Print (or write) a suite selecting QUERY_IDS from LANGUAGE's default pack.

    Needs a configured version for the default pack, e.g.
    --pack codeql/javascript-queries=1.2.5. Does not run the CodeQL CLI.
    """
    codeql = build_codeql(root, codeql_version, packs, timeout, ensure_ready=False)
    with codeql.make_suite(language, *query_ids) as qls:
        definition = qls.read()

    text = json.dumps(definition, indent=2)
    if output:
        Path(output).write_text(text + "\n", encoding="utf-8")
        print_success(f"Suite written to {output}")
    else:
        click.echo(text)


@click.command("resolve", cls=RichCommand)
@handle_exceptions
@codeql_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.argument("language", type=LANGUAGE)
@click.argument("query_ids", nargs=-1, required=True)
def resolve(root, codeql_version, packs, timeout, as_json, language, query_ids):
    """Resolve QUERY_IDS (e.g. js/xss) to their .ql files."""
    codeql = build_codeql(root, codeql_version, packs, timeout)
    resolved = dict(zip(query_ids, codeql.resolve_queries(language, *query_ids)))

    if as_json:
        click.echo(json.dumps(resolved, indent=2))
        return

    for query_id, path in resolved.items():
        if path:
            click.echo(f"{query_id}\t{path}")
        else:
            print_warning(f"{query_id} could not be resolved")


@click.command("classify", cls=RichCommand)
@handle_exceptions
@codeql_options
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.argument("database", type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.argument("language", type=LANGUAGE)
def classify(root, codeql_version, packs, timeout, as_json, database, language):
    """Classify files in DATABASE as test, generated, library, ...

    Runs the language's file-classifier query. Files that are plain
    source are not listed.
    """
    codeql = build_codeql(root, codeql_version, packs, timeout)
    classification = codeql.classify_files(database, language)

    if as_json:
        click.echo(json.dumps(classification, indent=2, sort_keys=True))
        return

    table = Table(title=f"{language} file classification")
    table.add_column("File", style="path")
    table.add_column("Classification")
    for path, label in sorted(classification.items()):
        table.add_row(path, label)
    console.print(table)
