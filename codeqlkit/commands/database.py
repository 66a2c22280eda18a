"""Create and analyze CodeQL databases."""

import click

from codeqlkit.cli import RichCommand
from codeqlkit.commands._common import LANGUAGE, build_codeql, codeql_options
from codeqlkit.ui import print_success
from codeqlkit.utils.error_handler import handle_exceptions


@click.command("create-db", cls=RichCommand)
@handle_exceptions
@codeql_options
@click.argument("language", type=LANGUAGE)
@click.argument("source_root", type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.argument("database", type=click.Path(resolve_path=True))
def create_db(root, codeql_version, packs, timeout, language, source_root, database):
    """Extract SOURCE_ROOT into a new CodeQL DATABASE.

    DATABASE should be an empty or non-existent directory. Java and C# are
    extracted without a build.

    \b
    EXAMPLES:
      codeqlkit create-db javascript ./src /tmp/js-db
    """
    codeql = build_codeql(root, codeql_version, packs, timeout)
    codeql.create_database(language, source_root, database)
    print_success(f"Created {language} database at {database}")


@click.command("analyze", cls=RichCommand)
@handle_exceptions
@codeql_options
@click.argument("database", type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.argument("output", type=click.Path(dir_okay=False, resolve_path=True))
@click.argument("queries", nargs=-1, required=True)
def analyze(root, codeql_version, packs, timeout, database, output, queries):
    """Run QUERIES against DATABASE and write SARIF to OUTPUT.

    QUERIES may be query files, suite files or pack references; missing
    packs are downloaded.

    \b
    EXAMPLES:
      codeqlkit analyze /tmp/js-db results.sarif codeql/javascript-queries
    """
    codeql = build_codeql(root, codeql_version, packs, timeout)
    codeql.analyze_database(database, output, *queries)
    print_success(f"SARIF written to {output}")
