"""codeqlkit CLI - Main entry point and command registration hub."""
# ruff: noqa: E402 - Intentional lazy loading: commands imported after cli group definition

import inspect

import click
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from codeqlkit import __version__
from codeqlkit.ui import console


class RichCommand(click.Command):
    """Command whose --help is rendered through the shared Rich console."""

    def format_help(self, ctx, formatter):
        """Print usage, the docstring and an options table with Rich styling."""
        pieces = " ".join(self.collect_usage_pieces(ctx))
        console.print(f"[bold]Usage:[/bold] [cmd]{escape(ctx.command_path)}[/cmd] {escape(pieces)}")

        if self.help:
            # \b only stops click's rewrapping; Rich keeps the lines as written
            lines = [line for line in inspect.cleandoc(self.help).splitlines() if line.strip() != "\b"]
            console.print()
            console.print(Text("\n".join(lines)))

        table = Table(show_header=False, box=None, padding=(0, 2, 0, 2))
        table.add_column("Option", style="cmd", no_wrap=True)
        table.add_column("Description")
        for param in self.get_params(ctx):
            record = param.get_help_record(ctx)
            if record:
                table.add_row(Text(record[0]), Text(record[1]))

        console.print()
        console.print("[bold]Options:[/bold]")
        console.print(table)


@click.group()
@click.version_option(version=__version__, prog_name="codeqlkit")
@click.help_option("-h", "--help")
def cli():
    """codeqlkit - run the CodeQL CLI with pinned CLI and query pack versions

    \b
    QUICK START:
      codeqlkit ensure-version --codeql-version 2.20.0
      codeqlkit create-db javascript ./src /tmp/js-db
      codeqlkit classify /tmp/js-db javascript

    \b
    Versions can also come from .codeqlkit.json:
      {"codeql": {"version": "2.20.0"},
       "packs": {"codeql/javascript-queries": "1.2.5"},
       "limits": {"timeout": 1800}}"""
    pass


from codeqlkit.commands.database import analyze, create_db
from codeqlkit.commands.languages import languages
from codeqlkit.commands.queries import classify, resolve, suite
from codeqlkit.commands.version import ensure_version

cli.add_command(languages)
cli.add_command(ensure_version)
cli.add_command(create_db)
cli.add_command(analyze)
cli.add_command(suite)
cli.add_command(resolve)
cli.add_command(classify)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
