"""Main Typer application — imports and registers all CLI commands.

Entry point: ``nixmonitor`` (configured via pyproject.toml [project.scripts]).

Commands: render, decode.
"""

from __future__ import annotations

import typer

from nixmonitor import __version__
from nixmonitor.cli.commands.decode_cmd import decode_cmd
from nixmonitor.cli.commands.render_cmd import render_cmd

app = typer.Typer(
    name="nixmonitor",
    help="nixmonitor: live progress display for structured build logs.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)

# Register subcommands
app.command(name="render", help="Render a build log as a live progress display.")(render_cmd)
app.command(name="decode", help="Print decoded log events as JSON lines.")(decode_cmd)


@app.command(name="version", help="Show the nixmonitor version.")
def version_cmd() -> None:
    """Print the installed version."""
    typer.echo(f"nixmonitor {__version__}")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
