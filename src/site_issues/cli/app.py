"""Command-line driver for running the issue aggregation outside a host build."""

import logging
from typing import Optional

import typer

from site_issues.cli.commands.generate import run as run_generate
from site_issues.version import __version__

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help=(
        "Fetch GitHub issues for every page that lists projects in its front matter "
        "and emit the merged titles, authors, labels, milestones and special filters."
    ),
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"site-issues {__version__}")
        raise typer.Exit()


@app.callback()
def _configure(
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Log each fetched page and retry to stderr."
    ),
    version: Optional[bool] = typer.Option(  # noqa: ARG001
        None,
        "--version",
        callback=_print_version,
        is_eager=True,
        help="Print the site-issues version.",
    ),
) -> None:
    """Set up logging before a command runs."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s", force=True)


app.command("generate")(run_generate)


def main() -> None:
    """Console-script entry point for ``site-issues``."""
    app()


if __name__ == "__main__":
    main()
