"""Generate command: run the issue aggregation over a site's pages."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer

from site_issues.adapters.config_loader import DEFAULT_CONFIG_FILENAME, load_issues_settings
from site_issues.adapters.github_adapter import GitHubAdapterError
from site_issues.adapters.github_rest import GitHubRestAdapter
from site_issues.adapters.pages import load_pages
from site_issues.core.normalizer import IssueFormatError
from site_issues.generator import declared_projects, generate

logger = logging.getLogger("site_issues")


def run(
    source: Path = typer.Option(
        Path("."), "--source", "-s", help="Site source directory containing pages."
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help=f"Site config YAML (default: <source>/{DEFAULT_CONFIG_FILENAME})."
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Directory for per-page JSON data. Prints one JSON document to stdout when omitted.",
    ),
) -> None:
    """Fetch issues for every page declaring projects and emit its page data."""
    config_path = config if config is not None else source / DEFAULT_CONFIG_FILENAME

    try:
        settings = load_issues_settings(config_path)
    except FileNotFoundError:
        _error(f"Config file not found: {config_path}", 2)
    except ValueError as exc:
        _error(f"Config validation error: {exc}", 2)

    try:
        pages = load_pages(source)
    except FileNotFoundError as exc:
        _error(str(exc), 2)
    except ValueError as exc:
        _error(f"Page error: {exc}", 2)

    selected = [page for page in pages if declared_projects(page.data)]
    logger.info("%d of %d pages declare issue projects", len(selected), len(pages))

    try:
        generate(selected, settings, GitHubRestAdapter())
    except GitHubAdapterError as exc:
        _error(f"GitHub error: {exc}", 1)
    except IssueFormatError as exc:
        _error(f"Issue data error: {exc}", 1)

    if output is None:
        payload = {str(page.path): page.data for page in selected}
        typer.echo(_dumps(payload), nl=False)
        return

    for page in selected:
        target = output / page.path.with_suffix(".json")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(_dumps(page.data), encoding="utf-8")
        logger.debug("Wrote %s", target)
    typer.echo(f"Wrote issue data for {len(selected)} page(s) to {output}")


def _dumps(payload: Any) -> str:
    # Front matter may hold YAML dates, which json cannot encode natively.
    return json.dumps(payload, indent=2, sort_keys=True, default=str) + "\n"


def _error(message: str, exit_code: int) -> NoReturn:
    """Print error to stderr and exit."""
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=exit_code)
