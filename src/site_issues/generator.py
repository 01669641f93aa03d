"""Site build hook: attach issue view models to pages that declare projects."""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, MutableMapping
from typing import Any, Callable, Protocol

from site_issues.core.aggregator import ProjectAggregator
from site_issues.core.fetcher import IssueFetcher, IssueSource
from site_issues.core.models import IssuesSettings
from site_issues.render.page_data import render_page_data

logger = logging.getLogger("site_issues")

PROJECTS_KEY = "issues"


class PageLike(Protocol):
    """Anything exposing a mutable front-matter ``data`` mapping."""

    data: MutableMapping[str, Any]


def declared_projects(data: MutableMapping[str, Any]) -> list[str]:
    """Return the project identifiers a page declares under ``issues``.

    A single string counts as a one-element list; anything else that is not
    a list declares nothing.
    """
    raw = data.get(PROJECTS_KEY)
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        return []
    return [str(project) for project in raw if project]


def generate(
    pages: Iterable[PageLike],
    settings: IssuesSettings,
    source: IssueSource,
    *,
    sleep_fn: Callable[[float], None] = time.sleep,
) -> int:
    """Extend every page declaring projects with its issue view model.

    Returns the number of pages updated. A transport failure propagates and
    stops the build; no partial data is written to the failing page.
    """
    fetcher = IssueFetcher(
        source,
        attempts=settings.fetch_attempts,
        backoff_seconds=settings.retry_backoff_seconds,
        sleep_fn=sleep_fn,
    )
    aggregator = ProjectAggregator(fetcher, settings.filter_set)

    updated = 0
    for page in pages:
        projects = declared_projects(page.data)
        if not projects:
            continue
        logger.debug("Aggregating issues for %s: %s", getattr(page, "path", "<page>"), projects)
        view = aggregator.aggregate(projects)
        page.data.update(render_page_data(view))
        updated += 1
    return updated
