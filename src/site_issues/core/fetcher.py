"""Paginated issue retrieval with a bounded "no result" retry."""

from __future__ import annotations

import logging
import time
from typing import Callable, Protocol

from site_issues.core.models import RawIssue

logger = logging.getLogger("site_issues")

DEFAULT_ATTEMPTS = 5
DEFAULT_BACKOFF_SECONDS = 1.0


class IssueSource(Protocol):
    """Swappable transport for the paginated issue listing."""

    def list_issues(self, project: str, page: int) -> list[RawIssue] | None:
        """Return one page of raw issues, ``[]`` past the end, or ``None`` for no result."""


class IssueFetcher:
    """Fetch every issue of a project, page by page.

    Pagination starts at page 1 and stops at the first page that is empty or
    absent. A page call returning ``None`` is retried after a fixed backoff;
    once ``attempts`` calls have returned ``None`` the page counts as absent.
    Exceptions raised by the source are not retried.
    """

    def __init__(
        self,
        source: IssueSource,
        *,
        attempts: int = DEFAULT_ATTEMPTS,
        backoff_seconds: float = DEFAULT_BACKOFF_SECONDS,
        sleep_fn: Callable[[float], None] = time.sleep,
    ) -> None:
        if attempts < 1:
            raise ValueError(f"attempts must be >= 1, got {attempts}")
        self._source = source
        self._attempts = attempts
        self._backoff_seconds = backoff_seconds
        self._sleep_fn = sleep_fn

    def fetch_all(self, project: str) -> list[RawIssue]:
        """Return all raw issues of ``project`` in server order."""
        issues: list[RawIssue] = []
        page = 1
        while True:
            data = self.fetch_page(project, page)
            if not data:
                break
            issues.extend(data)
            page += 1
        logger.info("Fetched %d issues from %s (%d pages)", len(issues), project, page - 1)
        return issues

    def fetch_page(self, project: str, page: int) -> list[RawIssue] | None:
        """Fetch one page, retrying while the source returns no result."""
        for attempt in range(1, self._attempts + 1):
            data = self._source.list_issues(project, page)
            if data is not None:
                return data
            logger.debug(
                "No result for %s page %d (attempt %d/%d)",
                project,
                page,
                attempt,
                self._attempts,
            )
            self._sleep_fn(self._backoff_seconds)
        return None
