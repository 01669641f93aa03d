"""Merge per-project issues into a page view model."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Sequence
from typing import TypeVar

from site_issues.core.fetcher import IssueFetcher
from site_issues.core.models import (
    Label,
    Milestone,
    NormalizedIssue,
    PageViewModel,
    ProjectIssues,
    SpecialFilter,
    SpecialFilterSet,
)
from site_issues.core.normalizer import normalize_issue

logger = logging.getLogger("site_issues")

H = TypeVar("H", bound=Hashable)


class ProjectAggregator:
    """Build a ``PageViewModel`` from the issues of several projects."""

    def __init__(self, fetcher: IssueFetcher, filters: SpecialFilterSet | None = None) -> None:
        self._fetcher = fetcher
        self._filters = filters or SpecialFilterSet()

    def aggregate(self, projects: Sequence[str]) -> PageViewModel:
        """Fetch, normalize and merge the issues of ``projects``.

        Projects without issues are skipped entirely. Transport errors from
        the fetcher propagate and abort the whole page.
        """
        project_map: dict[str, ProjectIssues] = {}
        for project in projects:
            raw_issues = self._fetcher.fetch_all(project)
            if not raw_issues:
                logger.info("Skipping %s: no issues", project)
                continue
            issues = tuple(normalize_issue(raw, self._filters) for raw in raw_issues)
            project_map[project] = ProjectIssues(name=project, issues=issues)

        return build_view_model(project_map, self._filters)


def build_view_model(
    project_map: dict[str, ProjectIssues],
    filters: SpecialFilterSet,
) -> PageViewModel:
    """Derive the cross-project collections from per-project issue lists."""
    all_issues = [issue for entry in project_map.values() for issue in entry.issues]

    return PageViewModel(
        projects=project_map,
        titles=_sorted_unique(issue.title for issue in all_issues),
        authors=_sorted_unique(issue.user.login for issue in all_issues),
        assignees=_sorted_unique(
            issue.assignee.login for issue in all_issues if issue.assignee is not None
        ),
        milestones=_collect_milestones(all_issues),
        labels=_collect_labels(all_issues),
        special_filters=_collect_special_filters(all_issues, filters),
    )


def _sorted_unique(values: Iterable[str | None]) -> tuple[str, ...]:
    return tuple(sorted({value for value in values if value is not None}))


def _unique(items: Iterable[H]) -> list[H]:
    # dict keeps first-seen order so ties keep their encounter order after sorting.
    return list(dict.fromkeys(items))


def _collect_milestones(issues: Sequence[NormalizedIssue]) -> tuple[Milestone, ...]:
    milestones = _unique(
        issue.milestone
        for issue in issues
        if issue.milestone is not None and issue.milestone.number is not None
    )
    return tuple(sorted(milestones, key=lambda milestone: milestone.number))


def _collect_labels(issues: Sequence[NormalizedIssue]) -> tuple[Label, ...]:
    labels = _unique(label for issue in issues for label in issue.labels)
    return tuple(sorted(labels, key=lambda label: (label.color, label.name)))


def _collect_special_filters(
    issues: Sequence[NormalizedIssue],
    filters: SpecialFilterSet,
) -> dict[str, SpecialFilter]:
    table: dict[str, SpecialFilter] = {}
    for key, name in filters:
        values: list[str | None] = []
        for issue in issues:
            entry = issue.special_filter_value.get(key)
            if entry is not None and entry.value is not None:
                values.extend(entry.value)
        table[key] = SpecialFilter(name=name, values=_sorted_unique(values))
    return table
