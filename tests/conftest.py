"""Shared fixtures for site_issues test suite."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

import pytest

from site_issues.core.models import SpecialFilterSet

RawIssueFactory = Callable[..., dict[str, Any]]


class FakeIssueSource:
    """In-memory ``IssueSource`` serving scripted pages per project.

    ``pages`` maps a project to the results of its successive calls; calls past
    the scripted results return ``[]``. A result may be an exception instance,
    which is raised instead of returned.
    """

    def __init__(self, pages: Mapping[str, Sequence[object]] | None = None) -> None:
        self._pages = {project: list(results) for project, results in (pages or {}).items()}
        self.calls: list[tuple[str, int]] = []

    def list_issues(self, project: str, page: int) -> list[dict[str, Any]] | None:
        self.calls.append((project, page))
        results = self._pages.get(project, [])
        call_index = sum(1 for called, _ in self.calls if called == project) - 1
        if call_index >= len(results):
            return []
        result = results[call_index]
        if isinstance(result, BaseException):
            raise result
        return result  # type: ignore[return-value]


def _person(login: str) -> dict[str, str]:
    return {
        "login": login,
        "avatar_url": f"https://avatars.example.com/{login}",
        "html_url": f"https://github.com/{login}",
    }


@pytest.fixture
def make_raw_issue() -> RawIssueFactory:
    """Factory for GitHub-shaped raw issue payloads."""

    def _make(
        number: int = 1,
        *,
        title: str | None = "Fix bug",
        user: str = "octocat",
        assignee: str | None = None,
        milestone: dict[str, Any] | None = None,
        labels: Sequence[tuple[str, str]] = (),
        state: str = "open",
        closed_at: str | None = None,
    ) -> dict[str, Any]:
        return {
            "number": number,
            "title": title,
            "state": state,
            "body": f"Body of #{number}",
            "created_at": "2014-03-01T10:00:00Z",
            "closed_at": closed_at,
            "html_url": f"https://github.com/acme/repo/issues/{number}",
            "user": _person(user),
            "assignee": _person(assignee) if assignee else None,
            "milestone": milestone,
            "labels": [{"name": name, "color": color} for name, color in labels],
        }

    return _make


@pytest.fixture
def make_milestone() -> Callable[..., dict[str, Any]]:
    def _make(number: int, *, title: str | None = None) -> dict[str, Any]:
        return {
            "id": 1000 + number,
            "number": number,
            "state": "open",
            "title": title or f"v{number}.0",
            "description": f"Release {number}",
            "due_on": "2014-06-01T07:00:00Z",
        }

    return _make


@pytest.fixture
def fake_source_cls() -> type[FakeIssueSource]:
    return FakeIssueSource


@pytest.fixture
def priority_filters() -> SpecialFilterSet:
    return SpecialFilterSet.from_names(["Priority"])


@pytest.fixture
def no_sleep() -> Callable[[float], None]:
    return lambda _seconds: None
