"""Pydantic settings models and issue/view-model dataclasses."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from datetime import datetime
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger("site_issues")

RawIssue = Mapping[str, Any]
"""One issue record exactly as decoded from the remote API."""


# ---------------------------------------------------------------------------
# Special filter configuration
# ---------------------------------------------------------------------------


def parse_special_filters(value: object) -> list[str]:
    """Split the whitespace-separated ``special_filters`` setting.

    Anything other than a string (absent, null, a list, a number) yields an
    empty list instead of an error.
    """
    if isinstance(value, str):
        return value.split()
    if value is not None:
        logger.debug("Ignoring unparseable special_filters setting: %r", value)
    return []


@dataclass(frozen=True)
class SpecialFilterSet:
    """Configured special filters keyed by lowercased name.

    ``entries`` holds ``(key, display_name)`` pairs in configuration order.
    Names differing only in case collapse onto the first spelling.
    """

    entries: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "SpecialFilterSet":
        seen: dict[str, str] = {}
        for name in names:
            seen.setdefault(name.lower(), name)
        return cls(entries=tuple(seen.items()))

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def keys(self) -> tuple[str, ...]:
        return tuple(key for key, _ in self.entries)

    def display_name(self, key: str) -> str:
        for entry_key, name in self.entries:
            if entry_key == key:
                return name
        raise KeyError(key)


class IssuesSettings(BaseModel):
    """The ``issues`` section of the site configuration."""

    model_config = ConfigDict(extra="ignore")

    special_filters: list[str] = Field(default_factory=list)
    fetch_attempts: Annotated[int, Field(ge=1)] = 5
    retry_backoff_seconds: Annotated[float, Field(ge=0)] = 1.0

    @field_validator("special_filters", mode="before")
    @classmethod
    def _split_special_filters(cls, value: object) -> list[str]:
        return parse_special_filters(value)

    @property
    def filter_set(self) -> SpecialFilterSet:
        return SpecialFilterSet.from_names(self.special_filters)


# ---------------------------------------------------------------------------
# Normalized issue dataclasses (frozen, output-only)
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Person:
    """A GitHub account as shown on an issue (author or assignee)."""

    login: str | None
    avatar_url: str | None
    html_url: str | None


@dataclass(frozen=True)
class Milestone:
    """Milestone attached to an issue; compared by exact field equality."""

    id: int | None
    number: int | None
    state: str | None
    title: str | None
    description: str | None
    due_on: datetime | None


@dataclass(frozen=True)
class Label:
    name: str
    color: str


@dataclass(frozen=True)
class SpecialFilterValue:
    """Values captured for one special filter on one issue.

    ``value`` is ``None`` when no label matched; it is never an empty tuple.
    """

    name: str
    value: tuple[str, ...] | None


@dataclass(frozen=True)
class NormalizedIssue:
    """Flat issue record consumed by page templates.

    ``assignee`` and ``milestone`` are all-or-nothing groups: either the
    whole sub-record is present or it is ``None``.
    """

    number: int
    title: str | None
    state: str | None
    body: str | None
    url: str | None
    date: datetime | None
    closed_at: datetime | None
    user: Person
    assignee: Person | None = None
    milestone: Milestone | None = None
    labels: tuple[Label, ...] = ()
    special_filter_value: dict[str, SpecialFilterValue] = dataclasses.field(default_factory=dict)


# ---------------------------------------------------------------------------
# Aggregated view-model dataclasses
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SpecialFilter:
    """Cross-project values of one special filter."""

    name: str
    values: tuple[str, ...]


@dataclass(frozen=True)
class ProjectIssues:
    name: str
    issues: tuple[NormalizedIssue, ...]


@dataclass(frozen=True)
class PageViewModel:
    """Everything one page gets from a run; rebuilt from scratch every time."""

    projects: Mapping[str, ProjectIssues]
    titles: tuple[str, ...]
    authors: tuple[str, ...]
    assignees: tuple[str, ...]
    milestones: tuple[Milestone, ...]
    labels: tuple[Label, ...]
    special_filters: Mapping[str, SpecialFilter]
