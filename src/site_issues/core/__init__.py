"""Core issue models and the fetch/normalize/aggregate pipeline."""

from site_issues.core.models import (
    IssuesSettings,
    Label,
    Milestone,
    NormalizedIssue,
    PageViewModel,
    Person,
    ProjectIssues,
    RawIssue,
    SpecialFilter,
    SpecialFilterSet,
    SpecialFilterValue,
    parse_special_filters,
)
from site_issues.core.aggregator import ProjectAggregator, build_view_model
from site_issues.core.fetcher import IssueFetcher, IssueSource
from site_issues.core.normalizer import IssueFormatError, normalize_issue, parse_timestamp
from site_issues.core.special_filters import build_filter_pattern, extract_special_filters

__all__ = [
    "IssueFetcher",
    "IssueFormatError",
    "IssueSource",
    "IssuesSettings",
    "Label",
    "Milestone",
    "NormalizedIssue",
    "PageViewModel",
    "Person",
    "ProjectAggregator",
    "ProjectIssues",
    "RawIssue",
    "SpecialFilter",
    "SpecialFilterSet",
    "SpecialFilterValue",
    "build_filter_pattern",
    "build_view_model",
    "extract_special_filters",
    "normalize_issue",
    "parse_special_filters",
    "parse_timestamp",
]
