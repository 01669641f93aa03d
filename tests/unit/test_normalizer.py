"""Tests for raw issue normalization."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest

from site_issues.core.models import Label, Milestone, Person, SpecialFilterSet
from site_issues.core.normalizer import IssueFormatError, normalize_issue, parse_timestamp
from site_issues.render.page_data import issue_payload


def test_normalize_maps_core_fields(make_raw_issue) -> None:
    raw = make_raw_issue(7, title="Crash on save", user="alice", state="closed", closed_at="2014-03-02T11:30:00Z")

    issue = normalize_issue(raw)

    assert issue.number == 7
    assert issue.title == "Crash on save"
    assert issue.state == "closed"
    assert issue.body == "Body of #7"
    assert issue.url == "https://github.com/acme/repo/issues/7"
    assert issue.date == datetime(2014, 3, 1, 10, 0, tzinfo=timezone.utc)
    assert issue.closed_at == datetime(2014, 3, 2, 11, 30, tzinfo=timezone.utc)
    assert issue.user == Person(
        login="alice",
        avatar_url="https://avatars.example.com/alice",
        html_url="https://github.com/alice",
    )


def test_missing_assignee_and_milestone_are_absent_groups(make_raw_issue) -> None:
    issue = normalize_issue(make_raw_issue())

    assert issue.assignee is None
    assert issue.milestone is None


def test_assignee_and_milestone_groups_are_mapped(make_raw_issue, make_milestone) -> None:
    raw = make_raw_issue(assignee="bob", milestone=make_milestone(3))

    issue = normalize_issue(raw)

    assert issue.assignee is not None
    assert issue.assignee.login == "bob"
    assert issue.assignee.html_url == "https://github.com/bob"
    assert issue.milestone == Milestone(
        id=1003,
        number=3,
        state="open",
        title="v3.0",
        description="Release 3",
        due_on=datetime(2014, 6, 1, 7, 0, tzinfo=timezone.utc),
    )


def test_label_colors_are_lowercased(make_raw_issue) -> None:
    issue = normalize_issue(make_raw_issue(labels=[("bug", "FC2929"), ("ui", "BfDaDc")]))

    assert issue.labels == (Label(name="bug", color="fc2929"), Label(name="ui", color="bfdadc"))


def test_special_filter_labels_are_extracted(make_raw_issue, priority_filters: SpecialFilterSet) -> None:
    raw = make_raw_issue(labels=[("Priority - High", "E11D21"), ("bug", "FC2929")])

    issue = normalize_issue(raw, priority_filters)

    assert issue.labels == (Label(name="bug", color="fc2929"),)
    assert issue.special_filter_value["priority"].name == "Priority"
    assert issue.special_filter_value["priority"].value == ("High",)


def test_every_configured_filter_gets_an_entry(make_raw_issue) -> None:
    filters = SpecialFilterSet.from_names(["Priority", "Area"])

    issue = normalize_issue(make_raw_issue(labels=[("bug", "fc2929")]), filters)

    assert set(issue.special_filter_value) == {"priority", "area"}
    assert all(entry.value is None for entry in issue.special_filter_value.values())


def test_flat_payload_omits_absent_groups_instead_of_nulls(make_raw_issue) -> None:
    payload = issue_payload(normalize_issue(make_raw_issue()))

    assert not any(key.startswith(("assignee_", "milestone_")) for key in payload)
    assert payload["user_login"] == "octocat"


def test_missing_number_raises_format_error(make_raw_issue) -> None:
    raw = make_raw_issue()
    del raw["number"]

    with pytest.raises(IssueFormatError, match="'number'"):
        normalize_issue(raw)


def test_missing_user_raises_format_error(make_raw_issue) -> None:
    raw = make_raw_issue()
    raw["user"] = None

    with pytest.raises(IssueFormatError, match="'user'"):
        normalize_issue(raw)


def test_missing_labels_and_body_are_tolerated(make_raw_issue) -> None:
    raw = make_raw_issue()
    raw.pop("labels")
    raw["body"] = None

    issue = normalize_issue(raw)

    assert issue.labels == ()
    assert issue.body is None


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (None, None),
        ("2014-03-01T10:00:00Z", datetime(2014, 3, 1, 10, 0, tzinfo=timezone.utc)),
        ("2014-03-01T10:00:00+02:00", datetime(2014, 3, 1, 8, 0, tzinfo=timezone.utc)),
    ],
)
def test_parse_timestamp(value: object, expected: datetime | None) -> None:
    assert parse_timestamp(value) == expected


def test_parse_timestamp_passes_datetimes_through() -> None:
    moment = datetime(2020, 1, 1, tzinfo=timezone.utc)

    assert parse_timestamp(moment) is moment


def test_parse_timestamp_rejects_garbage() -> None:
    with pytest.raises(IssueFormatError, match="Invalid timestamp"):
        parse_timestamp("yesterday")


def test_null_title_and_login_are_kept_as_none(make_raw_issue) -> None:
    raw = make_raw_issue(title=None)
    raw["user"]["login"] = None
    raw["html_url"] = None

    issue = normalize_issue(raw)

    assert issue.title is None
    assert issue.user.login is None
    assert issue.url is None
