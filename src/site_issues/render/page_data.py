"""Render a ``PageViewModel`` into the keys attached to a page's data."""

from __future__ import annotations

import json
from datetime import datetime
from typing import Any

from site_issues.core.models import Label, Milestone, NormalizedIssue, PageViewModel


def render_page_data(view: PageViewModel) -> dict[str, Any]:
    """Build the page data keys for one view model.

    Title/author/assignee lists are JSON text for the template layer;
    milestones, labels and special filters stay native structures.
    """
    return {
        "issues_titles": json.dumps(list(view.titles)),
        "issues_authors": json.dumps(list(view.authors)),
        "issues_assignees": json.dumps(list(view.assignees)),
        "issues_milestones": [milestone_payload(milestone) for milestone in view.milestones],
        "issues_labels": [label_payload(label) for label in view.labels],
        "issues_data": {
            key: {
                "name": project.name,
                "issues": [issue_payload(issue) for issue in project.issues],
            }
            for key, project in view.projects.items()
        },
        "issues_special_filters": {
            key: {"name": special.name, "values": list(special.values)}
            for key, special in view.special_filters.items()
        },
    }


def issue_payload(issue: NormalizedIssue) -> dict[str, Any]:
    """Flatten one issue; absent assignee/milestone groups leave no keys."""
    payload: dict[str, Any] = {
        "number": issue.number,
        "title": issue.title,
        "state": issue.state,
        "body": issue.body,
        "url": issue.url,
        "date": _timestamp(issue.date),
        "closed_at": _timestamp(issue.closed_at),
        "user_login": issue.user.login,
        "user_avatar": issue.user.avatar_url,
        "user_url": issue.user.html_url,
    }
    if issue.assignee is not None:
        payload["assignee_login"] = issue.assignee.login
        payload["assignee_avatar"] = issue.assignee.avatar_url
        payload["assignee_url"] = issue.assignee.html_url
    if issue.milestone is not None:
        payload.update(
            {f"milestone_{key}": value for key, value in milestone_payload(issue.milestone).items()}
        )
    payload["labels"] = [label_payload(label) for label in issue.labels]
    payload["special_filter_value"] = {
        key: {"name": entry.name, "value": list(entry.value) if entry.value is not None else None}
        for key, entry in issue.special_filter_value.items()
    }
    return payload


def milestone_payload(milestone: Milestone) -> dict[str, Any]:
    return {
        "id": milestone.id,
        "number": milestone.number,
        "state": milestone.state,
        "title": milestone.title,
        "description": milestone.description,
        "due_on": _timestamp(milestone.due_on),
    }


def label_payload(label: Label) -> dict[str, str]:
    return {"name": label.name, "color": label.color}


def _timestamp(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None
