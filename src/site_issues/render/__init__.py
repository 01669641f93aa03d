"""Output rendering modules."""

from site_issues.render.page_data import (
    issue_payload,
    label_payload,
    milestone_payload,
    render_page_data,
)

__all__ = [
    "issue_payload",
    "label_payload",
    "milestone_payload",
    "render_page_data",
]
