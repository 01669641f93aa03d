"""Special-filter extraction from label names.

A special filter named ``Priority`` turns a label such as ``Priority - High``
into the facet value ``High`` and removes the label from the issue. Matching
is case-insensitive and tolerates whitespace around the dash.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from site_issues.core.models import Label, SpecialFilterSet, SpecialFilterValue


def build_filter_pattern(filter_name: str) -> re.Pattern[str]:
    """Compile the ``<name> - <value>`` pattern for one filter name."""
    return re.compile(rf"\A{re.escape(filter_name)}\s*-\s*(.+)\Z", re.IGNORECASE)


def extract_special_filters(
    labels: Sequence[Label],
    filters: SpecialFilterSet,
) -> tuple[tuple[Label, ...], dict[str, SpecialFilterValue]]:
    """Split special-filter labels out of ``labels``.

    Every filter scans the same snapshot of ``labels``, so a label matching
    more than one filter contributes its value to each of them. The returned
    labels are the snapshot minus every matched label, in original order.
    """
    snapshot = tuple(labels)
    matched: set[int] = set()
    values: dict[str, SpecialFilterValue] = {}

    for key, name in filters:
        pattern = build_filter_pattern(name)
        captured: list[str] = []
        for index, label in enumerate(snapshot):
            match = pattern.match(label.name)
            if match is None:
                continue
            captured.append(match.group(1))
            matched.add(index)
        values[key] = SpecialFilterValue(name=name, value=tuple(captured) if captured else None)

    remaining = tuple(label for index, label in enumerate(snapshot) if index not in matched)
    return remaining, values
