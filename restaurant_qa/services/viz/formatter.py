"""Pure-Python chart payload builder, no LLM needed."""

from __future__ import annotations

import re
from typing import Any

from restaurant_qa.config.constants import ChartType
from restaurant_qa.services.viz.chart_type import is_number, label_field

_SINGLE_SERIES = {ChartType.PIE, ChartType.DOUGHNUT}
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def format_chart_data(rows: list[dict[str, Any]], chart_type: ChartType) -> dict[str, Any]:
    """Build a ``{type, data: {labels, datasets}, options: {title}}`` payload.

    Labels come from the first non-numeric field. Each numeric field becomes a
    dataset (pie and doughnut keep only the first). Rows without any numeric
    field are counted per label instead.
    """
    label_key = label_field(rows) or ""
    value_keys = [
        key for key, value in (rows[0].items() if rows else []) if key != label_key and is_number(value)
    ]

    if not value_keys:
        labels, counts = _count_labels(rows, label_key)
        datasets = [{"label": "Count", "data": counts}]
        title = f"Count by {humanize(label_key)}"
    else:
        if chart_type in _SINGLE_SERIES:
            value_keys = value_keys[:1]
        labels = [_format_label(row.get(label_key)) for row in rows]
        datasets = [
            {"label": humanize(key), "data": [_safe_number(row.get(key)) for row in rows]}
            for key in value_keys
        ]
        title = f"{' and '.join(humanize(key) for key in value_keys)} by {humanize(label_key)}"

    return {
        "type": chart_type.value,
        "data": {"labels": labels, "datasets": datasets},
        "options": {"title": title},
    }


def humanize(field: str) -> str:
    """``totalSold`` / ``total_sold`` -> ``Total Sold``."""
    words = _CAMEL_BOUNDARY.sub(" ", field).replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def _count_labels(rows: list[dict[str, Any]], label_key: str) -> tuple[list[str], list[int]]:
    counts: dict[str, int] = {}
    for row in rows:
        label = _format_label(row.get(label_key))
        counts[label] = counts.get(label, 0) + 1
    return list(counts), list(counts.values())


def _format_label(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _safe_number(value: Any) -> int | float:
    """Convert *value* to a number, returning 0 on failure."""
    if value is None:
        return 0
    if is_number(value):
        return value
    try:
        return float(value)
    except (ValueError, TypeError):
        return 0
