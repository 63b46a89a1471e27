"""Chart request detection and chart type selection."""

import re
from typing import Any

from restaurant_qa.config.constants import ChartType

_CHART_REQUEST = re.compile(
    r"\b(?:charts?|graphs?|plot\w*|visuali[sz]\w*"
    r"|trend\w*|distributions?|compar\w*)\b",
    re.IGNORECASE,
)

_EXPLICIT_KIND = re.compile(
    r"\b(doughnut|donut|pie|line|bar)[\s-]+(?:charts?|graphs?|plots?)\b",
    re.IGNORECASE,
)
_EXPLICIT_KINDS = {
    "doughnut": ChartType.DOUGHNUT,
    "donut": ChartType.DOUGHNUT,
    "pie": ChartType.PIE,
    "line": ChartType.LINE,
    "bar": ChartType.BAR,
}

_TEMPORAL_WORDS = re.compile(
    r"\b(?:trends?|over time|timeline|history|evolution|growth"
    r"|daily|weekly|monthly|yearly|annual(?:ly)?|per (?:day|week|month|year)"
    r"|by (?:day|week|month|year|date))\b",
    re.IGNORECASE,
)
_TEMPORAL_FIELD = re.compile(r"(?:date|time|day|week|month|year|quarter|period)", re.IGNORECASE)
_DATE_VALUE = re.compile(r"^\d{4}-\d{2}(?:-\d{2})?")

_PROPORTION_WORDS = re.compile(
    r"\b(?:distributions?|proportions?|shares?|percentages?|percent|breakdown|composition)\b",
    re.IGNORECASE,
)


def is_chart_request(question: str) -> bool:
    """True when the question asks for a chart, plot, trend, distribution or comparison."""
    return bool(_CHART_REQUEST.search(question))


def label_field(rows: list[dict[str, Any]]) -> str | None:
    """First non-numeric field of the first row, or its first field."""
    if not rows or not rows[0]:
        return None
    first = rows[0]
    for key, value in first.items():
        if not is_number(value):
            return key
    return next(iter(first))


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _has_temporal_labels(rows: list[dict[str, Any]]) -> bool:
    field = label_field(rows)
    if field is None:
        return False
    if _TEMPORAL_FIELD.search(field):
        return True
    return all(_DATE_VALUE.match(str(row.get(field, ""))) for row in rows)


def determine_chart_type(rows: list[dict[str, Any]], question: str) -> ChartType:
    """Pick the chart type for ``rows``.

    Precedence: a chart kind named in the question, then time-shaped data or
    wording (line), then proportion wording (pie), else bar.
    """
    explicit = _EXPLICIT_KIND.search(question)
    if explicit:
        return _EXPLICIT_KINDS[explicit.group(1).lower()]
    if _TEMPORAL_WORDS.search(question) or _has_temporal_labels(rows):
        return ChartType.LINE
    if _PROPORTION_WORDS.search(question):
        return ChartType.PIE
    return ChartType.BAR
