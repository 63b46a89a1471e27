"""Markdown summaries for chart answers."""

from typing import Any

from restaurant_qa.config.constants import ChartType
from restaurant_qa.services.formatting.template import stringify_value


def classify_trend(values: list[float]) -> str:
    """Compare the first and last value: increasing, decreasing or stable."""
    if len(values) < 2:
        return "stable"
    first, last = values[0], values[-1]
    if last > first:
        return "increasing"
    if last < first:
        return "decreasing"
    return "stable"


def top_items(labels: list[str], values: list[float], n: int = 3) -> list[tuple[str, float]]:
    """Highest ``n`` label/value pairs, ties keep their original order."""
    pairs = list(zip(labels, values))
    return sorted(pairs, key=lambda pair: pair[1], reverse=True)[:n]


def _format_items(items: list[tuple[str, Any]]) -> str:
    return ", ".join(f"{label} ({stringify_value(value)})" for label, value in items)


def describe_chart(chart_data: dict[str, Any]) -> str:
    """Summarize a chart payload built by ``format_chart_data``."""
    title = chart_data["options"]["title"]
    chart_type = ChartType(chart_data["type"])
    labels = chart_data["data"]["labels"]
    datasets = chart_data["data"]["datasets"]
    values = datasets[0]["data"] if datasets else []
    subject = title.lower()

    if chart_type in (ChartType.PIE, ChartType.DOUGHNUT):
        body = (
            f"The chart shows the distribution of {subject}. "
            f"The top items are: {_format_items(top_items(labels, values))}."
        )
    elif chart_type == ChartType.LINE:
        body = (
            f"The chart shows the trend of {subject} over time. "
            f"The overall trend appears to be {classify_trend(values)}."
        )
    else:
        body = (
            f"The chart compares {subject}. "
            f"The highest values are: {_format_items(top_items(labels, values))}."
        )

    return f"**{title}**\n\n{body}"
