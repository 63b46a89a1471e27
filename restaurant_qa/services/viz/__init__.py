"""Chart selection, payload and summary module."""

from restaurant_qa.services.viz.chart_type import determine_chart_type, is_chart_request
from restaurant_qa.services.viz.formatter import format_chart_data
from restaurant_qa.services.viz.summary import classify_trend, describe_chart

__all__ = [
    "classify_trend",
    "describe_chart",
    "determine_chart_type",
    "format_chart_data",
    "is_chart_request",
]
