"""Tests for ResponseFormatter (text and chart answers)."""

from restaurant_qa.config.constants import NO_RELEVANT_INFORMATION
from restaurant_qa.orchestrator.state import PipelineContext
from restaurant_qa.services.formatting.formatter import ResponseFormatter


def _make_context(**overrides) -> PipelineContext:
    """Create a PipelineContext with sensible defaults; override any field."""
    defaults = dict(
        question="What dishes do we sell?",
        query="MATCH (d:Dish) RETURN d.name AS name, d.price AS price",
        db_results=[{"name": "Pasta", "price": 12.5}, {"name": "Soup", "price": 8}],
        answer_template="**Our dishes**\n\n- {name}: ${price}",
    )
    defaults.update(overrides)
    return PipelineContext(**defaults)


# ==========================================
#  Short-circuits
# ==========================================


def test_error_passes_through():
    context = _make_context(error="No results found.")
    result = ResponseFormatter.format(context)

    assert result is context
    assert result.answer is None


def test_empty_results_give_apology():
    result = ResponseFormatter.format(_make_context(db_results=[]))
    assert result.answer == NO_RELEVANT_INFORMATION
    assert result.json_response is None


# ==========================================
#  Text path
# ==========================================


def test_single_scalar():
    result = ResponseFormatter.format(_make_context(db_results=[{"count": 42}]))

    assert result.answer == "**count**: 42"
    assert result.json_response == {"count": 42}


def test_template_rendered_per_row():
    result = ResponseFormatter.format(_make_context())

    assert result.answer == "**Our dishes**\n\n- Pasta: $12.5\n\n- Soup: $8"
    assert result.json_response == {
        "header": "Our dishes",
        "results": [{"name": "Pasta", "price": 12.5}, {"name": "Soup", "price": 8}],
    }
    assert result.chart_data is None


def test_default_template_when_none():
    rows = [{"Results": "Pasta"}, {"Results": "Soup"}]
    result = ResponseFormatter.format(_make_context(answer_template=None, db_results=rows))

    assert result.answer == "**Results:**\n\nPasta\n\nSoup"
    assert result.json_response["header"] == "Results:"


# ==========================================
#  Chart path
# ==========================================


def test_chart_answer():
    rows = [
        {"dish": "Pasta", "sold": 30},
        {"dish": "Soup", "sold": 50},
        {"dish": "Salad", "sold": 10},
    ]
    context = _make_context(
        question="Show a bar chart of dishes sold",
        is_chart_request=True,
        db_results=rows,
    )

    result = ResponseFormatter.format(context)

    assert result.chart_data == {
        "type": "bar",
        "data": {
            "labels": ["Pasta", "Soup", "Salad"],
            "datasets": [{"label": "Sold", "data": [30, 50, 10]}],
        },
        "options": {"title": "Sold by Dish"},
    }
    assert result.answer == (
        "**Sold by Dish**\n\n"
        "The chart compares sold by dish. "
        "The highest values are: Soup (50), Pasta (30), Salad (10)."
    )
    assert result.json_response == {"header": "Sold by Dish", "results": rows}
