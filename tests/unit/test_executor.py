"""Tests for QueryExecutor (two-attempt execution)."""

import pytest

from fakes import FakeGraphSession
from restaurant_qa.config.constants import INVALID_QUERY_ERROR, NO_RESULTS_ERROR
from restaurant_qa.orchestrator.state import PipelineContext
from restaurant_qa.services.cypher.executor import QueryExecutor

QUERY = "MATCH (d:Dish) RETURN d.name AS name"
ROWS = [{"name": "Pasta"}, {"name": "Soup"}]


def _context(**overrides) -> PipelineContext:
    defaults = dict(question="Which dishes do we have?", query=QUERY)
    defaults.update(overrides)
    return PipelineContext(**defaults)


@pytest.mark.asyncio
async def test_first_attempt_succeeds():
    graph = FakeGraphSession({QUERY: ROWS})
    result = await QueryExecutor().execute(_context(), graph)

    assert result.db_results == ROWS
    assert result.error is None
    assert result.query == QUERY
    assert graph.queries == [QUERY]


@pytest.mark.asyncio
async def test_extracted_candidate_used_on_second_attempt():
    raw = "```cypher\nMATCH (d:Dish) RETURN count(d) AS total\n```"
    extracted = "MATCH (d:Dish) RETURN count(d) AS total"
    graph = FakeGraphSession({extracted: [{"total": 2}]})

    result = await QueryExecutor().execute(_context(query=raw), graph)

    assert result.query == extracted
    assert result.db_results == [{"total": 2}]
    assert result.error is None
    assert graph.queries == [raw, extracted]


@pytest.mark.asyncio
async def test_two_failures_give_invalid_query_error():
    graph = FakeGraphSession({})
    result = await QueryExecutor().execute(_context(query="not cypher"), graph)

    assert result.error == INVALID_QUERY_ERROR
    assert result.db_results is None
    assert len(graph.queries) == 2


@pytest.mark.asyncio
async def test_zero_rows_on_first_attempt():
    graph = FakeGraphSession({QUERY: []})
    result = await QueryExecutor().execute(_context(), graph)

    assert result.error == NO_RESULTS_ERROR
    assert result.db_results == []
    assert graph.queries == [QUERY]


@pytest.mark.asyncio
async def test_zero_rows_on_second_attempt():
    raw = "Here: `MATCH (d:Dish) WHERE d.price > 100 RETURN d`"
    extracted = "MATCH (d:Dish) WHERE d.price > 100 RETURN d"
    graph = FakeGraphSession({extracted: []})

    result = await QueryExecutor().execute(_context(query=raw), graph)

    assert result.error == NO_RESULTS_ERROR
    assert graph.queries == [raw, extracted]


@pytest.mark.asyncio
async def test_cached_query_failure_is_not_retried():
    graph = FakeGraphSession({})
    result = await QueryExecutor().execute(_context(cached=True), graph)

    assert result.error == NO_RESULTS_ERROR
    assert graph.queries == [QUERY]


@pytest.mark.asyncio
async def test_error_passes_through():
    graph = FakeGraphSession({QUERY: ROWS})
    context = _context(error="earlier failure")

    result = await QueryExecutor().execute(context, graph)

    assert result is context
    assert graph.queries == []
