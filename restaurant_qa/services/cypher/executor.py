"""Query execution stage with a single extraction fallback."""

import logging

from restaurant_qa.config.constants import INVALID_QUERY_ERROR, NO_RESULTS_ERROR
from restaurant_qa.exceptions import QueryExecutionError
from restaurant_qa.infrastructure.graph.client import GraphSession
from restaurant_qa.orchestrator.state import PipelineContext
from restaurant_qa.services.cypher.extraction import extract_candidate_query

logger = logging.getLogger(__name__)


class QueryExecutor:
    """Runs the context's query against the graph.

    A freshly generated query gets at most two attempts: the raw model output,
    then the candidate pulled out of it by ``extract_candidate_query``. Cached
    queries are executed once. Zero rows on any attempt ends the run with
    ``NO_RESULTS_ERROR``; a second failure ends it with ``INVALID_QUERY_ERROR``.
    """

    async def execute(self, context: PipelineContext, graph: GraphSession) -> PipelineContext:
        if context.error:
            return context

        query = context.query or ""
        try:
            rows = await graph.query(query)
        except QueryExecutionError as e:
            if context.cached:
                logger.warning(f"Cached query failed: {e}")
                return context.evolve(error=NO_RESULTS_ERROR)
            logger.warning(f"Generated query failed, retrying with extracted candidate: {e}")
            return await self._execute_extracted(context, graph)

        return self._with_rows(context, query, rows)

    async def _execute_extracted(self, context: PipelineContext, graph: GraphSession) -> PipelineContext:
        candidate = extract_candidate_query(context.query or "")
        try:
            rows = await graph.query(candidate)
        except QueryExecutionError as e:
            logger.warning(f"Extracted query failed: {e}")
            return context.evolve(error=INVALID_QUERY_ERROR)
        return self._with_rows(context, candidate, rows)

    @staticmethod
    def _with_rows(context: PipelineContext, query: str, rows: list[dict]) -> PipelineContext:
        if not rows:
            logger.info("Query returned no rows")
            return context.evolve(query=query, db_results=[], error=NO_RESULTS_ERROR)
        logger.info(f"Query returned {len(rows)} rows")
        return context.evolve(query=query, db_results=rows)
