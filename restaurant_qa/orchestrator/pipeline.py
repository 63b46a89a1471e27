"""Main pipeline orchestrator."""

import logging
from typing import Any

from restaurant_qa.config.constants import PipelineStep, log_pipeline_step
from restaurant_qa.config.prompts import PromptLibrary
from restaurant_qa.config.settings import Settings
from restaurant_qa.infrastructure.cache.vector_cache import (
    InMemoryVectorCache,
    Neo4jVectorCache,
    VectorCache,
)
from restaurant_qa.infrastructure.graph.client import GraphSession, Neo4jGraph
from restaurant_qa.infrastructure.llm.client import TextGenerator
from restaurant_qa.infrastructure.llm.factory import create_embedder, create_text_generator
from restaurant_qa.infrastructure.logging.session_logger import SessionLogger
from restaurant_qa.orchestrator.state import PipelineContext
from restaurant_qa.orchestrator.step_timer import timed_step
from restaurant_qa.services.cache.service import SimilarityCacheService
from restaurant_qa.services.cypher.executor import QueryExecutor
from restaurant_qa.services.cypher.generator import QueryGenerator
from restaurant_qa.services.formatting.formatter import ResponseFormatter
from restaurant_qa.services.narration.generator import ResponseGenerator
from restaurant_qa.services.viz.chart_type import is_chart_request

logger = logging.getLogger(__name__)


class PipelineOrchestrator:
    """Orchestrates the restaurant question-answering pipeline.

    cache lookup -> query generation -> query execution -> response generation
    -> cache write -> format. A cache hit skips both model calls; an error set
    by any step turns every later step into a pass-through.
    """

    def __init__(
        self,
        settings: Settings,
        graph: Neo4jGraph,
        cache: VectorCache,
        coder: TextGenerator,
        narrator: TextGenerator,
        prompts: PromptLibrary | None = None,
    ):
        """Initialize orchestrator with explicitly constructed collaborators."""
        self.settings = settings
        self.graph = graph
        self.cache = cache
        self.coder = coder
        self.narrator = narrator
        self.prompts = prompts or PromptLibrary(settings.prompts_dir)

        self.cache_service = SimilarityCacheService(cache, settings.vector_threshold)
        self.query_gen = QueryGenerator(coder, self.prompts)
        self.query_exec = QueryExecutor()
        self.response_gen = ResponseGenerator(narrator, self.prompts)
        self.formatter = ResponseFormatter()

    @classmethod
    async def from_settings(cls, settings: Settings) -> "PipelineOrchestrator":
        """Build the production wiring: Neo4j graph, vector cache and model clients."""
        graph = Neo4jGraph.from_settings(settings)
        embedder = create_embedder(settings)
        if settings.cache_backend == "neo4j":
            cache: VectorCache = Neo4jVectorCache(
                graph.driver,
                embedder,
                index_name=settings.vector_index_name,
                node_label=settings.vector_node_label,
                dimensions=settings.vector_dimensions,
                database=settings.neo4j_database,
            )
            await cache.ensure_index()
        else:
            cache = InMemoryVectorCache(embedder)

        return cls(
            settings,
            graph=graph,
            cache=cache,
            coder=create_text_generator(settings, "coder"),
            narrator=create_text_generator(settings, "narrator"),
        )

    async def close(self) -> None:
        """Close model clients, the cache embedder and the graph driver."""
        try:
            await self.coder.close()
            await self.narrator.close()
            await self.cache.close()
            await self.graph.close()
            logger.info("Pipeline resources closed")
        except Exception as e:
            logger.error(f"Error closing pipeline resources: {e}", exc_info=True)

    async def _step_cache_lookup(
        self, context: PipelineContext, session_logger: SessionLogger
    ) -> PipelineContext:
        async with timed_step(
            PipelineStep.CACHE_LOOKUP, session_logger, input_text=context.question
        ) as step:
            context = await self.cache_service.lookup(context)
            step.set_result({"cached": context.cached, "query": context.query})
        return context

    async def _step_query_generation(
        self, context: PipelineContext, graph: GraphSession, session_logger: SessionLogger
    ) -> PipelineContext:
        if context.cached or context.error:
            logger.debug(f"{PipelineStep.QUERY_GENERATION.value}: skipped")
            return context
        async with timed_step(PipelineStep.QUERY_GENERATION, session_logger) as step:
            context = await self.query_gen.generate(context, graph)
            step.set_result(
                {"chart_profile": context.is_chart_request, "query": context.query},
                input_text=context.question,
            )
        return context

    async def _step_query_execution(
        self, context: PipelineContext, graph: GraphSession, session_logger: SessionLogger
    ) -> PipelineContext:
        if context.error:
            return context
        async with timed_step(
            PipelineStep.QUERY_EXECUTION, session_logger, input_text=context.query
        ) as step:
            context = await self.query_exec.execute(context, graph)
            step.set_result(
                {
                    "query": context.query,
                    "row_count": len(context.db_results or []),
                    "error": context.error,
                }
            )
        return context

    async def _step_response_generation(
        self, context: PipelineContext, session_logger: SessionLogger
    ) -> PipelineContext:
        if context.cached or context.error:
            logger.debug(f"{PipelineStep.RESPONSE_GENERATION.value}: skipped")
            return context
        async with timed_step(PipelineStep.RESPONSE_GENERATION, session_logger) as step:
            context = await self.response_gen.generate(context)
            step.set_result({"answer_template": context.answer_template})
        return context

    async def _step_cache_write(
        self, context: PipelineContext, session_logger: SessionLogger
    ) -> PipelineContext:
        if context.cached or context.error:
            return context
        async with timed_step(PipelineStep.CACHE_WRITE, session_logger) as step:
            context = await self.cache_service.store(context)
            step.set_result({"question": context.question, "query": context.query})
        return context

    def _step_format(self, context: PipelineContext, session_logger: SessionLogger) -> PipelineContext:
        log_pipeline_step(PipelineStep.FORMAT)
        context = self.formatter.format(context)
        session_logger.log_step(
            step_name=PipelineStep.FORMAT.value,
            result={
                "answer": context.answer,
                "chart_type": (context.chart_data or {}).get("type"),
                "error": context.error,
            },
        )
        return context

    async def run(self, question: str) -> PipelineContext:
        """
        Answer a question through the complete pipeline.

        Args:
            question: User's natural language question

        Returns:
            The final pipeline context
        """
        context = PipelineContext(question=question, is_chart_request=is_chart_request(question))
        session_logger = SessionLogger(
            self.settings.session_log_dir, enabled=self.settings.session_logging
        )
        session_logger.start_session(question)

        try:
            async with self.graph.session() as graph:
                context = await self._step_cache_lookup(context, session_logger)
                context = await self._step_query_generation(context, graph, session_logger)
                context = await self._step_query_execution(context, graph, session_logger)
                context = await self._step_response_generation(context, session_logger)
                context = await self._step_cache_write(context, session_logger)
                context = self._step_format(context, session_logger)
        except Exception as e:
            logger.error(f"Pipeline error: {e}", exc_info=True)
            session_logger.end_session(success=False, final_message=f"Pipeline error: {e}")
            raise

        session_logger.end_session(
            success=context.error is None,
            final_message=context.answer or context.error or "",
        )
        logger.info(
            f"Pipeline finished: cached={context.cached}, "
            f"chart={context.is_chart_request}, error={context.error!r}"
        )
        return context

    async def answer_question(self, question: str) -> dict[str, Any]:
        """Run the pipeline and return the boundary payload."""
        context = await self.run(question)
        return context.to_response()
