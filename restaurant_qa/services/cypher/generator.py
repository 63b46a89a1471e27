"""Cypher generation stage."""

import logging

from restaurant_qa.config.constants import PromptName
from restaurant_qa.config.prompts import PromptLibrary
from restaurant_qa.infrastructure.graph.client import GraphSession
from restaurant_qa.infrastructure.llm.client import TextGenerator
from restaurant_qa.orchestrator.state import PipelineContext

logger = logging.getLogger(__name__)


class QueryGenerator:
    """Asks the coder model for a Cypher query answering the question.

    Chart requests use the chart prompt profile, which asks for label/value
    shaped rows; everything else uses the general profile.
    """

    def __init__(self, coder: TextGenerator, prompts: PromptLibrary):
        self.coder = coder
        self.prompts = prompts

    def prompt_for(self, context: PipelineContext) -> str:
        name = PromptName.CHART_QUERY_GENERATOR if context.is_chart_request else PromptName.NLP_TO_CYPHER
        return self.prompts.get(name)

    async def generate(self, context: PipelineContext, graph: GraphSession) -> PipelineContext:
        if context.cached or context.error:
            return context

        schema = await graph.get_schema()
        query = await self.coder.generate(
            self.prompt_for(context),
            {
                "schema": schema,
                "context": self.prompts.get(PromptName.CONTEXT),
                "question": context.question,
            },
        )
        logger.debug(f"Generated query: {query[:200]}")
        return context.evolve(query=query)
