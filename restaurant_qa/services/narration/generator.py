"""Answer template generation stage."""

import json
import logging

from restaurant_qa.config.constants import PromptName
from restaurant_qa.config.prompts import PromptLibrary
from restaurant_qa.infrastructure.llm.client import TextGenerator
from restaurant_qa.orchestrator.state import PipelineContext

logger = logging.getLogger(__name__)


class ResponseGenerator:
    """Asks the narrator model for a reusable answer template.

    Only the first result row is shown to the model. The template it returns
    uses ``{fieldName}`` placeholders and is filled in per row by the formatter.
    """

    def __init__(self, narrator: TextGenerator, prompts: PromptLibrary):
        self.narrator = narrator
        self.prompts = prompts

    async def generate(self, context: PipelineContext) -> PipelineContext:
        if context.cached or context.error or not context.db_results:
            return context

        first_row = json.dumps(context.db_results[0], ensure_ascii=False, default=str)
        template = await self.narrator.generate(
            self.prompts.get(PromptName.RESPONSE_TEMPLATE_FROM_JSON),
            {"question": context.question, "structuredResponse": first_row},
        )
        logger.debug(f"Answer template: {template[:200]}")
        return context.evolve(answer_template=template)
