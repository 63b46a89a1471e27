"""
Constants, enums, and static values.
"""

import logging
from enum import Enum

logger = logging.getLogger(__name__)

NO_RESULTS_ERROR = "No results found."
INVALID_QUERY_ERROR = "I couldn't generate a valid query for your question."
NO_RELEVANT_INFORMATION = (
    "I'm sorry, but I couldn't find any relevant information in our restaurant database."
)
DEFAULT_ANSWER_TEMPLATE = "**Results:**\n\n{Results}"


class ChartType(str, Enum):
    """Chart kinds the formatter can produce."""

    PIE = "pie"
    DOUGHNUT = "doughnut"
    BAR = "bar"
    LINE = "line"


class PromptName(str, Enum):
    """Named prompt templates shipped in the prompts directory."""

    NLP_TO_CYPHER = "nlpToCypher"
    CHART_QUERY_GENERATOR = "chartQueryGenerator"
    RESPONSE_TEMPLATE_FROM_JSON = "responseTemplateFromJson"
    CONTEXT = "context"


class PipelineStep(str, Enum):
    """Pipeline execution steps."""

    CACHE_LOOKUP = "cache_lookup"
    QUERY_GENERATION = "query_generation"
    QUERY_EXECUTION = "query_execution"
    RESPONSE_GENERATION = "response_generation"
    CACHE_WRITE = "cache_write"
    FORMAT = "format"


class PipelineStepDescription(str, Enum):
    """Pipeline execution step descriptions."""

    CACHE_LOOKUP = "Search the similarity cache for an already answered question"
    QUERY_GENERATION = "Generate the Cypher query to answer the user's question"
    QUERY_EXECUTION = "Execute the Cypher query against the restaurant graph"
    RESPONSE_GENERATION = "Generate the answer template from the query results"
    CACHE_WRITE = "Store the new question, template and query in the cache"
    FORMAT = "Format the response to answer the user's question"


def log_pipeline_step(step: PipelineStep) -> None:
    """Log the start of a pipeline step with its description."""
    description = PipelineStepDescription[step.name].value
    logger.info(f"{step.value}: {description}")
