"""Final formatting stage: text answers and chart answers."""

import logging
from typing import Any

from restaurant_qa.config.constants import DEFAULT_ANSWER_TEMPLATE, NO_RELEVANT_INFORMATION
from restaurant_qa.orchestrator.state import PipelineContext
from restaurant_qa.services.formatting.template import render_template, stringify_value, strip_decoration
from restaurant_qa.services.viz.chart_type import determine_chart_type
from restaurant_qa.services.viz.formatter import format_chart_data
from restaurant_qa.services.viz.summary import describe_chart

logger = logging.getLogger(__name__)


class ResponseFormatter:
    """Builds ``answer``, ``chart_data`` and ``json_response`` from the results."""

    @staticmethod
    def format(context: PipelineContext) -> PipelineContext:
        if context.error:
            return context

        rows = context.db_results or []
        if not rows:
            return context.evolve(answer=NO_RELEVANT_INFORMATION)

        if context.is_chart_request:
            return ResponseFormatter._format_chart(context, rows)
        return ResponseFormatter._format_text(context, rows)

    @staticmethod
    def _format_chart(context: PipelineContext, rows: list[dict[str, Any]]) -> PipelineContext:
        chart_type = determine_chart_type(rows, context.question)
        chart_data = format_chart_data(rows, chart_type)
        title = chart_data["options"]["title"]
        logger.info(f"Chart answer: type={chart_type.value}, points={len(rows)}")
        return context.evolve(
            answer=describe_chart(chart_data),
            chart_data=chart_data,
            json_response={"header": title, "results": rows},
        )

    @staticmethod
    def _format_text(context: PipelineContext, rows: list[dict[str, Any]]) -> PipelineContext:
        if len(rows) == 1 and len(rows[0]) == 1:
            key, value = next(iter(rows[0].items()))
            return context.evolve(
                answer=f"**{key}**: {stringify_value(value)}",
                json_response={key: value},
            )

        template = context.answer_template or DEFAULT_ANSWER_TEMPLATE
        answer, header = render_template(template, rows)
        return context.evolve(
            answer=answer,
            json_response={"header": strip_decoration(header), "results": rows},
        )
