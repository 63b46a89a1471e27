"""Chat and health endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from restaurant_qa import __version__
from restaurant_qa.api.dependencies import get_orchestrator
from restaurant_qa.api.models import (
    ChartPayload,
    ChatRequest,
    HealthResponse,
    JsonChatResponse,
    TextChatResponse,
)
from restaurant_qa.orchestrator.pipeline import PipelineOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter()


def build_chat_payload(result: dict[str, Any], response_format: str) -> dict[str, Any]:
    """Shape a pipeline result for the requested response format.

    ``message`` is the answer, or the error when there is none. ``chart`` is
    only present when chart data was produced.
    """
    message = result.get("answer") or result.get("error") or ""
    chart = ChartPayload(**result["chart_data"]) if result.get("chart_data") else None

    if response_format == "json":
        response = JsonChatResponse(
            success=result.get("error") is None,
            message=message,
            data=result.get("json_response"),
            rawData=result.get("db_results"),
            query=result.get("query"),
            chart=chart,
        )
    else:
        response = TextChatResponse(message=message, chart=chart)

    payload = response.model_dump()
    if chart is None:
        payload.pop("chart")
    return payload


@router.post("/v1/chat")
async def chat(
    request: ChatRequest,
    orchestrator: PipelineOrchestrator = Depends(get_orchestrator),
) -> JSONResponse:
    """Answer a natural language question about the restaurant."""
    try:
        result = await orchestrator.answer_question(request.prompt)
    except Exception as e:
        logger.error("Error processing chat request: %s", e, exc_info=True)
        return JSONResponse(status_code=500, content={"message": "Internal Server Error"})
    return JSONResponse(content=build_chat_payload(result, request.format))


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Health check."""
    return HealthResponse(status="healthy", version=__version__)
