"""FastAPI dependencies."""

from fastapi import Request

from restaurant_qa.orchestrator.pipeline import PipelineOrchestrator


def get_orchestrator(request: Request) -> PipelineOrchestrator:
    """Shared orchestrator built during application startup."""
    return request.app.state.orchestrator
