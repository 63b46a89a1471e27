"""Request/Response models for API endpoints."""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class ChatRequest(BaseModel):
    """Request model for chat endpoint."""

    prompt: str = Field(..., min_length=1, description="User's natural language question")
    format: Literal["text", "json"] = Field("text", description="Response shape")


class ChartPayload(BaseModel):
    """Chart data ready for a Chart.js style renderer."""

    type: str = Field(..., description="pie, doughnut, bar or line")
    data: dict[str, Any] = Field(..., description="labels and datasets")
    options: dict[str, Any] = Field(default_factory=dict, description="title")


class TextChatResponse(BaseModel):
    """Response model for ``format="text"``."""

    message: str
    chart: Optional[ChartPayload] = None


class JsonChatResponse(BaseModel):
    """Response model for ``format="json"``."""

    success: bool
    message: str
    data: Optional[dict[str, Any]] = None
    rawData: Optional[list[dict[str, Any]]] = None
    query: Optional[str] = None
    chart: Optional[ChartPayload] = None


class HealthResponse(BaseModel):
    """Response model for health endpoint."""

    status: str = Field(..., description="Service status")
    version: str = Field(..., description="Application version")
