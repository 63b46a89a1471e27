"""Pipeline state model."""

from dataclasses import dataclass, replace
from typing import Any, Optional


@dataclass(frozen=True)
class PipelineContext:
    """State threaded through the pipeline.

    Frozen: every stage returns a new context through ``evolve`` instead of
    mutating the one it received. Each field is written by a single stage.
    """

    # Input
    question: str
    is_chart_request: bool = False

    # Step 1: Cache lookup
    cached: bool = False

    # Step 2-3: Query generation and execution
    query: Optional[str] = None
    db_results: Optional[list[dict[str, Any]]] = None  # [] is a valid "no rows" state

    # Step 4: Response generation (or cache hit)
    answer_template: Optional[str] = None

    # Any step: terminal error, later steps pass through
    error: Optional[str] = None

    # Step 6: Final response
    answer: Optional[str] = None
    chart_data: Optional[dict[str, Any]] = None
    json_response: Optional[dict[str, Any]] = None

    def evolve(self, **changes: Any) -> "PipelineContext":
        """Return a copy with ``changes`` applied."""
        return replace(self, **changes)

    def to_response(self) -> dict[str, Any]:
        """Boundary payload returned to callers of the pipeline."""
        return {
            "answer": self.answer,
            "error": self.error,
            "query": self.query,
            "db_results": self.db_results,
            "chart_data": self.chart_data,
            "json_response": self.json_response,
        }
