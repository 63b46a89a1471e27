"""Async context manager for timing and logging pipeline steps."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from restaurant_qa.config.constants import PipelineStep, log_pipeline_step
from restaurant_qa.infrastructure.logging.session_logger import SessionLogger

logger = logging.getLogger(__name__)


class StepContext:
    """Mutable context for a timed pipeline step."""

    def __init__(self) -> None:
        self.result: Any = None
        self.input_text: str | None = None

    def set_result(self, result: Any, *, input_text: str | None = None) -> None:
        self.result = result
        if input_text is not None:
            self.input_text = input_text


@asynccontextmanager
async def timed_step(
    step: PipelineStep,
    session_logger: SessionLogger,
    *,
    input_text: str | None = None,
) -> AsyncGenerator[StepContext, None]:
    """Time a pipeline step and log its result."""
    log_pipeline_step(step)
    ctx = StepContext()
    ctx.input_text = input_text
    start = time.time()
    yield ctx
    elapsed_ms = (time.time() - start) * 1000
    logger.debug(f"{step.value} finished in {elapsed_ms:.1f} ms")
    if ctx.result is not None:
        session_logger.log_step(
            step_name=step.value,
            result=ctx.result,
            input_text=ctx.input_text,
            execution_time_ms=elapsed_ms,
        )
