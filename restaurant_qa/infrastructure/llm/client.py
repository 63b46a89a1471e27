"""Text-generation and embedding clients.

Both roles of the pipeline ("query-coder" and "narrator") talk to a model
through ``TextGenerator.generate(template, variables)``. Concrete generators
wrap the ``openai`` SDK (any OpenAI-compatible endpoint, Ollama included) or
the ``anthropic`` SDK.
"""

import logging
from typing import Any

import anthropic
import openai

from restaurant_qa.config.prompts import render_prompt
from restaurant_qa.utils.retry import run_with_retry

logger = logging.getLogger(__name__)


class TextGenerator:
    """Base class: renders a prompt template and returns the model's text."""

    def __init__(
        self,
        name: str,
        model: str,
        temperature: float = 0.0,
        max_tokens: int = 1024,
        max_retries: int = 2,
    ):
        self.name = name
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.max_retries = max_retries

    async def generate(self, template: str, variables: dict[str, Any]) -> str:
        """Render ``template`` with ``variables`` and return the completion text."""
        prompt = render_prompt(template, variables)
        logger.debug(f"[{self.name}] prompt length={len(prompt)} chars, model={self.model}")
        text = await run_with_retry(
            lambda: self._complete(prompt),
            max_retries=self.max_retries,
        )
        logger.info(f"[{self.name}] completion received ({len(text)} chars)")
        return text

    async def _complete(self, prompt: str) -> str:
        raise NotImplementedError

    async def close(self) -> None:
        """Release the underlying HTTP client."""


class OpenAITextGenerator(TextGenerator):
    """Chat-completions generator for OpenAI-compatible endpoints."""

    def __init__(self, client: openai.AsyncOpenAI, **kwargs: Any):
        super().__init__(**kwargs)
        self._client = client

    async def _complete(self, prompt: str) -> str:
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[{"role": "user", "content": prompt}],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return response.choices[0].message.content or ""

    async def close(self) -> None:
        await self._client.close()


class AnthropicTextGenerator(TextGenerator):
    """Messages-API generator for Claude models."""

    def __init__(self, client: anthropic.AsyncAnthropic, **kwargs: Any):
        super().__init__(**kwargs)
        self._client = client

    async def _complete(self, prompt: str) -> str:
        response = await self._client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
            messages=[{"role": "user", "content": prompt}],
        )
        return "".join(block.text for block in response.content if block.type == "text")

    async def close(self) -> None:
        await self._client.close()


class Embedder:
    """Embeds question text through an OpenAI-compatible embeddings endpoint."""

    def __init__(self, client: openai.AsyncOpenAI, model: str, max_retries: int = 2):
        self._client = client
        self.model = model
        self.max_retries = max_retries

    async def embed(self, text: str) -> list[float]:
        """Convert text to an embedding vector."""

        async def _call() -> list[float]:
            resp = await self._client.embeddings.create(model=self.model, input=text)
            return resp.data[0].embedding

        return await run_with_retry(_call, max_retries=self.max_retries)

    async def close(self) -> None:
        await self._client.close()
