"""Model client factory helpers."""

import logging
from typing import Literal

import anthropic
import openai

from restaurant_qa.config.settings import Settings
from restaurant_qa.infrastructure.llm.client import (
    AnthropicTextGenerator,
    Embedder,
    OpenAITextGenerator,
    TextGenerator,
)

logger = logging.getLogger(__name__)

ModelRole = Literal["coder", "narrator"]


def is_anthropic_model(model: str) -> bool:
    """Check if model is Anthropic (Claude)."""
    return "claude" in model.lower()


def _openai_client(settings: Settings) -> openai.AsyncOpenAI:
    return openai.AsyncOpenAI(
        base_url=settings.llm_base_url,
        api_key=settings.llm_api_key,
        timeout=settings.llm_timeout,
        max_retries=0,
    )


def create_text_generator(settings: Settings, role: ModelRole) -> TextGenerator:
    """
    Create the text generator for one pipeline role.

    Args:
        settings: Application settings
        role: "coder" writes Cypher, "narrator" writes answer templates

    Returns:
        A generator bound to the role's model, temperature and token limit
    """
    if role == "coder":
        model = settings.coder_model
        temperature = settings.coder_temperature
        max_tokens = settings.coder_max_tokens
        name = "QueryCoder"
    else:
        model = settings.nlp_model
        temperature = settings.nlp_temperature
        max_tokens = settings.nlp_max_tokens
        name = "Narrator"

    common = {
        "name": name,
        "model": model,
        "temperature": temperature,
        "max_tokens": max_tokens,
        "max_retries": settings.llm_max_retries,
    }

    if is_anthropic_model(model):
        if not settings.anthropic_api_key:
            logger.warning(f"{name} uses {model} but anthropic_api_key is not set")
        logger.debug(f"Creating Anthropic generator '{name}' with model: {model}")
        client = anthropic.AsyncAnthropic(
            api_key=settings.anthropic_api_key,
            timeout=settings.llm_timeout,
            max_retries=0,
        )
        return AnthropicTextGenerator(client, **common)

    logger.debug(f"Creating OpenAI-compatible generator '{name}' with model: {model}")
    return OpenAITextGenerator(_openai_client(settings), **common)


def create_embedder(settings: Settings) -> Embedder:
    """Create the question embedder used by the similarity cache."""
    return Embedder(
        _openai_client(settings),
        model=settings.embedding_model,
        max_retries=settings.llm_max_retries,
    )
