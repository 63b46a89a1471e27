"""Text-generation and embedding clients."""

from restaurant_qa.infrastructure.llm.client import Embedder, TextGenerator
from restaurant_qa.infrastructure.llm.factory import create_embedder, create_text_generator

__all__ = ["Embedder", "TextGenerator", "create_embedder", "create_text_generator"]
