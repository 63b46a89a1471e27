"""Pytest configuration and fixtures."""

import pytest

from fakes import FakeEmbedder
from restaurant_qa.config.prompts import PromptLibrary
from restaurant_qa.config.settings import Settings
from restaurant_qa.infrastructure.cache.vector_cache import InMemoryVectorCache


@pytest.fixture
def settings(tmp_path):
    """Provide settings fixture."""
    return Settings(
        cache_backend="memory",
        vector_threshold=0.9,
        session_logging=False,
        session_log_dir=tmp_path / "logs",
    )


@pytest.fixture
def prompts(settings):
    return PromptLibrary(settings.prompts_dir)


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def cache(embedder):
    return InMemoryVectorCache(embedder)
