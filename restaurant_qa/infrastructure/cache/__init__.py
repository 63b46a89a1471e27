"""Similarity cache backends."""

from restaurant_qa.infrastructure.cache.vector_cache import (
    CacheEntry,
    InMemoryVectorCache,
    Neo4jVectorCache,
    VectorCache,
)

__all__ = ["CacheEntry", "InMemoryVectorCache", "Neo4jVectorCache", "VectorCache"]
