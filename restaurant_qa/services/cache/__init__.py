"""Similarity cache service module."""

from restaurant_qa.services.cache.service import SimilarityCacheService

__all__ = ["SimilarityCacheService"]
