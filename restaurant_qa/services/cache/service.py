"""Similarity cache stages: lookup before generation, write after a fresh answer."""

import logging

from restaurant_qa.exceptions import CacheUnavailableError
from restaurant_qa.infrastructure.cache.vector_cache import VectorCache
from restaurant_qa.orchestrator.state import PipelineContext

logger = logging.getLogger(__name__)


class SimilarityCacheService:
    """Reads and writes question/query/template triples in the vector cache."""

    def __init__(self, cache: VectorCache, threshold: float):
        self.cache = cache
        self.threshold = threshold

    async def lookup(self, context: PipelineContext) -> PipelineContext:
        """Mark the context as cached when the nearest question is similar enough.

        A match is accepted only when its score is strictly above the threshold.
        An empty or unreachable cache counts as a miss.
        """
        if context.error:
            return context

        try:
            matches = await self.cache.similarity_search(context.question, k=1)
        except CacheUnavailableError as e:
            logger.warning(f"[SEMANTIC CACHE] Unavailable, treating as miss: {e}")
            return context.evolve(cached=False)

        if not matches:
            logger.info("[SEMANTIC CACHE] MISS (cache is empty)")
            return context.evolve(cached=False)

        entry, score = matches[0]
        if score > self.threshold:
            logger.info("[SEMANTIC CACHE] HIT (score=%.3f, question=%s)", score, entry.question[:40])
            return context.evolve(
                cached=True,
                query=entry.query,
                answer_template=entry.answer_template,
            )

        logger.info(
            "[SEMANTIC CACHE] MISS (best_score=%.3f <= threshold=%.2f)", score, self.threshold
        )
        return context.evolve(cached=False)

    async def store(self, context: PipelineContext) -> PipelineContext:
        """Persist a freshly answered question. Skipped on cache hits and errors."""
        if context.cached or context.error:
            return context

        await self.cache.add_entry(
            context.question,
            {
                "answerTemplate": context.answer_template or "",
                "query": context.query or "",
            },
        )
        return context
