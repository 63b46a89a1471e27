"""Vector caches for answered questions.

Each entry pairs a question with the Cypher query that answered it and the
answer template produced for it. Entries are looked up by cosine similarity of
question embeddings and are never updated or evicted.
"""

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np
import openai
from neo4j import AsyncDriver, RoutingControl
from neo4j.exceptions import DriverError, Neo4jError

from restaurant_qa.exceptions import CacheUnavailableError
from restaurant_qa.infrastructure.llm.client import Embedder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """A previously answered question."""

    question: str
    answer_template: str
    query: str


class VectorCache:
    """Interface shared by the cache backends."""

    def __init__(self, embedder: Embedder):
        self.embedder = embedder

    async def similarity_search(self, text: str, k: int = 1) -> list[tuple[CacheEntry, float]]:
        """Return up to ``k`` entries with their similarity score, best first.

        Raises:
            CacheUnavailableError: The cache could not be searched.
        """
        raise NotImplementedError

    async def add_entry(self, text: str, metadata: dict[str, Any]) -> None:
        """Append an entry. ``metadata`` carries ``answerTemplate`` and ``query``."""
        raise NotImplementedError

    async def _embed_for_search(self, text: str) -> list[float]:
        try:
            return await self.embedder.embed(text)
        except openai.OpenAIError as e:
            raise CacheUnavailableError(f"Embedding failed: {e}") from e

    async def close(self) -> None:
        await self.embedder.close()


class Neo4jVectorCache(VectorCache):
    """Cache stored as nodes in Neo4j and searched through a vector index."""

    def __init__(
        self,
        driver: AsyncDriver,
        embedder: Embedder,
        index_name: str = "restaurant_agent_index",
        node_label: str = "Chunk",
        dimensions: int = 768,
        database: str | None = None,
    ):
        super().__init__(embedder)
        self._driver = driver
        self.index_name = index_name
        self.node_label = node_label
        self.dimensions = dimensions
        self.database = database

    async def ensure_index(self) -> None:
        """Create the vector index if it does not exist yet."""
        await self._driver.execute_query(
            f"""
            CREATE VECTOR INDEX `{self.index_name}` IF NOT EXISTS
            FOR (c:`{self.node_label}`) ON (c.embedding)
            OPTIONS {{indexConfig: {{
                `vector.dimensions`: {int(self.dimensions)},
                `vector.similarity_function`: 'cosine'
            }}}}
            """,
            database_=self.database,
        )
        logger.info(f"[SEMANTIC CACHE] Vector index '{self.index_name}' ready")

    async def similarity_search(self, text: str, k: int = 1) -> list[tuple[CacheEntry, float]]:
        embedding = await self._embed_for_search(text)
        try:
            records, _, _ = await self._driver.execute_query(
                """
                CALL db.index.vector.queryNodes($index_name, $k, $embedding)
                YIELD node, score
                RETURN node.question AS question,
                       node.answerTemplate AS answerTemplate,
                       node.query AS query,
                       score
                ORDER BY score DESC
                """,
                parameters_={"index_name": self.index_name, "k": k, "embedding": embedding},
                database_=self.database,
                routing_=RoutingControl.READ,
            )
        except (Neo4jError, DriverError) as e:
            raise CacheUnavailableError(f"Vector search failed: {e}") from e

        return [
            (
                CacheEntry(
                    question=record["question"] or "",
                    answer_template=record["answerTemplate"] or "",
                    query=record["query"] or "",
                ),
                float(record["score"]),
            )
            for record in records
        ]

    async def add_entry(self, text: str, metadata: dict[str, Any]) -> None:
        embedding = await self.embedder.embed(text)
        await self._driver.execute_query(
            f"""
            CREATE (c:`{self.node_label}` {{
                question: $question,
                answerTemplate: $answer_template,
                query: $query,
                embedding: $embedding
            }})
            """,
            parameters_={
                "question": text,
                "answer_template": metadata.get("answerTemplate", ""),
                "query": metadata.get("query", ""),
                "embedding": embedding,
            },
            database_=self.database,
        )
        logger.info(f"[SEMANTIC CACHE] Stored: {text[:40]}")


class InMemoryVectorCache(VectorCache):
    """Process-local cache using numpy cosine similarity."""

    def __init__(self, embedder: Embedder):
        super().__init__(embedder)
        self._entries: list[tuple[CacheEntry, np.ndarray]] = []

    @staticmethod
    def cosine_similarity(a: np.ndarray, b: np.ndarray) -> float:
        denom = np.linalg.norm(a) * np.linalg.norm(b)
        if denom == 0:
            return 0.0
        return float(np.dot(a, b) / denom)

    async def similarity_search(self, text: str, k: int = 1) -> list[tuple[CacheEntry, float]]:
        if not self._entries:
            return []
        query_vec = np.asarray(await self._embed_for_search(text), dtype=float)
        scored = [
            (entry, self.cosine_similarity(query_vec, vector)) for entry, vector in self._entries
        ]
        scored.sort(key=lambda pair: pair[1], reverse=True)
        return scored[:k]

    async def add_entry(self, text: str, metadata: dict[str, Any]) -> None:
        embedding = np.asarray(await self.embedder.embed(text), dtype=float)
        entry = CacheEntry(
            question=text,
            answer_template=metadata.get("answerTemplate", ""),
            query=metadata.get("query", ""),
        )
        self._entries.append((entry, embedding))
        logger.info("[SEMANTIC CACHE] Stored: %s (entries=%d)", text[:30], len(self._entries))
