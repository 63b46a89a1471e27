"""In-process fakes for the graph, cache and model collaborators."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from restaurant_qa.exceptions import QueryExecutionError
from restaurant_qa.infrastructure.llm.client import TextGenerator

SCHEMA = (
    "Node properties:\nDish {name: STRING, price: FLOAT}\n"
    "The relationships:\n(:Dish)-[:CONTAINS]->(:Ingredient)"
)


class FakeGraphSession:
    """Answers queries from a dict of query text -> rows or exception."""

    def __init__(self, responses: dict[str, Any], schema: str = SCHEMA):
        self.responses = responses
        self.schema = schema
        self.queries: list[str] = []

    async def query(self, cypher: str) -> list[dict[str, Any]]:
        self.queries.append(cypher)
        response = self.responses.get(cypher)
        if response is None:
            raise QueryExecutionError("Invalid input", query=cypher)
        if isinstance(response, Exception):
            raise response
        return response

    async def get_schema(self) -> str:
        return self.schema


class FakeGraph:
    """Stands in for ``Neo4jGraph``; counts opened and closed sessions."""

    def __init__(self, responses: dict[str, Any] | None = None):
        self.current = FakeGraphSession(responses or {})
        self.opened = 0
        self.closed = 0
        self.driver_closed = False

    @asynccontextmanager
    async def session(self) -> AsyncIterator[FakeGraphSession]:
        self.opened += 1
        try:
            yield self.current
        finally:
            self.closed += 1

    async def close(self) -> None:
        self.driver_closed = True


class FakeEmbedder:
    """Letter-frequency vectors: identical text scores 1.0, different text less."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        vector = [0.0] * 26
        for char in text.lower():
            if "a" <= char <= "z":
                vector[ord(char) - ord("a")] += 1.0
        return vector

    async def close(self) -> None:
        pass


class FakeGenerator(TextGenerator):
    """Returns queued completions and records every rendered prompt."""

    def __init__(self, *responses: str, name: str = "Fake"):
        super().__init__(name=name, model="fake-model", max_retries=1)
        self.responses = list(responses)
        self.prompts: list[str] = []

    async def _complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.responses:
            raise AssertionError(f"{self.name} called more times than expected")
        return self.responses.pop(0)


