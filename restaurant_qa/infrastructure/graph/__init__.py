"""Neo4j graph store client."""

from restaurant_qa.infrastructure.graph.client import GraphSession, Neo4jGraph

__all__ = ["GraphSession", "Neo4jGraph"]
