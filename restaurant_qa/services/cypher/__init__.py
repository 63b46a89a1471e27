"""Cypher generation and execution module."""

from restaurant_qa.services.cypher.executor import QueryExecutor
from restaurant_qa.services.cypher.extraction import extract_candidate_query
from restaurant_qa.services.cypher.generator import QueryGenerator

__all__ = ["QueryExecutor", "QueryGenerator", "extract_candidate_query"]
