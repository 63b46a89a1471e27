"""Adapters over external services: Neo4j, model endpoints, logging."""
