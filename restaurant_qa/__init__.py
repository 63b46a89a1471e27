"""Restaurant Graph QA: natural-language questions over a Neo4j restaurant graph."""

__version__ = "0.1.0"
