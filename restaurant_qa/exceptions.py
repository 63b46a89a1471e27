"""Exception types raised inside the question-answering pipeline."""


class RestaurantQAError(Exception):
    """Base class for all application errors."""


class QueryExecutionError(RestaurantQAError):
    """The graph store rejected a Cypher query (syntax, unknown procedure, type error)."""

    def __init__(self, message: str, query: str = ""):
        super().__init__(message)
        self.query = query


class CacheUnavailableError(RestaurantQAError):
    """The similarity cache could not be searched."""


class PromptNotFoundError(RestaurantQAError):
    """A named prompt template is unknown or its file is missing."""
