"""Neo4j graph store client.

The driver is long-lived and shared by every request. Each pipeline run opens
one ``GraphSession`` through ``Neo4jGraph.session()`` and the session is
released when the ``async with`` block exits, on success or failure.
"""

import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import asynccontextmanager
from typing import Any

from neo4j import AsyncDriver, AsyncGraphDatabase, AsyncSession
from neo4j.exceptions import AuthError, ClientError

from restaurant_qa.config.settings import Settings
from restaurant_qa.exceptions import QueryExecutionError

logger = logging.getLogger(__name__)

_NODE_PROPERTIES_QUERY = """
CALL db.schema.nodeTypeProperties()
YIELD nodeLabels, propertyName, propertyTypes
RETURN nodeLabels, propertyName, propertyTypes
"""

_REL_PROPERTIES_QUERY = """
CALL db.schema.relTypeProperties()
YIELD relType, propertyName, propertyTypes
RETURN relType, propertyName, propertyTypes
"""

_REL_SHAPES_QUERY = """
MATCH (a)-[r]->(b)
WITH DISTINCT labels(a) AS fromLabels, type(r) AS relType, labels(b) AS toLabels
UNWIND fromLabels AS fromLabel
UNWIND toLabels AS toLabel
RETURN DISTINCT fromLabel, relType, toLabel
ORDER BY relType, fromLabel, toLabel
"""


def normalize_value(value: Any) -> Any:
    """Convert driver values into plain JSON-friendly Python values."""
    if isinstance(value, dict):
        return {k: normalize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [normalize_value(v) for v in value]
    if hasattr(value, "iso_format"):
        # neo4j.time Date / DateTime / Time / Duration
        return value.iso_format()
    return value


def normalize_row(row: dict[str, Any]) -> dict[str, Any]:
    return {key: normalize_value(value) for key, value in row.items()}


class GraphSession:
    """One Neo4j session bound to a single pipeline run."""

    def __init__(self, session: AsyncSession, excluded_labels: Iterable[str] = ()):
        self._session = session
        self._excluded = set(excluded_labels)

    async def query(self, cypher: str) -> list[dict[str, Any]]:
        """
        Run a Cypher query and return its rows.

        Raises:
            QueryExecutionError: The store rejected the query (syntax error,
                unknown procedure, type error, empty query).
        """
        if not cypher or not cypher.strip():
            raise QueryExecutionError("Empty Cypher query", query=cypher or "")
        try:
            result = await self._session.run(cypher)
            records = await result.data()
        except AuthError:
            raise
        except ClientError as e:
            logger.debug(f"Cypher rejected [{e.code}]: {e.message}")
            raise QueryExecutionError(e.message or str(e), query=cypher) from e
        return [normalize_row(record) for record in records]

    async def get_schema(self) -> str:
        """Describe node properties, relationship properties and relationship shapes."""
        node_rows = await (await self._session.run(_NODE_PROPERTIES_QUERY)).data()
        rel_rows = await (await self._session.run(_REL_PROPERTIES_QUERY)).data()
        shape_rows = await (await self._session.run(_REL_SHAPES_QUERY)).data()
        return format_schema(node_rows, rel_rows, shape_rows, self._excluded)


def format_schema(
    node_rows: list[dict[str, Any]],
    rel_rows: list[dict[str, Any]],
    shape_rows: list[dict[str, Any]],
    excluded_labels: set[str] | None = None,
) -> str:
    """Render schema procedure rows as the text block given to the query coder."""
    excluded = excluded_labels or set()

    node_props: dict[str, list[str]] = {}
    for row in node_rows:
        labels = [label for label in row.get("nodeLabels") or [] if label not in excluded]
        if not labels or len(labels) != len(row.get("nodeLabels") or []):
            continue
        label = ":".join(labels)
        props = node_props.setdefault(label, [])
        if row.get("propertyName"):
            types = "|".join(row.get("propertyTypes") or [])
            props.append(f"{row['propertyName']}: {types.upper()}")

    rel_props: dict[str, list[str]] = {}
    for row in rel_rows:
        rel_type = (row.get("relType") or "").removeprefix(":`").removesuffix("`")
        props = rel_props.setdefault(rel_type, [])
        if row.get("propertyName"):
            types = "|".join(row.get("propertyTypes") or [])
            props.append(f"{row['propertyName']}: {types.upper()}")

    lines = ["Node properties:"]
    for label in sorted(node_props):
        lines.append(f"{label} {{{', '.join(node_props[label])}}}")

    lines.append("Relationship properties:")
    for rel_type in sorted(rel_props):
        if rel_props[rel_type]:
            lines.append(f"{rel_type} {{{', '.join(rel_props[rel_type])}}}")

    lines.append("The relationships:")
    for row in shape_rows:
        if row["fromLabel"] in excluded or row["toLabel"] in excluded:
            continue
        lines.append(f"(:{row['fromLabel']})-[:{row['relType']}]->(:{row['toLabel']})")

    return "\n".join(lines)


class Neo4jGraph:
    """Long-lived handle over the async Neo4j driver."""

    def __init__(
        self,
        driver: AsyncDriver,
        database: str | None = None,
        excluded_labels: Iterable[str] = (),
    ):
        self._driver = driver
        self.database = database
        self.excluded_labels = tuple(excluded_labels)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Neo4jGraph":
        driver = AsyncGraphDatabase.driver(
            settings.neo4j_uri,
            auth=(settings.neo4j_user, settings.neo4j_password),
        )
        return cls(
            driver,
            database=settings.neo4j_database,
            excluded_labels=(settings.vector_node_label,),
        )

    @property
    def driver(self) -> AsyncDriver:
        return self._driver

    @asynccontextmanager
    async def session(self) -> AsyncIterator[GraphSession]:
        """Open a session for one pipeline run and always close it."""
        session = self._driver.session(database=self.database)
        try:
            yield GraphSession(session, excluded_labels=self.excluded_labels)
        finally:
            await session.close()

    async def verify_connectivity(self) -> None:
        await self._driver.verify_connectivity()

    async def close(self) -> None:
        await self._driver.close()
