"""Schema Manager -- DDL for the vertices and edges tables.

DDL generation is a pure function of a :class:`SchemaConfig` and a
:class:`Dialect`.  Table names are validated by the config and quoted by the
dialect, so nothing reaches the engine unchecked.

Public API:
    SchemaStatements: The four statements of a schema.
    schema_statements: Build them for a config and dialect.
    SchemaManager: Execute them against a connection.
"""

from __future__ import annotations

import logging
from typing import Any, ContextManager, NamedTuple

from .config import DEFAULT_CONFIG, SchemaConfig
from .dialects import SQLITE, Dialect
from .transaction import UnitOfWork

logger = logging.getLogger(__name__)


class SchemaStatements(NamedTuple):
    create_vertices: str
    create_edges: str
    drop_vertices: str
    drop_edges: str


def _create_prefix(config: SchemaConfig) -> str:
    return "CREATE TABLE IF NOT EXISTS" if config.safe else "CREATE TABLE"


def _drop_prefix(config: SchemaConfig) -> str:
    return "DROP TABLE IF EXISTS" if config.safe else "DROP TABLE"


def create_vertices_table_sql(config: SchemaConfig, dialect: Dialect = SQLITE) -> str:
    hash_column = config.vertex_hash_type
    if config.unique:
        hash_column += " UNIQUE"
    return (
        f"{_create_prefix(config)} {dialect.quote(config.vertices_table)} (\n"
        f"    id {dialect.id_column},\n"
        f"    hash {hash_column},\n"
        f"    value {config.vertex_value_type},\n"
        f"    weight INTEGER,\n"
        f"    attributes {dialect.json_type}\n"
        f")"
    )


def create_edges_table_sql(config: SchemaConfig, dialect: Dialect = SQLITE) -> str:
    return (
        f"{_create_prefix(config)} {dialect.quote(config.edges_table)} (\n"
        f"    id {dialect.id_column},\n"
        f"    source_hash {config.vertex_hash_type},\n"
        f"    target_hash {config.vertex_hash_type},\n"
        f"    weight INTEGER,\n"
        f"    attributes {dialect.json_type},\n"
        f"    data {dialect.payload_type}\n"
        f")"
    )


def drop_vertices_table_sql(config: SchemaConfig, dialect: Dialect = SQLITE) -> str:
    return f"{_drop_prefix(config)} {dialect.quote(config.vertices_table)}"


def drop_edges_table_sql(config: SchemaConfig, dialect: Dialect = SQLITE) -> str:
    return f"{_drop_prefix(config)} {dialect.quote(config.edges_table)}"


def schema_statements(config: SchemaConfig, dialect: Dialect = SQLITE) -> SchemaStatements:
    """Return the create/drop statements for *config* in *dialect*."""
    return SchemaStatements(
        create_vertices=create_vertices_table_sql(config, dialect),
        create_edges=create_edges_table_sql(config, dialect),
        drop_vertices=drop_vertices_table_sql(config, dialect),
        drop_edges=drop_edges_table_sql(config, dialect),
    )


class SchemaManager:
    """Create and drop the graph tables on a connection.

    With ``config.safe`` both operations are idempotent.  Otherwise the
    engine's "table already exists" / "no such table" errors propagate as
    :class:`~graphsql.exceptions.BackendError`.

    Args:
        connection: An open DB-API 2.0 connection.
        config: Table layout.
        dialect: SQL dialect of the connection.
        lock: Optional lock shared with a store using the same connection.
        unit_of_work: Existing unit of work to share with a store; carries
            its own lock, so it cannot be combined with *lock*.

    Raises:
        ValueError: If both *lock* and *unit_of_work* are given.
    """

    def __init__(
        self,
        connection: Any,
        config: SchemaConfig = DEFAULT_CONFIG,
        dialect: Dialect = SQLITE,
        lock: ContextManager | None = None,
        unit_of_work: UnitOfWork | None = None,
    ) -> None:
        if lock is not None and unit_of_work is not None:
            raise ValueError("Pass either lock or unit_of_work, not both")
        self._config = config
        self._dialect = dialect
        self._statements = schema_statements(config, dialect)
        self._work = unit_of_work or UnitOfWork(connection, lock)

    @property
    def statements(self) -> SchemaStatements:
        return self._statements

    def setup_tables(self) -> None:
        """Create the vertices and edges tables."""
        with self._work("setup tables") as cur:
            for sql in (self._statements.create_vertices, self._statements.create_edges):
                logger.debug("Executing DDL: %s", sql)
                cur.execute(sql)
        logger.debug(
            "Created tables %s and %s (%s)",
            self._config.vertices_table,
            self._config.edges_table,
            self._dialect.name,
        )

    def teardown(self) -> None:
        """Drop the edges table, then the vertices table."""
        with self._work("teardown tables") as cur:
            for sql in (self._statements.drop_edges, self._statements.drop_vertices):
                logger.debug("Executing DDL: %s", sql)
                cur.execute(sql)
        logger.debug(
            "Dropped tables %s and %s",
            self._config.edges_table,
            self._config.vertices_table,
        )


__all__ = [
    "SchemaStatements",
    "schema_statements",
    "create_vertices_table_sql",
    "create_edges_table_sql",
    "drop_vertices_table_sql",
    "drop_edges_table_sql",
    "SchemaManager",
]
