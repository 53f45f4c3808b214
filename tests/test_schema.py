"""Tests for DDL generation and the SchemaManager."""

from __future__ import annotations

import threading

import pytest

from graphsql import (
    DEFAULT_CONFIG,
    MYSQL,
    POSTGRES,
    SQLITE,
    BackendError,
    SchemaConfig,
    SchemaManager,
    SQLGraphStore,
    schema_statements,
)
from graphsql.transaction import UnitOfWork


def _tables(connection) -> set[str]:
    rows = connection.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return {r[0] for r in rows}


# ── DDL generation ─────────────────────────────────────────────────


class TestStatements:
    """schema_statements is a pure function of config and dialect."""

    def test_vertices_columns(self) -> None:
        sql = schema_statements(DEFAULT_CONFIG, SQLITE).create_vertices
        assert sql.startswith('CREATE TABLE "vertices" (')
        assert "id INTEGER PRIMARY KEY AUTOINCREMENT" in sql
        assert "hash TEXT," in sql
        assert "value JSON" in sql
        assert "weight INTEGER" in sql
        assert "attributes JSON" in sql

    def test_edges_columns(self) -> None:
        sql = schema_statements(DEFAULT_CONFIG, SQLITE).create_edges
        assert sql.startswith('CREATE TABLE "edges" (')
        for column in ("source_hash TEXT", "target_hash TEXT", "weight INTEGER",
                       "attributes JSON", "data BLOB"):
            assert column in sql

    def test_hash_type_applies_to_both_tables(self) -> None:
        config = DEFAULT_CONFIG.with_options(vertex_hash_type="VARCHAR(64)")
        stmts = schema_statements(config, SQLITE)
        assert "hash VARCHAR(64)" in stmts.create_vertices
        assert "source_hash VARCHAR(64)" in stmts.create_edges
        assert "target_hash VARCHAR(64)" in stmts.create_edges

    def test_safe_guards(self) -> None:
        stmts = schema_statements(DEFAULT_CONFIG.with_options(safe=True), SQLITE)
        assert stmts.create_vertices.startswith('CREATE TABLE IF NOT EXISTS "vertices"')
        assert stmts.create_edges.startswith('CREATE TABLE IF NOT EXISTS "edges"')
        assert stmts.drop_vertices == 'DROP TABLE IF EXISTS "vertices"'
        assert stmts.drop_edges == 'DROP TABLE IF EXISTS "edges"'

    def test_unsafe_drops(self) -> None:
        stmts = schema_statements(DEFAULT_CONFIG, SQLITE)
        assert stmts.drop_vertices == 'DROP TABLE "vertices"'
        assert stmts.drop_edges == 'DROP TABLE "edges"'

    def test_unique_constraint_on_hash_only(self) -> None:
        stmts = schema_statements(DEFAULT_CONFIG.with_options(unique=True), SQLITE)
        assert "hash TEXT UNIQUE" in stmts.create_vertices
        assert "UNIQUE" not in stmts.create_edges

    def test_postgres_dialect(self) -> None:
        stmts = schema_statements(DEFAULT_CONFIG, POSTGRES)
        assert "id BIGSERIAL PRIMARY KEY" in stmts.create_vertices
        assert "data TEXT" in stmts.create_edges

    def test_mysql_dialect_quotes_with_backticks(self) -> None:
        config = DEFAULT_CONFIG.with_options(vertex_hash_type="VARCHAR(255)")
        stmts = schema_statements(config, MYSQL)
        assert stmts.create_vertices.startswith("CREATE TABLE `vertices` (")
        assert "BIGINT UNSIGNED AUTO_INCREMENT PRIMARY KEY" in stmts.create_vertices
        assert stmts.drop_edges == "DROP TABLE `edges`"

    def test_schema_qualified_names(self) -> None:
        config = SchemaConfig(vertices_table="graph.v", edges_table="graph.e")
        stmts = schema_statements(config, POSTGRES)
        assert '"graph"."v"' in stmts.create_vertices
        assert stmts.drop_edges == 'DROP TABLE "graph"."e"'


# ── SchemaManager ──────────────────────────────────────────────────


class TestSchemaManager:
    """Executing the DDL against SQLite."""

    def test_setup_creates_tables(self, connection) -> None:
        SchemaManager(connection).setup_tables()
        assert {"vertices", "edges"} <= _tables(connection)

    def test_teardown_drops_tables(self, connection) -> None:
        manager = SchemaManager(connection)
        manager.setup_tables()
        manager.teardown()
        assert not {"vertices", "edges"} & _tables(connection)

    def test_safe_setup_is_idempotent(self, connection) -> None:
        manager = SchemaManager(connection, DEFAULT_CONFIG.with_options(safe=True))
        manager.setup_tables()
        manager.setup_tables()
        manager.teardown()
        manager.teardown()
        assert not {"vertices", "edges"} & _tables(connection)

    def test_lock_and_unit_of_work_are_exclusive(self, connection) -> None:
        work = UnitOfWork(connection)
        with pytest.raises(ValueError, match="not both"):
            SchemaManager(connection, lock=threading.RLock(), unit_of_work=work)

    def test_shared_unit_of_work(self, connection) -> None:
        work = UnitOfWork(connection)
        SchemaManager(connection, unit_of_work=work).setup_tables()
        assert {"vertices", "edges"} <= _tables(connection)

    def test_unsafe_repeat_setup_raises(self, connection) -> None:
        manager = SchemaManager(connection)
        manager.setup_tables()
        with pytest.raises(BackendError, match="already exists"):
            manager.setup_tables()

    def test_unsafe_teardown_of_missing_tables_raises(self, connection) -> None:
        with pytest.raises(BackendError):
            SchemaManager(connection).teardown()

    def test_safe_setup_keeps_existing_rows(self, connection) -> None:
        config = DEFAULT_CONFIG.with_options(safe=True)
        store = SQLGraphStore(connection, config)
        store.setup_tables()
        store.add_vertex(1, 1)
        store.setup_tables()
        assert store.vertex_count() == 1

    def test_store_after_teardown_raises_backend_error(self, store: SQLGraphStore) -> None:
        store.teardown()
        with pytest.raises(BackendError):
            store.vertex_count()

    def test_attached_schema(self, connection) -> None:
        config = SchemaConfig(vertices_table="main.gv", edges_table="main.ge")
        store = SQLGraphStore(connection, config)
        store.setup_tables()
        store.add_vertex("a", "A")
        assert store.vertex("a")[0] == "A"
        assert {"gv", "ge"} <= _tables(connection)
