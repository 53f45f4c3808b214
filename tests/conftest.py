"""Pytest configuration and fixtures for graphsql tests."""

import sqlite3

import pytest

from graphsql import DEFAULT_CONFIG, SQLGraphStore


@pytest.fixture
def connection():
    """Fresh in-memory SQLite connection, shareable across threads."""
    conn = sqlite3.connect(":memory:", check_same_thread=False)
    yield conn
    conn.close()


@pytest.fixture
def store(connection) -> SQLGraphStore:
    """Store with the default (non-unique) schema, tables created."""
    s = SQLGraphStore(connection, DEFAULT_CONFIG)
    s.setup_tables()
    return s


@pytest.fixture
def unique_store(connection) -> SQLGraphStore:
    """Store whose vertex hash column carries a uniqueness constraint."""
    s = SQLGraphStore(connection, DEFAULT_CONFIG.with_options(unique=True))
    s.setup_tables()
    return s


@pytest.fixture
def db_path(tmp_path):
    """Path for a file-backed SQLite database."""
    return tmp_path / "graph.db"
