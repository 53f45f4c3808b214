"""Factory for opening a connection and building a store on it.

Public API:
    connect_store: Open a connection for a named backend and wrap it.
"""

from __future__ import annotations

import sqlite3
from typing import Any, Callable

from .config import DEFAULT_CONFIG, SchemaConfig
from .dialects import MYSQL, POSTGRES, SQLITE
from .store import SQLGraphStore


def connect_store(
    backend: str = "sqlite",
    *,
    config: SchemaConfig = DEFAULT_CONFIG,
    hash_fn: Callable[[Any], Any] | None = None,
    setup: bool = True,
    **kwargs: Any,
) -> SQLGraphStore:
    """Open a database connection and return a store using it.

    Args:
        backend: ``"sqlite"`` (stdlib, default), ``"postgres"`` (psycopg2)
            or ``"mysql"`` (PyMySQL).
        config: Table layout.
        hash_fn: Maps vertex values to keys; see :class:`SQLGraphStore`.
        setup: Create the tables before returning.
        **kwargs: Backend-specific connection settings.  ``database`` for
            sqlite (defaults to ``":memory:"``), ``dsn`` for postgres,
            keyword arguments of ``pymysql.connect`` for mysql.

    Returns:
        A ready :class:`SQLGraphStore`.  The caller owns the connection,
        available as ``store.connection``, and closes it when done.

    Raises:
        ValueError: If *backend* is unrecognised.
        ImportError: If the driver for *backend* is not installed.
    """
    if backend == "sqlite":
        conn = sqlite3.connect(
            str(kwargs.get("database", ":memory:")),
            check_same_thread=False,
            timeout=kwargs.get("timeout", 10.0),
        )
        dialect = SQLITE
    elif backend == "postgres":
        try:
            import psycopg2
        except ImportError as exc:
            raise ImportError(
                "psycopg2 is required for the postgres backend.  "
                "Install it with: pip install graphsql[postgres]"
            ) from exc
        conn = psycopg2.connect(kwargs["dsn"])
        dialect = POSTGRES
    elif backend == "mysql":
        try:
            import pymysql
        except ImportError as exc:
            raise ImportError(
                "PyMySQL is required for the mysql backend.  "
                "Install it with: pip install graphsql[mysql]"
            ) from exc
        conn = pymysql.connect(**kwargs)
        dialect = MYSQL
    else:
        raise ValueError(
            f"Unknown backend: {backend!r}.  "
            f"Choose from: 'sqlite', 'postgres', 'mysql'"
        )

    store = SQLGraphStore(conn, config, hash_fn, dialect=dialect)
    if setup:
        try:
            store.setup_tables()
        except Exception:
            conn.close()
            raise
    return store


__all__ = ["connect_store"]
