"""SQL dialects -- the engine-specific bits of the generated SQL.

Public API:
    Dialect: Placeholder style, identifier quoting and column types.
    SQLITE, POSTGRES, MYSQL: Built-in dialects.
    detect_dialect: Pick a dialect from a DB-API connection.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Dialect:
    """Engine-specific SQL fragments.

    Attributes:
        name: Short name used in logs and by ``connect_store``.
        placeholder: DB-API parameter marker (``?`` or ``%s``).
        quote_char: Character used to quote identifiers.
        id_column: Column definition of the auto-incrementing surrogate key.
        json_type: Column type of the ``attributes`` columns.
        payload_type: Column type of the edge ``data`` column.
        text_type: Type name used in ``CAST(... AS <text_type>)`` on reads.
    """

    name: str
    placeholder: str
    quote_char: str
    id_column: str
    json_type: str
    payload_type: str
    text_type: str

    def quote(self, identifier: str) -> str:
        """Quote a (possibly schema-qualified) identifier."""
        q = self.quote_char
        return ".".join(f"{q}{part}{q}" for part in identifier.split("."))

    def params(self, count: int) -> str:
        """Return *count* comma-separated placeholders."""
        return ", ".join([self.placeholder] * count)

    def as_text(self, column: str) -> str:
        """Return an expression reading *column* as text.

        Drivers that parse JSON columns themselves (psycopg2) and SQLite's
        numeric affinity on ``JSON`` columns would otherwise hand back
        something other than the stored document.
        """
        return f"CAST({column} AS {self.text_type})"


SQLITE = Dialect(
    name="sqlite",
    placeholder="?",
    quote_char='"',
    id_column="INTEGER PRIMARY KEY AUTOINCREMENT",
    json_type="JSON",
    payload_type="BLOB",
    text_type="TEXT",
)

POSTGRES = Dialect(
    name="postgres",
    placeholder="%s",
    quote_char='"',
    id_column="BIGSERIAL PRIMARY KEY",
    json_type="JSON",
    payload_type="TEXT",
    text_type="TEXT",
)

MYSQL = Dialect(
    name="mysql",
    placeholder="%s",
    quote_char="`",
    id_column="BIGINT UNSIGNED AUTO_INCREMENT PRIMARY KEY",
    json_type="JSON",
    payload_type="BLOB",
    text_type="CHAR",
)

DIALECTS: dict[str, Dialect] = {d.name: d for d in (SQLITE, POSTGRES, MYSQL)}

# Driver module prefix -> dialect.
_MODULE_PREFIXES = (
    ("sqlite3", SQLITE),
    ("psycopg", POSTGRES),
    ("pymysql", MYSQL),
    ("MySQLdb", MYSQL),
    ("mysql", MYSQL),
)


def detect_dialect(connection: Any) -> Dialect:
    """Guess the dialect from the module that defines *connection*'s type.

    Unknown drivers fall back to :data:`SQLITE`.
    """
    module = type(connection).__module__ or ""
    for prefix, dialect in _MODULE_PREFIXES:
        if module.startswith(prefix):
            return dialect
    return SQLITE


def get_dialect(name: str) -> Dialect:
    """Look up a built-in dialect by name.

    Raises:
        ValueError: If *name* is not a known dialect.
    """
    try:
        return DIALECTS[name]
    except KeyError:
        raise ValueError(
            f"Unknown dialect: {name!r}.  Choose from: {', '.join(sorted(DIALECTS))}"
        ) from None


__all__ = ["Dialect", "SQLITE", "POSTGRES", "MYSQL", "DIALECTS", "detect_dialect", "get_dialect"]
