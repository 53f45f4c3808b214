"""Schema configuration for the vertices and edges tables.

Public API:
    SchemaConfig: Immutable, validated table layout.
    DEFAULT_CONFIG: Sensible defaults for most users.
"""

from __future__ import annotations

import dataclasses
import re
from dataclasses import dataclass

from .exceptions import InvalidConfigError

# Optionally schema-qualified identifier: ``table`` or ``schema.table``.
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)?$")

# Plain SQL type: words with an optional precision, e.g. ``VARCHAR(255)``,
# ``BIGINT UNSIGNED``, ``NUMERIC(10, 2)``.
_SQL_TYPE_RE = re.compile(
    r"^[A-Za-z][A-Za-z0-9_]*( [A-Za-z][A-Za-z0-9_]*)*"
    r"(\s*\(\s*\d+(\s*,\s*\d+)?\s*\))?$"
)


@dataclass(frozen=True)
class SchemaConfig:
    """Table names and column types of the graph schema.

    Args:
        vertices_table: Name of the vertices table.
        edges_table: Name of the edges table.
        vertex_hash_type: SQL type of the ``hash``, ``source_hash`` and
            ``target_hash`` columns.
        vertex_value_type: SQL type of the vertex ``value`` column.
        safe: Use ``IF NOT EXISTS`` / ``IF EXISTS`` guards so setup and
            teardown are idempotent.
        unique: Put a uniqueness constraint on the vertex hash column and
            reject duplicate vertices instead of upserting them.

    Raises:
        InvalidConfigError: If a table name or column type is malformed.
    """

    vertices_table: str = "vertices"
    edges_table: str = "edges"
    vertex_hash_type: str = "TEXT"
    vertex_value_type: str = "JSON"
    safe: bool = False
    unique: bool = False

    def __post_init__(self) -> None:
        for name in ("vertices_table", "edges_table"):
            value = getattr(self, name)
            if not isinstance(value, str) or not _IDENTIFIER_RE.match(value):
                raise InvalidConfigError(f"{name} is not a valid SQL identifier: {value!r}")
        if self.vertices_table.lower() == self.edges_table.lower():
            raise InvalidConfigError(
                f"vertices_table and edges_table must differ: {self.vertices_table!r}"
            )
        for name in ("vertex_hash_type", "vertex_value_type"):
            value = getattr(self, name)
            if not isinstance(value, str) or not _SQL_TYPE_RE.match(value.strip()):
                raise InvalidConfigError(f"{name} is not a valid SQL type: {value!r}")

    def with_options(self, **changes) -> SchemaConfig:
        """Return a validated copy with *changes* applied."""
        return dataclasses.replace(self, **changes)


DEFAULT_CONFIG = SchemaConfig()


__all__ = ["SchemaConfig", "DEFAULT_CONFIG"]
