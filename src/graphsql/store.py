"""SQLGraphStore -- a graph store backed by two relational tables.

Vertices live in one table keyed by ``hash``, edges in another keyed by
``(source_hash, target_hash)``.  The engine only enforces column types, so
the graph invariants are checked here:

- an edge can only be created when both endpoints exist;
- there is at most one edge per ordered pair;
- removing a vertex removes every edge touching it.

Each operation is one unit of work under the store's lock, so checks and
writes cannot interleave with another caller of the same store.

Public API:
    SQLGraphStore: GraphStore implementation over a DB-API connection.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, ContextManager

from .codec import (
    Codec,
    JsonCodec,
    decode_attributes,
    encode_attributes,
    unwrap_document,
    wrap_document,
)
from .config import DEFAULT_CONFIG, SchemaConfig
from .dialects import Dialect, detect_dialect
from .exceptions import (
    EdgeAlreadyExistsError,
    EdgeNotFoundError,
    MissingEndpointError,
    VertexAlreadyExistsError,
    VertexNotFoundError,
)
from .schema import SchemaManager
from .transaction import UnitOfWork
from .types import Edge, EdgeProperties, VertexProperties

logger = logging.getLogger(__name__)


class SQLGraphStore:
    """Relational implementation of the GraphStore protocol.

    The stored ``hash`` of a vertex is the key encoded by *key_codec*
    (canonical JSON by default), so ``1`` and ``"1"`` are different vertices.

    Args:
        connection: An open DB-API 2.0 connection.  The store does not own it.
        config: Table layout; ``config.unique`` switches duplicate vertices
            from upsert to :class:`VertexAlreadyExistsError`.
        hash_fn: Maps a vertex value to its key.  When given, ``add_vertex``
            rejects keys that do not match the value and ``add_value`` can
            derive keys itself.
        dialect: SQL dialect; detected from *connection* when omitted.
        value_codec: Codec for vertex values.  Defaults to :class:`JsonCodec`.
        key_codec: Codec turning keys into hashes.  Defaults to :class:`JsonCodec`.
        lock: Context manager serializing access to *connection*.
    """

    def __init__(
        self,
        connection: Any,
        config: SchemaConfig = DEFAULT_CONFIG,
        hash_fn: Callable[[Any], Any] | None = None,
        *,
        dialect: Dialect | None = None,
        value_codec: Codec | None = None,
        key_codec: Codec | None = None,
        lock: ContextManager | None = None,
    ) -> None:
        self._config = config
        self._dialect = dialect or detect_dialect(connection)
        self._hash_fn = hash_fn
        self._values = value_codec or JsonCodec()
        self._keys = key_codec or JsonCodec()
        self._payloads = JsonCodec()
        self._work = UnitOfWork(connection, lock)
        self._schema = SchemaManager(
            connection, config, self._dialect, unit_of_work=self._work
        )
        self._sql = self._build_queries()

    @property
    def config(self) -> SchemaConfig:
        return self._config

    @property
    def connection(self) -> Any:
        return self._work.connection

    @property
    def dialect(self) -> Dialect:
        return self._dialect

    @property
    def schema(self) -> SchemaManager:
        return self._schema

    # ── schema ───────────────────────────────────────────────

    def setup_tables(self) -> None:
        """Create the vertices and edges tables."""
        self._schema.setup_tables()

    def teardown(self) -> None:
        """Drop the vertices and edges tables."""
        self._schema.teardown()

    # ── vertex operations ────────────────────────────────────

    def add_vertex(
        self,
        key: Any,
        value: Any,
        properties: VertexProperties | None = None,
    ) -> None:
        """Store *value* under *key*.

        In unique mode a second vertex with the same hash raises
        :class:`VertexAlreadyExistsError` and leaves the first row alone.
        Otherwise an existing row is overwritten (value, weight and
        attributes; no merge).

        Raises:
            ValueError: If ``hash_fn(value)`` does not equal *key*.
        """
        if self._hash_fn is not None:
            expected = self._hash_fn(value)
            if expected != key:
                raise ValueError(f"Key {key!r} does not match hash of value {expected!r}")

        props = properties or VertexProperties()
        h = self._hash(key)
        row = (
            wrap_document(self._values.encode(value)),
            int(props.weight),
            encode_attributes(props.attributes),
        )

        with self._work("add vertex") as cur:
            if self._config.unique:
                try:
                    cur.execute(self._sql["insert_vertex"], (h, *row))
                except self._work.integrity_error as exc:
                    raise VertexAlreadyExistsError(f"Vertex already exists: {key!r}") from exc
                logger.debug("Inserted vertex %s", h)
                return

            cur.execute(self._sql["vertex_exists"], (h,))
            if cur.fetchone() is None:
                cur.execute(self._sql["insert_vertex"], (h, *row))
                logger.debug("Inserted vertex %s", h)
            else:
                cur.execute(self._sql["update_vertex"], (*row, h))
                logger.debug("Updated vertex %s", h)

    def add_value(self, value: Any, properties: VertexProperties | None = None) -> Any:
        """Store *value* under the key derived by ``hash_fn`` and return the key.

        Raises:
            ValueError: If the store was built without a ``hash_fn``.
        """
        if self._hash_fn is None:
            raise ValueError("add_value requires a store built with hash_fn")
        key = self._hash_fn(value)
        self.add_vertex(key, value, properties)
        return key

    def vertex(self, key: Any) -> tuple[Any, VertexProperties]:
        with self._work("get vertex") as cur:
            cur.execute(self._sql["select_vertex"], (self._hash(key),))
            row = cur.fetchone()
        if row is None:
            raise VertexNotFoundError(f"Vertex not found: {key!r}")
        value, weight, attributes = row
        return self._values.decode(unwrap_document(value)), VertexProperties(
            weight=int(weight or 0),
            attributes=decode_attributes(attributes),
        )

    def remove_vertex(self, key: Any) -> None:
        """Delete the vertex and all edges where it is source or target."""
        h = self._hash(key)
        with self._work("remove vertex") as cur:
            cur.execute(self._sql["delete_incident_edges"], (h, h))
            removed_edges = cur.rowcount
            cur.execute(self._sql["delete_vertex"], (h,))
            if cur.rowcount == 0:
                raise VertexNotFoundError(f"Vertex not found: {key!r}")
        logger.debug("Removed vertex %s and %s incident edge(s)", h, removed_edges)

    def list_vertices(self) -> list[Any]:
        with self._work("list vertices") as cur:
            cur.execute(self._sql["list_vertices"])
            rows = cur.fetchall()
        return [self._keys.decode(r[0]) for r in rows]

    def vertex_count(self) -> int:
        return self._count("count_vertices")

    # ── edge operations ──────────────────────────────────────

    def add_edge(
        self,
        source: Any,
        target: Any,
        edge: Edge | EdgeProperties | None = None,
    ) -> None:
        """Create the directed edge *source* -> *target*.

        Raises:
            MissingEndpointError: If either endpoint has no vertex row.
            EdgeAlreadyExistsError: If the ordered pair already has an edge.
            ValueError: If *edge* is an :class:`Edge` whose endpoints differ
                from *source* or *target*.
        """
        props = _edge_properties(edge, source, target)
        sh, th = self._hash(source), self._hash(target)
        with self._work("add edge") as cur:
            cur.execute(self._sql["find_vertices"], (sh, th))
            found = {r[0] for r in cur.fetchall()}
            missing = [k for k, h in ((source, sh), (target, th)) if h not in found]
            if missing:
                raise MissingEndpointError(
                    f"Vertex not found for edge {source!r} -> {target!r}: {missing[0]!r}"
                )

            cur.execute(self._sql["edge_exists"], (sh, th))
            if cur.fetchone() is not None:
                raise EdgeAlreadyExistsError(f"Edge already exists: {source!r} -> {target!r}")

            cur.execute(self._sql["insert_edge"], (sh, th, *self._edge_row(props)))
        logger.debug("Inserted edge %s -> %s", sh, th)

    def edge(self, source: Any, target: Any) -> Edge:
        with self._work("get edge") as cur:
            cur.execute(self._sql["select_edge"], (self._hash(source), self._hash(target)))
            row = cur.fetchone()
        if row is None:
            raise EdgeNotFoundError(f"Edge not found: {source!r} -> {target!r}")
        return Edge(source=source, target=target, properties=self._edge_properties_from_row(row))

    def update_edge(
        self,
        source: Any,
        target: Any,
        edge: Edge | EdgeProperties,
    ) -> None:
        """Replace weight, attributes and data of an existing edge wholesale.

        Raises:
            EdgeNotFoundError: If the ordered pair has no edge.
            ValueError: If *edge* is an :class:`Edge` whose endpoints differ
                from *source* or *target*.
        """
        props = _edge_properties(edge, source, target)
        sh, th = self._hash(source), self._hash(target)
        with self._work("update edge") as cur:
            # Existence is checked separately: some drivers report changed
            # rather than matched rows for UPDATE.
            cur.execute(self._sql["edge_exists"], (sh, th))
            if cur.fetchone() is None:
                raise EdgeNotFoundError(f"Edge not found: {source!r} -> {target!r}")
            cur.execute(self._sql["update_edge"], (*self._edge_row(props), sh, th))
        logger.debug("Updated edge %s -> %s", sh, th)

    def remove_edge(self, source: Any, target: Any) -> None:
        sh, th = self._hash(source), self._hash(target)
        with self._work("remove edge") as cur:
            cur.execute(self._sql["delete_edge"], (sh, th))
            if cur.rowcount == 0:
                raise EdgeNotFoundError(f"Edge not found: {source!r} -> {target!r}")
        logger.debug("Removed edge %s -> %s", sh, th)

    def list_edges(self) -> list[Edge]:
        with self._work("list edges") as cur:
            cur.execute(self._sql["list_edges"])
            rows = cur.fetchall()
        return [
            Edge(
                source=self._keys.decode(r[0]),
                target=self._keys.decode(r[1]),
                properties=self._edge_properties_from_row(r[2:]),
            )
            for r in rows
        ]

    def edge_count(self) -> int:
        return self._count("count_edges")

    # ── private helpers ──────────────────────────────────────

    def _hash(self, key: Any) -> str:
        return self._keys.encode(key)

    def _count(self, query: str) -> int:
        with self._work(query.replace("_", " ")) as cur:
            cur.execute(self._sql[query])
            row = cur.fetchone()
        return int(row[0]) if row else 0

    def _edge_row(self, props: EdgeProperties) -> tuple[int, str, str]:
        return (
            int(props.weight),
            encode_attributes(props.attributes),
            self._payloads.encode(props.data),
        )

    def _edge_properties_from_row(self, row: Any) -> EdgeProperties:
        weight, attributes, data = row
        return EdgeProperties(
            weight=int(weight or 0),
            attributes=decode_attributes(attributes),
            data=self._payloads.decode(data),
        )

    def _build_queries(self) -> dict[str, str]:
        d = self._dialect
        v = d.quote(self._config.vertices_table)
        e = d.quote(self._config.edges_table)
        p = d.placeholder
        pair = f"source_hash = {p} AND target_hash = {p}"
        return {
            "insert_vertex": (
                f"INSERT INTO {v} (hash, value, weight, attributes) VALUES ({d.params(4)})"
            ),
            "update_vertex": (
                f"UPDATE {v} SET value = {p}, weight = {p}, attributes = {p} WHERE hash = {p}"
            ),
            "vertex_exists": f"SELECT 1 FROM {v} WHERE hash = {p}",
            "select_vertex": (
                f"SELECT {d.as_text('value')}, weight, {d.as_text('attributes')} "
                f"FROM {v} WHERE hash = {p} ORDER BY id"
            ),
            "find_vertices": f"SELECT hash FROM {v} WHERE hash IN ({d.params(2)})",
            "delete_vertex": f"DELETE FROM {v} WHERE hash = {p}",
            "delete_incident_edges": (
                f"DELETE FROM {e} WHERE source_hash = {p} OR target_hash = {p}"
            ),
            "list_vertices": f"SELECT hash FROM {v} ORDER BY id",
            "count_vertices": f"SELECT COUNT(*) FROM {v}",
            "insert_edge": (
                f"INSERT INTO {e} (source_hash, target_hash, weight, attributes, data) "
                f"VALUES ({d.params(5)})"
            ),
            "edge_exists": f"SELECT 1 FROM {e} WHERE {pair}",
            "select_edge": (
                f"SELECT weight, {d.as_text('attributes')}, data FROM {e} WHERE {pair}"
            ),
            "update_edge": (
                f"UPDATE {e} SET weight = {p}, attributes = {p}, data = {p} WHERE {pair}"
            ),
            "delete_edge": f"DELETE FROM {e} WHERE {pair}",
            "list_edges": (
                f"SELECT source_hash, target_hash, weight, {d.as_text('attributes')}, data "
                f"FROM {e} ORDER BY id"
            ),
            "count_edges": f"SELECT COUNT(*) FROM {e}",
        }


def _edge_properties(
    edge: Edge | EdgeProperties | None, source: Any, target: Any
) -> EdgeProperties:
    if edge is None:
        return EdgeProperties()
    if isinstance(edge, Edge):
        # None endpoints on the Edge mean "take them from the arguments".
        endpoints = (("source", edge.source, source), ("target", edge.target, target))
        for name, given, expected in endpoints:
            if given is not None and given != expected:
                raise ValueError(f"Edge {name} {given!r} does not match {expected!r}")
        return edge.properties
    return edge


__all__ = ["SQLGraphStore"]
