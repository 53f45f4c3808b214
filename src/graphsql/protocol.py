"""GraphStore protocol -- the storage contract a graph layer consumes.

Public API:
    GraphStore: Runtime-checkable protocol defining the graph store contract.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from .types import Edge, EdgeProperties, VertexProperties


@runtime_checkable
class GraphStore(Protocol):
    """Common interface for graph storage backends.

    Vertices are addressed by key, edges by the ordered pair of their
    endpoint keys.  Failures are reported with the exceptions in
    :mod:`graphsql.exceptions`.
    """

    # ── vertex operations ─────────────────────────────────────

    def add_vertex(
        self,
        key: Any,
        value: Any,
        properties: VertexProperties | None = None,
    ) -> None:
        """Store *value* under *key*.

        Raises:
            VertexAlreadyExistsError: In unique mode, if *key* is taken.
        """
        ...

    def vertex(self, key: Any) -> tuple[Any, VertexProperties]:
        """Return the value and properties stored under *key*.

        Raises:
            VertexNotFoundError: If there is no such vertex.
        """
        ...

    def remove_vertex(self, key: Any) -> None:
        """Delete a vertex and every edge touching it.

        Raises:
            VertexNotFoundError: If there is no such vertex.
        """
        ...

    def list_vertices(self) -> list[Any]:
        """Return the keys of all vertices."""
        ...

    def vertex_count(self) -> int:
        """Return the number of vertices."""
        ...

    # ── edge operations ───────────────────────────────────────

    def add_edge(
        self,
        source: Any,
        target: Any,
        edge: Edge | EdgeProperties | None = None,
    ) -> None:
        """Create the directed edge *source* -> *target*.

        Raises:
            VertexNotFoundError: If either endpoint does not exist.
            EdgeAlreadyExistsError: If the edge already exists.
        """
        ...

    def edge(self, source: Any, target: Any) -> Edge:
        """Return the edge *source* -> *target*.

        Raises:
            EdgeNotFoundError: If there is no such edge.
        """
        ...

    def update_edge(
        self,
        source: Any,
        target: Any,
        edge: Edge | EdgeProperties,
    ) -> None:
        """Replace the properties of an existing edge.

        Raises:
            EdgeNotFoundError: If there is no such edge.
        """
        ...

    def remove_edge(self, source: Any, target: Any) -> None:
        """Delete the edge *source* -> *target*.

        Raises:
            EdgeNotFoundError: If there is no such edge.
        """
        ...

    def list_edges(self) -> list[Edge]:
        """Return all edges."""
        ...

    def edge_count(self) -> int:
        """Return the number of edges."""
        ...


__all__ = ["GraphStore"]
