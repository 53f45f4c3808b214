"""Graph data structures stored by graphsql.

Public API:
    VertexProperties: Weight and attributes of a vertex.
    EdgeProperties: Weight, attributes and payload of an edge.
    Edge: An edge between two vertex keys.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class VertexProperties:
    """Properties stored alongside a vertex value.

    Attributes:
        weight: Signed integer weight.
        attributes: String-to-string attribute map.
    """

    weight: int = 0
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class EdgeProperties:
    """Properties stored on an edge.

    Attributes:
        weight: Signed integer weight.
        attributes: String-to-string attribute map.
        data: Opaque payload; any JSON-encodable value or ``bytes``.
    """

    weight: int = 0
    attributes: dict[str, str] = field(default_factory=dict)
    data: Any = None


@dataclass(frozen=True)
class Edge:
    """A directed edge identified by its (source, target) keys.

    Attributes:
        source: Key of the source (tail) vertex.
        target: Key of the target (head) vertex.
        properties: Weight, attributes and payload.
    """

    source: Any = None
    target: Any = None
    properties: EdgeProperties = field(default_factory=EdgeProperties)


__all__ = ["VertexProperties", "EdgeProperties", "Edge"]
