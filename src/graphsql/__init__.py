"""graphsql: Store a directed, weighted, attributed graph in a relational database."""

__version__ = "0.1.0"

from .codec import Codec, JsonCodec
from .config import DEFAULT_CONFIG, SchemaConfig
from .dialects import MYSQL, POSTGRES, SQLITE, Dialect, detect_dialect, get_dialect
from .exceptions import (
    BackendError,
    EdgeAlreadyExistsError,
    EdgeNotFoundError,
    GraphStoreError,
    InvalidConfigError,
    MissingEndpointError,
    VertexAlreadyExistsError,
    VertexNotFoundError,
)
from .factory import connect_store
from .protocol import GraphStore
from .schema import SchemaManager, SchemaStatements, schema_statements
from .store import SQLGraphStore
from .types import Edge, EdgeProperties, VertexProperties

__all__ = [
    # Store
    "GraphStore",
    "SQLGraphStore",
    "connect_store",
    "VertexProperties",
    "EdgeProperties",
    "Edge",
    # Schema
    "SchemaConfig",
    "DEFAULT_CONFIG",
    "SchemaManager",
    "SchemaStatements",
    "schema_statements",
    "Dialect",
    "SQLITE",
    "POSTGRES",
    "MYSQL",
    "detect_dialect",
    "get_dialect",
    # Serialization
    "Codec",
    "JsonCodec",
    # Exceptions
    "GraphStoreError",
    "VertexNotFoundError",
    "VertexAlreadyExistsError",
    "MissingEndpointError",
    "EdgeNotFoundError",
    "EdgeAlreadyExistsError",
    "BackendError",
    "InvalidConfigError",
]
