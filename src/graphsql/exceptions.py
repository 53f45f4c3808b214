"""Custom exceptions for graphsql."""


class GraphStoreError(Exception):
    """Base exception for graph store operations."""


class VertexNotFoundError(GraphStoreError):
    """Raised when no vertex row matches a key."""


class VertexAlreadyExistsError(GraphStoreError):
    """Raised when a vertex with the same hash already exists."""


class MissingEndpointError(VertexNotFoundError):
    """Raised when an edge refers to a vertex that does not exist."""


class EdgeNotFoundError(GraphStoreError):
    """Raised when no edge row matches an ordered pair."""


class EdgeAlreadyExistsError(GraphStoreError):
    """Raised when an edge for the same ordered pair already exists."""


class BackendError(GraphStoreError):
    """Raised when the database engine fails for any other reason."""


class InvalidConfigError(GraphStoreError, ValueError):
    """Raised when a schema configuration is malformed."""
