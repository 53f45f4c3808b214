"""Basic usage example for graphsql."""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


from graphsql import (
    DEFAULT_CONFIG,
    EdgeAlreadyExistsError,
    EdgeProperties,
    MissingEndpointError,
    VertexProperties,
    connect_store,
)


def main():
    print("=" * 60)
    print("graphsql - Basic Usage Example")
    print("=" * 60)

    # 1. Open a store on an in-memory SQLite database
    print("\n1. Opening store...")
    config = DEFAULT_CONFIG.with_options(unique=True)
    store = connect_store("sqlite", config=config, hash_fn=lambda city: city["name"])
    print(f"   Dialect: {store.dialect.name}")
    print(f"   Tables: {config.vertices_table}, {config.edges_table}")

    # 2. Add vertices
    print("\n2. Adding cities...")
    for city in (
        {"name": "Oslo", "population": 709000},
        {"name": "Bergen", "population": 286000},
        {"name": "Trondheim", "population": 212000},
    ):
        key = store.add_value(city, VertexProperties(attributes={"country": "NO"}))
        print(f"   + {key}")
    print(f"   Vertex count: {store.vertex_count()}")

    # 3. Add edges
    print("\n3. Adding roads...")
    store.add_edge("Oslo", "Bergen", EdgeProperties(weight=463, data={"road": "E16"}))
    store.add_edge("Oslo", "Trondheim", EdgeProperties(weight=494, data={"road": "E6"}))
    try:
        store.add_edge("Oslo", "Bergen")
    except EdgeAlreadyExistsError as e:
        print(f"   Rejected duplicate: {e}")
    try:
        store.add_edge("Oslo", "Stavanger")
    except MissingEndpointError as e:
        print(f"   Rejected dangling edge: {e}")
    print(f"   Edge count: {store.edge_count()}")

    # 4. Read and update
    print("\n4. Updating a road...")
    store.update_edge("Oslo", "Bergen", EdgeProperties(weight=470, attributes={"season": "winter"}))
    edge = store.edge("Oslo", "Bergen")
    print(f"   {edge.source} -> {edge.target}: {edge.properties}")

    # 5. Remove a vertex (its roads go with it)
    print("\n5. Removing Oslo...")
    store.remove_vertex("Oslo")
    print(f"   Vertices: {store.list_vertices()}")
    print(f"   Edge count: {store.edge_count()}")

    store.connection.close()


if __name__ == "__main__":
    main()
