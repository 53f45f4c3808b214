"""Tests for SchemaConfig validation."""

from __future__ import annotations

import pytest

from graphsql import DEFAULT_CONFIG, InvalidConfigError, SchemaConfig


class TestSchemaConfig:
    def test_defaults(self) -> None:
        assert DEFAULT_CONFIG.vertices_table == "vertices"
        assert DEFAULT_CONFIG.edges_table == "edges"
        assert DEFAULT_CONFIG.vertex_hash_type == "TEXT"
        assert DEFAULT_CONFIG.vertex_value_type == "JSON"
        assert DEFAULT_CONFIG.safe is False
        assert DEFAULT_CONFIG.unique is False

    def test_frozen(self) -> None:
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.unique = True  # type: ignore[misc]

    def test_with_options_returns_copy(self) -> None:
        config = DEFAULT_CONFIG.with_options(unique=True, safe=True)
        assert config.unique and config.safe
        assert DEFAULT_CONFIG.unique is False

    @pytest.mark.parametrize(
        "table",
        ["", "1abc", "v; DROP TABLE users", "v-1", 'v"', "a.b.c", "a..b"],
    )
    def test_rejects_bad_table_names(self, table: str) -> None:
        with pytest.raises(InvalidConfigError):
            SchemaConfig(vertices_table=table)

    def test_rejects_same_table_for_both(self) -> None:
        with pytest.raises(InvalidConfigError, match="must differ"):
            SchemaConfig(vertices_table="graph", edges_table="GRAPH")

    @pytest.mark.parametrize(
        "sql_type",
        ["TEXT", "VARCHAR(255)", "BIGINT UNSIGNED", "NUMERIC(10, 2)", "DOUBLE PRECISION", "JSONB"],
    )
    def test_accepts_sql_types(self, sql_type: str) -> None:
        config = SchemaConfig(vertex_hash_type=sql_type, vertex_value_type=sql_type)
        assert config.vertex_hash_type == sql_type

    @pytest.mark.parametrize(
        "sql_type",
        ["", "TEXT, evil TEXT", "TEXT); DROP TABLE x; --", "VARCHAR(abc)", "(10)"],
    )
    def test_rejects_bad_sql_types(self, sql_type: str) -> None:
        with pytest.raises(InvalidConfigError):
            SchemaConfig(vertex_value_type=sql_type)

    def test_invalid_config_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            DEFAULT_CONFIG.with_options(edges_table="bad name")
