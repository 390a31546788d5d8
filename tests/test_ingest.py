"""Tests for payload ingestion (parse_payload, load_graph)."""

from __future__ import annotations

import json
import logging

import pytest

from lineage_viz.exceptions import LineageGraphError, PayloadError
from lineage_viz.graph import Column, Edge, LineageGraph, Node, NodeKind
from lineage_viz.ingest import load_graph, parse_payload

PAYLOAD = {
    "nodes": [
        {
            "id": "customer",
            "name": "customer",
            "type": "Table",
            "columns": [{"name": "customer_id", "type": "integer"}, {"name": "email", "type": "text"}],
        },
        {
            "id": "customer_emails",
            "name": "customer_emails",
            "type": "View",
            "columns": [{"name": "email", "type": "text"}],
        },
    ],
    "edges": [
        {
            "sourceNodeId": "customer",
            "sourceColumn": "email",
            "targetNodeId": "customer_emails",
            "targetColumn": "email",
        }
    ],
}


def test_parses_camel_case_payload():
    graph = parse_payload(PAYLOAD)
    assert [n.id for n in graph.nodes] == ["customer", "customer_emails"]
    assert graph.node("customer").kind is NodeKind.TABLE
    assert graph.node("customer_emails").kind is NodeKind.VIEW
    assert graph.node("customer").columns == (Column("customer_id", "integer"), Column("email", "text"))
    assert graph.edges == (Edge("customer", "email", "customer_emails", "email"),)


def test_parses_json_text():
    assert parse_payload(json.dumps(PAYLOAD)) == parse_payload(PAYLOAD)


def test_parses_json_bytes():
    assert parse_payload(json.dumps(PAYLOAD).encode()) == parse_payload(PAYLOAD)


def test_empty_payload():
    graph = parse_payload({})
    assert len(graph) == 0
    assert graph.edges == ()


@pytest.mark.parametrize("raw", ["cte", "CTE", " Cte "])
def test_kind_is_case_insensitive(raw):
    graph = parse_payload({"nodes": [{"id": "x", "type": raw}]})
    assert graph.node("x").kind is NodeKind.CTE


def test_unknown_kind_raises():
    with pytest.raises(PayloadError, match="Invalid lineage payload"):
        parse_payload({"nodes": [{"id": "x", "type": "Banana"}]})


def test_node_without_id_raises():
    with pytest.raises(PayloadError):
        parse_payload({"nodes": [{"name": "x", "type": "Table"}]})


def test_invalid_json_text_raises():
    with pytest.raises(PayloadError):
        parse_payload("{not json")


def test_payload_error_is_library_error():
    """Callers can catch every library error through the base class."""
    from lineage_viz.exceptions import LineageVizError

    with pytest.raises(LineageVizError):
        parse_payload("[]")


# ─── Coercions ────────────────────────────────────────────────────────────────


class TestCoercions:
    def test_missing_columns_becomes_empty(self):
        graph = parse_payload({"nodes": [{"id": "x", "type": "Source"}]})
        assert graph.node("x").columns == ()

    def test_non_list_columns_becomes_empty(self, caplog):
        with caplog.at_level(logging.WARNING, logger="lineage_viz.ingest"):
            graph = parse_payload({"nodes": [{"id": "x", "type": "Source", "columns": "id,name"}]})
        assert graph.node("x").columns == ()
        assert "non-list columns" in caplog.text

    def test_null_columns_is_silent(self, caplog):
        with caplog.at_level(logging.WARNING, logger="lineage_viz.ingest"):
            graph = parse_payload({"nodes": [{"id": "x", "type": "Source", "columns": None}]})
        assert graph.node("x").columns == ()
        assert caplog.text == ""

    def test_nameless_columns_dropped(self, caplog):
        columns = [{"name": "a"}, {"type": "int"}, {"name": ""}, "b", {"name": "c", "type": "int"}]
        with caplog.at_level(logging.WARNING, logger="lineage_viz.ingest"):
            graph = parse_payload({"nodes": [{"id": "x", "type": "Table", "columns": columns}]})
        assert [c.name for c in graph.node("x").columns] == ["a", "c"]
        assert "Dropped 3 column(s)" in caplog.text

    @pytest.mark.parametrize("raw_type", [None, "", "   "])
    def test_missing_column_type_is_unknown(self, raw_type):
        graph = parse_payload({"nodes": [{"id": "x", "type": "Table", "columns": [{"name": "a", "type": raw_type}]}]})
        assert graph.node("x").columns == (Column("a", "unknown"),)

    def test_absent_column_type_is_unknown(self):
        graph = parse_payload({"nodes": [{"id": "x", "type": "Table", "columns": [{"name": "a"}]}]})
        assert graph.node("x").columns[0].type == "unknown"

    def test_name_defaults_to_id(self):
        graph = parse_payload({"nodes": [{"id": "raw.orders", "type": "Source"}]})
        assert graph.node("raw.orders").name == "raw.orders"

    def test_duplicate_ids_keep_first(self, caplog):
        payload = {
            "nodes": [
                {"id": "a", "name": "first", "type": "Table"},
                {"id": "b", "type": "Table"},
                {"id": "a", "name": "second", "type": "View"},
            ]
        }
        with caplog.at_level(logging.WARNING, logger="lineage_viz.ingest"):
            graph = parse_payload(payload)
        assert [n.id for n in graph.nodes] == ["a", "b"]
        assert graph.node("a").name == "first"
        assert "Duplicate node id 'a'" in caplog.text

    def test_incomplete_edges_dropped(self, caplog):
        edges = [
            {"sourceNodeId": "a", "sourceColumn": "x", "targetNodeId": "b", "targetColumn": "y"},
            {"sourceNodeId": "a", "sourceColumn": "x", "targetNodeId": "b"},
            {"sourceNodeId": "a", "sourceColumn": None, "targetNodeId": "b", "targetColumn": "y"},
            "a.x -> b.y",
        ]
        with caplog.at_level(logging.WARNING, logger="lineage_viz.ingest"):
            graph = parse_payload({"nodes": [], "edges": edges})
        assert graph.edges == (Edge("a", "x", "b", "y"),)
        assert "Dropped 3 edge(s)" in caplog.text

    def test_dangling_edges_are_kept(self):
        """Edges to unknown nodes survive ingestion; layout ignores them."""
        graph = parse_payload(
            {
                "nodes": [{"id": "a", "type": "Table"}],
                "edges": [{"sourceNodeId": "a", "sourceColumn": "x", "targetNodeId": "zz", "targetColumn": "y"}],
            }
        )
        assert len(graph.edges) == 1
        assert not graph.resolves(graph.edges[0])


# ─── Direct construction ──────────────────────────────────────────────────────


def test_direct_construction_rejects_duplicates():
    """Ingestion dedupes; building a graph by hand with duplicate ids does not."""
    node = Node("a", "a", NodeKind.TABLE)
    with pytest.raises(LineageGraphError) as exc_info:
        LineageGraph.build(nodes=[node, node], edges=[])
    assert exc_info.value.duplicates == ["a"]


# ─── load_graph ───────────────────────────────────────────────────────────────


class TestLoadGraph:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "lineage.json"
        path.write_text(json.dumps(PAYLOAD), encoding="utf-8")
        graph = load_graph(path)
        assert len(graph) == 2
        assert load_graph(str(path)) == graph

    def test_missing_file(self, tmp_path):
        with pytest.raises(PayloadError, match="Could not read"):
            load_graph(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{nodes: [", encoding="utf-8")
        with pytest.raises(PayloadError, match="not valid JSON"):
            load_graph(path)

    def test_non_object_document(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")
        with pytest.raises(PayloadError, match="JSON object"):
            load_graph(path)

    def test_invalid_utf8(self, tmp_path):
        path = tmp_path / "binary.json"
        path.write_bytes(b"\xff\xfe{}")
        with pytest.raises(PayloadError, match="not UTF-8"):
            load_graph(path)
