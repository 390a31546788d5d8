"""Tests for LayoutSettings and load_settings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from lineage_viz import config
from lineage_viz.config import (
    COLUMN_ROW_HEIGHT,
    COMPONENT_GAP,
    H_GAP,
    HEADER_HEIGHT,
    NODE_WIDTH,
    PADDING,
    V_GAP,
    LayoutSettings,
    default_settings,
    load_settings,
)
from lineage_viz.geometry import resolve_edge_geometry
from lineage_viz.graph import Column, Edge, LineageGraph, Node, NodeKind
from lineage_viz.layout import compute_layout


def test_defaults_match_constants(settings):
    assert settings.node_width == NODE_WIDTH
    assert settings.header_height == HEADER_HEIGHT
    assert settings.column_row_height == COLUMN_ROW_HEIGHT
    assert settings.horizontal_gap == H_GAP
    assert settings.vertical_gap == V_GAP
    assert settings.padding == PADDING
    assert settings.component_gap == COMPONENT_GAP
    assert settings.log_level == "WARNING"


def test_node_height(settings):
    assert settings.node_height(0) == 60
    assert settings.node_height(2) == 116
    assert settings.node_height(10) == 340


def test_env_override(monkeypatch):
    monkeypatch.setenv("LINEAGE_VIZ_VIEWPORT_HEIGHT", "1024")
    monkeypatch.setenv("LINEAGE_VIZ_COMPONENT_GAP", "3")
    settings = load_settings()
    assert settings.viewport_height == 1024
    assert settings.component_gap == 3


def test_dotenv_file(tmp_path):
    """A .env file in the working directory is read too."""
    (tmp_path / ".env").write_text("LINEAGE_VIZ_NODE_WIDTH=300\n", encoding="utf-8")
    assert load_settings().node_width == 300


def test_overrides_win_over_env(monkeypatch):
    monkeypatch.setenv("LINEAGE_VIZ_PADDING", "10")
    assert load_settings(padding=20).padding == 20


def test_log_level_is_uppercased():
    assert load_settings(log_level="debug").log_level == "DEBUG"


@pytest.mark.parametrize(
    "field,value",
    [
        ("node_width", 0),
        ("column_row_height", -1),
        ("viewport_height", 0),
        ("vertical_gap", -5),
        ("padding", -1),
        ("component_gap", 0),
        ("log_level", "chatty"),
    ],
)
def test_invalid_values_rejected(field, value):
    with pytest.raises(ValidationError):
        LayoutSettings(**{field: value})


def test_zero_gaps_allowed():
    settings = load_settings(horizontal_gap=0, vertical_gap=0, padding=0)
    assert (settings.horizontal_gap, settings.vertical_gap, settings.padding) == (0, 0, 0)


def test_default_settings_read_once(monkeypatch):
    """Calls without explicit settings share one environment read."""
    calls = []
    real_load = config.load_settings

    def counting_load(**overrides):
        calls.append(overrides)
        return real_load(**overrides)

    monkeypatch.setattr(config, "load_settings", counting_load)

    cols = (Column("id"),)
    graph = LineageGraph.build(
        nodes=[Node("A", "A", NodeKind.TABLE, cols), Node("B", "B", NodeKind.TABLE, cols)],
        edges=[Edge("A", "id", "B", "id")],
    )
    nodes = compute_layout(graph, 800)
    for _ in range(5):
        resolve_edge_geometry(nodes, graph.edges[0])

    assert len(calls) == 1
    assert config.default_settings() is config.default_settings()


def test_default_settings_sees_env_after_cache_clear(monkeypatch):
    monkeypatch.setenv("LINEAGE_VIZ_PADDING", "12")
    default_settings.cache_clear()
    assert default_settings().padding == 12
