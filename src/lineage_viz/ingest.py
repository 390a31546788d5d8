"""Ingestion boundary — validate an extraction payload and build a LineageGraph.

The payload comes from an external extractor and is not trusted. Shape
problems that can be repaired are coerced here, with a warning, so the layout
core can rely on a well-formed LineageGraph:

- a node's missing or non-list ``columns`` becomes an empty list;
- column entries without a usable name are dropped, a missing type is "unknown";
- a missing node ``name`` falls back to its id;
- duplicate node ids keep the first occurrence;
- edges missing any endpoint field are dropped.

Anything else (no node id, an unknown node kind, malformed JSON) raises
PayloadError.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from lineage_viz.exceptions import PayloadError
from lineage_viz.graph import Column, Edge, LineageGraph, Node, NodeKind

logger = logging.getLogger(__name__)

_EDGE_FIELDS = ("sourceNodeId", "sourceColumn", "targetNodeId", "targetColumn")


class ColumnPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str
    type: str = "unknown"

    @field_validator("type", mode="before")
    @classmethod
    def _default_type(cls, v: Any) -> str:
        if v is None or (isinstance(v, str) and not v.strip()):
            return "unknown"
        return str(v)


class NodePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    name: str | None = None
    kind: NodeKind = Field(alias="type")
    columns: list[ColumnPayload] = Field(default_factory=list)

    @field_validator("kind", mode="before")
    @classmethod
    def _match_kind(cls, v: Any) -> Any:
        if isinstance(v, str):
            for kind in NodeKind:
                if kind.value.lower() == v.strip().lower():
                    return kind
        return v

    @field_validator("columns", mode="before")
    @classmethod
    def _coerce_columns(cls, v: Any) -> list[Any]:
        if not isinstance(v, list):
            if v is not None:
                logger.warning("Ignoring non-list columns value of type %s", type(v).__name__)
            return []
        kept = [c for c in v if isinstance(c, Mapping) and isinstance(c.get("name"), str) and c["name"]]
        if len(kept) != len(v):
            logger.warning("Dropped %d column(s) without a name", len(v) - len(kept))
        return kept

    def to_node(self) -> Node:
        return Node(
            id=self.id,
            name=self.name or self.id,
            kind=self.kind,
            columns=tuple(Column(name=c.name, type=c.type) for c in self.columns),
        )


class EdgePayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    source_node_id: str = Field(alias="sourceNodeId")
    source_column: str = Field(alias="sourceColumn")
    target_node_id: str = Field(alias="targetNodeId")
    target_column: str = Field(alias="targetColumn")

    def to_edge(self) -> Edge:
        return Edge(
            source_node_id=self.source_node_id,
            source_column=self.source_column,
            target_node_id=self.target_node_id,
            target_column=self.target_column,
        )


class LineagePayload(BaseModel):
    """The ``{"nodes": [...], "edges": [...]}`` document produced by extraction."""

    model_config = ConfigDict(extra="ignore")

    nodes: list[NodePayload] = Field(default_factory=list)
    edges: list[EdgePayload] = Field(default_factory=list)

    @field_validator("edges", mode="before")
    @classmethod
    def _drop_incomplete_edges(cls, v: Any) -> list[Any]:
        if not isinstance(v, list):
            return []
        kept = [e for e in v if isinstance(e, Mapping) and all(isinstance(e.get(f), str) for f in _EDGE_FIELDS)]
        if len(kept) != len(v):
            logger.warning("Dropped %d edge(s) with missing endpoint fields", len(v) - len(kept))
        return kept

    @model_validator(mode="after")
    def _dedupe_nodes(self) -> LineagePayload:
        seen: set[str] = set()
        unique: list[NodePayload] = []
        for node in self.nodes:
            if node.id in seen:
                logger.warning("Duplicate node id %r; keeping the first occurrence", node.id)
                continue
            seen.add(node.id)
            unique.append(node)
        self.nodes = unique
        return self

    def to_graph(self) -> LineageGraph:
        return LineageGraph.build(
            nodes=(n.to_node() for n in self.nodes),
            edges=(e.to_edge() for e in self.edges),
        )


def parse_payload(data: Mapping[str, Any] | str | bytes) -> LineageGraph:
    """Build a LineageGraph from a decoded payload or its JSON text."""
    try:
        if isinstance(data, (str, bytes)):
            payload = LineagePayload.model_validate_json(data)
        else:
            payload = LineagePayload.model_validate(data)
    except ValidationError as e:
        raise PayloadError(f"Invalid lineage payload: {e}") from e
    return payload.to_graph()


def load_graph(path: str | Path) -> LineageGraph:
    """Read a JSON lineage payload from ``path``."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise PayloadError(f"Could not read {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise PayloadError(f"{path} is not UTF-8 text: {e}") from e
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise PayloadError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, Mapping):
        raise PayloadError(f"{path} must contain a JSON object with 'nodes' and 'edges'")
    return parse_payload(data)
