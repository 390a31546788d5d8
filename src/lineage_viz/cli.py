"""lineage-viz CLI — lay out and render lineage graphs from JSON payloads.

Commands:
    layout    Print depth and centre coordinates per node
    render    Write the diagram as SVG
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError

from lineage_viz.config import LayoutSettings, load_settings
from lineage_viz.exceptions import LineageVizError
from lineage_viz.graph import Edge, LineageGraph
from lineage_viz.ingest import load_graph
from lineage_viz.interaction import LineageCanvas
from lineage_viz.renderers.svg import SvgRenderer

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="lineage-viz",
    help="Column-level lineage layout and rendering.",
    no_args_is_help=True,
)


def _configure_logging(settings: LayoutSettings, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _settings() -> LayoutSettings:
    try:
        return load_settings()
    except ValidationError as e:
        print(f"Error: invalid LINEAGE_VIZ_* setting: {e}")
        raise typer.Exit(1) from e


def _load(path: Path) -> LineageGraph:
    try:
        return load_graph(path)
    except LineageVizError as e:
        print(f"Error: {e}")
        raise typer.Exit(1) from e


def parse_selection(text: str) -> Edge:
    """Parse ``SRC_NODE.SRC_COL->TGT_NODE.TGT_COL`` into an Edge.

    The column is everything after the last dot, so node ids may contain dots.
    """
    source, sep, target = text.partition("->")
    if not sep:
        raise typer.BadParameter("expected SRC_NODE.SRC_COL->TGT_NODE.TGT_COL")
    ends: list[tuple[str, str]] = []
    for part in (source.strip(), target.strip()):
        node_id, dot, column = part.rpartition(".")
        if not dot or not node_id or not column:
            raise typer.BadParameter(f"{part!r} is not NODE.COLUMN")
        ends.append((node_id, column))
    (src_node, src_col), (tgt_node, tgt_col) = ends
    return Edge(source_node_id=src_node, source_column=src_col, target_node_id=tgt_node, target_column=tgt_col)


def _print_table(headers: list[str], rows: list[list[str]]) -> None:
    widths = [len(h) for h in headers]
    for row in rows:
        for i, cell in enumerate(row):
            widths[i] = max(widths[i], len(cell))
    print("  " + "  ".join(h.ljust(widths[i]) for i, h in enumerate(headers)))
    print("  " + "  ".join("─" * w for w in widths))
    for row in rows:
        print("  " + "  ".join(cell.ljust(widths[i]) for i, cell in enumerate(row)))


@app.command("layout")
def layout_cmd(
    path: Annotated[Path, typer.Argument(help="JSON file with 'nodes' and 'edges'")],
    viewport_height: Annotated[float | None, typer.Option("--viewport-height", help="Viewport height in px")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Output as JSON")] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
):
    """Print the computed layout of a lineage graph."""
    settings = _settings()
    _configure_logging(settings, verbose)
    graph = _load(path)
    canvas = LineageCanvas(graph, viewport_height=viewport_height, settings=settings)

    if as_json:
        extent = canvas.extent()
        data = {
            "nodes": [
                {"id": n.id, "kind": n.kind.value, "depth": n.depth, "x": n.x, "y": n.y, "height": n.height}
                for n in canvas.nodes
            ],
            "fallback_nodes": canvas.fallback_nodes,
            "extent": {"width": extent.width, "height": extent.height},
        }
        print(json.dumps(data, indent=2))
        return

    if not canvas.nodes:
        print("\n  Graph has no nodes.")
        return

    print(f"\n  {len(graph.nodes)} nodes | {len(graph.edges)} edges\n")
    headers = ["Node", "Kind", "Depth", "X", "Y", "Height"]
    rows = [
        [n.id, n.kind.value, str(n.depth), f"{n.x:.1f}", f"{n.y:.1f}", f"{n.height:.0f}"]
        for n in canvas.nodes
    ]
    _print_table(headers, rows)
    if canvas.fallback_nodes:
        print(f"\n  Cycle fallback (depth 0): {', '.join(canvas.fallback_nodes)}")


@app.command("render")
def render_cmd(
    path: Annotated[Path, typer.Argument(help="JSON file with 'nodes' and 'edges'")],
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write SVG to file")] = None,
    viewport_width: Annotated[float | None, typer.Option("--viewport-width", help="Viewport width in px")] = None,
    viewport_height: Annotated[float | None, typer.Option("--viewport-height", help="Viewport height in px")] = None,
    select: Annotated[
        str | None, typer.Option("--select", help="Highlight edge SRC_NODE.SRC_COL->TGT_NODE.TGT_COL")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
):
    """Render a lineage graph to SVG."""
    settings = _settings()
    _configure_logging(settings, verbose)
    selected = parse_selection(select) if select else None
    graph = _load(path)

    canvas = LineageCanvas(graph, viewport_width, viewport_height, settings)
    if selected is not None:
        canvas.select_edge(selected)
    svg = SvgRenderer(settings).render(canvas.snapshot())

    if output is None:
        print(svg)
        return
    try:
        output.write_text(svg + "\n", encoding="utf-8")
    except OSError as e:
        print(f"Error: could not write {output}: {e}")
        raise typer.Exit(1) from e
    print(f"Wrote {output} ({len(svg.encode()) / 1024:.1f}KB)")


def main():
    """CLI entry point."""
    app()
