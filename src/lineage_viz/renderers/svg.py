"""SVG renderer — renders a lineage LayoutResult to an SVG string."""

from __future__ import annotations

import logging

from lineage_viz.config import LayoutSettings, default_settings
from lineage_viz.graph import Edge, LineageGraph, NodeKind
from lineage_viz.interaction import LineageCanvas
from lineage_viz.layout.types import LayoutNode, LayoutResult, RoutedEdge
from lineage_viz.selection import edge_style

logger = logging.getLogger(__name__)

# ─── Constants ──────────────────────────────────────────────────────────────

FONT_SIZE = 14
FONT_FAMILY = "Inter, Helvetica, Arial, sans-serif"
CORNER_RADIUS = 8
TEXT_INSET = 16  # horizontal text inset inside a box

_BOX_STYLE = 'fill="white" stroke="#e5e7eb" stroke-width="1"'
_DIVIDER_STYLE = 'stroke="#e5e7eb" stroke-width="1"'

# Header accent per kind family: warehouse tables vs. script-derived entities.
_ACCENT_WAREHOUSE = "#336791"
_ACCENT_DERIVED = "#ff694b"

_MARKER = "arrowhead"
_MARKER_ACTIVE = "arrowhead-active"


def _escape(s: str) -> str:
    return s.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;").replace('"', "&quot;")


def _font(size: int = FONT_SIZE, weight: str = "normal") -> str:
    return f'font-family="{FONT_FAMILY}" font-size="{size}" font-weight="{weight}"'


def _fmt(v: float) -> str:
    text = f"{v:.2f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text


def _accent(kind: NodeKind) -> str:
    return _ACCENT_DERIVED if kind.is_derived else _ACCENT_WAREHOUSE


# ─── Node Rendering ─────────────────────────────────────────────────────────


def _render_node(ln: LayoutNode, settings: LayoutSettings) -> str:
    x, y, w, h = ln.left, ln.top, ln.width, ln.height
    header_bottom = y + settings.header_height
    text_x = x + TEXT_INSET

    parts = [
        f'<g id="node-{_escape(ln.id)}">',
        f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="{_fmt(w)}" height="{_fmt(h)}" rx="{CORNER_RADIUS}" {_BOX_STYLE}/>',
        f'<rect x="{_fmt(x)}" y="{_fmt(y)}" width="4" height="{_fmt(settings.header_height)}" fill="{_accent(ln.kind)}"/>',
        f'<text x="{_fmt(text_x)}" y="{_fmt(y + settings.header_height * 0.45)}" {_font(weight="bold")} '
        f'fill="#1f2937">{_escape(ln.name)}</text>',
        f'<text x="{_fmt(text_x)}" y="{_fmt(y + settings.header_height * 0.78)}" {_font(FONT_SIZE - 2)} '
        f'fill="#6b7280">{ln.kind.value}</text>',
    ]

    if ln.columns:
        parts.append(f'<line x1="{_fmt(x)}" y1="{_fmt(header_bottom)}" x2="{_fmt(x + w)}" y2="{_fmt(header_bottom)}" {_DIVIDER_STYLE}/>')

    row_h = settings.column_row_height
    for i, col in enumerate(ln.columns):
        row_mid = header_bottom + i * row_h + row_h / 2
        parts.append(
            f'<text id="col-{_escape(ln.id)}-{_escape(col.name)}" x="{_fmt(text_x)}" y="{_fmt(row_mid)}" '
            f'dominant-baseline="central" {_font(FONT_SIZE - 1)} fill="#374151">{_escape(col.name)}</text>'
        )
        parts.append(
            f'<text x="{_fmt(x + w - TEXT_INSET)}" y="{_fmt(row_mid)}" dominant-baseline="central" '
            f'text-anchor="end" {_font(FONT_SIZE - 3)} fill="#9ca3af">{_escape(col.type)}</text>'
        )

    parts.append("</g>")
    return "\n".join(parts)


# ─── Edge Rendering ─────────────────────────────────────────────────────────


def _render_edge(re: RoutedEdge) -> str:
    style = edge_style(re.emphasis)
    marker = _MARKER_ACTIVE if style.active_marker else _MARKER
    return (
        f'<path d="{re.path}" fill="none" stroke="{style.stroke}" stroke-width="{_fmt(style.stroke_width)}" '
        f'opacity="{_fmt(style.opacity)}" marker-end="url(#{marker})" data-emphasis="{re.emphasis.value}"/>'
    )


def _marker_defs() -> list[str]:
    defs = ["<defs>"]
    for marker_id, fill in ((_MARKER, "#9ca3af"), (_MARKER_ACTIVE, "#2563eb")):
        defs.extend(
            [
                f'  <marker id="{marker_id}" viewBox="0 -5 10 10" refX="5" refY="0" orient="auto" '
                'markerWidth="8" markerHeight="8">',
                f'    <path d="M 0,-5 L 10,0 L 0,5" fill="{fill}" stroke-linejoin="round"/>',
                "  </marker>",
            ]
        )
    defs.append("</defs>")
    return defs


# ─── Public Renderer ────────────────────────────────────────────────────────


class SvgRenderer:
    """SVG renderer — consumes a LayoutResult, produces an SVG string."""

    def __init__(self, settings: LayoutSettings | None = None) -> None:
        self.settings = settings or default_settings()

    def render(self, result: LayoutResult) -> str:
        svg_w = _fmt(result.extent.width)
        svg_h = _fmt(result.extent.height)

        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{svg_w}" height="{svg_h}" viewBox="0 0 {svg_w} {svg_h}">',
            *_marker_defs(),
            f'<rect width="{svg_w}" height="{svg_h}" fill="#f9fafb"/>',
        ]

        # Edges (behind nodes), in original order.
        parts.append('<g class="edges">')
        for re in result.edges:
            parts.append(_render_edge(re))
        parts.append("</g>")

        # Nodes (on top)
        parts.append('<g class="nodes">')
        for ln in result.nodes:
            parts.append(_render_node(ln, self.settings))
        parts.append("</g>")

        parts.append("</svg>")
        logger.debug("Rendered %d node(s) and %d edge(s) to SVG", len(result.nodes), len(result.edges))
        return "\n".join(parts)


def render_svg(
    graph: LineageGraph,
    viewport_width: float | None = None,
    viewport_height: float | None = None,
    selected: Edge | None = None,
    settings: LayoutSettings | None = None,
) -> str:
    """Lay out ``graph`` and render it to SVG, optionally with one edge selected."""
    canvas = LineageCanvas(graph, viewport_width, viewport_height, settings)
    if selected is not None:
        canvas.select_edge(selected)
    return SvgRenderer(canvas.settings).render(canvas.snapshot())
