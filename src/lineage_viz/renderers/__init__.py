"""Renderers for laid-out lineage graphs."""

from lineage_viz.renderers.base import Renderer
from lineage_viz.renderers.svg import SvgRenderer, render_svg

__all__ = ["Renderer", "SvgRenderer", "render_svg"]
