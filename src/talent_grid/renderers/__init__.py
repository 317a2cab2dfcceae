"""Renderers turning a GridScene into drawable output."""

from talent_grid.renderers.base import Renderer
from talent_grid.renderers.svg import SvgRenderer

__all__ = ["Renderer", "SvgRenderer"]
