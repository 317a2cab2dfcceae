"""SVG renderer — renders a GridScene to an SVG string."""

from __future__ import annotations

from talent_grid.geometry import Rectangle
from talent_grid.graph import Entity
from talent_grid.routing import Arrowhead, Drawable, Segment
from talent_grid.scene import GridScene

# ─── Constants ──────────────────────────────────────────────────────────────

FONT_SIZE = 12
FONT_FAMILY = "monospace"
PADDING = 20  # canvas padding

_EDGE_STROKE = 'stroke="rgb(255,0,0)" stroke-width="2"'
_CELL_STROKE = 'fill="#333" stroke="black" stroke-width="1.5"'
_EMPTY_STROKE = 'fill="none" stroke="white" stroke-width="1" stroke-dasharray="4 4"'


def _fmt(v: float) -> str:
    """Render a coordinate without a trailing .0 for whole numbers."""
    return str(int(v)) if float(v).is_integer() else f"{v:.2f}".rstrip("0").rstrip(".")


def _font(size: int = FONT_SIZE) -> str:
    return f'font-family="{FONT_FAMILY}" font-size="{size}"'


# ─── Cell Rendering ─────────────────────────────────────────────────────────


def _rect_attrs(rect: Rectangle) -> str:
    return f'x="{_fmt(rect.x)}" y="{_fmt(rect.y)}" width="{_fmt(rect.width)}" height="{_fmt(rect.height)}"'


def _render_cell(rect: Rectangle, entity: Entity | None) -> str:
    if entity is None:
        return f"<rect {_rect_attrs(rect)} {_EMPTY_STROKE}/>"
    label = (
        f'<text x="{_fmt(rect.mid_x)}" y="{_fmt(rect.mid_y)}" dominant-baseline="central" '
        f'text-anchor="middle" {_font()} fill="white">{entity.id}</text>'
    )
    return f"<rect {_rect_attrs(rect)} {_CELL_STROKE}/>\n{label}"


# ─── Edge Rendering ─────────────────────────────────────────────────────────


def _render_line(seg: Segment) -> str:
    return (
        f'<line x1="{_fmt(seg.start.x)}" y1="{_fmt(seg.start.y)}" '
        f'x2="{_fmt(seg.end.x)}" y2="{_fmt(seg.end.y)}" {_EDGE_STROKE}/>'
    )


def _render_drawable(drawable: Drawable) -> str:
    if isinstance(drawable, Arrowhead):
        return "\n".join(_render_line(seg) for seg in drawable.segments())
    return _render_line(drawable)


# ─── Public Renderer ────────────────────────────────────────────────────────


class SvgRenderer:
    """SVG renderer — consumes a GridScene, produces SVG string."""

    def render(self, scene: GridScene) -> str:
        metrics = scene.layout.metrics
        svg_w = _fmt(PADDING * 2 + metrics.total_width)
        svg_h = _fmt(PADDING * 2 + metrics.total_height)

        parts = [
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{svg_w}" height="{svg_h}" viewBox="0 0 {svg_w} {svg_h}">',
            f'<rect width="{svg_w}" height="{svg_h}" fill="#1e1e1e"/>',
            f'<g transform="translate({PADDING},{PADDING})">',
        ]

        # Cells (underneath)
        columns = scene.spec.columns
        for i, rect in enumerate(scene.layout.rectangles):
            parts.append(_render_cell(rect, scene.graph.entity_at(i // columns, i % columns)))

        # Connectors (on top)
        for edge in scene.edges:
            for drawable in edge.drawables():
                parts.append(_render_drawable(drawable))

        parts.append("</g>")
        parts.append("</svg>")
        return "\n".join(parts)
