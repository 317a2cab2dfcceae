"""Edge routing — connectors between prerequisite cells.

For each resolvable prerequisite child → parent the router picks one of three
strategies from the literal alignment of the two cell rectangles:

  - same top y           → HORIZONTAL: one segment between the facing edges
  - same left x          → VERTICAL:   one segment from the parent's bottom
                                       edge to the child's top edge
  - anything else        → STEP:       sideways out of the parent, then
                                       down (or up) into the child's column

Every route ends in an arrowhead computed from the direction of its last
segment. The router never mutates its inputs.
"""

from __future__ import annotations

import enum
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Literal

import structlog

from talent_grid.errors import InvalidArgument
from talent_grid.geometry import Point, Rectangle, perpendicular, unit_vector, vector_length
from talent_grid.graph import DependencyGraph

logger = structlog.get_logger(__name__)

ARROW_SIZE: float = 8.0

# ─── Drawables ────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Segment:
    """A straight line from `start` to `end`."""

    start: Point
    end: Point
    kind: Literal["segment"] = "segment"

    @property
    def length(self) -> float:
        return vector_length(self.end.x - self.start.x, self.end.y - self.start.y)


@dataclass(frozen=True)
class Arrowhead:
    """Two short wings meeting at `tip`."""

    tip: Point
    left: Point
    right: Point
    kind: Literal["arrowhead"] = "arrowhead"

    def segments(self) -> tuple[Segment, Segment]:
        return Segment(self.tip, self.left), Segment(self.tip, self.right)


Drawable = Segment | Arrowhead


class RouteStyle(enum.Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    STEP = "step"


@dataclass(frozen=True)
class RoutedEdge:
    """One routed prerequisite connector.

    `segments` is the route itself in drawing order; `arrowhead` sits on the
    final point and is None when the last segment has zero length.
    """

    from_id: int
    to_id: int
    style: RouteStyle
    segments: tuple[Segment, ...]
    arrowhead: Arrowhead | None

    @property
    def end(self) -> Point:
        return self.segments[-1].end

    def drawables(self) -> Iterator[Drawable]:
        yield from self.segments
        if self.arrowhead is not None:
            yield self.arrowhead

    def lines(self) -> list[Segment]:
        """Route segments followed by the arrowhead wings, all as segments."""
        lines = list(self.segments)
        if self.arrowhead is not None:
            lines.extend(self.arrowhead.segments())
        return lines


# ─── Classification & Strategies ──────────────────────────────────────────────


def classify(parent: Rectangle, child: Rectangle) -> RouteStyle:
    """Pick a routing strategy. Uses exact equality of the top-left corners."""
    if parent.y == child.y:
        return RouteStyle.HORIZONTAL
    if parent.x == child.x:
        return RouteStyle.VERTICAL
    return RouteStyle.STEP


def horizontal_route(parent: Rectangle, child: Rectangle) -> list[Segment]:
    """Straight line at the row's midline between the facing edges."""
    y = parent.mid_y
    if child.mid_x > parent.mid_x:
        start_x, end_x = parent.right, child.x
    else:
        start_x, end_x = parent.x, child.right
    return [Segment(Point(start_x, y), Point(end_x, y))]


def vertical_route(parent: Rectangle, child: Rectangle) -> list[Segment]:
    """Straight drop from the parent's bottom edge to the child's top edge.

    The x position is offset by half the parent's height, which centres the
    line for the square cells the editor draws.
    """
    x = parent.x + parent.height / 2
    return [Segment(Point(x, parent.bottom), Point(x, child.y))]


def step_route(parent: Rectangle, child: Rectangle) -> list[Segment]:
    """Horizontal leg out of the parent's side, then a vertical leg to the child's top."""
    start_x = parent.right if child.x > parent.x else parent.x
    y = parent.mid_y
    corner = Point(child.mid_x, y)
    return [
        Segment(Point(start_x, y), corner),
        Segment(corner, Point(child.mid_x, child.y)),
    ]


_STRATEGIES = {
    RouteStyle.HORIZONTAL: horizontal_route,
    RouteStyle.VERTICAL: vertical_route,
    RouteStyle.STEP: step_route,
}


def arrowhead(start: Point, end: Point, size: float = ARROW_SIZE) -> Arrowhead | None:
    """Arrowhead at `end` for a segment travelling from `start`.

    Each wing ends at end - u*size ± p*size/2, where u is the unit direction
    and p its perpendicular. Returns None for a zero-length segment.
    """
    u = unit_vector(end.x - start.x, end.y - start.y)
    if u is None:
        return None
    ux, uy = u
    px, py = perpendicular(ux, uy)
    back_x = end.x - ux * size
    back_y = end.y - uy * size
    return Arrowhead(
        tip=end,
        left=Point(back_x + px * size / 2, back_y + py * size / 2),
        right=Point(back_x - px * size / 2, back_y - py * size / 2),
    )


def route_edge(
    from_id: int,
    to_id: int,
    parent: Rectangle,
    child: Rectangle,
    arrow_size: float = ARROW_SIZE,
) -> RoutedEdge:
    """Route a single parent → child connector between two rectangles."""
    style = classify(parent, child)
    segments = _STRATEGIES[style](parent, child)
    last = segments[-1]
    return RoutedEdge(
        from_id=from_id,
        to_id=to_id,
        style=style,
        segments=tuple(segments),
        arrowhead=arrowhead(last.start, last.end, arrow_size),
    )


# ─── Graph Routing ────────────────────────────────────────────────────────────


def _rect_for(cell_rectangles: Mapping[tuple[int, int], Rectangle], row: int, column: int, entity_id: int) -> Rectangle:
    try:
        return cell_rectangles[(row, column)]
    except KeyError:
        raise InvalidArgument(f"no rectangle for cell ({row}, {column}) occupied by entity {entity_id}") from None


def route_edges(
    graph: DependencyGraph,
    cell_rectangles: Mapping[tuple[int, int], Rectangle],
    arrow_size: float = ARROW_SIZE,
) -> list[RoutedEdge]:
    """Route every resolvable prerequisite in `graph`.

    Edges are emitted parent → child (from_id is the prerequisite, to_id the
    dependent). Prerequisites pointing at ids absent from the graph are
    skipped without error.
    """
    routes: list[RoutedEdge] = []

    for child in graph:
        for prereq in child.prerequisites:
            parent = graph.lookup(prereq.target_id)
            if parent is None:
                logger.debug("dangling_prerequisite", child=child.id, target=prereq.target_id)
                continue

            parent_rect = _rect_for(cell_rectangles, parent.row, parent.column, parent.id)
            child_rect = _rect_for(cell_rectangles, child.row, child.column, child.id)
            routes.append(route_edge(parent.id, child.id, parent_rect, child_rect, arrow_size))

    logger.debug("edges_routed", entities=len(graph), edges=len(routes))
    return routes
