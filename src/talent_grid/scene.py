"""Scene — one immutable (layout, routed edges) pair for a visualised grid.

Any change to the grid's contents produces a new scene; the old one is never
updated in place. `SceneHolder` swaps the current scene in one assignment so
readers see either the old grid or the new one, never a mix.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

import structlog

from talent_grid.geometry import Size
from talent_grid.graph import DependencyGraph, Entity, cell_items_for, graph_from_grid, map_entities_to_grid
from talent_grid.layout import GridLayout, GridSpec, layout_grid
from talent_grid.routing import ARROW_SIZE, RoutedEdge, route_edges

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class GridScene:
    """Everything a renderer needs to draw one grid."""

    graph: DependencyGraph
    layout: GridLayout
    edges: tuple[RoutedEdge, ...]

    @property
    def spec(self) -> GridSpec:
        return self.layout.spec


def build_scene(
    entities: Iterable[Entity],
    spec: GridSpec,
    occupied_size: Size,
    empty_size: Size | None = None,
    arrow_size: float = ARROW_SIZE,
) -> GridScene:
    """Map entities into the grid, lay it out and route every prerequisite."""
    grid = map_entities_to_grid(entities, spec)
    graph = graph_from_grid(grid)
    grid_layout = layout_grid(cell_items_for(grid, occupied_size, empty_size), spec)
    edges = route_edges(graph, grid_layout.cell_rectangles, arrow_size)

    dangling = graph.dangling_references()
    if dangling:
        logger.info("dangling_prerequisites_skipped", count=len(dangling), references=dangling)

    return GridScene(graph=graph, layout=grid_layout, edges=tuple(edges))


class SceneHolder:
    """Holds the scene currently on display."""

    def __init__(
        self,
        spec: GridSpec,
        occupied_size: Size,
        empty_size: Size | None = None,
        arrow_size: float = ARROW_SIZE,
    ) -> None:
        self._spec = spec
        self._occupied_size = occupied_size
        self._empty_size = empty_size
        self._arrow_size = arrow_size
        self._current: GridScene | None = None

    @property
    def current(self) -> GridScene | None:
        return self._current

    def rebuild(self, entities: Iterable[Entity]) -> GridScene:
        """Build a complete new scene, then publish it."""
        scene = build_scene(entities, self._spec, self._occupied_size, self._empty_size, self._arrow_size)
        self._current = scene
        return scene

    def clear(self) -> None:
        self._current = None
