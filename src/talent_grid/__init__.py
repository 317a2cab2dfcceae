"""talent_grid — grid layout and prerequisite routing for talent tree editors."""

from talent_grid.errors import InvalidArgument, TalentGridError
from talent_grid.geometry import Point, Rectangle, Size
from talent_grid.graph import DependencyGraph, Entity, Prerequisite
from talent_grid.layout import CellItem, GridLayout, GridSpec, layout, layout_grid
from talent_grid.routing import Arrowhead, RoutedEdge, RouteStyle, Segment, route_edges
from talent_grid.scene import GridScene, SceneHolder, build_scene

__all__ = [
    "Arrowhead",
    "CellItem",
    "DependencyGraph",
    "Entity",
    "GridLayout",
    "GridScene",
    "GridSpec",
    "InvalidArgument",
    "Point",
    "Prerequisite",
    "Rectangle",
    "RouteStyle",
    "RoutedEdge",
    "SceneHolder",
    "Segment",
    "Size",
    "TalentGridError",
    "build_scene",
    "layout",
    "layout_grid",
    "route_edges",
]
