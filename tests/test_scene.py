"""Tests for scene.py — end-to-end layout + routing and the atomic scene swap."""

from __future__ import annotations

from talent_grid.geometry import Point, Rectangle, Size
from talent_grid.graph import Entity, Prerequisite
from talent_grid.layout import GridSpec
from talent_grid.routing import RouteStyle, Segment
from talent_grid.scene import GridScene, SceneHolder, build_scene

# ─── Helpers ──────────────────────────────────────────────────────────────────

SPEC = GridSpec(rows=15, columns=4, horizontal_gutter=23, vertical_gutter=23)
ICON = Size(46, 46)


def make_entity(id: int, row: int, column: int, *targets: int) -> Entity:
    return Entity(id=id, row=row, column=column, prerequisites=tuple(Prerequisite(t) for t in targets))


def sample_tree() -> list[Entity]:
    """A small tree exercising all three routing strategies plus a dangling link.

    1 at (0,1); 2 below it; 3 beside it; 4 down-left of 2; 5 points at a
    deleted entity.
    """
    return [
        make_entity(1, 0, 1),
        make_entity(2, 1, 1, 1),
        make_entity(3, 0, 2, 1),
        make_entity(4, 2, 0, 2),
        make_entity(5, 3, 3, 999),
    ]


def edge_between(scene: GridScene, from_id: int, to_id: int):
    return next(e for e in scene.edges if e.from_id == from_id and e.to_id == to_id)


# ─── build_scene ──────────────────────────────────────────────────────────────


class TestBuildScene:
    def test_every_cell_laid_out(self):
        scene = build_scene(sample_tree(), SPEC, ICON, ICON)
        assert len(scene.layout.rectangles) == 60
        assert scene.layout.rect_at(14, 3) == Rectangle(207, 14 * 69, 46, 46)

    def test_edge_count_skips_dangling(self):
        scene = build_scene(sample_tree(), SPEC, ICON, ICON)
        declared = sum(len(e.prerequisites) for e in scene.graph)
        assert declared == 4
        assert len(scene.edges) == 3

    def test_vertical_edge(self):
        scene = build_scene(sample_tree(), SPEC, ICON, ICON)
        edge = edge_between(scene, 1, 2)
        assert edge.style is RouteStyle.VERTICAL
        assert edge.segments == (Segment(Point(92, 46), Point(92, 69)),)

    def test_horizontal_edge(self):
        scene = build_scene(sample_tree(), SPEC, ICON, ICON)
        edge = edge_between(scene, 1, 3)
        assert edge.style is RouteStyle.HORIZONTAL
        assert edge.segments == (Segment(Point(115, 23), Point(138, 23)),)

    def test_step_edge(self):
        scene = build_scene(sample_tree(), SPEC, ICON, ICON)
        edge = edge_between(scene, 2, 4)
        assert edge.style is RouteStyle.STEP
        assert edge.segments == (
            Segment(Point(69, 92), Point(23, 92)),
            Segment(Point(23, 92), Point(23, 138)),
        )
        assert edge.arrowhead is not None
        assert edge.arrowhead.tip == Point(23, 138)

    def test_zero_sized_placeholders(self):
        """Without an explicit empty size, empty tracks collapse to the gutter."""
        scene = build_scene([make_entity(1, 0, 0)], GridSpec(rows=2, columns=2, horizontal_gutter=10), ICON)
        assert scene.layout.metrics.column_widths == (46, 0)
        assert scene.layout.rect_at(0, 1) == Rectangle(56, 0, 0, 46)

    def test_out_of_grid_entities_ignored(self):
        scene = build_scene([make_entity(1, 0, 0), make_entity(2, 20, 0, 1)], SPEC, ICON, ICON)
        assert 2 not in scene.graph
        assert scene.edges == ()

    def test_idempotent(self):
        """Same inputs give identical rectangles and routed edges."""
        first = build_scene(sample_tree(), SPEC, ICON, ICON)
        second = build_scene(sample_tree(), SPEC, ICON, ICON)
        assert first.layout == second.layout
        assert first.edges == second.edges


# ─── SceneHolder ──────────────────────────────────────────────────────────────


class TestSceneHolder:
    def test_starts_empty(self):
        assert SceneHolder(SPEC, ICON).current is None

    def test_rebuild_replaces_scene(self):
        holder = SceneHolder(SPEC, ICON, ICON)
        old = holder.rebuild(sample_tree())
        assert holder.current is old

        new = holder.rebuild(sample_tree()[:2])
        assert holder.current is new
        assert new is not old
        # The previous scene is left untouched for readers still holding it.
        assert len(old.edges) == 3
        assert len(new.edges) == 1

    def test_clear(self):
        holder = SceneHolder(SPEC, ICON)
        holder.rebuild(sample_tree())
        holder.clear()
        assert holder.current is None
