"""Graph module — entities placed in grid cells and their prerequisite links.

A DependencyGraph is built fresh from the authoritative occupancy data every
time the visualised grid changes. It is never mutated after construction.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, field

import networkx as nx
import structlog

from talent_grid.errors import InvalidArgument
from talent_grid.geometry import Size
from talent_grid.layout import CellItem, GridSpec

logger = structlog.get_logger(__name__)

MAX_PREREQUISITES = 3


@dataclass(frozen=True)
class Prerequisite:
    """A link from a child entity to the parent it depends on."""

    target_id: int
    rank_requirement: int = 0


@dataclass(frozen=True)
class Entity:
    """An occupant of one grid cell."""

    id: int
    row: int
    column: int
    prerequisites: tuple[Prerequisite, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if len(self.prerequisites) > MAX_PREREQUISITES:
            raise InvalidArgument(
                f"entity {self.id} declares {len(self.prerequisites)} prerequisites, at most {MAX_PREREQUISITES} allowed"
            )

    @classmethod
    def from_slots(
        cls,
        id: int,
        row: int,
        column: int,
        talent_slots: Sequence[int | None] = (),
        rank_slots: Sequence[int | None] = (),
    ) -> Entity:
        """Build an entity from fixed-width prerequisite columns.

        Stored records keep three talent/rank column pairs where an unset
        talent is NULL or 0. Those slots are dropped rather than kept as
        references to a sentinel id.
        """
        prerequisites: list[Prerequisite] = []
        for i, target in enumerate(talent_slots):
            if not target:
                continue
            rank = rank_slots[i] if i < len(rank_slots) else None
            prerequisites.append(Prerequisite(target_id=target, rank_requirement=rank or 0))
        return cls(id=id, row=row, column=column, prerequisites=tuple(prerequisites))

    @property
    def cell(self) -> tuple[int, int]:
        return self.row, self.column


@dataclass(frozen=True)
class PrerequisiteEdge:
    """A resolved child → parent prerequisite."""

    child: Entity
    parent: Entity
    prerequisite: Prerequisite


class DependencyGraph:
    """Immutable set of entities plus id → Entity and cell → Entity lookups.

    Ids are unique and a cell holds at most one entity.
    """

    def __init__(self, entities: Iterable[Entity]) -> None:
        by_id: dict[int, Entity] = {}
        by_cell: dict[tuple[int, int], Entity] = {}
        for entity in entities:
            if entity.id in by_id:
                raise InvalidArgument(f"duplicate entity id {entity.id}")
            if entity.cell in by_cell:
                raise InvalidArgument(
                    f"cell {entity.cell} holds entity {by_cell[entity.cell].id}, cannot also place {entity.id}"
                )
            by_id[entity.id] = entity
            by_cell[entity.cell] = entity
        self._by_id = by_id
        self._by_cell = by_cell
        # Deterministic iteration: top-to-bottom, left-to-right.
        self._ordered = tuple(sorted(by_id.values(), key=lambda e: (e.row, e.column, e.id)))

    def __iter__(self) -> Iterator[Entity]:
        return iter(self._ordered)

    def __len__(self) -> int:
        return len(self._ordered)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._by_id

    def __repr__(self) -> str:
        return f"DependencyGraph({len(self)} entities)"

    def lookup(self, entity_id: int) -> Entity | None:
        return self._by_id.get(entity_id)

    def entity_at(self, row: int, column: int) -> Entity | None:
        return self._by_cell.get((row, column))

    def prerequisite_edges(self) -> list[PrerequisiteEdge]:
        """All prerequisites whose target exists, in deterministic order."""
        edges: list[PrerequisiteEdge] = []
        for child in self._ordered:
            for prereq in child.prerequisites:
                parent = self._by_id.get(prereq.target_id)
                if parent is not None:
                    edges.append(PrerequisiteEdge(child=child, parent=parent, prerequisite=prereq))
        return edges

    def dangling_references(self) -> list[tuple[int, int]]:
        """(child_id, target_id) pairs whose target is not in the graph."""
        return [
            (child.id, prereq.target_id)
            for child in self._ordered
            for prereq in child.prerequisites
            if prereq.target_id not in self._by_id
        ]

    def to_networkx(self) -> nx.DiGraph:
        """Directed graph with edges parent → child, one node per entity."""
        g: nx.DiGraph = nx.DiGraph()
        for entity in self._ordered:
            g.add_node(entity.id, data=entity)
        for edge in self.prerequisite_edges():
            g.add_edge(edge.parent.id, edge.child.id, rank=edge.prerequisite.rank_requirement)
        return g

    def has_cycle(self) -> bool:
        return not nx.is_directed_acyclic_graph(self.to_networkx())

    def depth_of(self, entity_id: int) -> int:
        """Length of the longest prerequisite chain ending at `entity_id`.

        Roots have depth 0. Raises InvalidArgument for unknown ids or when the
        graph contains a cycle.
        """
        if entity_id not in self._by_id:
            raise InvalidArgument(f"unknown entity id {entity_id}")
        g = self.to_networkx()
        if not nx.is_directed_acyclic_graph(g):
            raise InvalidArgument("prerequisite graph contains a cycle")
        depth: dict[int, int] = {}
        for node in nx.topological_sort(g):
            depth[node] = max((depth[p] + 1 for p in g.predecessors(node)), default=0)
        return depth[entity_id]


# ─── Occupancy Mapping ────────────────────────────────────────────────────────


def map_entities_to_grid(entities: Iterable[Entity], spec: GridSpec) -> list[list[Entity | None]]:
    """Place entities into a rows x columns matrix.

    Entities outside the grid are dropped. When two entities claim the same
    cell the later one replaces the earlier.
    """
    grid: list[list[Entity | None]] = [[None] * spec.columns for _ in range(spec.rows)]
    for entity in entities:
        if not (0 <= entity.row < spec.rows and 0 <= entity.column < spec.columns):
            logger.debug("entity_out_of_grid", entity=entity.id, row=entity.row, column=entity.column)
            continue
        occupant = grid[entity.row][entity.column]
        if occupant is not None:
            logger.debug(
                "cell_occupant_replaced",
                entity=entity.id,
                replaced=occupant.id,
                row=entity.row,
                column=entity.column,
            )
        grid[entity.row][entity.column] = entity
    return grid


def graph_from_grid(grid: Sequence[Sequence[Entity | None]]) -> DependencyGraph:
    """Build the DependencyGraph from a mapped occupancy matrix."""
    return DependencyGraph(entity for row in grid for entity in row if entity is not None)


def cell_items_for(
    grid: Sequence[Sequence[Entity | None]],
    occupied_size: Size,
    empty_size: Size | None = None,
) -> list[CellItem]:
    """Flat row-major CellItem list for a mapped occupancy matrix.

    Empty slots get `empty_size` (zero-sized when omitted) so they still take
    part in sizing and still receive a rectangle.
    """
    occupied = CellItem.of_size(occupied_size)
    empty = CellItem.of_size(empty_size) if empty_size is not None else CellItem.empty()
    return [occupied if entity is not None else empty for row in grid for entity in row]
