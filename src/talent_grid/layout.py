"""Layout module — fixed-size grid layout.

Passes:
  1. Measurement   (max minimum width per column, max minimum height per row)
  2. Total size    (sum of tracks + gutters, with an empty-grid fallback)
  3. Offsets       (cumulative column/row offsets)
  4. Placement     (one rectangle per flat item index)

Every one of the rows * columns slots receives a rectangle, including empty
placeholders, so the grid never collapses around a missing entity.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import structlog

from talent_grid.errors import InvalidArgument
from talent_grid.geometry import Rectangle, Size

logger = structlog.get_logger(__name__)

# Edge length substituted per track when no item reports a non-zero size.
DEFAULT_CELL_EDGE: float = 50.0

# ─── Inputs ───────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GridSpec:
    """Shape of the grid and spacing between tracks."""

    rows: int
    columns: int
    horizontal_gutter: float = 0.0
    vertical_gutter: float = 0.0

    def __post_init__(self) -> None:
        if self.rows < 1 or self.columns < 1:
            raise InvalidArgument(f"grid needs at least one row and column, got {self.rows}x{self.columns}")
        if self.horizontal_gutter < 0 or self.vertical_gutter < 0:
            raise InvalidArgument(
                f"gutters must be non-negative, got h={self.horizontal_gutter} v={self.vertical_gutter}"
            )

    @property
    def cell_count(self) -> int:
        return self.rows * self.columns


@dataclass(frozen=True)
class CellItem:
    """One positional slot with the minimum size its content needs."""

    min_width: float = 0.0
    min_height: float = 0.0

    def __post_init__(self) -> None:
        if self.min_width < 0 or self.min_height < 0:
            raise InvalidArgument(f"minimum size must be non-negative, got {self.min_width}x{self.min_height}")

    @classmethod
    def empty(cls) -> CellItem:
        """Zero-sized placeholder for an unoccupied slot."""
        return cls(0.0, 0.0)

    @classmethod
    def of_size(cls, size: Size) -> CellItem:
        return cls(size.width, size.height)


def cell_position(index: int, columns: int) -> tuple[int, int]:
    """Flat index → (row, column)."""
    return index // columns, index % columns


def cell_index(row: int, column: int, columns: int) -> int:
    """(row, column) → flat index."""
    return row * columns + column


# ─── Measurement ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class GridMetrics:
    """Track sizes and offsets computed by the measurement and offset passes."""

    column_widths: tuple[float, ...]
    row_heights: tuple[float, ...]
    column_offsets: tuple[float, ...]
    row_offsets: tuple[float, ...]
    total_width: float
    total_height: float

    @property
    def total_size(self) -> Size:
        return Size(self.total_width, self.total_height)


def _check_items(items: Sequence[CellItem], spec: GridSpec) -> None:
    if len(items) != spec.cell_count:
        raise InvalidArgument(
            f"expected {spec.cell_count} items for a {spec.rows}x{spec.columns} grid, got {len(items)}"
        )


def _offsets(sizes: Sequence[float], gutter: float) -> tuple[float, ...]:
    offsets = [0.0] * len(sizes)
    for i in range(1, len(sizes)):
        offsets[i] = offsets[i - 1] + sizes[i - 1] + gutter
    return tuple(offsets)


def _total(sizes: Sequence[float], gutter: float) -> float:
    return sum(sizes) + (len(sizes) - 1) * gutter


def _with_fallback(sizes: list[float]) -> list[float]:
    # Nothing on this axis reported a size: use default-sized tracks.
    if not any(sizes):
        return [DEFAULT_CELL_EDGE] * len(sizes)
    return sizes


def measure(items: Sequence[CellItem], spec: GridSpec) -> GridMetrics:
    """Run the measurement, total-size and offset passes."""
    _check_items(items, spec)

    column_widths = [0.0] * spec.columns
    row_heights = [0.0] * spec.rows
    for i, item in enumerate(items):
        row, col = cell_position(i, spec.columns)
        if item.min_width > column_widths[col]:
            column_widths[col] = item.min_width
        if item.min_height > row_heights[row]:
            row_heights[row] = item.min_height

    column_widths = _with_fallback(column_widths)
    row_heights = _with_fallback(row_heights)

    return GridMetrics(
        column_widths=tuple(column_widths),
        row_heights=tuple(row_heights),
        column_offsets=_offsets(column_widths, spec.horizontal_gutter),
        row_offsets=_offsets(row_heights, spec.vertical_gutter),
        total_width=_total(column_widths, spec.horizontal_gutter),
        total_height=_total(row_heights, spec.vertical_gutter),
    )


# ─── Placement ────────────────────────────────────────────────────────────────


def layout(items: Sequence[CellItem], spec: GridSpec) -> list[Rectangle]:
    """Lay out `items` (flat, row-major, exactly rows * columns long)."""
    return list(layout_grid(items, spec).rectangles)


@dataclass(frozen=True)
class GridLayout:
    """Result of one layout call: rectangles in flat order plus metrics."""

    spec: GridSpec
    metrics: GridMetrics
    rectangles: tuple[Rectangle, ...]

    def rect_at(self, row: int, column: int) -> Rectangle:
        if not (0 <= row < self.spec.rows and 0 <= column < self.spec.columns):
            raise InvalidArgument(f"cell ({row}, {column}) is outside the {self.spec.rows}x{self.spec.columns} grid")
        return self.rectangles[cell_index(row, column, self.spec.columns)]

    @property
    def cell_rectangles(self) -> dict[tuple[int, int], Rectangle]:
        """(row, column) → Rectangle mapping, as consumed by the router."""
        return {cell_position(i, self.spec.columns): rect for i, rect in enumerate(self.rectangles)}


def layout_grid(items: Sequence[CellItem], spec: GridSpec) -> GridLayout:
    """Like `layout` but also returns the metrics and a cell lookup."""
    metrics = measure(items, spec)

    rectangles: list[Rectangle] = []
    for i in range(len(items)):
        row, col = cell_position(i, spec.columns)
        rectangles.append(
            Rectangle(
                x=metrics.column_offsets[col],
                y=metrics.row_offsets[row],
                width=metrics.column_widths[col],
                height=metrics.row_heights[row],
            )
        )

    logger.debug(
        "grid_laid_out",
        rows=spec.rows,
        columns=spec.columns,
        total_width=metrics.total_width,
        total_height=metrics.total_height,
    )
    return GridLayout(spec=spec, metrics=metrics, rectangles=tuple(rectangles))
