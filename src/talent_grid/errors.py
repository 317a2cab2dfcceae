"""Error types raised by the layout and routing core."""

from __future__ import annotations


class TalentGridError(Exception):
    """Base class for all talent_grid errors."""


class InvalidArgument(TalentGridError, ValueError):
    """Raised when a caller hands the core malformed input.

    Examples: an item list whose length is not rows * columns, a grid with
    zero rows, a negative gutter, or a routing request for an occupied cell
    that has no rectangle.
    """
