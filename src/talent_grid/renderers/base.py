"""Base renderer protocol."""

from __future__ import annotations

from typing import Protocol

from talent_grid.scene import GridScene


class Renderer(Protocol):
    """Protocol that all renderers must implement."""

    def render(self, scene: GridScene) -> str:
        """Render a laid-out grid to an output string."""
        ...
