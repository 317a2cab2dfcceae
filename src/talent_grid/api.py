"""Public API — build and render a talent grid in one call."""

from __future__ import annotations

from collections.abc import Iterable

from talent_grid.config import Settings, get_settings
from talent_grid.graph import Entity
from talent_grid.logging_config import configure_logging
from talent_grid.renderers.svg import SvgRenderer
from talent_grid.scene import GridScene, build_scene


def setup_logging(settings: Settings | None = None) -> None:
    """Configure structlog from `settings.log_level` and `settings.log_format`.

    Call once at application start-up; the library itself never configures
    logging on import.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_format)


def scene_for(entities: Iterable[Entity], settings: Settings | None = None) -> GridScene:
    """Build a GridScene for `entities` using `settings` (environment defaults if omitted)."""
    settings = settings or get_settings()
    return build_scene(
        entities,
        settings.grid_spec(),
        settings.occupied_size,
        settings.empty_size,
        settings.arrow_size,
    )


def render_svg(entities: Iterable[Entity], settings: Settings | None = None) -> str:
    """Lay out `entities`, route their prerequisites and render the grid as SVG."""
    return SvgRenderer().render(scene_for(entities, settings))
