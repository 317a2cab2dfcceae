"""Settings for the talent grid, read from TALENT_GRID_* environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from talent_grid.geometry import Size
from talent_grid.layout import GridSpec


class Settings(BaseSettings):
    """Grid shape, cell geometry and logging options."""

    model_config = SettingsConfigDict(
        env_prefix="TALENT_GRID_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Grid Configuration
    rows: int = Field(default=15, ge=1, description="Number of tiers")
    columns: int = Field(default=4, ge=1, description="Number of columns per tier")
    cell_size: float = Field(default=46.0, gt=0, description="Edge length of an occupied cell (icon size)")
    horizontal_gutter: float = Field(default=23.0, ge=0, description="Spacing between columns")
    vertical_gutter: float = Field(default=23.0, ge=0, description="Spacing between rows")
    arrow_size: float = Field(default=8.0, gt=0, description="Length of an arrowhead wing")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="plain", description="Logging format (plain or json)")

    def grid_spec(self) -> GridSpec:
        return GridSpec(
            rows=self.rows,
            columns=self.columns,
            horizontal_gutter=self.horizontal_gutter,
            vertical_gutter=self.vertical_gutter,
        )

    @property
    def occupied_size(self) -> Size:
        return Size(self.cell_size, self.cell_size)

    @property
    def empty_size(self) -> Size:
        """Empty slots are drawn as outlines the same size as an icon."""
        return Size(self.cell_size, self.cell_size)


@lru_cache
def get_settings() -> Settings:
    return Settings()
