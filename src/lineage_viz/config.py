"""Layout configuration loaded from environment variables."""

from __future__ import annotations

import functools
import logging

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Pixel geometry of a node box.
NODE_WIDTH: float = 256.0
HEADER_HEIGHT: float = 60.0
COLUMN_ROW_HEIGHT: float = 28.0

# Spacing between depth columns, between stacked boxes, and around the canvas.
H_GAP: float = 120.0
V_GAP: float = 40.0
LEFT_MARGIN: float = 50.0
PADDING: float = 50.0

# Room left in front of an entry point for the arrowhead marker.
MARKER_CLEARANCE: float = 10.0

# Depth columns reserved between consecutive components (one stays empty).
COMPONENT_GAP: int = 2


class LayoutSettings(BaseSettings):
    """Box metrics and viewport defaults, overridable with the LINEAGE_VIZ_ prefix."""

    model_config = SettingsConfigDict(
        env_prefix="LINEAGE_VIZ_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Box geometry
    node_width: float = NODE_WIDTH
    header_height: float = HEADER_HEIGHT
    column_row_height: float = COLUMN_ROW_HEIGHT

    # Spacing
    horizontal_gap: float = H_GAP
    vertical_gap: float = V_GAP
    left_margin: float = LEFT_MARGIN
    padding: float = PADDING
    marker_clearance: float = MARKER_CLEARANCE
    component_gap: int = COMPONENT_GAP

    # Viewport used when the caller does not supply one (CLI, renderer)
    viewport_width: float = 1280.0
    viewport_height: float = 800.0

    log_level: str = "WARNING"

    @field_validator("node_width", "header_height", "column_row_height", "viewport_width", "viewport_height")
    @classmethod
    def _positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("horizontal_gap", "vertical_gap", "left_margin", "padding", "marker_clearance")
    @classmethod
    def _non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("must not be negative")
        return v

    @field_validator("component_gap")
    @classmethod
    def _gap_at_least_one(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, v: str) -> str:
        level = v.upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"unknown log level {v!r}")
        return level

    def node_height(self, column_count: int) -> float:
        """Pixel height of a box holding ``column_count`` column rows."""
        return self.header_height + column_count * self.column_row_height


def load_settings(**overrides: object) -> LayoutSettings:
    """Load settings from environment, with optional overrides for testing."""
    settings = LayoutSettings(**overrides)  # type: ignore[arg-type]
    logger.debug("Loaded layout settings: %s", settings.model_dump())
    return settings


@functools.cache
def default_settings() -> LayoutSettings:
    """Settings used when a caller passes none; the environment is read once."""
    return load_settings()
