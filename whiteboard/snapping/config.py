"""Object snapping configuration and tuned constants.

The numeric constants below are UX-tuned and must stay in sync with the
scoring tests. User-facing options live in ``SnapConfig``; process-wide
defaults can be supplied through ``SNAP_*`` environment variables.
"""

from functools import lru_cache

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Tolerance and comparison
EPSILON = 0.0001

# Candidate selection
PRIORITY_DISTANCE_SLACK_FACTOR = 0.05  # share of snap distance before distance decides
PRIORITY_DISTANCE_SLACK_MAX = 0.5
STRENGTH_SLACK = 0.05

# Point snap scoring weights (sum to 1.0)
POINT_DISTANCE_WEIGHT = 0.45
POINT_PERPENDICULAR_WEIGHT = 0.4
POINT_ANCHOR_WEIGHT = 0.15

# Gap snap scoring weights (sum to 1.0)
GAP_DISTANCE_WEIGHT = 0.7
GAP_FREQUENCY_WEIGHT = 0.2
GAP_KIND_WEIGHT = 0.1
GAP_CENTER_KIND_STRENGTH = 1.0
GAP_SIDE_KIND_STRENGTH = 0.85
GAP_STRENGTH_SCALE = 0.9

# Perpendicular range
PERPENDICULAR_SIZE_RANGE_FACTOR = 1.5
PERPENDICULAR_SNAP_RANGE_FACTOR = 4.0

# Limits and priority bounds
MAX_ASSOCIATED_GAP_GUIDES = 4
MAX_ANCHOR_PRIORITY = 3
MAX_POINT_PAIR_PRIORITY = 4


class SnapConfig(BaseModel):
    """User-facing object snapping options."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False, description="Whether object snapping is on")
    distance: float = Field(default=8.0, ge=0, description="Snap distance in screen pixels")
    enable_point_snaps: bool = Field(
        default=True, description="Align corners, edges and centers"
    )
    enable_gap_snaps: bool = Field(default=True, description="Match spacing between elements")
    show_guides: bool = Field(default=True, description="Render snap guides")
    show_gap_size: bool = Field(default=False, description="Render gap size labels")
    line_color: str = Field(default="#FF6B6B", description="Guide color (RGB hex)")
    line_width: float = Field(default=1.0, gt=0, description="Guide stroke width")
    marker_size: float = Field(default=8.0, ge=0, description="Marker size in screen pixels")
    gap_dash_length: float = Field(default=4.0, ge=0, description="Dash length for gap guides")
    gap_dash_gap: float = Field(default=4.0, ge=0, description="Dash gap for gap guides")

    @property
    def has_active_features(self) -> bool:
        """Whether at least one snap family is switched on."""
        return self.enable_point_snaps or self.enable_gap_snaps

    def world_snap_distance(self, zoom: float) -> float:
        """Convert the screen-space snap distance to canvas units.

        Args:
            zoom: Current camera zoom. Zero is treated as 1.

        Returns:
            Snap distance in canvas units.
        """
        effective_zoom = 1.0 if zoom == 0 else zoom
        return self.distance / effective_zoom


class SnapSettings(BaseSettings):
    """Object snapping defaults loaded from the environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SNAP_",
        extra="ignore",
    )

    enabled: bool = False
    distance: float = Field(default=8.0, ge=0)
    enable_point_snaps: bool = True
    enable_gap_snaps: bool = True
    show_guides: bool = True
    show_gap_size: bool = False

    def to_config(self) -> SnapConfig:
        """Build a ``SnapConfig`` from these settings."""
        return SnapConfig(**self.model_dump())


@lru_cache()
def get_snap_settings() -> SnapSettings:
    """Get cached snap settings instance."""
    return SnapSettings()
