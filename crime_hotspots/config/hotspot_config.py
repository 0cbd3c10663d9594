"""
Configuration management for hotspot detection and insight parameters.
"""

from dataclasses import dataclass, field, replace
from typing import Dict


@dataclass(frozen=True)
class GridConfig:
    """Bounding region and cell size used to partition incidents into zones."""

    lat_grid_size: float = 0.05  # degrees - ~5km at the equator
    lng_grid_size: float = 0.05  # degrees
    min_lat: float = 28.4
    max_lat: float = 28.9
    min_lng: float = 76.8
    max_lng: float = 77.4

    def validate(self) -> None:
        """Validate grid parameters."""
        if self.lat_grid_size <= 0 or self.lng_grid_size <= 0:
            raise ValueError("grid cell sizes must be positive")
        if self.min_lat >= self.max_lat:
            raise ValueError("min_lat must be less than max_lat")
        if self.min_lng >= self.max_lng:
            raise ValueError("min_lng must be less than max_lng")
        if not (-90 <= self.min_lat and self.max_lat <= 90):
            raise ValueError("latitude bounds must be within [-90, 90]")
        if not (-180 <= self.min_lng and self.max_lng <= 180):
            raise ValueError("longitude bounds must be within [-180, 180]")

    def as_bounds(self) -> Dict[str, float]:
        """Return the region as a plain bounds dictionary."""
        return {
            'min_lat': self.min_lat,
            'max_lat': self.max_lat,
            'min_lng': self.min_lng,
            'max_lng': self.max_lng
        }

    @classmethod
    def create_delhi_config(cls) -> 'GridConfig':
        """Default operational region (Delhi, India)."""
        return cls()

    @classmethod
    def create_mumbai_config(cls) -> 'GridConfig':
        """Region covering Mumbai's western suburbs."""
        return cls(
            min_lat=18.9,
            max_lat=19.3,
            min_lng=72.75,
            max_lng=73.0
        )

    @classmethod
    def from_bounds(cls, min_lat: float, max_lat: float, min_lng: float, max_lng: float,
                    cell_size: float = 0.05) -> 'GridConfig':
        """Create a grid with square cells over an arbitrary region."""
        return cls(
            lat_grid_size=cell_size,
            lng_grid_size=cell_size,
            min_lat=min_lat,
            max_lat=max_lat,
            min_lng=min_lng,
            max_lng=max_lng
        )


@dataclass(frozen=True)
class SeverityThresholds:
    """Incident counts at which a zone becomes medium or high severity."""

    medium: int = 5
    high: int = 10

    def validate(self) -> None:
        if self.medium < 1:
            raise ValueError("medium threshold must be at least 1")
        if self.medium > self.high:
            raise ValueError("medium threshold must not exceed high threshold")


@dataclass(frozen=True)
class HotspotConfig:
    """Configuration parameters for the hotspot and insight engines."""

    grid: GridConfig = field(default_factory=GridConfig)
    thresholds: SeverityThresholds = field(default_factory=SeverityThresholds)

    # Proximity
    cluster_radius_km: float = 0.5  # radius around a seed record

    # Insights
    top_crime_types_limit: int = 10
    predicted_peak_hour_count: int = 3

    # Visualization
    map_style: str = 'OpenStreetMap'  # base map tiles
    max_heatmap_points: int = 2000  # incidents sampled into the heatmap layer

    def validate(self) -> None:
        """Validate configuration parameters."""
        self.grid.validate()
        self.thresholds.validate()
        if self.cluster_radius_km <= 0:
            raise ValueError("cluster_radius_km must be positive")
        if self.top_crime_types_limit < 1:
            raise ValueError("top_crime_types_limit must be at least 1")
        if not 1 <= self.predicted_peak_hour_count <= 24:
            raise ValueError("predicted_peak_hour_count must be between 1 and 24")

    def with_grid(self, grid: GridConfig) -> 'HotspotConfig':
        """Return a copy of this configuration over a different region."""
        return replace(self, grid=grid)

    @classmethod
    def create_default_config(cls) -> 'HotspotConfig':
        """Create the default configuration (Delhi, 0.05° cells)."""
        return cls()

    @classmethod
    def create_fine_grained_config(cls) -> 'HotspotConfig':
        """
        Create a configuration for neighbourhood-level analysis.

        Uses ~1km cells, so the severity thresholds are lowered to match the
        smaller number of incidents each cell collects.
        """
        return cls(
            grid=GridConfig(lat_grid_size=0.01, lng_grid_size=0.01),
            thresholds=SeverityThresholds(medium=2, high=4),
            cluster_radius_km=0.25
        )
