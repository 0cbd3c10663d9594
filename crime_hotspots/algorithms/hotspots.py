"""
Hotspot detection: grid density classified by severity.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional, Union

from ..config.hotspot_config import GridConfig, HotspotConfig, SeverityThresholds
from ..data.records import IncidentRecord
from .grid import assign_records_to_grid, create_grid

logger = logging.getLogger(__name__)

SEVERITY_LEVELS = ('low', 'medium', 'high')


@dataclass(frozen=True)
class Hotspot:
    """A populated grid zone ranked by incident density."""
    zone_id: str
    zone_name: str
    center_lat: float
    center_lng: float
    record_count: int
    severity: str
    percentage: float
    last_updated: datetime


@dataclass(frozen=True)
class HotspotStatistics:
    """Summary of a hotspot list for dashboard counters."""
    total_hotspots: int
    high_risk: int
    medium_risk: int
    low_risk: int
    total_records: int
    top_zone: Optional[str]


def classify_severity(record_count: int, thresholds: Optional[SeverityThresholds] = None) -> str:
    """Classify a zone's incident count as 'low', 'medium' or 'high'."""
    thresholds = thresholds or SeverityThresholds()
    if record_count >= thresholds.high:
        return 'high'
    if record_count >= thresholds.medium:
        return 'medium'
    return 'low'


def detect_hotspots(records: List[IncidentRecord],
                    config: Union[GridConfig, HotspotConfig, None] = None,
                    generated_at: Optional[datetime] = None) -> List[Hotspot]:
    """
    Detect incident hotspots using grid-based density.

    Steps:
    1. Create a uniform grid over the configured region
    2. Assign each record to its grid cell
    3. Classify every non-empty cell by severity
    4. Rank cells by incident count (stable, so ties keep grid order)

    Args:
        records: Validated incident records
        config: Grid configuration, or a full HotspotConfig for custom thresholds
        generated_at: Timestamp stamped on every hotspot (defaults to now, UTC)

    Returns:
        Hotspots sorted by incident count, highest first
    """
    if not records:
        return []

    if isinstance(config, HotspotConfig):
        grid_config, thresholds = config.grid, config.thresholds
    else:
        grid_config, thresholds = config or GridConfig(), SeverityThresholds()

    generated_at = generated_at or datetime.now(timezone.utc)
    total_records = len(records)

    cells = create_grid(grid_config)
    assign_records_to_grid(records, cells)

    hotspots = [
        Hotspot(
            zone_id=cell.id,
            zone_name=f"Zone {cell.index}",
            center_lat=cell.center_lat,
            center_lng=cell.center_lng,
            record_count=cell.record_count,
            severity=classify_severity(cell.record_count, thresholds),
            percentage=cell.record_count / total_records * 100,
            last_updated=generated_at
        )
        for cell in cells
        if cell.record_count > 0
    ]

    hotspots.sort(key=lambda hotspot: hotspot.record_count, reverse=True)

    logger.debug(f"Detected {len(hotspots)} hotspots from {total_records} records")
    return hotspots


def hotspot_statistics(hotspots: List[Hotspot]) -> HotspotStatistics:
    """Count hotspots per severity level."""
    severity_counts = {level: 0 for level in SEVERITY_LEVELS}
    for hotspot in hotspots:
        severity_counts[hotspot.severity] = severity_counts.get(hotspot.severity, 0) + 1

    return HotspotStatistics(
        total_hotspots=len(hotspots),
        high_risk=severity_counts['high'],
        medium_risk=severity_counts['medium'],
        low_risk=severity_counts['low'],
        total_records=sum(hotspot.record_count for hotspot in hotspots),
        top_zone=hotspots[0].zone_name if hotspots else None
    )
