"""
Spatial algorithms for hotspot detection.

This module contains:
- Grid partitioning
- Hotspot detection and severity classification
- Radius search and seed-based clustering
- Bounds and centroid calculation
"""

from .grid import GridCell, create_grid, assign_records_to_grid
from .hotspots import (
    Hotspot,
    HotspotStatistics,
    classify_severity,
    detect_hotspots,
    hotspot_statistics
)
from .proximity import find_nearby_records, cluster_records
from .bounds import Bounds, Center, calculate_bounds, get_center

__all__ = [
    'GridCell',
    'create_grid',
    'assign_records_to_grid',
    'Hotspot',
    'HotspotStatistics',
    'classify_severity',
    'detect_hotspots',
    'hotspot_statistics',
    'find_nearby_records',
    'cluster_records',
    'Bounds',
    'Center',
    'calculate_bounds',
    'get_center'
]
