"""
Bounding box and centroid helpers used for map framing.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..config.hotspot_config import GridConfig
from ..data.records import IncidentRecord


@dataclass(frozen=True)
class Bounds:
    min_lat: float
    max_lat: float
    min_lng: float
    max_lng: float

    def as_folium_bounds(self) -> List[List[float]]:
        """South-west and north-east corners as expected by folium."""
        return [[self.min_lat, self.min_lng], [self.max_lat, self.max_lng]]


@dataclass(frozen=True)
class Center:
    lat: float
    lng: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.lat, self.lng)


def calculate_bounds(records: List[IncidentRecord], default: Optional[GridConfig] = None) -> Bounds:
    """
    Calculate the bounding box of a set of records.

    An empty set returns the default grid region, so callers framing a map
    never need to special-case it.
    """
    if not records:
        region = default or GridConfig()
        return Bounds(
            min_lat=region.min_lat,
            max_lat=region.max_lat,
            min_lng=region.min_lng,
            max_lng=region.max_lng
        )

    lats = [record.latitude for record in records]
    lngs = [record.longitude for record in records]
    return Bounds(min_lat=min(lats), max_lat=max(lats), min_lng=min(lngs), max_lng=max(lngs))


def get_center(records: List[IncidentRecord]) -> Optional[Center]:
    """Geographic centroid (mean latitude and longitude), or None for no records."""
    if not records:
        return None

    sum_lat = sum(record.latitude for record in records)
    sum_lng = sum(record.longitude for record in records)
    return Center(lat=sum_lat / len(records), lng=sum_lng / len(records))
