"""
Proximity queries: radius search and seed-based grouping of nearby incidents.
"""

import logging
from typing import List

from ..data.distance_utils import haversine_distance
from ..data.records import IncidentRecord

logger = logging.getLogger(__name__)


def _nearby_indices(records: List[IncidentRecord], center_lat: float, center_lng: float,
                    radius_km: float) -> List[int]:
    return [
        index for index, record in enumerate(records)
        if haversine_distance(center_lat, center_lng, record.latitude, record.longitude) <= radius_km
    ]


def find_nearby_records(records: List[IncidentRecord], center_lat: float, center_lng: float,
                        radius_km: float) -> List[IncidentRecord]:
    """
    Find records within a radius of a point.

    Args:
        records: Records to search
        center_lat, center_lng: Search centre
        radius_km: Search radius in kilometers (boundary inclusive)

    Returns:
        Matching records in input order
    """
    return [records[index] for index in _nearby_indices(records, center_lat, center_lng, radius_km)]


def cluster_records(records: List[IncidentRecord], radius_km: float = 0.5) -> List[List[IncidentRecord]]:
    """
    Group records around seed incidents.

    Records are visited in input order. Each unvisited record seeds a new
    cluster which absorbs every other unvisited record within ``radius_km``
    of the seed. Members are not expanded further, so a cluster is a single
    radius around its seed rather than a connected component.

    Time Complexity: O(n²)

    Args:
        records: Records to group
        radius_km: Grouping radius around each seed

    Returns:
        Clusters sorted by size, largest first (ties in discovery order).
        Every input record appears in exactly one cluster.
    """
    clusters = []
    visited = set()

    for seed_index, seed in enumerate(records):
        if seed_index in visited:
            continue

        cluster = [seed]
        visited.add(seed_index)

        for index in _nearby_indices(records, seed.latitude, seed.longitude, radius_km):
            if index not in visited:
                cluster.append(records[index])
                visited.add(index)

        clusters.append(cluster)

    clusters.sort(key=len, reverse=True)

    logger.debug(f"Grouped {len(records)} records into {len(clusters)} clusters")
    return clusters
